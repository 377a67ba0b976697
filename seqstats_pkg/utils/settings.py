"""Base settings infrastructure for calculators."""

from dataclasses import asdict, fields
from copy import deepcopy
from typing import Dict, Any
from abc import ABC

from seqstats_pkg.exceptions import ConfigurationError

__all__ = [
    'BaseSettings',
]


# ===== Base Settings Class =====
class BaseSettings(ABC):
    """Base class for all settings dataclasses with common functionality."""

    def copy(self):
        """Return a deep copy of settings."""
        return deepcopy(self)

    def _normalize(self) -> None:
        """Coerce and check field values. Subclasses override."""
        pass

    @classmethod
    def _check_unknown(cls, keys) -> None:
        valid_fields = {f.name for f in fields(cls)}
        unknown = set(keys) - valid_fields
        if unknown:
            allowed = ', '.join(sorted(valid_fields))
            unknown_str = ', '.join(f"'{k}'" for k in sorted(unknown))
            raise ConfigurationError(
                f"Unknown setting(s) {unknown_str} for {cls.__name__}. "
                f"Allowed settings: {allowed}"
            )

    def update(self, **kwargs):
        """Update settings and return new instance (immutable pattern)."""
        self._check_unknown(kwargs.keys())

        new_settings = self.copy()
        for key, value in kwargs.items():
            setattr(new_settings, key, value)

        # setattr bypasses __post_init__
        new_settings._normalize()
        return new_settings

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Create settings instance from dictionary."""
        cls._check_unknown(data.keys())
        return cls(**data)

    def __str__(self) -> str:
        """Pretty print settings for inspection."""
        lines = [f"{self.__class__.__name__}:"]
        for key, value in self.to_dict().items():
            lines.append(f"  {key}: {value}")
        return '\n'.join(lines)

    def __repr__(self) -> str:
        params = ', '.join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{self.__class__.__name__}({params})"
