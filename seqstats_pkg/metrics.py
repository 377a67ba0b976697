"""Metrics aggregate, field catalog and field accessor."""

from dataclasses import asdict, dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Union

from seqstats_pkg.exceptions import ConfigurationError

__all__ = [
    'MetricField',
    'FIELDS',
    'IntValue',
    'FloatValue',
    'MetricValue',
    'MetricsAggregate',
    'parse_output_fields',
]


class MetricField(Enum):
    """The 23 reportable metrics, in catalog order."""
    CUMUL = "cumul"
    NUMBER = "number"
    MIN_SIZE = "min_size"
    MAX_SIZE = "max_size"
    AVG_SIZE = "avg_size"
    AUN = "aun"
    NUMBER_N = "number_n"
    PERCENT_N = "percent_n"
    NUMBER_GC = "number_gc"
    PERCENT_GC = "percent_gc"
    N50 = "n50"
    L50 = "l50"
    N80 = "n80"
    L80 = "l80"
    N90 = "n90"
    L90 = "l90"
    NG50 = "ng50"
    LG50 = "lg50"
    NG80 = "ng80"
    LG80 = "lg80"
    NG90 = "ng90"
    LG90 = "lg90"
    MEAN_QUALITY = "mean_quality"

    @property
    def is_float(self) -> bool:
        return self in (MetricField.PERCENT_N, MetricField.PERCENT_GC)

    @classmethod
    def parse(cls, name: Union[str, 'MetricField']) -> 'MetricField':
        """Return the field called ``name``; unknown names are a configuration error."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise ConfigurationError(
                f"'{name}' is not a valid field. Valid fields: {', '.join(FIELDS)}"
            ) from None


FIELDS = tuple(f.value for f in MetricField)


@dataclass(frozen=True)
class IntValue:
    value: int

    def format(self) -> str:
        return str(self.value)

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class FloatValue:
    value: float

    def format(self) -> str:
        # 0.0 -> "0", 42.5 -> "42.5", 5e-05 -> "0.00005"
        if self.value.is_integer():
            return str(int(self.value))
        return format(Decimal(repr(self.value)), 'f')

    def __str__(self) -> str:
        return self.format()


MetricValue = Union[IntValue, FloatValue]


@dataclass(frozen=True)
class MetricsAggregate:
    """Summary statistics of one input file. Read-only once built."""
    name: str
    genome_size: int
    cumul: int
    number: int
    min_size: int
    max_size: int
    avg_size: int
    aun: int
    number_n: int
    percent_n: float
    number_gc: int
    percent_gc: float
    n50: int
    l50: int
    n80: int
    l80: int
    n90: int
    l90: int
    ng50: int = 0
    lg50: int = 0
    ng80: int = 0
    lg80: int = 0
    ng90: int = 0
    lg90: int = 0
    mean_quality: int = 0

    def value(self, field: Union[str, MetricField]) -> MetricValue:
        """Return the value of ``field`` tagged as integer or float."""
        field = MetricField.parse(field)
        raw = getattr(self, field.value)
        if field.is_float:
            return FloatValue(float(raw))
        return IntValue(int(raw))

    def __getitem__(self, field: Union[str, MetricField]) -> MetricValue:
        return self.value(field)

    def to_dict(self) -> Dict[str, Union[str, int, float]]:
        return asdict(self)


def parse_output_fields(format_string: Optional[str]) -> Optional[List[MetricField]]:
    """
    Parse a comma-separated list of field names.

    Returns None when no list was given, so callers fall back to all fields.

    Raises:
        ConfigurationError: If the list is empty or names an unknown field
    """
    if format_string is None:
        return None

    names = [name.strip() for name in format_string.split(',')]
    if not any(names):
        raise ConfigurationError("Could not parse output format string: no field given")

    return [MetricField.parse(name) for name in names]
