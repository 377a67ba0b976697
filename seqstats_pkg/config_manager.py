"""Run configuration: input files, calculator settings and output options."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from seqstats_pkg.calculator import MetricsCalculator
from seqstats_pkg.exceptions import ConfigurationError, InputFileNotFoundError
from seqstats_pkg.logger import get_logger
from seqstats_pkg.metrics import MetricField
from seqstats_pkg.report import OutputMode
from seqstats_pkg.utils.file_handler import detect_compression_type, detect_file_format
from seqstats_pkg.utils.formats import CodingType, SequenceFormat
from seqstats_pkg.utils.path_utils import derive_sample_name, resolve_filepath

__all__ = [
    'InputConfig',
    'Config',
    'ConfigManager',
    'apply_names',
]

CONFIG_KEYS = {'files', 'settings', 'output'}
OUTPUT_KEYS = {'mode', 'fields', 'no_header', 'per_seq'}


@dataclass
class InputConfig:
    """One input file with its detected format and display name."""
    filename: str
    filepath: Path
    name: str
    coding_type: CodingType
    detected_format: SequenceFormat

    @classmethod
    def from_path(cls, filepath: Union[str, Path], name: Optional[str] = None) -> 'InputConfig':
        filepath = Path(filepath)
        if not filepath.is_file():
            raise InputFileNotFoundError(f"File not found: {filepath}")

        coding_type = detect_compression_type(filepath)
        return cls(
            filename=filepath.name,
            filepath=filepath,
            name=name if name else derive_sample_name(filepath),
            coding_type=coding_type,
            detected_format=detect_file_format(filepath, coding_type),
        )


@dataclass
class Config:
    """Complete run configuration."""
    inputs: List[InputConfig]
    settings: MetricsCalculator.Settings = field(default_factory=MetricsCalculator.Settings)
    output_mode: OutputMode = OutputMode.TABLE
    output_fields: Optional[List[MetricField]] = None
    no_header: bool = False
    per_seq: Optional[Path] = None

    def __post_init__(self):
        if not self.inputs:
            raise ConfigurationError("At least one input file is required")
        if self.output_fields is not None and not self.output_fields:
            raise ConfigurationError("Output field list is empty")
        if self.output_fields is not None and self.output_mode != OutputMode.PARSABLE:
            raise ConfigurationError("Output fields can only be selected in parsable mode")
        if self.no_header and self.output_fields is None:
            raise ConfigurationError("no_header requires parsable mode with an explicit field list")


def apply_names(paths: List[Union[str, Path]], names: Optional[List[str]] = None) -> List[InputConfig]:
    """Build one InputConfig per path, renamed positionally when ``names`` is given."""
    if names is not None and len(names) != len(paths):
        raise ConfigurationError(
            f"Got {len(names)} name(s) for {len(paths)} input file(s); "
            f"provide exactly one name per file"
        )
    if names is None:
        names = [None] * len(paths)
    return [InputConfig.from_path(path, name) for path, name in zip(paths, names)]


class ConfigManager:
    """Loads a JSON run configuration.

    Example::

        {
          "files": ["assembly.fasta", {"filename": "reads.fq.gz", "name": "run1"}],
          "settings": {"min_size": 500, "genome_size": 5000000},
          "output": {"mode": "parsable", "fields": ["n50", "l50"], "no_header": false}
        }

    File paths are relative to the configuration file's directory.
    """

    @staticmethod
    def load(config_path: Union[str, Path]) -> Config:
        config_path = Path(config_path)
        logger = get_logger()
        logger.debug(f"Loading configuration from {config_path}")

        if not config_path.is_file():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r') as handle:
                data = json.load(handle)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path.name}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError("Configuration root must be a JSON object")
        ConfigManager._check_keys(data, CONFIG_KEYS, "configuration")

        base_dir = config_path.parent
        inputs = ConfigManager._parse_files(data.get('files'), base_dir)
        settings = MetricsCalculator.Settings.from_dict(data.get('settings') or {})

        output = data.get('output') or {}
        if not isinstance(output, dict):
            raise ConfigurationError("'output' must be a JSON object")
        ConfigManager._check_keys(output, OUTPUT_KEYS, "output")

        fields = output.get('fields')
        if fields is not None:
            if not isinstance(fields, list):
                raise ConfigurationError("'output.fields' must be a list of field names")
            fields = [MetricField.parse(name) for name in fields]

        per_seq = output.get('per_seq')
        config = Config(
            inputs=inputs,
            settings=settings,
            output_mode=OutputMode.parse(output.get('mode', OutputMode.TABLE.value)),
            output_fields=fields,
            no_header=bool(output.get('no_header', False)),
            per_seq=base_dir / per_seq if per_seq else None,
        )
        logger.info(f"Loaded configuration with {len(config.inputs)} input file(s)")
        return config

    @staticmethod
    def _check_keys(data: Dict[str, Any], allowed: set, section: str) -> None:
        unknown = set(data.keys()) - allowed
        if unknown:
            raise ConfigurationError(
                f"Unknown {section} key(s): {', '.join(sorted(unknown))}. "
                f"Allowed: {', '.join(sorted(allowed))}"
            )

    @staticmethod
    def _parse_files(files: Any, base_dir: Path) -> List[InputConfig]:
        if not files or not isinstance(files, list):
            raise ConfigurationError("'files' must be a non-empty list")

        inputs = []
        for entry in files:
            if isinstance(entry, str):
                filename, name = entry, None
            elif isinstance(entry, dict) and 'filename' in entry:
                filename, name = entry['filename'], entry.get('name')
            else:
                raise ConfigurationError(
                    f"Invalid file entry {entry!r}: expected a filename or "
                    f"an object with a 'filename' key"
                )
            inputs.append(InputConfig.from_path(resolve_filepath(base_dir, filename), name))
        return inputs
