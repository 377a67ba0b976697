"""Metrics calculator for one FASTA/FASTQ file."""

from dataclasses import dataclass
from typing import Optional

from seqstats_pkg.accumulator import RecordCallback, collect_working_state, finalize
from seqstats_pkg.exceptions import (
    ConfigurationError,
    EmptyInputError,
    IngestionError,
)
from seqstats_pkg.logger import get_logger
from seqstats_pkg.metrics import MetricsAggregate
from seqstats_pkg.reader import read_records
from seqstats_pkg.utils.composition import DEFAULT_QUALITY_OFFSET
from seqstats_pkg.utils.settings import BaseSettings


class MetricsCalculator:
    """Computes the metrics aggregate of a single input file."""

    @dataclass
    class Settings(BaseSettings):
        """Settings for metrics computation."""
        # Records shorter than this are ignored
        min_size: int = 0
        # Estimated genome size for NGx/LGx; <= 0 disables them
        genome_size: int = 0
        # Phred offset, usually 33 or 64
        quality_offset: int = DEFAULT_QUALITY_OFFSET

        def __post_init__(self):
            self._normalize()

        def _normalize(self) -> None:
            try:
                self.min_size = int(self.min_size)
                self.genome_size = int(self.genome_size)
                self.quality_offset = int(self.quality_offset)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid numeric setting: {e}") from e

            if self.min_size < 0:
                raise ConfigurationError(f"min_size must be >= 0, got {self.min_size}")
            if not 0 <= self.quality_offset <= 255:
                raise ConfigurationError(
                    f"quality_offset must be between 0 and 255, got {self.quality_offset}"
                )

    def __init__(
        self,
        input_config,
        settings: Optional[Settings] = None,
        on_record: Optional[RecordCallback] = None
    ) -> None:
        self.logger = get_logger()

        self.input_config = input_config
        self.input_path = input_config.filepath
        self.settings = settings if settings is not None else self.Settings()
        self.on_record = on_record

    def run(self) -> MetricsAggregate:
        """Read the file once and return its metrics."""
        filename = self.input_config.filename
        self.logger.start_timer("metrics")
        self.logger.info(f"Processing file: {filename}")
        self.logger.debug(
            f"Format: {self.input_config.detected_format}, "
            f"Compression: {self.input_config.coding_type}",
            min_size=self.settings.min_size,
            genome_size=self.settings.genome_size,
            quality_offset=self.settings.quality_offset
        )

        try:
            records = read_records(
                self.input_path,
                self.input_config.detected_format,
                self.input_config.coding_type
            )
            state = collect_working_state(
                records,
                min_size=self.settings.min_size,
                quality_offset=self.settings.quality_offset,
                on_record=self.on_record
            )
            self.logger.debug(f"Collected {len(state.lengths):,} sequence(s)")

            metrics = finalize(self.input_config.name, self.settings.genome_size, state)

        except EmptyInputError as e:
            if self.settings.min_size:
                message = f"No sequence of at least {self.settings.min_size} bases in {filename}"
            else:
                message = f"No sequence in {filename}"
            self.logger.add_processing_issue(
                level='ERROR',
                category='input',
                message=message,
                details={'file': filename, 'min_size': self.settings.min_size}
            )
            raise EmptyInputError(message) from e
        except IngestionError as e:
            self.logger.add_processing_issue(
                level='ERROR',
                category='input',
                message=str(e),
                details={'file': filename, 'error_type': type(e).__name__}
            )
            raise

        elapsed = self.logger.stop_timer("metrics")
        self.logger.info(
            f"✓ {filename}: {metrics.number:,} sequence(s), {metrics.cumul:,} bases in {elapsed:.2f}s"
        )
        return metrics
