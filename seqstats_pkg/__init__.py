"""
Sequence Statistics Package
===========================

Summary statistics of assemblies and sequencing runs from FASTA/FASTQ files:
length distribution (N50/L50, N80/L80, N90/L90, NGx/LGx, auN), size
reductions, ambiguous and GC base content, and mean read quality.

Supported File Types
--------------------
- **FASTA** (.fasta, .fa, .fna, .fas) and **FASTQ** (.fastq, .fq)
- **Compression:** gzip (.gz), bzip2 (.bz2)

Quick Start
-----------

>>> from seqstats_pkg import InputConfig, MetricsCalculator, compute_metrics, write_report
>>> settings = MetricsCalculator.Settings(min_size=500, genome_size=5_000_000)
>>> inputs = [InputConfig.from_path("assembly.fasta"), InputConfig.from_path("reads.fq.gz")]
>>> results = compute_metrics(inputs, settings)
>>> results[0].n50, results[0]["l50"].format()
>>> write_report(results, mode="csv")

Files are processed one after another. Each file's working buffers are
released as soon as its metrics are built, and the first failing file aborts
the whole run.

Error Handling
--------------
- SeqStatsError: Base exception
    - ConfigurationError: Unknown output field, invalid settings or config file
    - IngestionError: Unreadable file or malformed record
        - InputFileNotFoundError, CompressionError
        - FileFormatError: FastaFormatError, FastqFormatError
    - EmptyInputError: No record passed the minimum size filter
"""

__version__ = "0.1.0"
__license__ = "EUPL-1.2 license"

from typing import List, Optional

from seqstats_pkg.accumulator import RecordCallback
from seqstats_pkg.calculator import MetricsCalculator
from seqstats_pkg.config_manager import Config, ConfigManager, InputConfig, apply_names
from seqstats_pkg.exceptions import (
    SeqStatsError,
    ConfigurationError,
    IngestionError,
    EmptyInputError,
)
from seqstats_pkg.logger import setup_logging, get_logger
from seqstats_pkg.metrics import FIELDS, MetricField, MetricsAggregate, parse_output_fields
from seqstats_pkg.report import OutputMode, PerSequenceWriter, write_report

# ============================================================================
# Functional API
# ============================================================================

def compute_file_metrics(
    input_config: InputConfig,
    settings: Optional[MetricsCalculator.Settings] = None,
    on_record: Optional[RecordCallback] = None
) -> MetricsAggregate:
    """Compute the metrics of a single file."""
    return MetricsCalculator(input_config, settings, on_record).run()


def compute_metrics(
    input_configs: List[InputConfig],
    settings: Optional[MetricsCalculator.Settings] = None,
    per_seq_writer: Optional[PerSequenceWriter] = None
) -> List[MetricsAggregate]:
    """Compute the metrics of several files, strictly one after another."""
    results = []
    for input_config in input_configs:
        results.append(compute_file_metrics(input_config, settings, per_seq_writer))
    return results


__all__ = [
    # Configuration
    'ConfigManager',
    'Config',
    'InputConfig',
    'apply_names',

    # Calculation
    'MetricsCalculator',
    'compute_file_metrics',
    'compute_metrics',

    # Metrics
    'MetricsAggregate',
    'MetricField',
    'FIELDS',
    'parse_output_fields',

    # Reporting
    'OutputMode',
    'PerSequenceWriter',
    'write_report',

    # Errors
    'SeqStatsError',
    'ConfigurationError',
    'IngestionError',
    'EmptyInputError',

    # Logging
    'setup_logging',
    'get_logger',

    # Version info
    '__version__',
    '__license__',
]
