"""Command line interface: ``seqstats -f reads.fq.gz -f assembly.fasta``."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from seqstats_pkg import compute_metrics
from seqstats_pkg.calculator import MetricsCalculator
from seqstats_pkg.config_manager import Config, ConfigManager, apply_names
from seqstats_pkg.exceptions import ConfigurationError, SeqStatsError
from seqstats_pkg.logger import get_logger, setup_logging
from seqstats_pkg.metrics import parse_output_fields
from seqstats_pkg.report import OutputMode, PerSequenceWriter, write_report
from seqstats_pkg.utils.composition import DEFAULT_QUALITY_OFFSET

VERBOSITY_LEVELS = ['WARNING', 'INFO', 'DEBUG']


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='seqstats',
        description='Computes statistics about FASTA/FASTQ files, gzipped or not.'
    )
    parser.add_argument(
        '-f', '--files', dest='files', action='extend', nargs='+', type=Path, default=None,
        help='Fastx files to process. Can be gzipped. Can be specified multiple times.'
    )
    parser.add_argument(
        '--config', type=Path, default=None,
        help='JSON run configuration (replaces -f and the metric options).'
    )
    parser.add_argument(
        '-m', '--min-size', type=int, default=0,
        help='Sequences shorter than this number will not be processed.'
    )
    parser.add_argument(
        '-g', '--genome-size', type=int, default=0,
        help='Estimated genome size to compute NGx metrics (in bases).'
    )
    parser.add_argument(
        '-q', '--quality', type=int, default=DEFAULT_QUALITY_OFFSET,
        help='Phred quality offset (usually 33 or 64).'
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '-c', '--csv', action='store_true',
        help='Activate parsable mode (csv format with metrics as rows).'
    )
    mode.add_argument(
        '-p', '--parsable', action='store_true',
        help='Activate parsable mode (csv format with metrics as columns).'
    )
    parser.add_argument(
        '--output-format', default=None,
        help='(--parsable only) Comma-separated list of metrics to output.'
    )
    parser.add_argument(
        '--no-header', action='store_true',
        help='(--parsable and --output-format only) Do not print a header.'
    )
    parser.add_argument(
        '--per-seq', type=Path, default=None,
        help='Write per sequence metrics (id, length, GC%%, mean quality) to this TSV file.'
    )
    parser.add_argument(
        '-r', '--rename', default=None,
        help='Use these names instead of inferring them. Format name_1,name_2,name_n'
    )
    parser.add_argument(
        '-v', '--verbose', action='count', default=0,
        help='Increase log verbosity on stderr (-v info, -vv debug).'
    )
    parser.add_argument(
        '--log-file', type=Path, default=None,
        help='Also write a debug log to this file.'
    )
    return parser


def _metric_options(args: argparse.Namespace):
    """Options the JSON configuration also defines, paired with whether they were given."""
    return [
        ('-m', args.min_size != 0),
        ('-g', args.genome_size != 0),
        ('-q', args.quality != DEFAULT_QUALITY_OFFSET),
        ('-c', args.csv),
        ('-p', args.parsable),
        ('--output-format', args.output_format is not None),
        ('--no-header', args.no_header),
        ('--per-seq', args.per_seq is not None),
        ('-r', args.rename is not None),
    ]


def config_from_args(args: argparse.Namespace) -> Config:
    """Build the run configuration, rejecting bad output options before any file is read."""
    if args.output_format is not None and not args.parsable:
        raise ConfigurationError("--output-format requires --parsable")
    if args.no_header and args.output_format is None:
        raise ConfigurationError("--no-header requires --parsable and --output-format")

    if args.config is not None:
        if args.files:
            raise ConfigurationError("Use either --config or -f, not both")
        overridden = [flag for flag, given in _metric_options(args) if given]
        if overridden:
            raise ConfigurationError(
                f"--config cannot be combined with {', '.join(overridden)}; "
                f"set them in the configuration file"
            )
        return ConfigManager.load(args.config)

    if not args.files:
        raise ConfigurationError("No input file given (use -f or --config)")

    output_fields = parse_output_fields(args.output_format)
    settings = MetricsCalculator.Settings(
        min_size=args.min_size,
        genome_size=args.genome_size,
        quality_offset=args.quality,
    )
    names = [name.strip() for name in args.rename.split(',')] if args.rename else None

    if args.csv:
        output_mode = OutputMode.CSV
    elif args.parsable:
        output_mode = OutputMode.PARSABLE
    else:
        output_mode = OutputMode.TABLE

    return Config(
        inputs=apply_names(args.files, names),
        settings=settings,
        output_mode=output_mode,
        output_fields=output_fields,
        no_header=args.no_header,
        per_seq=args.per_seq,
    )


def run(config: Config) -> None:
    if config.per_seq is not None:
        if len(config.inputs) > 1:
            get_logger().warning(
                f"Per sequence metrics of {len(config.inputs)} files go to one file",
                path=str(config.per_seq)
            )
        with PerSequenceWriter(config.per_seq) as writer:
            results = compute_metrics(config.inputs, config.settings, writer)
    else:
        results = compute_metrics(config.inputs, config.settings)

    write_report(results, config.output_mode, config.output_fields, config.no_header)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = VERBOSITY_LEVELS[min(args.verbose, len(VERBOSITY_LEVELS) - 1)]
    setup_logging(console_level=level, log_file=args.log_file)

    try:
        config = config_from_args(args)
        run(config)
    except SeqStatsError as e:
        print(f"\n✗ Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
