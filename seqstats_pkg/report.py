"""Report rendering: table, CSV, parsable CSV and per-sequence TSV."""

import sys
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TextIO, Tuple, Union

from seqstats_pkg.exceptions import ConfigurationError
from seqstats_pkg.metrics import MetricField, MetricsAggregate
from seqstats_pkg.reader import SequenceRecord
from seqstats_pkg.utils.composition import GC_BASES
from seqstats_pkg.utils.file_handler import RECORD_ENCODING

__all__ = [
    'OutputMode',
    'PerSequenceWriter',
    'format_table',
    'format_csv',
    'format_parsable',
    'write_report',
]


class OutputMode(Enum):
    TABLE = "table"
    CSV = "csv"
    PARSABLE = "parsable"

    @classmethod
    def parse(cls, value: Union[str, 'OutputMode']) -> 'OutputMode':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(
                f"'{value}' is not a valid output mode. "
                f"Valid modes: {', '.join(m.value for m in cls)}"
            ) from None


def _number(value: int) -> str:
    return f"{value:,}"


def _size_rank(size: int, rank: int) -> str:
    return f"{size:,} ({rank:,})"


def _count_percent(count: int, pct: float) -> str:
    return f"{count:,} ({pct:,.2f}%)"


# (label, cell renderer) in display order
TABLE_ROWS: List[Tuple[str, Callable[[MetricsAggregate], str]]] = [
    ("Cumul. size", lambda m: _number(m.cumul)),
    ("Seq. number", lambda m: _number(m.number)),
    ("N50 (L50)", lambda m: _size_rank(m.n50, m.l50)),
    ("N80 (L80)", lambda m: _size_rank(m.n80, m.l80)),
    ("N90 (L90)", lambda m: _size_rank(m.n90, m.l90)),
    ("Min. size", lambda m: _number(m.min_size)),
    ("Max. size", lambda m: _number(m.max_size)),
    ("Avg. size", lambda m: _number(m.avg_size)),
    ("auN", lambda m: _number(m.aun)),
    ("Ns Number", lambda m: _count_percent(m.number_n, m.percent_n)),
    ("GC Number", lambda m: _count_percent(m.number_gc, m.percent_gc)),
    ("NG50 (LG50)", lambda m: _size_rank(m.ng50, m.lg50)),
    ("NG80 (LG80)", lambda m: _size_rank(m.ng80, m.lg80)),
    ("NG90 (LG90)", lambda m: _size_rank(m.ng90, m.lg90)),
    ("Mean quality", lambda m: str(m.mean_quality)),
]

GENOME_ROWS = {"NG50 (LG50)", "NG80 (LG80)", "NG90 (LG90)"}
QUALITY_ROWS = {"Mean quality"}


def _border(widths: Sequence[int], left: str, middle: str, right: str) -> str:
    return left + middle.join("─" * (width + 2) for width in widths) + right


def _row(cells: Sequence[str], widths: Sequence[int]) -> str:
    rendered = []
    for idx, (cell, width) in enumerate(zip(cells, widths)):
        # Labels left aligned, values right aligned
        rendered.append(f" {cell:<{width}} " if idx == 0 else f" {cell:>{width}} ")
    return "│" + "│".join(rendered) + "│"


def format_table(aggregates: Sequence[MetricsAggregate]) -> List[str]:
    """
    Format metrics as a box-drawn table with one column per file.

    Genome-relative rows are shown only when the first file has an NG50,
    the mean quality row only when the first file has qualities.
    """
    if not aggregates:
        return []

    first = aggregates[0]
    hidden = set()
    if first.ng50 == 0 and first.lg50 == 0:
        hidden |= GENOME_ROWS
    if first.mean_quality == 0:
        hidden |= QUALITY_ROWS

    header = [""] + [m.name for m in aggregates]
    body = [
        [label] + [render(m) for m in aggregates]
        for label, render in TABLE_ROWS
        if label not in hidden
    ]

    widths = [max(len(row[idx]) for row in [header] + body) for idx in range(len(header))]

    lines = [_border(widths, "┌", "┬", "┐"), _row(header, widths), _border(widths, "├", "┼", "┤")]
    lines.extend(_row(row, widths) for row in body)
    lines.append(_border(widths, "└", "┴", "┘"))
    return lines


def format_csv(aggregates: Sequence[MetricsAggregate]) -> List[str]:
    """Format all metrics as CSV, one row per metric and one column per file."""
    lines = [",".join(["filename"] + [m.name for m in aggregates])]
    for field in MetricField:
        lines.append(",".join([field.value] + [m[field].format() for m in aggregates]))
    return lines


def format_parsable(
    aggregates: Sequence[MetricsAggregate],
    fields: Optional[Sequence[Union[str, MetricField]]] = None,
    no_header: bool = False
) -> List[str]:
    """Format metrics as CSV, one row per file and one column per requested metric."""
    # Resolve every name before any line is produced
    if fields is None:
        output_fields = list(MetricField)
    else:
        output_fields = [MetricField.parse(f) for f in fields]
        if not output_fields:
            raise ConfigurationError("No output field requested")

    lines = []
    if not no_header:
        lines.append(",".join(["filename"] + [f.value for f in output_fields]))
    for m in aggregates:
        lines.append(",".join([m.name] + [m[f].format() for f in output_fields]))
    return lines


def write_report(
    aggregates: Sequence[MetricsAggregate],
    mode: Union[str, OutputMode] = OutputMode.TABLE,
    fields: Optional[Sequence[Union[str, MetricField]]] = None,
    no_header: bool = False,
    stream: Optional[TextIO] = None
) -> None:
    """Render ``aggregates`` in the requested mode to ``stream`` (stdout by default)."""
    mode = OutputMode.parse(mode)
    stream = stream if stream is not None else sys.stdout

    if mode == OutputMode.CSV:
        lines = format_csv(aggregates)
    elif mode == OutputMode.PARSABLE:
        lines = format_parsable(aggregates, fields, no_header)
    else:
        lines = format_table(aggregates)

    for line in lines:
        stream.write(line + "\n")
    stream.flush()


class PerSequenceWriter:
    """Writes one TSV line per record: id, length, GC percent, mean quality.

    Instances are callables usable as record callbacks and context managers.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._handle: Optional[TextIO] = None
        self.lines_written = 0

    def open(self) -> 'PerSequenceWriter':
        if self._handle is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = open(self.path, 'w', encoding=RECORD_ENCODING)
        return self

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> 'PerSequenceWriter':
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __call__(self, record: SequenceRecord, mean_quality: Optional[float]) -> None:
        self.write(record, mean_quality)

    def write(self, record: SequenceRecord, mean_quality: Optional[float]) -> None:
        if self._handle is None:
            self.open()

        record_len = len(record.seq)
        gc = sum(record.seq.count(base) for base in GC_BASES)
        gc_percent = gc * 100 / record_len if record_len else 0.0
        quality = mean_quality if mean_quality is not None else 0.0

        self._handle.write(
            f"{record.id.decode(RECORD_ENCODING)}\t{record_len}\t{gc_percent:.2f}\t{quality:.2f}\n"
        )
        self.lines_written += 1
