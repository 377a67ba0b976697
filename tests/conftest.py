"""Shared fixtures for sequence statistics tests."""

import gzip
import tempfile
from pathlib import Path

import pytest

from seqstats_pkg.logger import get_logger
from seqstats_pkg.metrics import MetricsAggregate


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def clear_logger_issues():
    """Start every test with an empty issue list."""
    get_logger().clear_issues()
    yield


def write_fasta(path: Path, records, compress: bool = False) -> Path:
    """Write (id, sequence) pairs as FASTA, wrapping sequences at 60 columns."""
    lines = []
    for record_id, seq in records:
        lines.append(f">{record_id}\n")
        for start in range(0, len(seq), 60):
            lines.append(seq[start:start + 60] + "\n")
    opener = gzip.open if compress else open
    with opener(path, "wt") as handle:
        handle.writelines(lines)
    return path


def write_fastq(path: Path, records, compress: bool = False) -> Path:
    """Write (id, sequence, quality) triples as FASTQ."""
    opener = gzip.open if compress else open
    with opener(path, "wt") as handle:
        for record_id, seq, qual in records:
            handle.write(f"@{record_id}\n{seq}\n+\n{qual}\n")
    return path


def make_aggregate(**overrides) -> MetricsAggregate:
    """Build an aggregate with plausible values; keyword arguments override fields."""
    values = dict(
        name="A",
        genome_size=0,
        cumul=5957360,
        number=1000,
        min_size=159,
        max_size=28705,
        avg_size=5957,
        aun=9598,
        number_n=0,
        percent_n=0.0,
        number_gc=2542770,
        percent_gc=42.5,
        n50=8383,
        l50=229,
        n80=4170,
        l80=530,
        n90=3016,
        l90=697,
        mean_quality=9,
    )
    values.update(overrides)
    return MetricsAggregate(**values)
