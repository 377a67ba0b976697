"""Per-file working state and the count -> distribution -> assembly pipeline."""

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from seqstats_pkg.exceptions import EmptyInputError
from seqstats_pkg.metrics import MetricsAggregate
from seqstats_pkg.reader import SequenceRecord
from seqstats_pkg.utils.composition import (
    DEFAULT_QUALITY_OFFSET,
    CompositionCounter,
    QualityAccumulator,
    percent,
)
from seqstats_pkg.utils.sequence_stats import LengthDistribution, calculate_length_distribution

__all__ = [
    'WorkingState',
    'RecordCallback',
    'collect_working_state',
    'assemble_metrics',
    'finalize',
]

# Called with each kept record and its mean quality (None without qualities)
RecordCallback = Callable[[SequenceRecord, Optional[float]], None]


@dataclass
class WorkingState:
    """Transient buffers for one file. Dropped once its metrics are built."""
    lengths: List[int] = field(default_factory=list)
    composition: CompositionCounter = field(default_factory=CompositionCounter)
    quality: QualityAccumulator = field(default_factory=QualityAccumulator)

    def reset(self) -> None:
        self.lengths = []
        self.composition.reset()
        self.quality.reset()


def collect_working_state(
    records: Iterable[SequenceRecord],
    min_size: int = 0,
    quality_offset: int = DEFAULT_QUALITY_OFFSET,
    on_record: Optional[RecordCallback] = None
) -> WorkingState:
    """Count lengths, composition and qualities of every record of at least ``min_size`` bases."""
    state = WorkingState(quality=QualityAccumulator(quality_offset))

    for record in records:
        record_len = len(record.seq)
        if record_len < min_size:
            continue

        state.lengths.append(record_len)
        state.composition.update(record.seq)
        mean_quality = state.quality.add(record.qual)

        if on_record is not None:
            on_record(record, mean_quality)

    return state


def assemble_metrics(
    name: str,
    genome_size: int,
    state: WorkingState,
    distribution: LengthDistribution
) -> MetricsAggregate:
    """Combine a length distribution with the composition and quality of the same file."""
    number_n = state.composition.number_n
    number_gc = state.composition.number_gc
    n50, n80, n90 = distribution.nx
    l50, l80, l90 = distribution.lx
    ng50, ng80, ng90 = distribution.ngx
    lg50, lg80, lg90 = distribution.lgx

    return MetricsAggregate(
        name=name,
        genome_size=genome_size,
        cumul=distribution.cumul,
        number=distribution.number,
        min_size=distribution.min_size,
        max_size=distribution.max_size,
        avg_size=distribution.avg_size,
        aun=distribution.aun,
        number_n=number_n,
        percent_n=percent(number_n, distribution.cumul),
        number_gc=number_gc,
        percent_gc=percent(number_gc, distribution.cumul),
        n50=n50, l50=l50,
        n80=n80, l80=l80,
        n90=n90, l90=l90,
        ng50=ng50, lg50=lg50,
        ng80=ng80, lg80=lg80,
        ng90=ng90, lg90=lg90,
        mean_quality=state.quality.mean_quality,
    )


def finalize(name: str, genome_size: int, state: WorkingState) -> MetricsAggregate:
    """Build the metrics of one file and release its working state.

    Raises:
        EmptyInputError: If no record was collected
    """
    try:
        if not state.lengths:
            raise EmptyInputError(f"No sequence to compute metrics on for '{name}'")
        distribution = calculate_length_distribution(state.lengths, genome_size)
        return assemble_metrics(name, genome_size, state, distribution)
    finally:
        state.reset()
