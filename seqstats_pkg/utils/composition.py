"""Per-file base composition and quality accumulators."""

from collections import Counter
from typing import List, Optional

from seqstats_pkg.exceptions import FastqFormatError

__all__ = [
    'DEFAULT_QUALITY_OFFSET',
    'CompositionCounter',
    'QualityAccumulator',
    'percent',
]

DEFAULT_QUALITY_OFFSET = 33

AMBIGUOUS_BASES = b'Nn'
GC_BASES = b'GCgc'


def percent(count: int, total: int) -> float:
    """Return ``count`` as a percentage of ``total`` (0.0 for an empty total)."""
    if total == 0:
        return 0.0
    return count / total * 100


class CompositionCounter:
    """Occurrence table of every raw byte value seen in sequences."""

    def __init__(self) -> None:
        self.counts: List[int] = [0] * 256

    def update(self, seq: bytes) -> None:
        for byte, occurrences in Counter(seq).items():
            self.counts[byte] += occurrences

    def count_of(self, symbols: bytes) -> int:
        return sum(self.counts[byte] for byte in symbols)

    @property
    def number_n(self) -> int:
        return self.count_of(AMBIGUOUS_BASES)

    @property
    def number_gc(self) -> int:
        return self.count_of(GC_BASES)

    def reset(self) -> None:
        self.counts = [0] * 256


class QualityAccumulator:
    """Collects one mean quality per record carrying qualities.

    The run-level mean is the plain mean of the per-record means: a short
    record weighs as much as a long one.
    """

    def __init__(self, offset: int = DEFAULT_QUALITY_OFFSET) -> None:
        self.offset = offset
        self.record_means: List[float] = []

    def add(self, qual: Optional[bytes]) -> Optional[float]:
        """Add one record's encoded qualities and return its mean quality.

        Records without qualities (FASTA) or with an empty quality string are
        skipped and return None.
        """
        if not qual:
            return None

        lowest = min(qual)
        if lowest < self.offset:
            raise FastqFormatError(
                f"Quality character {chr(lowest)!r} is below the Phred offset {self.offset}"
            )

        mean = (sum(qual) - self.offset * len(qual)) / len(qual)
        self.record_means.append(mean)
        return mean

    @property
    def mean_quality(self) -> int:
        if not self.record_means:
            return 0
        return int(sum(self.record_means) / len(self.record_means))

    def reset(self) -> None:
        self.record_means = []
