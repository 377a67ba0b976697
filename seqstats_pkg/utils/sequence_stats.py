"""Length distribution engine: Nx/Lx, NGx/LGx, auN and size reductions."""

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from seqstats_pkg.exceptions import EmptyInputError

__all__ = [
    'BREAKPOINT_FRACTIONS',
    'LengthDistribution',
    'calculate_length_distribution',
]

# 50%, 80% and 90% breakpoints, in the order they are assigned
BREAKPOINT_FRACTIONS: Tuple[float, ...] = (0.5, 0.8, 0.9)


@dataclass(frozen=True)
class LengthDistribution:
    """Metrics derived from the lengths of one file's sequences.

    ``nx``/``lx`` and ``ngx``/``lgx`` hold one value per entry of
    ``BREAKPOINT_FRACTIONS``. Genome-relative values are zero when no genome
    size was given or when the breakpoint was never reached.
    """
    cumul: int
    number: int
    min_size: int
    max_size: int
    avg_size: int
    aun: int
    nx: Tuple[int, int, int]
    lx: Tuple[int, int, int]
    ngx: Tuple[int, int, int] = (0, 0, 0)
    lgx: Tuple[int, int, int] = (0, 0, 0)


@dataclass
class _BreakpointCursor:
    """Walks the three breakpoint thresholds of one reference total."""
    thresholds: Tuple[int, ...]
    sizes: List[int] = field(default_factory=lambda: [0] * len(BREAKPOINT_FRACTIONS))
    ranks: List[int] = field(default_factory=lambda: [0] * len(BREAKPOINT_FRACTIONS))
    index: int = 0

    @classmethod
    def for_total(cls, total: int) -> '_BreakpointCursor':
        # int() truncates the float product, as the thresholds are defined
        return cls(thresholds=tuple(int(fraction * total) for fraction in BREAKPOINT_FRACTIONS))

    @property
    def done(self) -> bool:
        return self.index == len(self.thresholds)

    def advance(self, cumul: int, size: int, rank: int) -> None:
        """Assign every breakpoint reached by ``cumul`` to the current sequence."""
        while not self.done and cumul >= self.thresholds[self.index]:
            self.sizes[self.index] = size
            self.ranks[self.index] = rank
            self.index += 1


def calculate_length_distribution(lengths: Iterable[int], genome_size: int = 0) -> LengthDistribution:
    """Compute the length distribution metrics of one file.

    Lengths are sorted in descending order and walked once. Each sequence
    adds to the running total and to the sum of squares; every breakpoint
    whose threshold the running total has reached is assigned that sequence's
    length (Nx) and rank (Lx). Thresholds are fractions of the observed total
    for Nx/Lx and of ``genome_size`` for NGx/LGx. A ``genome_size`` of zero or
    less disables the genome-relative metrics.

    auN is the sum of squared lengths divided by the total, rounded down.

    Args:
        lengths: Sequence lengths in any order
        genome_size: Estimated genome size in bases (<= 0 means not provided)

    Returns:
        LengthDistribution for the given lengths

    Raises:
        EmptyInputError: If ``lengths`` is empty

    Examples:
        >>> dist = calculate_length_distribution([2, 10, 4, 8, 6])
        >>> dist.nx, dist.lx, dist.aun
        ((8, 6, 4), (2, 3, 4), 7)
    """
    sorted_lengths = sorted(lengths, reverse=True)
    if not sorted_lengths:
        raise EmptyInputError("Cannot compute length metrics without any sequence")

    cumul_total = sum(sorted_lengths)
    number = len(sorted_lengths)

    observed = _BreakpointCursor.for_total(cumul_total)
    genome = _BreakpointCursor.for_total(genome_size) if genome_size > 0 else None

    cumul = 0
    square_sum = 0
    for rank, size in enumerate(sorted_lengths, start=1):
        cumul += size
        square_sum += size * size

        observed.advance(cumul, size, rank)
        if genome is not None:
            genome.advance(cumul, size, rank)

    # The whole total always reaches its own 90% threshold
    if not observed.done:
        raise RuntimeError(
            f"Only {observed.index} of {len(BREAKPOINT_FRACTIONS)} breakpoints reached "
            f"for a total of {cumul_total}"
        )

    return LengthDistribution(
        cumul=cumul_total,
        number=number,
        min_size=sorted_lengths[-1],
        max_size=sorted_lengths[0],
        avg_size=cumul_total // number,
        aun=square_sum // cumul_total if cumul_total else 0,
        nx=tuple(observed.sizes),
        lx=tuple(observed.ranks),
        ngx=tuple(genome.sizes) if genome is not None else (0, 0, 0),
        lgx=tuple(genome.ranks) if genome is not None else (0, 0, 0),
    )
