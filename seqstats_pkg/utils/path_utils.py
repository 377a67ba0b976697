"""Path resolution and sample naming utilities."""

from pathlib import Path
from typing import Union
from seqstats_pkg.exceptions import ConfigurationError

__all__ = [
    'resolve_filepath',
    'derive_sample_name',
]

# Suffixes removed when a sample name is derived from a filename
SEQUENCE_EXTENSIONS = ('.fasta', '.fastq', '.fna', '.fas', '.fa', '.fq')
COMPRESSION_EXTENSIONS = ('.gz', '.gzip', '.bz2', '.bzip2')


def resolve_filepath(base_dir: Path, filename: str) -> Path:
    """Resolve filepath relative to base directory with path traversal protection."""
    filepath = (base_dir / filename).resolve()
    base_dir_resolved = base_dir.resolve()

    try:
        filepath.relative_to(base_dir_resolved)
    except ValueError:
        raise ConfigurationError(
            f"Path traversal detected: '{filename}' resolves outside config directory.\n"
            f"Resolved path: {filepath}\n"
            f"Config directory: {base_dir_resolved}\n"
            f"Only files within the config directory are allowed."
        )

    return filepath


def derive_sample_name(filepath: Union[str, Path]) -> str:
    """
    Derive a sample name from a sequence filename.

    Only sequence and compression extensions are removed, so dotted sample
    names survive.

    Examples:
        >>> derive_sample_name("data/assembly.fasta.gz")
        'assembly'
        >>> derive_sample_name("reads.R1.fq")
        'reads.R1'
        >>> derive_sample_name("contigs.txt")
        'contigs.txt'
    """
    name = Path(filepath).name

    lowered = name.lower()
    for ext in COMPRESSION_EXTENSIONS:
        if lowered.endswith(ext) and len(name) > len(ext):
            name = name[:-len(ext)]
            lowered = name.lower()
            break

    for ext in SEQUENCE_EXTENSIONS:
        if lowered.endswith(ext) and len(name) > len(ext):
            name = name[:-len(ext)]
            break

    return name
