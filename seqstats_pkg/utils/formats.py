"""File format and compression type enumerations."""

from enum import Enum

__all__ = [
    'CodingType',
    'SequenceFormat',
]


class CodingType(Enum):
    """Supported compression types for sequence files."""
    GZIP = "gzip"
    BZIP2 = "bzip2"
    NONE = "none"


class SequenceFormat(Enum):
    FASTA = "fasta"
    FASTQ = "fastq"

    @classmethod
    def _missing_(cls, value):
        """Accept file extensions ('fa', '.fq', 'FASTQ') as format names."""
        value_lower = str(value).lower().strip()

        if value_lower.startswith('.'):
            value_lower = value_lower[1:]

        extension_map = {
            'fa': cls.FASTA,
            'fas': cls.FASTA,
            'fasta': cls.FASTA,
            'fna': cls.FASTA,
            'fq': cls.FASTQ,
            'fastq': cls.FASTQ,
        }

        if value_lower in extension_map:
            return extension_map[value_lower]

        raise ValueError(f"'{value}' is not a valid {cls.__name__}")
