"""Custom exceptions for the sequence statistics package."""


class SeqStatsError(Exception):
    """Base exception for all sequence statistics errors."""
    pass


class ConfigurationError(SeqStatsError):
    """Raised when settings, output fields or the configuration file are invalid."""
    pass


class IngestionError(SeqStatsError):
    """Raised when an input file cannot be read or contains malformed records."""
    pass


class InputFileNotFoundError(IngestionError):
    """Raised when an input file is missing."""
    pass


class CompressionError(IngestionError):
    """Raised when there are errors decompressing files."""
    pass


class FileFormatError(IngestionError):
    """Base exception for file format errors."""
    pass


class FastaFormatError(FileFormatError):
    """Raised when FASTA file has invalid format."""
    pass


class FastqFormatError(FileFormatError):
    """Raised when FASTQ file has invalid format."""
    pass


class EmptyInputError(SeqStatsError):
    """Raised when a file yields no record long enough to be counted."""
    pass
