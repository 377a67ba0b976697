"""Utility functions for file handling with compression support."""

import gzip
import bz2
from pathlib import Path
from typing import Union, TextIO, Optional

from seqstats_pkg.utils.formats import CodingType, SequenceFormat
from seqstats_pkg.exceptions import CompressionError, FileFormatError

__all__ = [
    'open_file_with_coding_type',
    'detect_compression_type',
    'detect_file_format',
    'sniff_file_format',
]

COMPRESSION_EXTENSIONS = {'.gz', '.gzip', '.bz2', '.bzip2'}

# latin-1 maps every byte to one code point, so records can be re-encoded losslessly
RECORD_ENCODING = 'latin-1'


def open_file_with_coding_type(
    filepath: Union[str, Path],
    coding_type: CodingType,
    mode: str = 'rt',
    encoding: Optional[str] = RECORD_ENCODING
) -> TextIO:
    """Open a file with automatic decompression based on CodingType enum."""
    filepath = Path(filepath)
    if 'b' in mode:
        encoding = None

    try:
        if coding_type == CodingType.GZIP:
            return gzip.open(filepath, mode, encoding=encoding)
        elif coding_type == CodingType.BZIP2:
            return bz2.open(filepath, mode, encoding=encoding)
        else:
            return open(filepath, mode, encoding=encoding)
    except OSError as e:
        raise CompressionError(f"Failed to open file {filepath}: {e}") from e


def detect_compression_type(filepath: Path) -> CodingType:
    """Detect compression type from file path and return CodingType enum."""
    suffixes = Path(filepath).suffixes

    if not suffixes:
        return CodingType.NONE

    last_ext = suffixes[-1].lower()

    if last_ext in ['.gz', '.gzip']:
        return CodingType.GZIP
    elif last_ext in ['.bz2', '.bzip2']:
        return CodingType.BZIP2
    else:
        return CodingType.NONE


def sniff_file_format(filepath: Path, coding_type: CodingType) -> SequenceFormat:
    """Detect FASTA/FASTQ from the first non-blank character of the file."""
    try:
        with open_file_with_coding_type(filepath, coding_type) as handle:
            for line in handle:
                stripped = line.strip()
                if not stripped:
                    continue
                if stripped.startswith('>'):
                    return SequenceFormat.FASTA
                if stripped.startswith('@'):
                    return SequenceFormat.FASTQ
                break
    except (OSError, EOFError) as e:
        raise CompressionError(f"Failed to read {filepath}: {e}") from e

    raise FileFormatError(
        f"Cannot determine format of {Path(filepath).name}: "
        f"expected a FASTA ('>') or FASTQ ('@') header"
    )


def detect_file_format(filepath: Path, coding_type: Optional[CodingType] = None) -> SequenceFormat:
    """Detect file format from extension, falling back to the file content."""
    filepath = Path(filepath)
    suffixes = filepath.suffixes
    if coding_type is None:
        coding_type = detect_compression_type(filepath)

    if suffixes:
        # sample.fastq.gz -> .fastq, sample.R1.fastq -> .fastq
        if suffixes[-1].lower() in COMPRESSION_EXTENSIONS:
            format_ext = suffixes[-2] if len(suffixes) > 1 else None
        else:
            format_ext = suffixes[-1]

        if format_ext:
            try:
                return SequenceFormat(format_ext)
            except ValueError:
                pass

    return sniff_file_format(filepath, coding_type)
