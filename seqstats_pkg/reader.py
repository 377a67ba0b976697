"""FASTA/FASTQ record reader with transparent decompression."""

from pathlib import Path
from typing import Iterator, NamedTuple, Optional, Union

from Bio.SeqIO.FastaIO import SimpleFastaParser
from Bio.SeqIO.QualityIO import FastqGeneralIterator

from seqstats_pkg.exceptions import (
    IngestionError,
    InputFileNotFoundError,
    CompressionError,
    FastaFormatError,
    FastqFormatError,
)
from seqstats_pkg.utils.file_handler import (
    RECORD_ENCODING,
    detect_compression_type,
    detect_file_format,
    open_file_with_coding_type,
)
from seqstats_pkg.utils.formats import CodingType, SequenceFormat

__all__ = [
    'SequenceRecord',
    'read_records',
]


class SequenceRecord(NamedTuple):
    """One parsed record. ``qual`` is None for FASTA records."""
    id: bytes
    seq: bytes
    qual: Optional[bytes] = None


def _encode(text: str) -> bytes:
    return text.encode(RECORD_ENCODING)


def _record_id(title: str) -> bytes:
    parts = title.split(None, 1)
    return _encode(parts[0]) if parts else b''


def read_records(
    filepath: Union[str, Path],
    detected_format: Optional[SequenceFormat] = None,
    coding_type: Optional[CodingType] = None
) -> Iterator[SequenceRecord]:
    """
    Yield the records of a FASTA or FASTQ file, in file order.

    Format and compression are detected from the filename when not given.
    The iterator is single-pass.

    Raises:
        InputFileNotFoundError: If the file does not exist
        CompressionError: If the compressed stream is corrupt or truncated
        FastaFormatError, FastqFormatError: If a record is malformed
    """
    filepath = Path(filepath)
    if not filepath.is_file():
        raise InputFileNotFoundError(f"File not found: {filepath}")

    if coding_type is None:
        coding_type = detect_compression_type(filepath)
    if detected_format is None:
        detected_format = detect_file_format(filepath, coding_type)

    if detected_format == SequenceFormat.FASTQ:
        format_error = FastqFormatError
    else:
        format_error = FastaFormatError

    handle = open_file_with_coding_type(filepath, coding_type)
    try:
        if detected_format == SequenceFormat.FASTQ:
            for title, seq, qual in FastqGeneralIterator(handle):
                yield SequenceRecord(_record_id(title), _encode(seq), _encode(qual))
        else:
            for title, seq in SimpleFastaParser(handle):
                yield SequenceRecord(_record_id(title), _encode(seq))
    except ValueError as e:
        raise format_error(f"Malformed {detected_format.value.upper()} record in {filepath.name}: {e}") from e
    except (OSError, EOFError) as e:
        if coding_type != CodingType.NONE:
            raise CompressionError(f"Failed to decompress {filepath.name}: {e}") from e
        raise IngestionError(f"Failed to read {filepath.name}: {e}") from e
    finally:
        handle.close()
