"""Utility functions for fastaidx.

Helpers for FASTA line handling: terminator stripping, header name
extraction, and output wrapping.

Example:
    >>> from fastaidx.utils import chomp, parse_name
    >>> chomp(b"ACGT\\r\\n")
    b'ACGT'
    >>> parse_name(b">chr1 assembled\\n")
    'chr1'
"""

from typing import Iterator

from fastaidx.errors import FastaFormatError

LINE_TERMINATORS = b"\r\n"

# one byte per character for names, sequences and index files
SEQUENCE_ENCODING = "latin-1"


def chomp(line: bytes) -> bytes:
    """Strip trailing line terminators (LF and CR) from a line."""
    return line.rstrip(LINE_TERMINATORS)


def strip_terminators(data: bytes) -> bytes:
    """Remove every line terminator byte from a block of sequence data."""
    return data.replace(b"\n", b"").replace(b"\r", b"")


def count_visible(line: bytes) -> int:
    """Count the printable, non-whitespace characters in a line.

    Example:
        >>> count_visible(b"ACGT \\n")
        4
    """
    return sum(1 for ch in line if 0x21 <= ch <= 0x7E)


def parse_name(header: bytes, marker: bytes = b">") -> str:
    """Extract the record name from a header line.

    The name is the first whitespace-delimited token following the marker.

    Args:
        header: Raw header line, terminator included or not.
        marker: Header marker the line starts with.

    Returns:
        The record name.

    Raises:
        FastaFormatError: If the line does not start with the marker, or has
            no token after it.

    Example:
        >>> parse_name(b">seq1 desc\\n")
        'seq1'
    """
    if not header.startswith(marker):
        raise FastaFormatError(
            f"Expected header ({marker.decode('ascii')!r}), instead: {header[:1]!r}"
        )
    tokens = header[len(marker):].split()
    if not tokens:
        raise FastaFormatError("Could not parse record name from FASTA header")
    return tokens[0].decode(SEQUENCE_ENCODING)


def wrap_sequence(sequence: str, width: int = 60) -> Iterator[str]:
    """Yield ``sequence`` in chunks of ``width`` characters.

    A width of 0 or less yields the sequence as a single line.

    Example:
        >>> list(wrap_sequence("ACGTACGT", 3))
        ['ACG', 'TAC', 'GT']
    """
    if width <= 0:
        if sequence:
            yield sequence
        return
    for i in range(0, len(sequence), width):
        yield sequence[i : i + width]


def format_record(name: str, sequence: str, width: int = 60) -> str:
    """Render one FASTA record, terminated by a newline.

    Example:
        >>> format_record("seq1", "ACGTAC", 4)
        '>seq1\\nACGT\\nAC\\n'
    """
    lines = [f">{name}"]
    lines.extend(wrap_sequence(sequence, width))
    return "\n".join(lines) + "\n"
