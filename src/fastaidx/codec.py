"""Reading and writing FASTA index files.

The on-disk format is plain text, one record per line with five
tab-separated fields::

    <name>\\t<length>\\t<offset>\\t<line_length>\\t<byte_length>\\n

This is the layout of a samtools ``.fai`` file. Decoding stops at the first
blank line or at end-of-stream, and is all-or-nothing: any malformed line
aborts the whole load.

Index files are read and written as latin-1, the same one-byte encoding
used for record names, so names round-trip byte for byte.

Example:
    >>> from fastaidx.codec import dumps_index, loads_index
    >>> text = dumps_index(table)
    >>> loads_index(text) == table
    True
"""

import io
from pathlib import Path
from typing import List, TextIO, Union

from fastaidx.errors import FastaFormatError
from fastaidx.index import IndexEntry, IndexTable
from fastaidx.io import read_text, write_text
from fastaidx.logging_config import get_logger
from fastaidx.utils import SEQUENCE_ENCODING

logger = get_logger("codec")

FIELD_COUNT = 5


def encode_entry(entry: IndexEntry) -> str:
    """Render a single index entry as one newline-terminated line."""
    return (
        f"{entry.name}\t{entry.length}\t{entry.offset}\t"
        f"{entry.line_length}\t{entry.byte_length}\n"
    )


def decode_entry(line: str, line_number: int = 1) -> IndexEntry:
    """Parse one index line into an IndexEntry.

    Args:
        line: Index line, with or without its terminator.
        line_number: 1-based line number, used in error messages.

    Raises:
        FastaFormatError: If the line does not hold exactly five fields, or a
            numeric field is not an integer.
    """
    fields = line.rstrip("\r\n").split("\t")
    if len(fields) != FIELD_COUNT:
        raise FastaFormatError(
            f"Index line {line_number}: expected {FIELD_COUNT} tab-separated fields, "
            f"found {len(fields)}"
        )

    name = fields[0]
    if not name:
        raise FastaFormatError(f"Index line {line_number}: empty record name")

    try:
        length, offset, line_length, byte_length = (int(f) for f in fields[1:])
    except ValueError as e:
        raise FastaFormatError(f"Index line {line_number}: {e}") from e

    if min(length, offset, line_length, byte_length) < 0:
        raise FastaFormatError(f"Index line {line_number}: negative field value")
    if length > 0 and (line_length == 0 or byte_length < line_length):
        raise FastaFormatError(
            f"Index line {line_number}: invalid line geometry "
            f"({line_length} bases, {byte_length} bytes)"
        )

    return IndexEntry(
        name=name,
        length=length,
        offset=offset,
        line_length=line_length,
        byte_length=byte_length,
    )


def encode_index(table: IndexTable, stream: TextIO) -> None:
    """Write every entry of ``table`` to a text stream."""
    for entry in table:
        stream.write(encode_entry(entry))


def decode_index(stream: TextIO) -> IndexTable:
    """Read an index table from a text stream.

    Raises:
        FastaFormatError: If any line is malformed. No partial table is
            returned.
    """
    entries: List[IndexEntry] = []
    for line_number, line in enumerate(stream, start=1):
        if not line.strip("\r\n"):
            break
        entries.append(decode_entry(line, line_number))
    return IndexTable(entries)


def dumps_index(table: IndexTable) -> str:
    """Serialize an index table to a string."""
    buffer = io.StringIO()
    encode_index(table, buffer)
    return buffer.getvalue()


def loads_index(text: str) -> IndexTable:
    """Parse an index table from a string."""
    return decode_index(io.StringIO(text))


def write_index(table: IndexTable, path: Union[str, Path]) -> Path:
    """Write an index table to ``path``.

    Raises:
        FastaIOError: If the file cannot be written.
        FastaFormatError: If a record name is not latin-1 encodable.
    """
    path = write_text(dumps_index(table), path, encoding=SEQUENCE_ENCODING)
    logger.debug("Wrote %d index entries to %s", len(table), path)
    return path


def read_index(path: Union[str, Path]) -> IndexTable:
    """Load an index table from ``path``.

    Raises:
        FastaIOError: If the file cannot be read.
        FastaFormatError: If the file content is malformed.
    """
    try:
        table = loads_index(read_text(path, encoding=SEQUENCE_ENCODING))
    except FastaFormatError as e:
        raise FastaFormatError(f"{path}: {e}") from e
    logger.debug("Loaded %d index entries from %s", len(table), path)
    return table
