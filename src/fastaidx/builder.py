"""Index construction for FASTA files.

:func:`build_index` scans a FASTA stream once and returns a complete
:class:`~fastaidx.index.IndexTable`, or raises without returning a partial
one.

Line geometry (visible characters and bytes per wrapped line) is measured
once, on the first sequence line of the file, and shared by every record.
Files whose records are wrapped at different widths produce wrong offsets
on the indexed read path.

Example:
    >>> from fastaidx.builder import build_index
    >>> with open("genome.fa", "rb") as stream:
    ...     table = build_index(stream)
    >>> table.names()
    ['chr1', 'chr2']
"""

from typing import BinaryIO, Tuple

from fastaidx.errors import FastaFormatError
from fastaidx.index import IndexEntry, IndexTable
from fastaidx.io import read_line, rewind, tell
from fastaidx.logging_config import get_logger
from fastaidx.utils import chomp, count_visible, parse_name

logger = get_logger("builder")


def measure_geometry(stream: BinaryIO, marker: bytes = b">") -> Tuple[int, int]:
    """Measure the line geometry shared by all records of a FASTA file.

    Args:
        stream: Binary FASTA stream. It is rewound before reading and left
            at an unspecified position afterwards.
        marker: Header marker.

    Returns:
        Tuple of (line_length, byte_length) taken from the first non-empty
        sequence line. ``(0, 0)`` if the file holds no sequence data.

    Raises:
        FastaFormatError: If the file does not start with a header line.
        FastaIOError: If the stream cannot be rewound or read.
    """
    rewind(stream)

    first = read_line(stream)
    if not first.startswith(marker):
        raise FastaFormatError(
            f"Expected header ({marker.decode('ascii')!r}) at start of file, "
            f"instead: {first[:1]!r}"
        )

    line = read_line(stream)
    while line and (line.startswith(marker) or count_visible(line) == 0):
        line = read_line(stream)
    if not line:
        return 0, 0

    line_length = count_visible(line)
    byte_length = len(line)
    if not line.endswith(b"\n"):
        # final line without terminator still accounts for one
        byte_length += 1
    return line_length, byte_length


def build_index(stream: BinaryIO, header_marker: str = ">") -> IndexTable:
    """Scan a FASTA stream and build its index.

    Record ids follow file order. Each entry's offset is the stream position
    right after its header line; its length is the number of sequence
    characters up to the next header or end-of-stream.

    Args:
        stream: Seekable binary FASTA stream.
        header_marker: Character that starts header lines.

    Returns:
        A complete IndexTable.

    Raises:
        FastaFormatError: If the file does not start with a header, or a
            header carries no record name.
        FastaIOError: If the stream cannot be rewound or read.
    """
    marker = header_marker.encode("ascii")
    line_length, byte_length = measure_geometry(stream, marker)
    logger.debug("Measured line geometry: %d bases, %d bytes", line_length, byte_length)

    rewind(stream)

    table = IndexTable()
    line = read_line(stream)
    while line:
        name = parse_name(line, marker)
        offset = tell(stream)

        length = 0
        line = read_line(stream)
        while line and not line.startswith(marker):
            length += len(chomp(line))
            line = read_line(stream)

        table.append(
            IndexEntry(
                name=name,
                length=length,
                offset=offset,
                line_length=line_length,
                byte_length=byte_length,
            )
        )

    logger.debug("Indexed %d records", len(table))
    return table
