"""Sequence retrieval from FASTA streams.

Two readers share one interface:

- :class:`IndexedReader` computes byte offsets from an
  :class:`~fastaidx.index.IndexTable` and seeks straight to the requested
  bases.
- :class:`SequentialReader` is the fallback when no index is loaded. It
  rewinds and walks the file record by record until it reaches the
  requested one, so every query costs a scan.

Coordinates are 0-based and ``stop`` is inclusive. A position equal to the
record length is accepted and addresses the (empty) end of the sequence.

Example:
    >>> reader = IndexedReader(stream, table)
    >>> reader.get_sequence(0, 2, 5)
    'GTAC'
"""

from typing import BinaryIO, Iterator, Optional, Tuple

from fastaidx.errors import FastaFormatError, FastaIOError, FastaRangeError, FastaStateError
from fastaidx.index import IndexEntry, IndexTable
from fastaidx.io import read_at, read_line, rewind
from fastaidx.logging_config import get_logger
from fastaidx.utils import SEQUENCE_ENCODING, chomp, parse_name, strip_terminators

logger = get_logger("reader")


def iter_records(stream: BinaryIO, marker: bytes = b">") -> Iterator[Tuple[str, str]]:
    """Yield ``(name, sequence)`` for every record, in file order.

    The stream is rewound when iteration starts, so each call walks the
    file from the top. Sequences are materialized one record at a time.

    Raises:
        FastaFormatError: If a header is missing or has no name.
        FastaIOError: If the stream cannot be rewound or read.
    """
    rewind(stream)
    line = read_line(stream)
    while line:
        name = parse_name(line, marker)
        chunks = []
        line = read_line(stream)
        while line and not line.startswith(marker):
            chunks.append(chomp(line))
            line = read_line(stream)
        yield name, b"".join(chunks).decode(SEQUENCE_ENCODING)


def check_position(ref_id: int, position: int, length: int) -> None:
    """Raise FastaRangeError unless ``0 <= position <= length``."""
    if position < 0 or position > length:
        raise FastaRangeError(
            f"Invalid position specified for refId {ref_id}: {position} (length {length})"
        )


def check_span(ref_id: int, start: int, stop: int, length: Optional[int] = None) -> None:
    """Raise FastaRangeError unless ``0 <= start <= stop <= length``.

    With ``length=None`` only the length-independent bounds are checked.
    """
    if start < 0 or start > stop or (length is not None and stop > length):
        raise FastaRangeError(
            f"Invalid start/stop positions specified for refId {ref_id}: {start}, {stop}"
            + (f" (length {length})" if length is not None else "")
        )


class SequenceReader:
    """Common interface of the indexed and sequential readers."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def get_base(self, ref_id: int, position: int) -> str:
        raise NotImplementedError

    def get_sequence(self, ref_id: int, start: int, stop: int) -> str:
        raise NotImplementedError

    def get_length(self, ref_id: int) -> int:
        raise NotImplementedError

    def find(self, name: str) -> Optional[int]:
        raise NotImplementedError


class IndexedReader(SequenceReader):
    """Random-access reader driven by an index table.

    Every query validates its arguments before touching the stream, so a
    rejected call leaves the stream cursor where it was.
    """

    def __init__(self, stream: BinaryIO, table: IndexTable):
        super().__init__(stream)
        self.table = table

    def _entry(self, ref_id: int) -> IndexEntry:
        if not self.table.contains(ref_id):
            raise FastaRangeError(
                f"Invalid refId specified: {ref_id} (index holds {len(self.table)} records)"
            )
        return self.table[ref_id]

    @staticmethod
    def _seek_target(entry: IndexEntry, position: int) -> int:
        if entry.line_length <= 0:
            raise FastaFormatError(f"Index entry {entry.name!r} has no line geometry")
        return entry.seek_offset(position)

    def get_base(self, ref_id: int, position: int) -> str:
        """Return the base at ``position``, or ``""`` at the end of the sequence."""
        entry = self._entry(ref_id)
        check_position(ref_id, position, entry.length)
        if position == entry.length:
            return ""

        target = self._seek_target(entry, position)
        logger.debug("Reading base %s:%d at byte %d", entry.name, position, target)
        data = read_at(self.stream, target, 1)
        if len(data) != 1:
            raise FastaIOError(f"Unexpected end of file at byte {target}")
        return data.decode(SEQUENCE_ENCODING)

    def get_sequence(self, ref_id: int, start: int, stop: int) -> str:
        """Return bases ``start`` through ``stop``, inclusive.

        ``stop`` may equal the record length; the result then ends at the
        last base of the record.
        """
        entry = self._entry(ref_id)
        check_span(ref_id, start, stop, entry.length)

        last = min(stop, entry.length - 1)
        if start > last:
            return ""

        first_byte = self._seek_target(entry, start)
        last_byte = self._seek_target(entry, last)
        logger.debug(
            "Reading %s:%d-%d from bytes %d-%d", entry.name, start, last, first_byte, last_byte
        )
        data = strip_terminators(read_at(self.stream, first_byte, last_byte - first_byte + 1))

        expected = last - start + 1
        if len(data) != expected:
            raise FastaIOError(
                f"Read {len(data)} bases for {entry.name}:{start}-{last}, expected {expected}; "
                "the file may have changed since it was indexed"
            )
        return data.decode(SEQUENCE_ENCODING)

    def get_length(self, ref_id: int) -> int:
        return self._entry(ref_id).length

    def find(self, name: str) -> Optional[int]:
        return self.table.find(name)


class SequentialReader(SequenceReader):
    """Fallback reader that walks the file for every query.

    Finding record ``ref_id`` materializes every record before it, so this
    path is O(ref_id) scans and O(record length) memory per call. Length
    queries are not supported, since there is no metadata to answer them
    from.
    """

    def __init__(self, stream: BinaryIO, marker: bytes = b">"):
        super().__init__(stream)
        self.marker = marker

    def records(self) -> Iterator[Tuple[str, str]]:
        return iter_records(self.stream, self.marker)

    def _materialize(self, ref_id: int) -> str:
        if ref_id < 0:
            raise FastaRangeError(f"Invalid refId specified: {ref_id}")

        count = 0
        for current_id, (_, sequence) in enumerate(self.records()):
            if current_id == ref_id:
                return sequence
            count += 1
        raise FastaRangeError(f"Invalid refId specified: {ref_id} (file holds {count} records)")

    def get_base(self, ref_id: int, position: int) -> str:
        if position < 0:
            raise FastaRangeError(f"Invalid position specified for refId {ref_id}: {position}")
        sequence = self._materialize(ref_id)
        check_position(ref_id, position, len(sequence))
        return sequence[position : position + 1]

    def get_sequence(self, ref_id: int, start: int, stop: int) -> str:
        check_span(ref_id, start, stop)
        sequence = self._materialize(ref_id)
        check_span(ref_id, start, stop, len(sequence))
        return sequence[start : stop + 1]

    def get_length(self, ref_id: int) -> int:
        raise FastaStateError("Cannot query sequence length: no index available")

    def find(self, name: str) -> Optional[int]:
        for ref_id, (record_name, _) in enumerate(self.records()):
            if record_name == name:
                return ref_id
        return None
