"""In-memory FASTA index.

An :class:`IndexTable` is the ordered list of :class:`IndexEntry` records
for one FASTA file. A record's position in the table is its record id,
assigned in file order starting at zero; the sequential reader walks the
file in the same order, so both read paths agree on ids.

Example:
    >>> table = IndexTable([IndexEntry("chr1", 12, 11, 8, 9)])
    >>> table.find("chr1")
    0
    >>> table[0].seek_offset(8)
    20
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional


@dataclass(frozen=True)
class IndexEntry:
    """Per-record index metadata.

    Attributes:
        name: Record name, the first token of the header line.
        length: Number of sequence characters, terminators excluded.
        offset: Byte offset of the first sequence character, immediately
            after the header line and its terminator.
        line_length: Visible sequence characters per wrapped line.
        byte_length: Bytes per wrapped line, terminator(s) included.
    """

    name: str
    length: int
    offset: int
    line_length: int
    byte_length: int

    def seek_offset(self, position: int) -> int:
        """Translate a 0-based sequence position into a file byte offset.

        Args:
            position: Position within this record's sequence.

        Returns:
            ``offset + (position // line_length) * byte_length
            + position % line_length``.
        """
        line_index, line_offset = divmod(position, self.line_length)
        return self.offset + line_index * self.byte_length + line_offset


class IndexTable:
    """Ordered collection of index entries, addressed by record id."""

    def __init__(self, entries: Optional[Iterable[IndexEntry]] = None):
        self._entries: List[IndexEntry] = list(entries or [])

    def append(self, entry: IndexEntry) -> None:
        self._entries.append(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self._entries)

    def __getitem__(self, ref_id: int) -> IndexEntry:
        return self._entries[ref_id]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexTable):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"IndexTable({len(self._entries)} entries)"

    def contains(self, ref_id: int) -> bool:
        """Return True if ``ref_id`` addresses a record in this table."""
        return 0 <= ref_id < len(self._entries)

    def names(self) -> List[str]:
        """Record names in record-id order."""
        return [entry.name for entry in self._entries]

    def find(self, name: str) -> Optional[int]:
        """Return the record id of the first record called ``name``.

        Returns None when no record has that name.
        """
        for ref_id, entry in enumerate(self._entries):
            if entry.name == name:
                return ref_id
        return None
