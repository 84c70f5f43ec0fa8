"""Indexed FASTA file access.

:class:`Fasta` owns one open FASTA stream and, optionally, the index table
for it. Queries use the index when one is loaded and fall back to walking
the file otherwise.

Example:
    >>> from fastaidx import Fasta
    >>> with Fasta() as fasta:
    ...     fasta.open("genome.fa")
    ...     fasta.create_index()
    ...     fasta.get_sequence(0, 2, 5)
    'GTAC'
"""

from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union

from fastaidx.builder import build_index
from fastaidx.codec import read_index, write_index
from fastaidx.config import FastaConfig, load_config
from fastaidx.errors import FastaError, FastaRangeError, FastaStateError
from fastaidx.index import IndexTable
from fastaidx.io import open_sequence_stream
from fastaidx.logging_config import get_logger
from fastaidx.reader import IndexedReader, SequenceReader, SequentialReader
from fastaidx.regions import Region, parse_region

logger = get_logger("fasta")

PathLike = Union[str, Path]


class Fasta:
    """Random access to the records of one FASTA file.

    Record ids are 0-based and follow file order. Sequence coordinates are
    0-based with inclusive ``stop``.

    A Fasta instance is not thread-safe: every query moves the shared
    stream cursor. Use one instance per thread.

    Attributes:
        config: The FastaConfig providing the header marker and the default
            index suffix.

    Example:
        >>> fasta = Fasta()
        >>> fasta.open("genome.fa", "genome.fa.fai")
        >>> fasta.get_base(0, 8)
        'A'
        >>> fasta.close()
    """

    def __init__(
        self,
        config: Optional[FastaConfig] = None,
        *,
        header_marker: Optional[str] = None,
        index_suffix: Optional[str] = None,
    ):
        """Create a closed handle.

        Args:
            config: Pre-built config object. Takes precedence over other args.
            header_marker: Header marker character. Defaults to the
                FASTAIDX_HEADER_MARKER environment variable, or ``>``.
            index_suffix: Default index suffix. Defaults to the
                FASTAIDX_INDEX_SUFFIX environment variable, or ``.fai``.
        """
        if config:
            self.config = config
        else:
            self.config = load_config(header_marker=header_marker, index_suffix=index_suffix)

        self._path: Optional[Path] = None
        self._stream: Optional[BinaryIO] = None
        self._index: Optional[IndexTable] = None

    def __enter__(self) -> "Fasta":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __del__(self):
        self.close()

    @property
    def path(self) -> Optional[Path]:
        """Path of the open FASTA file, or None when closed."""
        return self._path

    @property
    def stream(self) -> Optional[BinaryIO]:
        """The underlying binary stream, or None when closed."""
        return self._stream

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    @property
    def has_index(self) -> bool:
        return self._index is not None

    @property
    def index(self) -> Optional[IndexTable]:
        """The active index table, or None when queries use the fallback."""
        return self._index

    def open(self, path: PathLike, index_path: Optional[PathLike] = None) -> None:
        """Open a FASTA file, and optionally load its index.

        If any step fails, everything opened so far is released and the
        handle stays closed.

        Args:
            path: FASTA file to read.
            index_path: Index file to load. Without it, queries use the
                sequential fallback until create_index() is called.

        Raises:
            FastaStateError: If the handle is already open.
            FastaIOError: If either file cannot be read.
            FastaFormatError: If the index file is malformed.
        """
        if self.is_open:
            raise FastaStateError(f"FASTA handle already open: {self._path}")

        path = Path(path)
        try:
            self._stream = open_sequence_stream(path)
            self._path = path
            if index_path is not None:
                self._index = read_index(index_path)
        except Exception as e:
            logger.error("Could not open %s: %s", path, e)
            self.close()
            raise

        logger.debug(
            "Opened %s (%s)",
            path,
            f"{len(self._index)} indexed records" if self._index is not None else "no index",
        )

    def close(self) -> None:
        """Release the stream and drop the index. Safe to call repeatedly."""
        stream, self._stream = getattr(self, "_stream", None), None
        self._path = None
        self._index = None
        if stream is not None:
            stream.close()

    def create_index(self, index_path: Optional[PathLike] = None) -> Path:
        """Build the index for the open file, write it, and start using it.

        The new table replaces the active one only after both the build and
        the write succeed. On failure the previous index, if any, remains
        in use.

        Args:
            index_path: Output path. Defaults to the FASTA path plus the
                configured index suffix.

        Returns:
            Path of the written index file.

        Raises:
            FastaStateError: If the handle is not open.
            FastaFormatError: If the FASTA file is malformed.
            FastaIOError: If reading the FASTA or writing the index fails.
        """
        stream = self._require_open()
        if index_path is None:
            index_path = self.config.index_path_for(self._path)

        try:
            table = build_index(stream, self.config.header_marker)
            written = write_index(table, index_path)
        except FastaError as e:
            logger.error("Could not create index for %s: %s", self._path, e)
            raise

        self._index = table
        logger.info("Indexed %d records from %s -> %s", len(table), self._path, written)
        return written

    def get_base(self, ref_id: int, position: int) -> str:
        """Return the base at 0-based ``position`` of record ``ref_id``.

        ``position`` equal to the record length returns ``""``.

        Raises:
            FastaStateError: If the handle is not open.
            FastaRangeError: If ``ref_id`` or ``position`` is out of bounds.
        """
        return self._reader().get_base(ref_id, position)

    def get_sequence(self, ref_id: int, start: int, stop: int) -> str:
        """Return bases ``start`` through ``stop`` (0-based, inclusive).

        Raises:
            FastaStateError: If the handle is not open.
            FastaRangeError: Unless ``0 <= start <= stop <= length``.
        """
        return self._reader().get_sequence(ref_id, start, stop)

    def get_length(self, ref_id: int) -> int:
        """Return the number of bases in record ``ref_id``.

        Raises:
            FastaStateError: If the handle is not open, or no index is loaded.
            FastaRangeError: If ``ref_id`` is out of bounds.
        """
        return self._reader().get_length(ref_id)

    def names(self) -> List[str]:
        """Record names in record-id order."""
        if self._index is not None:
            return self._index.names()
        return [name for name, _ in self.records()]

    def records(self) -> Iterator[Tuple[str, str]]:
        """Iterate over ``(name, sequence)`` for every record in file order."""
        stream = self._require_open()
        return SequentialReader(stream, self.config.marker_byte).records()

    def get_ref_id(self, name: str) -> int:
        """Return the record id of the first record called ``name``.

        Raises:
            FastaStateError: If the handle is not open.
            FastaRangeError: If no record has that name.
        """
        ref_id = self._reader().find(name)
        if ref_id is None:
            raise FastaRangeError(f"Unknown record name: {name!r}")
        return ref_id

    def fetch(self, region: Union[str, Region]) -> str:
        """Return the subsequence for a region.

        Args:
            region: Region object, or a ``name[:start[-stop]]`` string with
                1-based inclusive coordinates.

        Raises:
            ValueError: If a region string cannot be parsed.
            FastaRangeError: If the name is unknown or the span is out of
                bounds.
        """
        if isinstance(region, str):
            region = parse_region(region)

        ref_id = self.get_ref_id(region.name)
        if region.stop is not None:
            return self.get_sequence(ref_id, region.start, region.stop)

        if self._index is not None:
            length = self.get_length(ref_id)
            return self.get_sequence(ref_id, region.start, length)

        for current_id, (_, sequence) in enumerate(self.records()):
            if current_id == ref_id:
                if region.start > len(sequence):
                    raise FastaRangeError(
                        f"Region {region} starts beyond the end of {region.name} "
                        f"(length {len(sequence)})"
                    )
                return sequence[region.start :]
        raise FastaRangeError(f"Unknown record name: {region.name!r}")

    def _require_open(self) -> BinaryIO:
        if self._stream is None:
            raise FastaStateError("FASTA file not open for reading")
        return self._stream

    def _reader(self) -> SequenceReader:
        stream = self._require_open()
        if self._index is not None:
            return IndexedReader(stream, self._index)
        return SequentialReader(stream, self.config.marker_byte)
