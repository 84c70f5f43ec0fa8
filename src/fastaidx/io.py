"""Stream I/O helpers for fastaidx.

Thin wrappers around binary file operations that translate ``OSError``
into :class:`~fastaidx.errors.FastaIOError`, so callers only have to deal
with the package's own exception types.

Example:
    >>> from fastaidx.io import open_sequence_stream, read_at
    >>> stream = open_sequence_stream(Path("genome.fa"))
    >>> read_at(stream, 6, 4)
    b'ACGT'
"""

import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Union

from fastaidx.errors import FastaFormatError, FastaIOError

PathLike = Union[str, Path]


def open_sequence_stream(path: PathLike) -> BinaryIO:
    """Open a FASTA file for binary, seekable reading.

    Args:
        path: Path to the FASTA file.

    Returns:
        An open binary file object positioned at offset 0.

    Raises:
        FastaIOError: If the file cannot be opened, or is not seekable.
    """
    path = Path(path)
    try:
        stream = open(path, "rb")
    except OSError as e:
        raise FastaIOError(f"Could not open {path} for reading: {e}") from e

    if not stream.seekable():
        stream.close()
        raise FastaIOError(f"FASTA stream is not seekable: {path}")
    return stream


def rewind(stream: BinaryIO) -> None:
    """Seek a stream back to offset 0.

    Raises:
        FastaIOError: If the seek fails.
    """
    try:
        stream.seek(0)
    except (OSError, ValueError) as e:
        raise FastaIOError(f"Could not rewind FASTA stream: {e}") from e


def read_line(stream: BinaryIO) -> bytes:
    """Read one physical line, terminator included.

    Returns ``b""`` at end-of-stream.

    Raises:
        FastaIOError: If the read fails.
    """
    try:
        return stream.readline()
    except (OSError, ValueError) as e:
        raise FastaIOError(f"Could not read from FASTA stream: {e}") from e


def tell(stream: BinaryIO) -> int:
    """Return the current stream offset.

    Raises:
        FastaIOError: If the position cannot be determined.
    """
    try:
        return stream.tell()
    except (OSError, ValueError) as e:
        raise FastaIOError(f"Could not query FASTA stream position: {e}") from e


def read_at(stream: BinaryIO, offset: int, size: int) -> bytes:
    """Seek to ``offset`` and read up to ``size`` bytes.

    Raises:
        FastaIOError: If the seek or read fails.
    """
    try:
        stream.seek(offset)
        return stream.read(size)
    except (OSError, ValueError) as e:
        raise FastaIOError(f"Could not read {size} bytes at offset {offset}: {e}") from e


def write_text(content: str, path: PathLike, encoding: str = "utf-8") -> Path:
    """Write text content to a file, replacing it atomically.

    The content goes to a temporary file in the same directory, which is
    then renamed over ``path``. A failed write leaves any existing file
    untouched.

    Args:
        content: Text to write.
        path: Output file path.
        encoding: Text encoding. Defaults to UTF-8.

    Returns:
        Path to the written file.

    Raises:
        FastaIOError: If the file cannot be written.
        FastaFormatError: If the content cannot be encoded.
    """
    path = Path(path)
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as e:
        raise FastaIOError(f"Could not write {path}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="\n") as f:
            f.write(content)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as e:
        os.unlink(tmp_name)
        raise FastaIOError(f"Could not write {path}: {e}") from e
    except UnicodeEncodeError as e:
        os.unlink(tmp_name)
        raise FastaFormatError(f"Could not encode {path} as {encoding}: {e}") from e
    return path


def read_text(path: PathLike, encoding: str = "utf-8") -> str:
    """Read text content from a file.

    Raises:
        FastaIOError: If the file doesn't exist or cannot be read.
        FastaFormatError: If the file is not valid text in ``encoding``.
    """
    path = Path(path)
    try:
        return path.read_text(encoding=encoding)
    except OSError as e:
        raise FastaIOError(f"Could not open {path} for reading: {e}") from e
    except UnicodeDecodeError as e:
        raise FastaFormatError(f"{path} is not valid {encoding} text: {e}") from e
