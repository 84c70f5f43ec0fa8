"""Configuration loading for fastaidx.

Settings can be provided through:
    - Environment variables (FASTAIDX_HEADER_MARKER, FASTAIDX_INDEX_SUFFIX)
    - A .env file in the current directory
    - Explicit parameters passed to load_config()

Example:
    >>> from fastaidx.config import load_config
    >>> config = load_config()
    >>> config.index_suffix
    '.fai'
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

DEFAULT_HEADER_MARKER = ">"
DEFAULT_INDEX_SUFFIX = ".fai"


@dataclass
class FastaConfig:
    """Settings shared by the index builder, readers and the CLI.

    Attributes:
        header_marker: Single character that starts every header line.
        index_suffix: Suffix appended to a FASTA path to derive its default
            index path.
    """

    header_marker: str = DEFAULT_HEADER_MARKER
    index_suffix: str = DEFAULT_INDEX_SUFFIX

    @property
    def marker_byte(self) -> bytes:
        """The header marker encoded for comparison against raw lines."""
        return self.header_marker.encode("ascii")

    def index_path_for(self, fasta_path: Union[str, Path]) -> Path:
        """Return the default index path for a FASTA file.

        Example:
            >>> FastaConfig().index_path_for("genome.fa")
            PosixPath('genome.fa.fai')
        """
        return Path(f"{fasta_path}{self.index_suffix}")


def load_config(
    env_path: Optional[Path] = None,
    header_marker: Optional[str] = None,
    index_suffix: Optional[str] = None,
) -> FastaConfig:
    """Load fastaidx configuration from environment or explicit values.

    Precedence:
        1. Explicit parameters passed to this function
        2. Environment variables (FASTAIDX_HEADER_MARKER, FASTAIDX_INDEX_SUFFIX)
        3. Values from .env file
        4. Built-in defaults

    Args:
        env_path: Path to a .env file. If not provided, searches for .env
            in the current directory and parent directories.
        header_marker: Explicit header marker character.
        index_suffix: Explicit index file suffix.

    Returns:
        A FastaConfig instance with resolved values.

    Raises:
        ValueError: If the resolved header marker is not a single ASCII
            character, or the index suffix is empty.
    """
    if env_path:
        load_dotenv(env_path)
    else:
        load_dotenv()

    resolved_marker = header_marker or os.getenv("FASTAIDX_HEADER_MARKER", DEFAULT_HEADER_MARKER)
    if len(resolved_marker) != 1 or not resolved_marker.isascii():
        raise ValueError(
            f"Header marker must be a single ASCII character, got {resolved_marker!r}"
        )

    resolved_suffix = index_suffix or os.getenv("FASTAIDX_INDEX_SUFFIX", DEFAULT_INDEX_SUFFIX)
    if not resolved_suffix:
        raise ValueError("Index suffix must not be empty")

    return FastaConfig(header_marker=resolved_marker, index_suffix=resolved_suffix)
