"""Indexed random access to FASTA files.

This package builds samtools-compatible ``.fai`` indexes for line-wrapped
FASTA files and uses them to seek straight to any base or subsequence.
Without an index, queries fall back to scanning the file.

Example:
    >>> from fastaidx import Fasta
    >>> with Fasta() as fasta:
    ...     fasta.open("genome.fa")
    ...     fasta.create_index()
    ...     fasta.fetch("chr1:101-150")
"""

from fastaidx.builder import build_index
from fastaidx.codec import dumps_index, loads_index, read_index, write_index
from fastaidx.config import FastaConfig, load_config
from fastaidx.errors import (
    FastaError,
    FastaFormatError,
    FastaIOError,
    FastaRangeError,
    FastaStateError,
)
from fastaidx.fasta import Fasta
from fastaidx.index import IndexEntry, IndexTable
from fastaidx.logging_config import get_logger, setup_logging
from fastaidx.reader import IndexedReader, SequentialReader, iter_records
from fastaidx.regions import Region, load_regions_from_yaml, parse_region

__version__ = "0.1.0"

__all__ = [
    # Facade
    "Fasta",
    # Index
    "IndexEntry",
    "IndexTable",
    "build_index",
    "dumps_index",
    "loads_index",
    "read_index",
    "write_index",
    # Readers
    "IndexedReader",
    "SequentialReader",
    "iter_records",
    # Regions
    "Region",
    "parse_region",
    "load_regions_from_yaml",
    # Configuration
    "FastaConfig",
    "load_config",
    # Errors
    "FastaError",
    "FastaFormatError",
    "FastaIOError",
    "FastaRangeError",
    "FastaStateError",
    # Logging
    "setup_logging",
    "get_logger",
]
