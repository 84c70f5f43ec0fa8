"""CLI entry points for the fastaidx package.

This module provides command-line interfaces:
    - fastaidx-index: Build the index for a FASTA file
    - fastaidx-fetch: Print regions of a FASTA file
    - fastaidx-batch: Extract every region listed in a YAML file

Example:
    $ fastaidx-index genome.fa
    $ fastaidx-fetch genome.fa chr1:101-150 chr2 -w 80
    $ fastaidx-batch genome.fa regions.yaml -o regions.fa
"""

import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from fastaidx.errors import FastaError
from fastaidx.fasta import Fasta
from fastaidx.logging_config import get_logger, setup_logging
from fastaidx.regions import Region, load_regions_from_yaml, parse_region
from fastaidx.utils import format_record

logger = get_logger("cli")


def _open_fasta(fasta_path: Path, index_path: Optional[Path]) -> Fasta:
    """Open a FASTA file, using an explicit or default index when present."""
    fasta = Fasta()
    if index_path is None:
        candidate = fasta.config.index_path_for(fasta_path)
        if candidate.exists():
            index_path = candidate
            logger.debug("Using existing index: %s", index_path)
        else:
            logger.debug("No index found for %s, falling back to sequential reads", fasta_path)
    fasta.open(fasta_path, index_path)
    return fasta


def _write_regions(
    fasta: Fasta,
    regions: Iterable[Region],
    out: TextIO,
    width: int,
) -> int:
    """Write each region as a FASTA record. Returns the number of failures."""
    failures = 0
    for region in regions:
        try:
            sequence = fasta.fetch(region)
        except (FastaError, ValueError) as e:
            logger.error("Could not fetch %s: %s", region, e)
            failures += 1
            continue
        out.write(format_record(str(region), sequence, width))
    return failures


def index_main():
    """CLI entry point for building a FASTA index.

    This function is the main entry point for the fastaidx-index command.
    """
    parser = argparse.ArgumentParser(description="Build a .fai index for a FASTA file")
    parser.add_argument("fasta", type=Path, help="Path to FASTA file")
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Index output path (default: FASTA path + .fai)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )

    args = parser.parse_args()

    if args.verbose:
        setup_logging(level="DEBUG")

    if not args.fasta.exists():
        logger.error("Input file not found: %s", args.fasta)
        sys.exit(1)

    try:
        with Fasta() as fasta:
            fasta.open(args.fasta)
            index_path = fasta.create_index(args.output)
            count = len(fasta.index)
    except (FastaError, ValueError) as e:
        logger.error("Indexing failed: %s", e)
        sys.exit(1)

    logger.info("Wrote %d records to %s", count, index_path)


def fetch_main():
    """CLI entry point for printing regions of a FASTA file.

    This function is the main entry point for the fastaidx-fetch command.
    Regions use 1-based inclusive coordinates: name, name:start or
    name:start-stop.
    """
    parser = argparse.ArgumentParser(description="Print regions of a FASTA file")
    parser.add_argument("fasta", type=Path, help="Path to FASTA file")
    parser.add_argument("regions", nargs="+", help="Regions as name[:start[-stop]] (1-based, inclusive)")
    parser.add_argument("-i", "--index", type=Path, help="Index file (default: FASTA path + .fai if present)")
    parser.add_argument("-w", "--width", type=int, default=60, help="Wrap output to this column width (0 = no wrap)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose (debug) logging")

    args = parser.parse_args()

    if args.verbose:
        setup_logging(level="DEBUG")

    if not args.fasta.exists():
        logger.error("File not found: %s", args.fasta)
        sys.exit(1)

    try:
        regions = [parse_region(r) for r in args.regions]
    except ValueError as e:
        logger.error("Invalid region: %s", e)
        sys.exit(1)

    try:
        with _open_fasta(args.fasta, args.index) as fasta:
            failures = _write_regions(fasta, regions, sys.stdout, args.width)
    except (FastaError, ValueError) as e:
        logger.error("Fetch failed: %s", e)
        sys.exit(1)

    if failures:
        sys.exit(1)


def batch_main():
    """CLI entry point to extract every region listed in a YAML file.

    This function is the main entry point for the fastaidx-batch command.
    Regions that cannot be fetched are logged and skipped.

    Usage:
        fastaidx-batch genome.fa regions.yaml [-o OUT] [-i INDEX] [-w WIDTH]
    """
    parser = argparse.ArgumentParser(description="Extract FASTA regions listed in a YAML file")
    parser.add_argument("fasta", type=Path, help="Path to FASTA file")
    parser.add_argument("regions_yaml", type=Path, help="YAML file with a 'regions' list")
    parser.add_argument("-o", "--output", type=Path, help="Output FASTA path (default: stdout)")
    parser.add_argument("-i", "--index", type=Path, help="Index file (default: FASTA path + .fai if present)")
    parser.add_argument("-w", "--width", type=int, default=60, help="Wrap output to this column width (0 = no wrap)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose (debug) logging")

    args = parser.parse_args()

    if args.verbose:
        setup_logging(level="DEBUG")

    for path in (args.fasta, args.regions_yaml):
        if not path.exists():
            logger.error("File not found: %s", path)
            sys.exit(1)

    try:
        regions = load_regions_from_yaml(args.regions_yaml)
    except ValueError as e:
        logger.error("Error loading YAML: %s", e)
        sys.exit(1)

    if not regions:
        logger.warning("No regions listed in %s", args.regions_yaml)
        sys.exit(0)

    logger.info("Extracting %d regions from %s", len(regions), args.fasta)

    try:
        with _open_fasta(args.fasta, args.index) as fasta:
            if args.output:
                with open(args.output, "w", encoding="utf-8") as out:
                    failures = _write_regions(fasta, regions, out, args.width)
            else:
                failures = _write_regions(fasta, regions, sys.stdout, args.width)
    except (FastaError, OSError, ValueError) as e:
        logger.error("Batch extraction failed: %s", e)
        sys.exit(1)

    logger.info("Finished: %d extracted, %d failed", len(regions) - failures, failures)
