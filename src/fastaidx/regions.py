"""Region parsing for fastaidx.

Regions use the samtools convention ``name[:start[-stop]]`` with 1-based,
inclusive coordinates, and are stored as :class:`Region` objects with
0-based inclusive coordinates ready for
:meth:`fastaidx.Fasta.get_sequence`.

Batches of regions can be loaded from YAML::

    regions:
      - chr1:1-100
      - name: chr2
        start: 5
        stop: 20

Example:
    >>> parse_region("chr1:1,001-2,000")
    Region(name='chr1', start=1000, stop=1999)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml


@dataclass(frozen=True)
class Region:
    """A slice of one record.

    Attributes:
        name: Record name.
        start: 0-based first position.
        stop: 0-based last position (inclusive), or None for "to the end".
    """

    name: str
    start: int = 0
    stop: Optional[int] = None

    def __str__(self) -> str:
        if self.start == 0 and self.stop is None:
            return self.name
        if self.stop is None:
            return f"{self.name}:{self.start + 1}"
        return f"{self.name}:{self.start + 1}-{self.stop + 1}"


def _parse_coordinate(value: Any, region: str) -> int:
    try:
        coordinate = int(str(value).replace(",", ""))
    except ValueError:
        raise ValueError(f"Invalid coordinate {value!r} in region {region!r}") from None
    if coordinate < 1:
        raise ValueError(f"Coordinates are 1-based, got {coordinate} in region {region!r}")
    return coordinate


def make_region(name: str, start: Any = None, stop: Any = None) -> Region:
    """Build a Region from 1-based inclusive coordinates.

    Args:
        name: Record name.
        start: 1-based first position. Defaults to the start of the record.
        stop: 1-based last position. Defaults to the end of the record.

    Raises:
        ValueError: If the name is empty or the coordinates are invalid.
    """
    if not name:
        raise ValueError("Region name must not be empty")
    label = f"{name}:{start}-{stop}"

    first = _parse_coordinate(start, label) if start is not None else 1
    last = _parse_coordinate(stop, label) if stop is not None else None
    if last is not None and last < first:
        raise ValueError(f"Region stop precedes start: {label!r}")

    return Region(name=name, start=first - 1, stop=last - 1 if last is not None else None)


def parse_region(region: str) -> Region:
    """Parse a ``name[:start[-stop]]`` region string.

    Only the last colon separates the name from the coordinates, so record
    names containing colons still parse when coordinates are given.

    Raises:
        ValueError: If the string is empty or its coordinates are invalid.

    Example:
        >>> parse_region("chr2:5")
        Region(name='chr2', start=4, stop=None)
    """
    region = region.strip()
    if not region:
        raise ValueError("Empty region")

    name, sep, span = region.rpartition(":")
    if not sep:
        return make_region(region)

    start, dash, stop = span.partition("-")
    return make_region(name, start, stop if dash else None)


def regions_from_config(config: Any) -> List[Region]:
    """Build regions from a parsed YAML document.

    Args:
        config: Mapping with a ``regions`` list. Items are region strings or
            mappings with ``name`` and optional ``start``/``stop``.

    Raises:
        ValueError: If the document does not follow that layout.
    """
    if not isinstance(config, dict):
        raise ValueError("Regions YAML root must be a mapping/dictionary")

    items = config.get("regions")
    if not isinstance(items, list):
        raise ValueError("Regions YAML must contain a 'regions' list")

    regions: List[Region] = []
    for item in items:
        if isinstance(item, str):
            regions.append(parse_region(item))
        elif isinstance(item, dict):
            regions.append(make_region(str(item.get("name") or ""), item.get("start"), item.get("stop")))
        else:
            raise ValueError(f"Unsupported region entry: {item!r}")
    return regions


def load_regions_from_yaml(yaml_path: Union[str, Path]) -> List[Region]:
    """Load a list of regions from a YAML file.

    Raises:
        ValueError: If the file is empty or malformed.
        FileNotFoundError: If the file does not exist.

    Example:
        >>> regions = load_regions_from_yaml(Path("regions.yaml"))
        >>> regions[0].name
        'chr1'
    """
    yaml_path = Path(yaml_path)
    with open(yaml_path, "r", encoding="utf-8") as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}") from e

    if config is None:
        raise ValueError(f"YAML file is empty or invalid: {yaml_path}")

    return regions_from_config(config)
