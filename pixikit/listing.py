"""Filtering, sorting and printing the packages of an environment."""

from __future__ import annotations

import json
import math
import re
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Iterable

_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB")

_HEADER = ("Package", "Version", "Build", "Size", "Kind", "Source")

_MIN_WIDTH = 2
_PADDING = 2


class SortBy(Enum):
    """How packages are ordered in a listing."""

    SIZE = "size"
    NAME = "name"
    TYPE = "type"


@dataclass
class PackageToOutput:
    """One package as it appears in a listing."""

    name: str
    version: str
    build: str | None = None
    size_bytes: int | None = None
    kind: str = "conda"
    source: str | None = None
    is_explicit: bool = False


def filter_packages(
    packages: Iterable[PackageToOutput], pattern: str
) -> list[PackageToOutput]:
    """Keep the packages whose name matches the regular expression ``pattern``."""
    try:
        regex = re.compile(pattern)
    except re.error as exc:
        raise ValueError("Invalid regex") from exc
    return [package for package in packages if regex.search(package.name)]


def sort_packages(
    packages: Iterable[PackageToOutput], sort_by: SortBy | str = SortBy.NAME
) -> list[PackageToOutput]:
    """Return the packages ordered by size, name or kind (a stable sort)."""
    strategy = SortBy(sort_by)
    if strategy is SortBy.SIZE:
        return sorted(packages, key=lambda p: p.size_bytes or 0)
    if strategy is SortBy.NAME:
        return sorted(packages, key=lambda p: p.name)
    return sorted(packages, key=lambda p: p.kind)


def packages_to_json(packages: Iterable[PackageToOutput], pretty: bool = False) -> str:
    """Serialize the packages as a JSON array, compact or indented."""
    data = [asdict(package) for package in packages]
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def human_bytes(size: float) -> str:
    """Format a byte count with binary units, e.g. ``1.5 KiB``."""
    if size <= 0:
        return "0 B"
    exponent = min(int(math.floor(math.log(size, 1024))), len(_UNITS) - 1)
    if exponent < len(_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    while exponent > 0 and size < 1024**exponent:
        exponent -= 1
    text = f"{size / 1024**exponent:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text} {_UNITS[exponent]}"


def format_table(packages: Iterable[PackageToOutput]) -> str:
    """Return the packages as an aligned table with a header row."""
    rows = [_HEADER] + [
        (
            package.name,
            package.version,
            package.build or "",
            human_bytes(package.size_bytes) if package.size_bytes is not None else "",
            package.kind,
            package.source or "",
        )
        for package in packages
    ]
    columns = list(zip(*rows))[:-1]
    widths = [max(_MIN_WIDTH, *map(len, column)) + _PADDING for column in columns]
    lines = [
        "".join(cell.ljust(width) for cell, width in zip(row, widths)) + row[-1]
        for row in rows
    ]
    return "\n".join(lines) + "\n"