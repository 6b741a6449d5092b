"""Expand command-line paths into X12 files and read them."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

AFTER_FORMATS = ("%Y%m%d %H%M%S", "%Y%m%d")


def parse_after(value: str) -> datetime:
    """Parse ``YYYYMMDD`` or ``YYYYMMDD HHMMSS``."""
    for fmt in AFTER_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt)
        except ValueError:
            continue
    raise ValueError(f"expected 'YYYYMMDD' or 'YYYYMMDD HHMMSS', got {value!r}")


def _newer(path: Path, after: datetime | None) -> bool:
    return after is None or datetime.fromtimestamp(path.stat().st_mtime) > after


def collect_paths(
    paths: Iterable[Path], dive: bool = False, after: datetime | None = None
) -> list[Path]:
    """Files named directly, plus files inside named directories.

    Directories contribute their immediate files, or every file below them
    when ``dive`` is set; each directory's files are sorted. ``after`` keeps
    only files modified later than that moment.
    """
    found: list[Path] = []
    for path in paths:
        if path.is_dir():
            items = path.rglob("*") if dive else path.iterdir()
            found.extend(sorted(item for item in items if item.is_file() and _newer(item, after)))
        elif path.is_file():
            if _newer(path, after):
                found.append(path)
        else:
            logger.warning("unknown item in list: %s", path)
    return found


def read_text(path: Path) -> str:
    """Read a file as UTF-8, dropping a byte order mark if present."""
    return path.read_text(encoding="utf-8-sig")
