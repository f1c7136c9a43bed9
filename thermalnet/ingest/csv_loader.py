"""
Hourly comparison CSV loader.

Reads the heat pump comparison export (one row per hour, wide columns per
building) from a local path or an http(s) URL and auto-types every cell:

- empty cell        -> None
- true / false      -> bool
- numeric literal   -> int or float (no ``_`` digit separators)
- anything else     -> str (left for the transformer to default or reject)
"""

from __future__ import annotations

import asyncio
import csv
import io
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

import requests

from ..core.models import RawRow

logger = logging.getLogger(__name__)

Source = Union[str, Path]


class DataLoadError(RuntimeError):
    """Raised when the hourly source cannot be read or parsed."""

    def __init__(self, message: str, source: Optional[Source] = None):
        super().__init__(message)
        self.source = str(source) if source is not None else None


def auto_type(value: Optional[str]) -> Any:
    """Convert a raw CSV cell to None, bool, int, float or str."""
    if value is None:
        return None
    text = value.strip()
    if text == "":
        return None
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    # int()/float() accept digit separators ("1_000"); a CSV cell does not
    if "_" in text:
        return text
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def is_remote(source: Source) -> bool:
    return str(source).lower().startswith(("http://", "https://"))


def _read_text(source: Source, timeout: float) -> str:
    if is_remote(source):
        response = requests.get(str(source), timeout=timeout)
        response.raise_for_status()
        return response.text

    with open(Path(source), "r", encoding="utf-8-sig", newline="") as f:
        return f.read()


def parse_csv_text(text: str) -> List[RawRow]:
    """Parse CSV text with a header row into auto-typed rows."""
    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames:
        return []

    rows = []
    for record in reader:
        # DictReader files surplus cells under the None key
        rows.append({k: auto_type(v) for k, v in record.items() if k is not None})
    return rows


def read_rows(source: Source, timeout: float = 30.0) -> List[RawRow]:
    """
    Read and auto-type every row of the source.

    Args:
        source: Filesystem path or http(s) URL
        timeout: Request timeout for remote sources (seconds)

    Returns:
        List of rows in source order

    Raises:
        DataLoadError: If the source is unreachable or unparsable
    """
    try:
        text = _read_text(source, timeout)
        rows = parse_csv_text(text)
    except (OSError, UnicodeDecodeError, csv.Error, requests.RequestException) as e:
        raise DataLoadError(f"Could not read hourly data from {source}: {e}", source=source) from e

    logger.debug(f"Read {len(rows)} rows from {source}")
    return rows


async def load_rows(source: Source, timeout: float = 30.0) -> List[RawRow]:
    """Async wrapper around read_rows; the blocking read runs in a worker thread."""
    return await asyncio.to_thread(read_rows, source, timeout)
