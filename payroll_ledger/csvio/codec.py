from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from ..models.tabular_store import Cell, TabularStore

"""Comma-delimited text codec for TabularStore.

Format:
- first line is the header, following lines are data rows
- fields are split on every literal comma; there is no quoting or escaping,
  so cell values must not contain commas or line breaks
- no type coercion: every field is kept as text
- absent cells are written as empty strings

decode(encode(store)) reproduces columns and rows for any store whose cells
are comma-free and newline-free strings.
"""

__all__ = [
    "DELIMITER",
    "CsvFileError",
    "DecodeError",
    "EncodeError",
    "decode",
    "encode",
    "load_table",
    "save_table",
]

logger = logging.getLogger(__name__)

DELIMITER = ","
LINE_END = "\n"
DEFAULT_ENCODING = "utf-8"


class CsvFileError(Exception):
    """A CSV file could not be read or written."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class DecodeError(CsvFileError):
    """Source missing or unreadable."""


class EncodeError(CsvFileError):
    """Destination not writable."""


def _strip_line_end(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _split(line: str, width: int) -> list[str]:
    # A zero-column table writes rows as empty lines
    if width == 0 and line == "":
        return []
    return line.split(DELIMITER)


def decode(stream: Iterable[str]) -> TabularStore:
    """Build a TabularStore from lines of delimited text.

    An empty source yields a store with no columns and no rows.
    """
    store = TabularStore()
    lines = iter(stream)
    header = next(lines, None)
    if header is None:
        return store
    header = _strip_line_end(header)
    store.set_columns(_split(header, 0))
    logger.debug(f"columns={store.columns}")
    for raw in lines:
        line = _strip_line_end(raw)
        store.add_row(_split(line, store.column_count))
        logger.debug(f"-> {line}")
    return store


def _cell_text(value: Cell | object) -> str:
    return "" if value is None else str(value)


def encode(store: TabularStore, stream: TextIO) -> None:
    """Write header and rows; absent cells become empty strings."""
    stream.write(DELIMITER.join(store.columns) + LINE_END)
    for i in range(store.row_count):
        stream.write(DELIMITER.join(_cell_text(v) for v in store.row_values(i)) + LINE_END)


def load_table(path: Path | str, encoding: str = DEFAULT_ENCODING) -> TabularStore:
    """Decode a CSV file.

    Raises:
        DecodeError: the file is missing, unreadable or not valid text in ``encoding``
    """
    p = Path(path)
    try:
        with p.open("r", encoding=encoding, newline="") as f:
            store = decode(f)
    except FileNotFoundError as e:
        raise DecodeError(p, "file not found") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DecodeError(p, str(e)) from e
    logger.debug(f"loaded {p} columns={store.column_count} rows={store.row_count}")
    return store


def save_table(store: TabularStore, path: Path | str, encoding: str = DEFAULT_ENCODING) -> Path:
    """Encode ``store`` into ``path`` (overwritten).

    Raises:
        EncodeError: the destination cannot be opened or written
    """
    p = Path(path)
    try:
        with p.open("w", encoding=encoding, newline="") as f:
            encode(store, f)
    except (OSError, UnicodeEncodeError) as e:
        raise EncodeError(p, str(e)) from e
    logger.debug(f"saved {p} columns={store.column_count} rows={store.row_count}")
    return p
