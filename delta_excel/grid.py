"""
Cell access for the weapon-code workbooks.

Parsers never touch openpyxl directly: they go through a ``SheetReader`` so
tests (and callers that already hold cell values) can feed an in-memory grid.
Row and column numbers are 1-indexed, matching Excel.
"""

from __future__ import annotations

import logging
import zipfile
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, List, Mapping, Protocol, Sequence

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from delta_common.errors import ExtractionError, SheetNotFoundError

LOGGER = logging.getLogger(__name__)


class SheetReader(Protocol):
    def sheet_names(self) -> List[str]:
        ...

    def cell(self, sheet: str, row: int, column: int) -> Any:
        ...


class GridReader:
    """In-memory reader over ``{sheet: [[row1 values], [row2 values], ...]}``."""

    def __init__(self, sheets: Mapping[str, Sequence[Sequence[Any]]]) -> None:
        self._sheets: Dict[str, List[List[Any]]] = {name: [list(r) for r in rows] for name, rows in sheets.items()}

    def sheet_names(self) -> List[str]:
        return list(self._sheets)

    def cell(self, sheet: str, row: int, column: int) -> Any:
        rows = self._sheets[sheet]
        if row < 1 or row > len(rows):
            return None
        values = rows[row - 1]
        if column < 1 or column > len(values):
            return None
        return values[column - 1]


class WorkbookReader:
    """openpyxl-backed reader; use as a context manager so the workbook is closed."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        try:
            self._wb = openpyxl.load_workbook(self.path, data_only=True)
        except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError) as exc:
            raise ExtractionError(f"Failed to open workbook {self.path}: {exc}") from exc

    def sheet_names(self) -> List[str]:
        return list(self._wb.sheetnames)

    def cell(self, sheet: str, row: int, column: int) -> Any:
        return self._wb[sheet].cell(row=row, column=column).value

    def close(self) -> None:
        self._wb.close()

    def __enter__(self) -> "WorkbookReader":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def format_cell(value: Any) -> str:
    """Render a raw cell value the way it reads in the spreadsheet."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def require_sheet(reader: SheetReader, sheet: str) -> None:
    names = reader.sheet_names()
    if sheet not in names:
        raise SheetNotFoundError(sheet, names)


def read_cell(reader: SheetReader, sheet: str, row: int, column: int) -> str:
    """Trimmed cell text; a cell that fails to read counts as empty."""

    try:
        value = reader.cell(sheet, row, column)
    except Exception as exc:
        LOGGER.debug("Unreadable cell %s!R%dC%d: %s", sheet, row, column, exc)
        return ""
    return format_cell(value).strip()


def read_row(
    reader: SheetReader,
    sheet: str,
    row: int,
    first_column: int = 1,
    last_column: int = 12,
) -> List[str]:
    return [read_cell(reader, sheet, row, col) for col in range(first_column, last_column + 1)]


def cell_at(row: Sequence[str], index: int) -> str:
    """0-based lookup into a row buffer, empty when the buffer is short."""

    if index < 0 or index >= len(row):
        return ""
    return row[index]
