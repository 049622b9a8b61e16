"""
Parser for the 武器大师 workbook (Format B).

Two sheets, one per mode. Each data row repeats a (name, price+build, code)
triad three times across columns A-C, E-G and I-K. A few promotional rows sit
above the data; the first column-A cell naming a weapon category marks the
start of the table.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from delta_common.fields import DIGITS_RE, infer_tier, parse_price
from delta_common.noise import is_advertisement_cell
from delta_common.schema import (
    DEFAULT_FULL_SCALE_BUILD,
    DEFAULT_WARZONE_BUILD,
    SOURCE_WEAPON_MASTER,
    Mode,
    WeaponCode,
)

from .assembler import RecordAssembler
from .grid import SheetReader, read_cell, require_sheet

LOGGER = logging.getLogger(__name__)

WARZONE_SHEET = "烽火地带"
FULL_SCALE_SHEET = "全面战场"
ANCHOR_KEYWORD = "步枪"
ANCHOR_SCAN_ROWS = 10
LAST_ROW = 500
CODE_PREFIX = "6"
CODE_LENGTH = 21
# 1-based (name, price+build, code) columns.
TRIADS: Tuple[Tuple[int, int, int], ...] = ((1, 2, 3), (5, 6, 7), (9, 10, 11))

PRICE_TOKEN_RE = re.compile(r"[0-9]+w", re.IGNORECASE)


@dataclass(frozen=True)
class FormatBLayout:
    warzone_sheet: str = WARZONE_SHEET
    full_scale_sheet: str = FULL_SCALE_SHEET
    anchor_keyword: str = ANCHOR_KEYWORD
    anchor_scan_rows: int = ANCHOR_SCAN_ROWS
    last_row: int = LAST_ROW
    code_prefix: str = CODE_PREFIX
    code_length: int = CODE_LENGTH
    triads: Tuple[Tuple[int, int, int], ...] = TRIADS

    @property
    def sheets(self) -> Tuple[Tuple[str, Mode], ...]:
        return ((self.warzone_sheet, Mode.WARZONE), (self.full_scale_sheet, Mode.FULL_SCALE))


FORMAT_B_LAYOUT = FormatBLayout()


def find_data_start(reader: SheetReader, sheet: str, layout: FormatBLayout = FORMAT_B_LAYOUT) -> int:
    """First row after the category anchor in column A, or 1 when there is none."""

    for row_num in range(1, layout.anchor_scan_rows + 1):
        if layout.anchor_keyword in read_cell(reader, sheet, row_num, 1):
            return row_num + 1
    return 1


def is_valid_code(code: str, layout: FormatBLayout = FORMAT_B_LAYOUT) -> bool:
    if not code or is_advertisement_cell(code):
        return False
    return code.startswith(layout.code_prefix) and len(code) == layout.code_length


def split_warzone_cell(combined: str) -> Tuple[Optional[int], str]:
    """Split e.g. "22W青春版" into (22, "青春版"), dropping the price token from the build."""

    if not combined:
        return None, DEFAULT_WARZONE_BUILD
    price = parse_price(combined)
    match = PRICE_TOKEN_RE.search(combined)
    if match:
        build = combined[: match.start()] + combined[match.end() :]
    elif price is not None:
        # the whole cell was a bare number
        build = ""
    else:
        build = combined
    return price, build.strip() or DEFAULT_WARZONE_BUILD


def split_full_scale_cell(combined: str) -> Tuple[Optional[int], str]:
    """Split e.g. "60腰射" into (60, "腰射"); the first digit run is the price."""

    match = DIGITS_RE.search(combined)
    if not match:
        return None, combined.strip() or DEFAULT_FULL_SCALE_BUILD
    build = combined[: match.start()] + combined[match.end() :]
    return int(match.group(1)), build.strip() or DEFAULT_FULL_SCALE_BUILD


def _parse_triad(
    reader: SheetReader,
    sheet: str,
    row_num: int,
    columns: Sequence[int],
    mode: Mode,
    layout: FormatBLayout,
    assembler: RecordAssembler,
) -> Optional[WeaponCode]:
    name_col, combined_col, code_col = columns
    name = read_cell(reader, sheet, row_num, name_col)
    combined = read_cell(reader, sheet, row_num, combined_col)
    code = read_cell(reader, sheet, row_num, code_col)

    if not is_valid_code(code, layout) or not name:
        if code:
            LOGGER.debug("Rejected triad %s!R%dC%d (name=%r, code=%r)", sheet, row_num, name_col, name, code)
        return None

    if mode is Mode.WARZONE:
        price, build = split_warzone_cell(combined)
    else:
        price, build = split_full_scale_cell(combined)

    return assembler.emit(
        mode=mode,
        name=name,
        tier=infer_tier(name),
        price=price,
        build=build,
        code=code,
        source=SOURCE_WEAPON_MASTER,
    )


def parse_sheet(
    reader: SheetReader,
    sheet: str,
    mode: Mode,
    assembler: RecordAssembler,
    layout: FormatBLayout = FORMAT_B_LAYOUT,
) -> List[WeaponCode]:
    mark = len(assembler)
    data_start = find_data_start(reader, sheet, layout)
    for row_num in range(data_start, layout.last_row + 1):
        for columns in layout.triads:
            _parse_triad(reader, sheet, row_num, columns, mode, layout, assembler)

    emitted = assembler.since(mark)
    LOGGER.info("Format B sheet '%s': data starts at row %d, %d codes extracted", sheet, data_start, len(emitted))
    return emitted


def parse_format_b(
    reader: SheetReader,
    layout: FormatBLayout = FORMAT_B_LAYOUT,
    assembler: RecordAssembler | None = None,
) -> List[WeaponCode]:
    """
    Extract weapon codes from both Format-B sheets, warzone first.

    Both sheets must exist (SheetNotFoundError otherwise); they share one ID
    sequence.
    """

    for sheet, _ in layout.sheets:
        require_sheet(reader, sheet)

    assembler = assembler if assembler is not None else RecordAssembler()
    codes: List[WeaponCode] = []
    for sheet, mode in layout.sheets:
        codes.extend(parse_sheet(reader, sheet, mode, assembler, layout))
    return codes
