"""
Parser for the 刀仔 workbook (Format A).

One sheet, two independent regions per physical row:

    A     B     C      D      E     F      G          I     J      K
    name  tier  price  build  code  range  updated  | name  build  code
    ---------------- warzone -----------------------  -- full scale --

Names are merged cells, so a blank name inherits the last named row of the
same region.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from delta_common.fields import infer_tier, parse_price, parse_range
from delta_common.noise import (
    FULL_SCALE_CODE_HEADER_LABEL,
    WARZONE_CODE_HEADER_LABEL,
    is_advertisement_row,
    is_header_marker,
)
from delta_common.schema import (
    DEFAULT_FULL_SCALE_BUILD,
    DEFAULT_WARZONE_BUILD,
    MAX_NAME_LENGTH,
    SOURCE_DAOZAI,
    UNKNOWN_TIER,
    Mode,
    WeaponCode,
)

from .assembler import NameCarry, RecordAssembler
from .grid import SheetReader, cell_at, read_row, require_sheet

LOGGER = logging.getLogger(__name__)

SHEET_NAME = "工作表1"
FIRST_ROW = 11
LAST_ROW = 500
HEADER_ROW = 11
COLUMN_COUNT = 12

# 0-based offsets into the row buffer.
WZ_NAME, WZ_TIER, WZ_PRICE, WZ_BUILD, WZ_CODE, WZ_RANGE, WZ_UPDATED = range(7)
FS_NAME, FS_BUILD, FS_CODE = 8, 9, 10


@dataclass(frozen=True)
class FormatALayout:
    sheet: str = SHEET_NAME
    first_row: int = FIRST_ROW
    last_row: int = LAST_ROW
    header_row: int = HEADER_ROW
    column_count: int = COLUMN_COUNT


FORMAT_A_LAYOUT = FormatALayout()


def _accept_name(
    row: Sequence[str],
    name_col: int,
    code_col: int,
    carry: NameCarry,
    code_label: str,
) -> Optional[Tuple[str, str]]:
    """Return (name, code) for a region, or None when the region is noise."""

    cell_name = cell_at(row, name_col)
    code = cell_at(row, code_col)
    if not code:
        return None

    name = carry.resolve(cell_name)
    if not name:
        return None
    if is_header_marker(name, code, code_label):
        return None
    if len(name) > MAX_NAME_LENGTH or is_advertisement_row([name]):
        return None

    carry.remember(cell_name)
    return name, code


def _parse_warzone_region(row: Sequence[str], carry: NameCarry, assembler: RecordAssembler) -> Optional[WeaponCode]:
    accepted = _accept_name(row, WZ_NAME, WZ_CODE, carry, WARZONE_CODE_HEADER_LABEL)
    if accepted is None:
        return None
    name, code = accepted

    price_cell = cell_at(row, WZ_PRICE)
    range_cell = cell_at(row, WZ_RANGE)
    return assembler.emit(
        mode=Mode.WARZONE,
        name=name,
        tier=cell_at(row, WZ_TIER) or UNKNOWN_TIER,
        price=parse_price(price_cell) if price_cell else None,
        build=cell_at(row, WZ_BUILD) or DEFAULT_WARZONE_BUILD,
        code=code,
        range=parse_range(range_cell) if range_cell else None,
        update_time=cell_at(row, WZ_UPDATED) or None,
        source=SOURCE_DAOZAI,
    )


def _parse_full_scale_region(row: Sequence[str], carry: NameCarry, assembler: RecordAssembler) -> Optional[WeaponCode]:
    accepted = _accept_name(row, FS_NAME, FS_CODE, carry, FULL_SCALE_CODE_HEADER_LABEL)
    if accepted is None:
        return None
    name, code = accepted

    # The full-scale region carries no price, range or timestamp columns.
    return assembler.emit(
        mode=Mode.FULL_SCALE,
        name=name,
        tier=infer_tier(name),
        price=None,
        build=cell_at(row, FS_BUILD) or DEFAULT_FULL_SCALE_BUILD,
        code=code,
        source=SOURCE_DAOZAI,
    )


def parse_format_a(
    reader: SheetReader,
    layout: FormatALayout = FORMAT_A_LAYOUT,
    assembler: RecordAssembler | None = None,
) -> List[WeaponCode]:
    """
    Extract weapon codes from a Format-A sheet.

    Raises SheetNotFoundError when the data sheet is missing; every row-level
    problem is a silent skip. Pass a shared ``assembler`` to continue an ID
    sequence started by another parser.
    """

    require_sheet(reader, layout.sheet)
    assembler = assembler if assembler is not None else RecordAssembler()
    mark = len(assembler)
    warzone_carry = NameCarry()
    full_scale_carry = NameCarry()
    skipped_rows = 0

    for row_num in range(layout.first_row, layout.last_row + 1):
        row = read_row(reader, layout.sheet, row_num, 1, layout.column_count)
        if not any(row):
            continue
        if is_advertisement_row(row) or row_num == layout.header_row:
            skipped_rows += 1
            continue

        _parse_warzone_region(row, warzone_carry, assembler)
        _parse_full_scale_region(row, full_scale_carry, assembler)

    emitted = assembler.since(mark)
    LOGGER.info(
        "Format A sheet '%s': %d codes extracted, %d header/advertisement rows skipped",
        layout.sheet,
        len(emitted),
        skipped_rows,
    )
    return emitted
