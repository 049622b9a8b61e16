"""
Spreadsheet extraction for the two community weapon-code workbooks.
"""

from .assembler import NameCarry, RecordAssembler  # noqa: F401
from .extract import (  # noqa: F401
    DAOZAI_FILENAME,
    WEAPON_MASTER_FILENAME,
    default_data_dirs,
    load_daozai_codes,
    load_weapon_codes,
    load_weapon_master_codes,
    locate_source,
)
from .format_a import FORMAT_A_LAYOUT, FormatALayout, parse_format_a  # noqa: F401
from .format_b import FORMAT_B_LAYOUT, FormatBLayout, parse_format_b  # noqa: F401
from .grid import GridReader, SheetReader, WorkbookReader, read_row  # noqa: F401

__all__ = [
    "NameCarry",
    "RecordAssembler",
    "DAOZAI_FILENAME",
    "WEAPON_MASTER_FILENAME",
    "default_data_dirs",
    "load_daozai_codes",
    "load_weapon_codes",
    "load_weapon_master_codes",
    "locate_source",
    "FORMAT_A_LAYOUT",
    "FormatALayout",
    "parse_format_a",
    "FORMAT_B_LAYOUT",
    "FormatBLayout",
    "parse_format_b",
    "GridReader",
    "SheetReader",
    "WorkbookReader",
    "read_row",
]
