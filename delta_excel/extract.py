"""
Extraction job over both community workbooks.

Locates each workbook in the configured data directories, runs the matching
parser and concatenates the results (刀仔 first, then 武器大师). A source that
cannot be found or opened is logged and skipped; only an overall empty result
is an error.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from delta_common.errors import ExtractionError, NoDataError, SourceNotFoundError
from delta_common.schema import SOURCE_DAOZAI, SOURCE_WEAPON_MASTER, WeaponCode

from .assembler import RecordAssembler
from .format_a import FORMAT_A_LAYOUT, FormatALayout, parse_format_a
from .format_b import FORMAT_B_LAYOUT, FormatBLayout, parse_format_b
from .grid import SheetReader, WorkbookReader

LOGGER = logging.getLogger(__name__)

DAOZAI_FILENAME = "刀仔三角洲枪械改装.xlsx"
WEAPON_MASTER_FILENAME = "武器大师地板的改枪码合集.xlsx"


def _uniq(paths: Iterable[Path]) -> List[Path]:
    seen = set()
    ordered: List[Path] = []
    for path in paths:
        key = str(path)
        if key in seen:
            continue
        seen.add(key)
        ordered.append(path)
    return ordered


def default_data_dirs(data_dir: Path | None = None) -> List[Path]:
    """Configured data dir, then ./data, then data/ next to the launched script and one level up."""

    script_dir = Path(sys.argv[0]).resolve().parent if sys.argv and sys.argv[0] else Path.cwd()
    candidates = [Path("data"), script_dir / "data", script_dir.parent / "data"]
    if data_dir is not None:
        candidates.insert(0, Path(data_dir))
    return _uniq(candidates)


def locate_source(filename: str, data_dirs: Sequence[Path]) -> Path:
    tried: List[str] = []
    for directory in data_dirs:
        path = Path(directory) / filename
        if path.is_file():
            return path
        tried.append(str(path))
    raise SourceNotFoundError(f"{filename} not found; tried: {', '.join(tried) or '[]'}")


def _parse_workbook(
    path: Path,
    parse: Callable[[SheetReader], List[WeaponCode]],
) -> List[WeaponCode]:
    with WorkbookReader(path) as reader:
        return parse(reader)


def load_daozai_codes(
    path: str | Path,
    layout: FormatALayout = FORMAT_A_LAYOUT,
    assembler: RecordAssembler | None = None,
) -> List[WeaponCode]:
    return _parse_workbook(Path(path), lambda reader: parse_format_a(reader, layout, assembler))


def load_weapon_master_codes(
    path: str | Path,
    layout: FormatBLayout = FORMAT_B_LAYOUT,
    assembler: RecordAssembler | None = None,
) -> List[WeaponCode]:
    return _parse_workbook(Path(path), lambda reader: parse_format_b(reader, layout, assembler))


def load_weapon_codes(
    daozai_path: str | Path | None = None,
    weapon_master_path: str | Path | None = None,
    *,
    data_dirs: Optional[Sequence[Path]] = None,
    format_a_layout: FormatALayout = FORMAT_A_LAYOUT,
    format_b_layout: FormatBLayout = FORMAT_B_LAYOUT,
) -> List[WeaponCode]:
    """
    Run both parsers with one shared ID sequence and return the combined codes.

    Explicit paths win over searching ``data_dirs``. Raises NoDataError when
    neither workbook produced a single code.
    """

    dirs = list(data_dirs) if data_dirs is not None else default_data_dirs()
    assembler = RecordAssembler()
    jobs = [
        (SOURCE_DAOZAI, daozai_path, DAOZAI_FILENAME, lambda p: load_daozai_codes(p, format_a_layout, assembler)),
        (
            SOURCE_WEAPON_MASTER,
            weapon_master_path,
            WEAPON_MASTER_FILENAME,
            lambda p: load_weapon_master_codes(p, format_b_layout, assembler),
        ),
    ]

    for label, explicit, filename, run in jobs:
        try:
            path = Path(explicit) if explicit is not None else locate_source(filename, dirs)
            codes = run(path)
        except ExtractionError as exc:
            LOGGER.warning("Skipping %s source: %s", label, exc)
            continue
        LOGGER.info("Loaded %d codes from %s (%s)", len(codes), label, path)

    if not assembler.records:
        raise NoDataError("No weapon codes found from any source")
    return list(assembler.records)
