from datetime import datetime
from pathlib import Path
from typing import List, Sequence

import openpyxl
import pytest

from delta_excel.grid import GridReader

FORMAT_A_HEADER = ["枪械名称", "版本排行", "改装价格", "改装描述", "枪械代码", "有效射程", "更新时间", "", "枪械名称", "风格", "改枪码"]

VALID_CODE = "6IDP1280B97T7MULLRJ3C"
OTHER_CODE = "6IG8E6O07OULUBJA9PRPI"
THIRD_CODE = "6IENQK0097PFORHQ0UK53"


def a_row(warzone: Sequence = (), full_scale: Sequence = ()) -> List:
    """Format-A row: warzone cells in A-G, full-scale cells in I-K."""

    wz = list(warzone) + [""] * (7 - len(warzone))
    fs = list(full_scale) + [""] * (3 - len(full_scale))
    return wz + [""] + fs + [""]


def format_a_rows(*data_rows: Sequence) -> List[List]:
    """Ten banner rows, the header on row 11, data from row 12."""

    rows: List[List] = [[] for _ in range(10)]
    rows.append(list(FORMAT_A_HEADER))
    rows.extend(list(r) for r in data_rows)
    return rows


def format_a_reader(*data_rows: Sequence) -> GridReader:
    return GridReader({"工作表1": format_a_rows(*data_rows)})


def b_row(*triads: Sequence) -> List:
    """Format-B row from up to three (name, price+build, code) triads."""

    row: List = []
    for triad in triads:
        row.extend(list(triad) + [""] * (3 - len(triad)))
        row.append("")
    return row


def format_b_rows(*data_rows: Sequence, banner: bool = True) -> List[List]:
    rows: List[List] = []
    if banner:
        rows.append(["抖音搜 武器大师地板 每次使用点链接"])
        rows.append([])
        rows.append(["步枪", "", "", "", "冲锋枪", "", "", "", "狙击"])
    rows.extend(list(r) for r in data_rows)
    return rows


def format_b_reader(warzone_rows: Sequence[Sequence], full_scale_rows: Sequence[Sequence]) -> GridReader:
    return GridReader(
        {
            "烽火地带": format_b_rows(*warzone_rows),
            "全面战场": format_b_rows(*full_scale_rows),
        }
    )


def write_workbook(path: Path, sheets: dict) -> Path:
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for title, rows in sheets.items():
        ws = wb.create_sheet(title)
        for r_idx, values in enumerate(rows, start=1):
            for c_idx, value in enumerate(values, start=1):
                if value not in ("", None):
                    ws.cell(row=r_idx, column=c_idx, value=value)
    wb.save(path)
    return path


@pytest.fixture
def daozai_workbook(tmp_path: Path) -> Path:
    rows = format_a_rows(
        a_row(["M4A1", "T1", 85, "烽火满配", "ABCDE", "52米", datetime(2024, 1, 1)], ["AK-47", "腰射", "FULL1"]),
        a_row(["", "T1", "60w", "半改", "FGHIJ"], ["", "", "FULL2"]),
    )
    return write_workbook(tmp_path / "daozai.xlsx", {"工作表1": rows})


@pytest.fixture
def weapon_master_workbook(tmp_path: Path) -> Path:
    sheets = {
        "烽火地带": format_b_rows(b_row(("MK47", "22W青春版", VALID_CODE))),
        "全面战场": format_b_rows(b_row(("M4A1", "60腰射", OTHER_CODE))),
    }
    return write_workbook(tmp_path / "weapon_master.xlsx", sheets)
