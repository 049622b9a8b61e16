"""
Advertisement and header filters for the community spreadsheets.

Both datasets interleave promotional text (channel plugs, "link expires"
notices, watermark phrases) with the data. These predicates are intentionally
loose: a missed advertisement degrades output quality, it never breaks parsing.
"""

from __future__ import annotations

from typing import Iterable, Sequence

MAX_CELL_LENGTH = 100

# Checked against a single cell (mostly Format-B code cells).
CELL_AD_KEYWORDS: Sequence[str] = (
    "抖音",
    "刀仔",
    "武器大师",
    "地板",
    "改枪码大全",
    "每次使用点链接",
    "在线文档",
    "失效",
    "保存好链接",
    "永久更新",
    "s7最新版",
    "被抄袭",
    "被超越",
    "屏息",
    "射手步枪以及狙击步枪",
    "霰弹枪以及其它",
    "高手版",
    "陈泽杯",
)

# Checked against every cell of a Format-A row.
ROW_AD_KEYWORDS: Sequence[str] = ("抖音搜", "画质调整", "刀仔", "关注", "群", "频道")

NAME_HEADER_LABEL = "枪械名称"
WARZONE_CODE_HEADER_LABEL = "枪械代码"
FULL_SCALE_CODE_HEADER_LABEL = "改枪码"


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def is_advertisement_cell(cell: str) -> bool:
    """True for overly long cells or cells carrying a promotional keyword."""

    if len(cell) > MAX_CELL_LENGTH:
        return True
    return _contains_any(cell, CELL_AD_KEYWORDS)


def is_advertisement_row(row: Iterable[str]) -> bool:
    return any(_contains_any(cell, ROW_AD_KEYWORDS) for cell in row)


def is_header_marker(name: str, code: str, code_label: str = WARZONE_CODE_HEADER_LABEL) -> bool:
    return NAME_HEADER_LABEL in name or code_label in code
