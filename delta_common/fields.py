from __future__ import annotations

import re
from typing import Optional, Sequence, Tuple

from .schema import UNKNOWN_TIER

PRICE_TOKEN_RE = re.compile(r"([0-9]+)w")
DIGITS_RE = re.compile(r"([0-9]+)")

# Evaluated top to bottom, first hit wins. Compound names such as
# "狙击步枪" must resolve to the more specific category, so rifles go last.
TIER_RULES: Sequence[Tuple[str, str]] = (
    ("连狙", "连狙"),
    ("狙击", "狙击"),
    ("弓", "弓弩"),
    ("发射器", "发射器"),
    ("霰弹枪", "霰弹枪"),
    ("冲锋枪", "冲锋枪"),
    ("机枪", "机枪"),
    ("手枪", "手枪"),
    ("步枪", "步枪"),
)


def _to_int(text: str) -> Optional[int]:
    # int() also takes full-width digits and underscores
    if not (text.isascii() and text.lstrip("+-").isdigit()):
        return None
    try:
        return int(text)
    except ValueError:
        return None


def parse_price(value: str) -> Optional[int]:
    """
    Parse a price in ten-thousand units ("85w", "22W青春版", "30").

    The first ``<digits>w`` token wins; otherwise the whole string must be a
    plain integer. Anything else yields ``None``.
    """

    text = value.strip().lower()
    match = PRICE_TOKEN_RE.search(text)
    if match:
        return int(match.group(1))
    return _to_int(text)


def parse_range(value: str) -> Optional[int]:
    """Leading meters value of cells like "52米"."""

    match = DIGITS_RE.search(value)
    if match:
        return int(match.group(1))
    return None


def infer_tier(name: str) -> str:
    lowered = name.lower()
    for keyword, tier in TIER_RULES:
        if keyword in lowered:
            return tier
    return UNKNOWN_TIER
