from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class Mode(str, Enum):
    """Game mode a modification code applies to."""

    WARZONE = "烽火地带"
    FULL_SCALE = "全面战场"


# Provenance tags, one per spreadsheet dataset.
SOURCE_DAOZAI = "刀仔"
SOURCE_WEAPON_MASTER = "武器大师"

DEFAULT_WARZONE_BUILD = "标准改装"
DEFAULT_FULL_SCALE_BUILD = "标准配置"
UNKNOWN_TIER = "-"
MAX_NAME_LENGTH = 50


@dataclass(frozen=True)
class WeaponCode:
    """One weapon + modification recipe, normalized across both spreadsheet layouts."""

    id: str
    mode: Mode
    name: str
    tier: str
    price: Optional[int]
    build: str
    code: str
    range: Optional[int] = None
    update_time: Optional[str] = None
    source: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["mode"] = self.mode.value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WeaponCode":
        return cls(
            id=str(data.get("id", "")),
            mode=Mode(data.get("mode")),
            name=str(data.get("name", "")),
            tier=str(data.get("tier") or UNKNOWN_TIER),
            price=_optional_int(data.get("price")),
            build=str(data.get("build", "")),
            code=str(data.get("code", "")),
            range=_optional_int(data.get("range")),
            update_time=data.get("update_time"),
            source=str(data.get("source", "")),
        )


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)
