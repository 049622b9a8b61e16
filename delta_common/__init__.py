"""
Shared weapon-code schema, noise filters and field parsers used by both
spreadsheet parsers and the cache/remote collaborators.
"""

from .errors import (  # noqa: F401
    ApiError,
    CacheError,
    ConfigError,
    DeltaError,
    ExtractionError,
    NoDataError,
    SheetNotFoundError,
    SourceNotFoundError,
)
from .fields import TIER_RULES, infer_tier, parse_price, parse_range  # noqa: F401
from .noise import (  # noqa: F401
    FULL_SCALE_CODE_HEADER_LABEL,
    WARZONE_CODE_HEADER_LABEL,
    is_advertisement_cell,
    is_advertisement_row,
    is_header_marker,
)
from .schema import (  # noqa: F401
    DEFAULT_FULL_SCALE_BUILD,
    DEFAULT_WARZONE_BUILD,
    MAX_NAME_LENGTH,
    SOURCE_DAOZAI,
    SOURCE_WEAPON_MASTER,
    UNKNOWN_TIER,
    Mode,
    WeaponCode,
)

__all__ = [
    "ApiError",
    "CacheError",
    "ConfigError",
    "DeltaError",
    "ExtractionError",
    "NoDataError",
    "SheetNotFoundError",
    "SourceNotFoundError",
    "TIER_RULES",
    "infer_tier",
    "parse_price",
    "parse_range",
    "FULL_SCALE_CODE_HEADER_LABEL",
    "WARZONE_CODE_HEADER_LABEL",
    "is_advertisement_cell",
    "is_advertisement_row",
    "is_header_marker",
    "DEFAULT_FULL_SCALE_BUILD",
    "DEFAULT_WARZONE_BUILD",
    "MAX_NAME_LENGTH",
    "SOURCE_DAOZAI",
    "SOURCE_WEAPON_MASTER",
    "UNKNOWN_TIER",
    "Mode",
    "WeaponCode",
]
