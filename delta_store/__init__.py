"""
Cache, remote source and query collaborators around the extraction core.
"""

from .api_client import ApiClient  # noqa: F401
from .cache import CACHE_FILENAME, CACHE_VERSION, CacheManager  # noqa: F401
from .config import Settings, load_layout_config, load_settings  # noqa: F401
from .loader import DataSourceConfig, WeaponCodeLoader  # noqa: F401
from .service import WeaponCodeService, filter_by_source  # noqa: F401
from .summary import codes_to_frame, count_by_source, summarize_codes  # noqa: F401

__all__ = [
    "ApiClient",
    "CACHE_FILENAME",
    "CACHE_VERSION",
    "CacheManager",
    "Settings",
    "load_layout_config",
    "load_settings",
    "DataSourceConfig",
    "WeaponCodeLoader",
    "WeaponCodeService",
    "filter_by_source",
    "codes_to_frame",
    "count_by_source",
    "summarize_codes",
]
