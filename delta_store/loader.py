from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

from delta_common.errors import ApiError, CacheError, NoDataError
from delta_common.schema import WeaponCode

from .api_client import ApiClient
from .cache import CacheManager
from .config import Settings

LOGGER = logging.getLogger(__name__)

DEFAULT_CACHE_MAX_AGE = timedelta(hours=24)


@dataclass
class DataSourceConfig:
    use_local_cache: bool = True
    local_cache_path: Optional[Path] = None
    api_base_url: str = ""
    # None means the cache never expires.
    cache_max_age: Optional[timedelta] = DEFAULT_CACHE_MAX_AGE

    @classmethod
    def from_settings(cls, settings: Settings) -> "DataSourceConfig":
        return cls(
            use_local_cache=settings.use_local_cache,
            local_cache_path=settings.cache_path,
            api_base_url=settings.api_base_url,
            cache_max_age=settings.cache_max_age,
        )


class WeaponCodeLoader:
    """
    Picks the freshest available source.

    Order: the API when configured and the cache is stale (or has no age
    limit), then the local cache. Fresh API data is written back to the cache.
    """

    def __init__(
        self,
        config: Optional[DataSourceConfig] = None,
        cache: Optional[CacheManager] = None,
        api_client: Optional[ApiClient] = None,
    ) -> None:
        self.config = config or DataSourceConfig()
        self.cache = cache or CacheManager(self.config.local_cache_path)
        if api_client is None and self.config.api_base_url:
            api_client = ApiClient(self.config.api_base_url)
        self.api_client = api_client

    def _should_refresh(self) -> bool:
        if not self.config.use_local_cache or self.config.cache_max_age is None:
            return True
        return self.cache.is_expired(self.config.cache_max_age)

    def load(self) -> List[WeaponCode]:
        if self.api_client is not None and self._should_refresh():
            LOGGER.info("Fetching weapon codes from API...")
            try:
                codes = self.api_client.fetch_weapon_codes()
            except ApiError as exc:
                LOGGER.warning("API fetch failed: %s, falling back to cache", exc)
            else:
                if self.config.use_local_cache:
                    try:
                        self.cache.save(codes, "api")
                    except CacheError as exc:
                        LOGGER.warning("Failed to refresh cache: %s", exc)
                return codes

        if self.config.use_local_cache:
            try:
                codes, found = self.cache.load()
            except CacheError as exc:
                LOGGER.warning("Cache load failed: %s", exc)
            else:
                if found:
                    return codes
                LOGGER.info("No cache file at %s", self.cache.cache_path)

        raise NoDataError("No weapon codes available (API not configured or failed, cache not available)")
