from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from delta_common.errors import CacheError, NoDataError
from delta_common.schema import SOURCE_DAOZAI, SOURCE_WEAPON_MASTER, WeaponCode
from delta_excel.extract import default_data_dirs, load_weapon_codes

from .cache import CACHE_VERSION, CacheManager
from .config import Settings, load_layout_config, load_settings
from .summary import count_by_source

LOGGER = logging.getLogger(__name__)

EXCEL_DATA_SOURCE = "local-excel"


def filter_by_source(codes: List[WeaponCode], source: str) -> List[WeaponCode]:
    return [code for code in codes if code.source == source]


class WeaponCodeService:
    """
    Query surface for weapon codes.

    Reads the cache; when the cache is missing and Excel support is enabled
    (development setups), extracts from the workbooks and saves the result.
    """

    def __init__(self, settings: Optional[Settings] = None, cache: Optional[CacheManager] = None) -> None:
        self.settings = settings or load_settings()
        self.cache = cache or CacheManager(self.settings.cache_path)

    def _load_cache(self) -> Optional[List[WeaponCode]]:
        try:
            codes, found = self.cache.load()
        except CacheError as exc:
            LOGGER.warning("Cache load failed: %s", exc)
            return None
        return codes if found else None

    def extract_from_excel(self, data_dir: Optional[Path] = None) -> List[WeaponCode]:
        layout_a, layout_b = load_layout_config(self.settings.layout_config)
        return load_weapon_codes(
            data_dirs=default_data_dirs(data_dir or self.settings.data_dir),
            format_a_layout=layout_a,
            format_b_layout=layout_b,
        )

    def get_weapon_codes(self) -> List[WeaponCode]:
        codes = self._load_cache()
        if codes is not None:
            return codes

        if not self.settings.enable_excel:
            LOGGER.error(
                "Weapon codes cache not found at %s. Run `python generate_cache.py generate` to build it.",
                self.cache.cache_path,
            )
            return []

        LOGGER.info("Development mode: loading weapon codes from Excel...")
        try:
            codes = self.extract_from_excel()
        except NoDataError as exc:
            LOGGER.error("Error loading weapon codes: %s", exc)
            return []
        try:
            self.cache.save(codes, EXCEL_DATA_SOURCE)
        except CacheError as exc:
            LOGGER.warning("Failed to save cache: %s", exc)
        return codes

    def get_weapon_codes_by_source(self, source: str) -> List[WeaponCode]:
        return filter_by_source(self.get_weapon_codes(), source)

    def cache_info(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {
            "cache_path": str(self.cache.cache_path),
            "cache_found": False,
            "cache_loaded": False,
            "version": CACHE_VERSION,
            "excel_enabled": self.settings.enable_excel,
            "mode": "development" if self.settings.enable_excel else "production",
        }
        try:
            codes, found = self.cache.load()
        except CacheError as exc:
            LOGGER.warning("Cache load failed: %s", exc)
            return info

        info["cache_found"] = found
        info["cache_loaded"] = found
        if found:
            counts = count_by_source(codes)
            info["code_count"] = len(codes)
            info["dao_zai_count"] = counts.get(SOURCE_DAOZAI, 0)
            info["weapon_master_count"] = counts.get(SOURCE_WEAPON_MASTER, 0)
        return info
