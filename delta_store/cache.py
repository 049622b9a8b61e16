from __future__ import annotations

import json
import logging
import sys
import threading
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from delta_common.errors import CacheError
from delta_common.schema import WeaponCode

LOGGER = logging.getLogger(__name__)

CACHE_VERSION = "1.0.0"
CACHE_FILENAME = "weapon_codes.json"
APP_DIR_NAME = "delta-tool"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _script_dir() -> Path:
    if sys.argv and sys.argv[0]:
        return Path(sys.argv[0]).resolve().parent
    return Path.cwd()


def candidate_cache_paths() -> List[Path]:
    script_dir = _script_dir()
    return [
        Path("data") / CACHE_FILENAME,
        Path(CACHE_FILENAME),
        script_dir / CACHE_FILENAME,
        script_dir / "data" / CACHE_FILENAME,
        script_dir.parent / "data" / CACHE_FILENAME,
    ]


def find_cache_path(candidates: Optional[Sequence[Path]] = None) -> Path:
    """First existing cache file among the candidates, else ./data/weapon_codes.json."""

    for path in candidates if candidates is not None else candidate_cache_paths():
        if Path(path).exists():
            return Path(path)
    return Path("data") / CACHE_FILENAME


def writable_cache_path(platform: str = sys.platform, home: Optional[Path] = None) -> Path:
    """
    Per-user location for the cache.

    Windows keeps it next to the installed script under data/; macOS uses
    ~/Library/Application Support/delta-tool; everything else ~/.config/delta-tool.
    """

    if platform.startswith("win"):
        return _script_dir() / "data" / CACHE_FILENAME
    try:
        home_dir = home if home is not None else Path.home()
    except RuntimeError:
        return _script_dir() / CACHE_FILENAME
    if platform == "darwin":
        return home_dir / "Library" / "Application Support" / APP_DIR_NAME / CACHE_FILENAME
    return home_dir / ".config" / APP_DIR_NAME / CACHE_FILENAME


class CacheManager:
    """Versioned JSON cache of weapon codes."""

    def __init__(self, cache_path: Optional[Path] = None) -> None:
        self.cache_path = Path(cache_path) if cache_path is not None else find_cache_path()
        self._lock = threading.Lock()

    def load(self) -> Tuple[List[WeaponCode], bool]:
        """
        Return (codes, found). A missing file is ``([], False)``; an unreadable
        or malformed file raises CacheError.
        """

        with self._lock:
            if not self.cache_path.exists():
                return [], False
            try:
                with self.cache_path.open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except OSError as exc:
                raise CacheError(f"Failed to read cache file {self.cache_path}: {exc}") from exc
            except json.JSONDecodeError as exc:
                raise CacheError(f"Failed to parse cache file {self.cache_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise CacheError(f"Cache file {self.cache_path} must contain a JSON object.")

        version = data.get("version")
        if version != CACHE_VERSION:
            LOGGER.warning("Cache version mismatch. Expected %s, got %s", CACHE_VERSION, version)

        try:
            codes = [WeaponCode.from_dict(item) for item in data.get("weapon_codes") or []]
        except (TypeError, ValueError, AttributeError) as exc:
            raise CacheError(f"Invalid weapon code entry in {self.cache_path}: {exc}") from exc

        LOGGER.info(
            "Loaded %d weapon codes from cache (version: %s, updated: %s)",
            len(codes),
            version,
            data.get("last_updated"),
        )
        return codes, True

    def read_envelope(self) -> Dict[str, Any]:
        """Cache metadata without the code list; empty when there is no cache."""

        with self._lock:
            if not self.cache_path.exists():
                return {}
            try:
                with self.cache_path.open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as exc:
                raise CacheError(f"Failed to read cache file {self.cache_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise CacheError(f"Cache file {self.cache_path} must contain a JSON object.")
        return {k: v for k, v in data.items() if k != "weapon_codes"}

    def save(self, codes: Sequence[WeaponCode], data_source: str) -> None:
        payload = {
            "version": CACHE_VERSION,
            "last_updated": datetime.now().strftime(TIMESTAMP_FORMAT),
            "total_count": len(codes),
            "data_source": data_source,
            "weapon_codes": [code.to_dict() for code in codes],
        }
        with self._lock:
            try:
                self.cache_path.parent.mkdir(parents=True, exist_ok=True)
                with self.cache_path.open("w", encoding="utf-8") as f:
                    json.dump(payload, f, indent=2, ensure_ascii=False)
            except OSError as exc:
                raise CacheError(f"Failed to write cache file {self.cache_path}: {exc}") from exc
        LOGGER.info("Saved %d weapon codes to cache: %s", len(codes), self.cache_path)

    def is_expired(self, max_age: timedelta) -> bool:
        """A missing cache counts as expired."""

        try:
            mtime = self.cache_path.stat().st_mtime
        except FileNotFoundError:
            return True
        age = datetime.now() - datetime.fromtimestamp(mtime)
        return age > max_age

    def clear(self) -> None:
        with self._lock:
            try:
                self.cache_path.unlink()
            except FileNotFoundError:
                return
            except OSError as exc:
                raise CacheError(f"Failed to remove cache file {self.cache_path}: {exc}") from exc
        LOGGER.info("Cache file removed: %s", self.cache_path)

    def initialize_from_bytes(self, data: bytes, target: Optional[Path] = None) -> None:
        """
        Seed the per-user cache from bundled JSON bytes on first run.

        Switches ``cache_path`` to the writable location; an existing file there
        is left untouched.
        """

        if not data:
            raise CacheError("No bundled cache data provided")

        self.cache_path = Path(target) if target is not None else writable_cache_path()
        if self.cache_path.exists():
            return
        with self._lock:
            try:
                self.cache_path.parent.mkdir(parents=True, exist_ok=True)
                self.cache_path.write_bytes(data)
            except OSError as exc:
                raise CacheError(f"Failed to write bundled cache to {self.cache_path}: {exc}") from exc
        LOGGER.info("Initialized cache from bundled data: %s", self.cache_path)
