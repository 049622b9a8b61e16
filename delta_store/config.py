from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv

from delta_common.errors import ConfigError
from delta_excel.format_a import FORMAT_A_LAYOUT, FormatALayout
from delta_excel.format_b import FORMAT_B_LAYOUT, FormatBLayout

load_dotenv()

DEFAULT_LAYOUT_CONFIG = Path("config/layouts.yaml")


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_float(value: str | None, default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


def _parse_path(value: str | None) -> Optional[Path]:
    if not value or not value.strip():
        return None
    return Path(value.strip())


@dataclass
class Settings:
    data_dir: Path
    cache_path: Optional[Path]
    api_base_url: str
    use_local_cache: bool
    cache_max_age_hours: float
    enable_excel: bool
    layout_config: Path = DEFAULT_LAYOUT_CONFIG

    @property
    def cache_max_age(self) -> Optional[timedelta]:
        """None means the cache never expires."""

        if self.cache_max_age_hours <= 0:
            return None
        return timedelta(hours=self.cache_max_age_hours)


def load_settings() -> Settings:
    return Settings(
        data_dir=Path(os.getenv("DELTA_DATA_DIR", "data")),
        cache_path=_parse_path(os.getenv("DELTA_CACHE_PATH")),
        api_base_url=os.getenv("DELTA_API_BASE_URL", "").strip(),
        use_local_cache=_parse_bool(os.getenv("DELTA_USE_LOCAL_CACHE"), True),
        cache_max_age_hours=_parse_float(os.getenv("DELTA_CACHE_MAX_AGE_HOURS"), 24.0),
        enable_excel=_parse_bool(os.getenv("DELTA_ENABLE_EXCEL"), False),
        layout_config=_parse_path(os.getenv("DELTA_LAYOUT_CONFIG")) or DEFAULT_LAYOUT_CONFIG,
    )


def _override(layout: Any, section: Any, section_name: str) -> Any:
    if section is None:
        return layout
    if not isinstance(section, dict):
        raise ConfigError(f"`{section_name}` must be a mapping of layout fields.")

    fields = {f.name: f for f in dataclasses.fields(layout)}
    updates: Dict[str, Any] = {}
    for key, value in section.items():
        if key not in fields:
            raise ConfigError(f"Unknown key '{key}' in `{section_name}`; expected one of: {', '.join(fields)}")
        current = getattr(layout, key)
        if key == "triads":
            try:
                value = tuple(tuple(int(c) for c in triad) for triad in value)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"`{section_name}.triads` must be a list of 3-column lists.") from exc
            if any(isinstance(c, bool) for triad in section[key] for c in triad):
                raise ConfigError(f"`{section_name}.triads` columns must be integers.")
            if any(len(triad) != 3 for triad in value):
                raise ConfigError(f"`{section_name}.triads` entries must have exactly 3 columns.")
        elif isinstance(current, int) and (isinstance(value, bool) or not isinstance(value, int)):
            raise ConfigError(f"`{section_name}.{key}` must be an integer.")
        elif isinstance(current, str):
            value = str(value)
        updates[key] = value
    return dataclasses.replace(layout, **updates)


def load_layout_config(path: Path = DEFAULT_LAYOUT_CONFIG) -> Tuple[FormatALayout, FormatBLayout]:
    """
    Load optional layout overrides for both workbooks.

    The YAML may carry ``format_a`` and ``format_b`` sections whose keys are the
    layout dataclass fields (sheet names, row windows, anchor, code shape).
    A missing file means the built-in layouts.
    """

    path = Path(path)
    if path.exists():
        with path.open("r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    else:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level.")

    unknown = set(data) - {"format_a", "format_b"}
    if unknown:
        raise ConfigError(f"Unknown sections in {path}: {', '.join(sorted(unknown))}")

    layout_a = _override(FORMAT_A_LAYOUT, data.get("format_a"), "format_a")
    layout_b = _override(FORMAT_B_LAYOUT, data.get("format_b"), "format_b")
    return layout_a, layout_b
