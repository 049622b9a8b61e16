"""
Build and inspect the weapon-code cache.

    python generate_cache.py generate [--daozai PATH] [--weapon-master PATH]
    python generate_cache.py info
    python generate_cache.py clear

``generate`` parses both community workbooks (searched under DELTA_DATA_DIR,
./data and data/ next to this script unless given explicitly) and writes
weapon_codes.json for the query layer.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from delta_common.errors import CacheError, ConfigError, NoDataError
from delta_excel.extract import default_data_dirs, load_weapon_codes
from delta_store.cache import CACHE_VERSION, CacheManager
from delta_store.config import load_layout_config, load_settings
from delta_store.service import EXCEL_DATA_SOURCE
from delta_store.summary import summarize_codes

LOGGER = logging.getLogger(__name__)


def configure_logging(verbosity: int) -> None:
    level = logging.DEBUG if verbosity > 0 else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(message)s")


def _cache_manager(args: argparse.Namespace) -> CacheManager:
    settings = load_settings()
    return CacheManager(args.cache or settings.cache_path)


def cmd_generate(args: argparse.Namespace) -> int:
    settings = load_settings()
    try:
        layout_a, layout_b = load_layout_config(args.layout_config or settings.layout_config)
    except ConfigError as exc:
        LOGGER.error("Invalid layout config: %s", exc)
        return 2

    try:
        codes = load_weapon_codes(
            args.daozai,
            args.weapon_master,
            data_dirs=default_data_dirs(args.data_dir or settings.data_dir),
            format_a_layout=layout_a,
            format_b_layout=layout_b,
        )
    except NoDataError as exc:
        LOGGER.error("%s", exc)
        return 1

    cache = _cache_manager(args)
    try:
        cache.save(codes, EXCEL_DATA_SOURCE)
    except CacheError as exc:
        LOGGER.error("%s", exc)
        return 1

    print(summarize_codes(codes))
    print(f"Wrote {len(codes)} weapon codes to {cache.cache_path}")
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    cache = _cache_manager(args)
    try:
        envelope = cache.read_envelope()
        codes, found = cache.load()
    except CacheError as exc:
        LOGGER.error("%s", exc)
        return 1

    print(f"Cache location: {cache.cache_path}")
    if not found:
        print("Cache not found.")
        return 1
    version = envelope.get("version")
    marker = "" if version == CACHE_VERSION else f" (expected {CACHE_VERSION})"
    print(f"Version: {version}{marker}")
    print(f"Last updated: {envelope.get('last_updated')}")
    print(f"Data source: {envelope.get('data_source')}")
    print(f"Total codes: {len(codes)}")
    print(summarize_codes(codes))
    return 0


def cmd_clear(args: argparse.Namespace) -> int:
    cache = _cache_manager(args)
    try:
        cache.clear()
    except CacheError as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate and inspect the weapon-code cache.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (repeatable).",
    )
    parser.add_argument("--cache", type=Path, help="Cache file path (defaults to DELTA_CACHE_PATH or discovery).")
    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help="Parse both workbooks and write the cache.")
    gen.add_argument("--daozai", type=Path, help="Path to the 刀仔 workbook (Format A).")
    gen.add_argument("--weapon-master", type=Path, help="Path to the 武器大师 workbook (Format B).")
    gen.add_argument("--data-dir", type=Path, help="Directory searched for the workbooks.")
    gen.add_argument("--layout-config", type=Path, help="YAML layout overrides.")
    gen.set_defaults(func=cmd_generate)

    info = sub.add_parser("info", help="Show cache location, version and per-source counts.")
    info.set_defaults(func=cmd_info)

    clear = sub.add_parser("clear", help="Remove the cache file.")
    clear.set_defaults(func=cmd_clear)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
