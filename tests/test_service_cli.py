import shutil
from pathlib import Path

import generate_cache
from delta_excel.extract import DAOZAI_FILENAME, WEAPON_MASTER_FILENAME
from delta_store.cache import CacheManager
from delta_store.config import Settings
from delta_store.service import WeaponCodeService


def _settings(tmp_path: Path, enable_excel: bool) -> Settings:
    return Settings(
        data_dir=tmp_path / "data",
        cache_path=tmp_path / "weapon_codes.json",
        api_base_url="",
        use_local_cache=True,
        cache_max_age_hours=24,
        enable_excel=enable_excel,
        layout_config=tmp_path / "layouts.yaml",
    )


def _stage_workbooks(tmp_path, daozai_workbook, weapon_master_workbook):
    data_dir = tmp_path / "data"
    data_dir.mkdir(exist_ok=True)
    shutil.copy(daozai_workbook, data_dir / DAOZAI_FILENAME)
    shutil.copy(weapon_master_workbook, data_dir / WEAPON_MASTER_FILENAME)


def test_service_without_cache_in_production_returns_empty(tmp_path):
    service = WeaponCodeService(_settings(tmp_path, enable_excel=False))
    assert service.get_weapon_codes() == []
    assert service.cache_info()["cache_found"] is False
    assert service.cache_info()["mode"] == "production"


def test_service_extracts_and_caches_in_development(tmp_path, daozai_workbook, weapon_master_workbook):
    _stage_workbooks(tmp_path, daozai_workbook, weapon_master_workbook)
    service = WeaponCodeService(_settings(tmp_path, enable_excel=True))

    codes = service.get_weapon_codes()

    assert len(codes) == 6
    assert (tmp_path / "weapon_codes.json").exists()
    assert len(service.get_weapon_codes_by_source("武器大师")) == 2

    info = service.cache_info()
    assert info["cache_found"] is True
    assert info["code_count"] == 6
    assert info["dao_zai_count"] == 4
    assert info["weapon_master_count"] == 2


def test_cli_generate_info_clear(tmp_path, daozai_workbook, weapon_master_workbook, capsys):
    cache_path = tmp_path / "out" / "weapon_codes.json"
    layout = tmp_path / "no_layout.yaml"

    rc = generate_cache.main(
        [
            "--cache",
            str(cache_path),
            "generate",
            "--daozai",
            str(daozai_workbook),
            "--weapon-master",
            str(weapon_master_workbook),
            "--layout-config",
            str(layout),
        ]
    )
    assert rc == 0
    codes, found = CacheManager(cache_path).load()
    assert found and len(codes) == 6

    assert generate_cache.main(["--cache", str(cache_path), "info"]) == 0
    out = capsys.readouterr().out
    assert "Total codes: 6" in out
    assert "Data source: local-excel" in out

    assert generate_cache.main(["--cache", str(cache_path), "clear"]) == 0
    assert not cache_path.exists()
    assert generate_cache.main(["--cache", str(cache_path), "info"]) == 1


def test_cli_generate_without_sources_fails(tmp_path):
    rc = generate_cache.main(
        [
            "--cache",
            str(tmp_path / "weapon_codes.json"),
            "generate",
            "--data-dir",
            str(tmp_path / "empty"),
            "--daozai",
            str(tmp_path / "missing_a.xlsx"),
            "--weapon-master",
            str(tmp_path / "missing_b.xlsx"),
            "--layout-config",
            str(tmp_path / "no_layout.yaml"),
        ]
    )
    assert rc == 1


def test_cli_info_reports_malformed_cache(tmp_path):
    path = tmp_path / "weapon_codes.json"
    path.write_text("[]", encoding="utf-8")

    assert generate_cache.main(["--cache", str(path), "info"]) == 1
