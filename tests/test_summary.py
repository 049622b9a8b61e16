from delta_common.schema import Mode, WeaponCode
from delta_store.summary import codes_to_frame, count_by_source, summarize_codes


def _codes():
    return [
        WeaponCode("0", Mode.WARZONE, "M4A1", "T1", 85, "满改", "A", 52, None, "刀仔"),
        WeaponCode("1", Mode.WARZONE, "MP5", "T2", None, "半改", "B", None, None, "刀仔"),
        WeaponCode("2", Mode.FULL_SCALE, "AK-47", "-", None, "标准配置", "C", source="刀仔"),
        WeaponCode("3", Mode.WARZONE, "MK47", "-", 22, "青春版", "D", source="武器大师"),
    ]


def test_codes_to_frame_keeps_nulls():
    frame = codes_to_frame(_codes())
    assert frame.height == 4
    assert frame["price"].null_count() == 2
    assert frame["mode"].to_list()[0] == "烽火地带"


def test_summarize_codes_groups_by_source_and_mode():
    summary = summarize_codes(_codes())
    rows = {(r["source"], r["mode"]): r for r in summary.iter_rows(named=True)}

    assert rows[("刀仔", "烽火地带")]["code_count"] == 2
    assert rows[("刀仔", "烽火地带")]["priced_count"] == 1
    assert rows[("刀仔", "烽火地带")]["ranged_count"] == 1
    assert rows[("刀仔", "全面战场")]["code_count"] == 1
    assert rows[("武器大师", "烽火地带")]["priced_count"] == 1


def test_empty_summary():
    assert summarize_codes([]).is_empty()
    assert count_by_source([]) == {}


def test_count_by_source():
    assert count_by_source(_codes()) == {"刀仔": 3, "武器大师": 1}
