import pytest

from conftest import OTHER_CODE, THIRD_CODE, VALID_CODE, b_row, format_b_reader, format_b_rows
from delta_common.errors import SheetNotFoundError
from delta_common.schema import Mode
from delta_excel.assembler import RecordAssembler
from delta_excel.format_b import (
    find_data_start,
    is_valid_code,
    parse_format_b,
    split_full_scale_cell,
    split_warzone_cell,
)
from delta_excel.grid import GridReader


def test_warzone_triad_strips_price_token():
    reader = format_b_reader([b_row(("MK47", "22W青春版", VALID_CODE))], [])

    codes = parse_format_b(reader)

    assert len(codes) == 1
    code = codes[0]
    assert code.mode is Mode.WARZONE
    assert code.price == 22
    assert code.build == "青春版"
    assert code.code == VALID_CODE
    assert code.source == "武器大师"
    assert code.range is None
    assert code.update_time is None


def test_full_scale_triad_uses_first_digit_run():
    reader = format_b_reader([], [b_row(("M4A1", "60腰射", VALID_CODE))])

    codes = parse_format_b(reader)

    assert len(codes) == 1
    assert codes[0].mode is Mode.FULL_SCALE
    assert codes[0].price == 60
    assert codes[0].build == "腰射"


def test_split_helpers_defaults():
    assert split_warzone_cell("") == (None, "标准改装")
    assert split_warzone_cell("26W") == (26, "标准改装")
    assert split_warzone_cell("30") == (30, "标准改装")
    assert split_warzone_cell("青春版") == (None, "青春版")
    assert split_warzone_cell("２２W青春版") == (None, "２２W青春版")
    assert split_full_scale_cell("") == (None, "标准配置")
    assert split_full_scale_cell("30") == (30, "标准配置")
    assert split_full_scale_cell("腰射") == (None, "腰射")
    assert split_full_scale_cell("60腰射2") == (60, "腰射2")
    assert split_full_scale_cell("６０腰射") == (None, "６０腰射")


def test_code_one_short_is_rejected_entirely():
    reader = format_b_reader([b_row(("MK47", "22W青春版", VALID_CODE[:-1]))], [])
    assert parse_format_b(reader) == []


def test_code_shape_validation():
    assert is_valid_code(VALID_CODE)
    assert not is_valid_code("")
    assert not is_valid_code("7" + VALID_CODE[1:])
    assert not is_valid_code(VALID_CODE + "X")
    assert not is_valid_code("6" + "失效" + "A" * 18)
    assert not is_valid_code("6" * 101)


def test_triad_without_name_is_rejected():
    reader = format_b_reader([b_row(("", "22W", VALID_CODE))], [])
    assert parse_format_b(reader) == []


def test_three_triads_per_row_in_column_order():
    reader = format_b_reader(
        [b_row(("MK47", "22W", VALID_CODE), ("MP5冲锋枪", "18W", OTHER_CODE), ("AWM狙击", "90W", THIRD_CODE))],
        [],
    )

    codes = parse_format_b(reader)

    assert [c.name for c in codes] == ["MK47", "MP5冲锋枪", "AWM狙击"]
    assert [c.id for c in codes] == ["0", "1", "2"]
    assert [c.tier for c in codes] == ["-", "冲锋枪", "狙击"]


def test_sheets_share_one_id_sequence_warzone_first():
    reader = format_b_reader(
        [b_row(("MK47", "22W", VALID_CODE)), b_row(("QCQ171", "26W", OTHER_CODE))],
        [b_row(("M4A1", "30", THIRD_CODE))],
    )

    codes = parse_format_b(reader)

    assert [(c.id, c.mode) for c in codes] == [
        ("0", Mode.WARZONE),
        ("1", Mode.WARZONE),
        ("2", Mode.FULL_SCALE),
    ]


def test_rows_before_anchor_are_ignored():
    rows = [
        b_row(("MK47", "22W", VALID_CODE)),
        ["步枪"],
        b_row(("QCQ171", "26W", OTHER_CODE)),
    ]
    reader = GridReader({"烽火地带": rows, "全面战场": []})

    codes = parse_format_b(reader)

    assert find_data_start(reader, "烽火地带") == 3
    assert [c.name for c in codes] == ["QCQ171"]


def test_data_starts_at_row_one_without_anchor():
    reader = GridReader({"烽火地带": format_b_rows(b_row(("MK47", "22W", VALID_CODE)), banner=False), "全面战场": []})

    assert find_data_start(reader, "烽火地带") == 1
    assert len(parse_format_b(reader)) == 1


def test_advertisement_banner_rows_do_not_emit():
    reader = format_b_reader([["武器大师改枪码大全", "", "链接失效请看置顶6IDP1280"]], [])
    assert parse_format_b(reader) == []


def test_missing_sheet_raises_before_emitting():
    reader = GridReader({"烽火地带": format_b_rows(b_row(("MK47", "22W", VALID_CODE)))})
    assembler = RecordAssembler()

    with pytest.raises(SheetNotFoundError):
        parse_format_b(reader, assembler=assembler)
    assert assembler.records == []


def test_emitted_codes_hold_shape_invariants():
    reader = format_b_reader(
        [b_row(("MK47", "22W", VALID_CODE), ("Bad", "1W", "12345"), ("", "2W", OTHER_CODE))],
        [b_row(("M4A1", "30", THIRD_CODE), ("M4A1", "", THIRD_CODE[:-2]))],
    )
    codes = parse_format_b(reader)

    assert len(codes) == 2
    for code in codes:
        assert code.code.startswith("6")
        assert len(code.code) == 21
        assert 0 < len(code.name) <= 50
