from datetime import datetime

import pytest

from arana import cmp
from arana.cmp import Comparison, Kind


def test_comparison_symbols_round_trip():
    for comparison in Comparison:
        assert cmp.parse_comparison(str(comparison)) is comparison


def test_parse_comparison_aliases():
    assert cmp.parse_comparison("!=") is Comparison.NE
    assert cmp.parse_comparison("<>") is Comparison.NE
    assert cmp.parse_comparison(">=") is Comparison.GTE


def test_parse_comparison_invalid():
    with pytest.raises(ValueError):
        cmp.parse_comparison("=>")


def test_kind_names():
    assert str(cmp.new_int64("k", Comparison.EQ, 1).kind) == "int"
    assert str(cmp.new_string("k", Comparison.EQ, "x").kind) == "string"
    assert str(cmp.new_date("k", Comparison.EQ, datetime(2021, 1, 1)).kind) == "date"


def test_comparison_order():
    parsed = [cmp.parse_comparison(s) for s in ("=", "<>", ">", ">=", "<", "<=")]
    assert parsed == sorted(parsed)
    assert parsed[0] < parsed[-1]


def test_int_round_trip():
    c = cmp.new_int64("uid", Comparison.EQ, 42)
    assert c.key == "uid"
    assert c.kind is Kind.INT
    assert c.comparison is Comparison.EQ
    assert c.value() == 42
    assert c.must_value() == 42


def test_negative_int_round_trip():
    c = cmp.new_int64("uid", Comparison.LT, -7)
    assert c.value() == -7


def test_string_value():
    c = cmp.new_string("name", Comparison.NE, "foo")
    assert c.value() == "foo"
    assert c.raw_value == "foo"


def test_str_format():
    c = cmp.new_int64("uid", Comparison.EQ, 42)
    assert str(c) == "(=42)"


def test_date_round_trip():
    moment = datetime(2021, 1, 17, 17, 45, 4)
    c = cmp.new_date("created", Comparison.GTE, moment)
    assert c.kind is Kind.DATE
    assert c.value() == moment


def test_date_drops_microseconds():
    moment = datetime(2021, 1, 17, 17, 45, 4, 123456)
    assert cmp.new_date("created", Comparison.GT, moment).value() == moment.replace(
        microsecond=0
    )


def test_date_only_layout():
    c = cmp.new("d", Comparison.EQ, "2021-03-08", Kind.DATE)
    assert c.value() == datetime(2021, 3, 8)


def test_datetime_with_millis_layout():
    c = cmp.new("d", Comparison.EQ, "2021-03-08 10:11:12.500", Kind.DATE)
    assert c.value() == datetime(2021, 3, 8, 10, 11, 12, 500000)


def test_time_only_layout():
    value = cmp.new("d", Comparison.EQ, "15:04:05", Kind.DATE).value()
    assert (value.hour, value.minute, value.second) == (15, 4, 5)


def test_unix_date_layout():
    value = cmp.new("d", Comparison.EQ, "Mon Jan 02 15:04:05 UTC 2006", Kind.DATE).value()
    assert value == datetime(2006, 1, 2, 15, 4, 5)


def test_invalid_date():
    c = cmp.new("d", Comparison.EQ, "not a date", Kind.DATE)
    with pytest.raises(ValueError):
        c.value()


def test_invalid_int():
    c = cmp.new("uid", Comparison.EQ, "abc", Kind.INT)
    with pytest.raises(ValueError):
        c.value()
    with pytest.raises(ValueError):
        c.must_value()


def test_int_out_of_range():
    c = cmp.new("uid", Comparison.EQ, str(1 << 63), Kind.INT)
    with pytest.raises(ValueError):
        c.value()


def test_kind_can_be_changed():
    c = cmp.new_string("uid", Comparison.EQ, "12")
    assert c.value() == "12"
    c.kind = Kind.INT
    assert c.value() == 12