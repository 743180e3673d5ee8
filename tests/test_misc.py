import math
from datetime import datetime, timedelta

import pytest

from arana.misc import compare, compute_unary, is_float_equal, is_zero, wrap


def test_is_float_equal():
    assert is_float_equal(0.1 + 0.2, 0.3)
    assert not is_float_equal(1.0, 1.1)
    assert not is_float_equal(math.nan, math.nan)


@pytest.mark.parametrize("value", [0, 0.0, "", None, False])
def test_is_zero_true(value):
    assert is_zero(value) is True


@pytest.mark.parametrize("value", [5, -1.5, "x", True])
def test_is_zero_false(value):
    assert is_zero(value) is False


@pytest.mark.parametrize(
    "a, b",
    [("a", "b"), (2, 10), (1.5, 2.5), ("x", 3), (datetime(2020, 1, 1), datetime(2021, 1, 1))],
)
def test_compare_antisymmetric(a, b):
    assert compare(a, b) == -compare(b, a)
    assert compare(a, a) == 0
    assert compare(b, b) == 0


def test_compare_numbers_numerically():
    assert compare(2, 10) < 0
    assert compare(10, 9) > 0
    assert compare(-3, 2) < 0


def test_compare_strings_lexically():
    assert compare("10", "9") < 0
    assert compare("abc", "abc") == 0


def test_compare_datetimes():
    now = datetime(2022, 5, 1, 12, 0, 0)
    assert compare(now, now + timedelta(seconds=1)) < 0
    assert compare(now + timedelta(days=1), now) > 0


def test_compare_int_and_numeric_float_text():
    assert compare(3, 3.0) == 0
    assert compare(3, 3.5) < 0


def test_unary_minus_on_ints_and_floats():
    assert compute_unary("-", 5) == -5
    assert compute_unary("-", -2.5) == 2.5
    assert compute_unary("-", "7") == -7.0


def test_unary_not():
    assert compute_unary("!", 0) == 1
    assert compute_unary("NOT", 42) == 0
    assert compute_unary("!", True) is False
    assert compute_unary("!", "0") == 1


def test_unary_bitwise_not():
    assert compute_unary("~", 0) == ~0
    assert compute_unary("~", -5) == ~-5
    for x in (1, 7, 1000):
        assert compute_unary("~", x) + x == 2**64 - 1


def test_unary_bool_minus():
    assert compute_unary("-", True) == -1
    assert compute_unary("-", False) == 0


def test_unary_unknown_operator_returns_input():
    assert compute_unary("?", 5) == 5
    assert compute_unary("-", [1, 2]) == [1, 2]


def test_unary_nan_passthrough():
    assert math.isnan(compute_unary("-", math.nan))
    assert compute_unary("~", math.inf) == math.inf


def test_unary_unparseable_string_is_zero():
    assert compute_unary("!", "abc") == 1


def test_wrap():
    assert wrap("`", "student") == "`student`"
    assert wrap("'", "") == "''"