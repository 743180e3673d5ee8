from datetime import datetime, timezone

import pytest

from arana.stepper import Stepper, StepUnit


def test_date_after():
    test_time = datetime(2021, 1, 17, 17, 45, 4, tzinfo=timezone.utc)
    hour = Stepper(2, StepUnit.HOUR).after(test_time)
    assert hour.hour == 19
    day = Stepper(2, StepUnit.DAY).after(test_time)
    assert day.day == 19


def test_after():
    assert Stepper(2, StepUnit.NUM).after(2) == 4


def test_before():
    assert Stepper(1, StepUnit.NUM).before(2) == 1


def test_ascend():
    assert list(Stepper(1, StepUnit.NUM).ascend(100, 3)) == [100, 101, 102]


def test_descend():
    assert list(Stepper(1, StepUnit.NUM).descend(100, 3)) == [100, 99, 98]


def test_week_descend_steps_by_weeks():
    start = datetime(2021, 1, 17)
    values = list(Stepper(1, StepUnit.WEEK).descend(start, 2))
    assert values[0] == start
    assert (values[0] - values[1]).days == 7


def test_after_then_before_round_trip():
    stepper = Stepper(3, StepUnit.DAY)
    start = datetime(2021, 3, 8, 10, 0, 0)
    assert stepper.before(stepper.after(start)) == start


def test_zero_count_range_is_empty():
    assert list(Stepper(1, StepUnit.NUM).ascend(5, 0)) == []


def test_string_range_yields_numeric_strings():
    values = list(Stepper(1, StepUnit.STR).ascend("abc", 4))
    assert len(values) == 4
    assert all(v.isdigit() for v in values)


def test_none_offset_raises():
    with pytest.raises(ValueError, match="offset is nil"):
        Stepper(1, StepUnit.NUM).after(None)
    with pytest.raises(ValueError, match="offset is nil"):
        Stepper(1, StepUnit.NUM).ascend(None, 3)


def test_unsupported_unit_raises():
    with pytest.raises(ValueError, match="unsupported offset type"):
        Stepper(1, StepUnit.MONTH).after(datetime(2021, 1, 1))
    with pytest.raises(ValueError, match="unsupported offset type"):
        Stepper(1, StepUnit.NUM).ascend(datetime(2021, 1, 1), 2)


def test_is_time():
    assert StepUnit.HOUR.is_time() is True
    assert StepUnit.YEAR.is_time() is True
    assert StepUnit.NUM.is_time() is False
    assert StepUnit.STR.is_time() is False


def test_unit_names():
    assert str(StepUnit.DAY) == "DATE"
    assert str(StepUnit.NUM) == "NUMBER"
    assert str(Stepper(2, StepUnit.NUM)) == "Stepper{N=2,U=NUMBER}"