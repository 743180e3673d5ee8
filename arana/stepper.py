"""Stepping of sharding key values: numbers, times and strings."""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterator

__all__ = ["StepUnit", "Stepper"]

_STRING_LENGTH = 16
_INT31_MAX = (1 << 31) - 1


class StepUnit(enum.IntEnum):
    """The unit of a Stepper."""

    HOUR = 1
    DAY = 2
    WEEK = 3
    MONTH = 4
    YEAR = 5
    NUM = 6
    STR = 7

    def is_time(self) -> bool:
        """Return True if the unit measures time."""
        return self in _TIME_UNITS

    def __str__(self) -> str:
        return _UNIT_NAMES[self]


_TIME_UNITS = frozenset(
    {StepUnit.HOUR, StepUnit.DAY, StepUnit.WEEK, StepUnit.MONTH, StepUnit.YEAR}
)

_UNIT_NAMES = {
    StepUnit.HOUR: "HOUR",
    StepUnit.DAY: "DATE",
    StepUnit.WEEK: "WEEK",
    StepUnit.MONTH: "MONTH",
    StepUnit.YEAR: "YEAR",
    StepUnit.NUM: "NUMBER",
    StepUnit.STR: "STRING",
}

_DURATIONS = {
    StepUnit.HOUR: timedelta(hours=1),
    StepUnit.DAY: timedelta(days=1),
    StepUnit.WEEK: timedelta(weeks=1),
}


def _random_strings(count: int, length: int = _STRING_LENGTH) -> Iterator[str]:
    for _ in range(max(count, 0)):
        yield str(random.randint(0, _INT31_MAX))


def _arithmetic(start: Any, step: Any, count: int) -> Iterator[Any]:
    current = start
    for _ in range(max(count, 0)):
        yield current
        current = current + step


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Stepper:
    """Steps a sharding value by ``n`` units of ``unit``."""

    n: int
    unit: StepUnit

    def __str__(self) -> str:
        return f"Stepper{{N={self.n},U={self.unit}}}"

    def after(self, offset: Any) -> Any:
        """Return the value one step after ``offset``."""
        return self._compute(offset, self.n)

    def before(self, offset: Any) -> Any:
        """Return the value one step before ``offset``."""
        return self._compute(offset, -self.n)

    def ascend(self, offset: Any, count: int) -> Iterator[Any]:
        """Iterate ``count`` values upwards, starting at ``offset``."""
        return self._compute_range(offset, count, reverse=False)

    def descend(self, offset: Any, count: int) -> Iterator[Any]:
        """Iterate ``count`` values downwards, starting at ``offset``."""
        return self._compute_range(offset, count, reverse=True)

    def _unsupported(self, offset: Any) -> ValueError:
        return ValueError(
            f"unsupported offset type: type={type(offset).__name__}, unit={self.unit}"
        )

    def _compute(self, offset: Any, n: int) -> Any:
        if offset is None:
            raise ValueError("offset is nil")
        if self.unit is StepUnit.NUM and _is_integer(offset):
            return offset + n
        if self.unit in _DURATIONS and isinstance(offset, datetime):
            return offset + n * _DURATIONS[self.unit]
        if self.unit is StepUnit.STR:
            return _random_strings(n)
        raise self._unsupported(offset)

    def _compute_range(self, offset: Any, count: int, reverse: bool) -> Iterator[Any]:
        if offset is None:
            raise ValueError("offset is nil")
        sign = -1 if reverse else 1
        if self.unit is StepUnit.NUM and _is_integer(offset):
            return _arithmetic(offset, sign * self.n, count)
        if self.unit in _DURATIONS and isinstance(offset, datetime):
            return _arithmetic(offset, sign * self.n * _DURATIONS[self.unit], count)
        if self.unit is StepUnit.STR:
            return _random_strings(count)
        raise self._unsupported(offset)