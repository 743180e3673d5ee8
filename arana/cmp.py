"""Comparisons of a sharding key against a literal value."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

__all__ = [
    "Kind",
    "Comparison",
    "Comparative",
    "parse_comparison",
    "new",
    "new_int64",
    "new_date",
    "new_string",
]

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_DATE = r"([0-9]{4})-([0-9]{2})-([0-9]{2})"
_TIME = r"([0-9]{2}):([0-9]{2}):([0-9]{2})(?:\.([0-9]+))?"
_DATE_RE = re.compile(_DATE)
_TIME_RE = re.compile(_TIME)
_DATETIME_RE = re.compile(_DATE + " " + _TIME)
_UNIX_DATE_FORMAT = "%a %b %d %H:%M:%S %Z %Y"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Kind(enum.IntEnum):
    """The data type of a compared value."""

    INT = 1
    STRING = 2
    DATE = 3

    def __str__(self) -> str:
        return self.name.lower()


class Comparison(enum.IntEnum):
    """A comparison operator. The order of the members is significant."""

    EQ = 1
    NE = 2
    GT = 3
    GTE = 4
    LT = 5
    LTE = 6

    def __str__(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    Comparison.EQ: "=",
    Comparison.NE: "<>",
    Comparison.GT: ">",
    Comparison.GTE: ">=",
    Comparison.LT: "<",
    Comparison.LTE: "<=",
}

_PARSED = {
    ">": Comparison.GT,
    ">=": Comparison.GTE,
    "<": Comparison.LT,
    "<=": Comparison.LTE,
    "=": Comparison.EQ,
    "<>": Comparison.NE,
    "!=": Comparison.NE,
}


def parse_comparison(text: str) -> Comparison:
    """Parse a comparison operator such as ">=" or "!="."""
    try:
        return _PARSED[text]
    except KeyError:
        raise ValueError(f"invalid comparison {text!r}") from None


def _microseconds(fraction: str | None) -> int:
    if not fraction:
        return 0
    return int(fraction[:6].ljust(6, "0"))


def _parse_date_auto(text: str) -> datetime:
    try:
        match = _DATE_RE.fullmatch(text)
        if match:
            return datetime(*(int(g) for g in match.groups()))

        match = _TIME_RE.fullmatch(text)
        if match:
            hour, minute, second, fraction = match.groups()
            return datetime(
                1, 1, 1, int(hour), int(minute), int(second), _microseconds(fraction)
            )

        match = _DATETIME_RE.fullmatch(text)
        if match:
            *parts, fraction = match.groups()
            return datetime(*(int(p) for p in parts), _microseconds(fraction))
    except ValueError:
        pass

    try:
        return datetime.strptime(text, _UNIX_DATE_FORMAT)
    except ValueError:
        pass
    raise ValueError(f"invalid date string {text}")


def _parse_int64(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"integer {text!r} out of range")
    return number


@dataclass
class Comparative:
    """A comparison of ``key`` against a raw textual value of a given kind."""

    key: str
    comparison: Comparison
    raw_value: str
    kind: Kind

    def __str__(self) -> str:
        return f"({self.comparison}{self.raw_value})"

    def value(self) -> Any:
        """Return the raw value converted according to the kind."""
        if self.kind == Kind.INT:
            return _parse_int64(self.raw_value)
        if self.kind == Kind.DATE:
            return _parse_date_auto(self.raw_value)
        if self.kind == Kind.STRING:
            return self.raw_value
        raise ValueError(f"invalid comparative kind {self.kind!r}")

    def must_value(self) -> Any:
        """Return the converted value; the conversion error propagates."""
        return self.value()


def new(key: str, comparison: Comparison, value: str, kind: Kind) -> Comparative:
    """Create a Comparative."""
    return Comparative(key=key, comparison=comparison, raw_value=value, kind=kind)


def new_int64(key: str, comparison: Comparison, value: int) -> Comparative:
    """Create a Comparative holding an integer."""
    return new(key, comparison, str(int(value)), Kind.INT)


def new_date(key: str, comparison: Comparison, value: datetime) -> Comparative:
    """Create a Comparative holding a date, at second precision."""
    return new(key, comparison, value.strftime(_DATE_FORMAT), Kind.DATE)


def new_string(key: str, comparison: Comparison, value: str) -> Comparative:
    """Create a Comparative holding a string."""
    return new(key, comparison, value, Kind.STRING)