"""Value helpers: comparison, zero checks and unary operators."""

from __future__ import annotations

import math
import re
from datetime import datetime
from decimal import Decimal
from typing import Any

__all__ = ["is_float_equal", "is_zero", "compare", "compute_unary", "wrap"]

_EPSILON = 0.000001
_UINT64_MASK = (1 << 64) - 1

_NUM_RE = re.compile(r"-?(0|[1-9][0-9]*)")
_FLOAT_RE = re.compile(r"-?(0|[1-9][0-9]*)(\.[0-9]+)?")
_PARSE_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def is_float_equal(f1: float, f2: float) -> bool:
    """Return True if two floats differ by less than one millionth."""
    return abs(f1 - f2) < _EPSILON


def is_zero(value: Any) -> bool:
    """Return True if ``value`` equals the zero value of its type."""
    if value is None:
        return True
    try:
        zero = type(value)()
    except TypeError:
        return False
    return value == zero


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    number = Decimal(repr(value)).normalize()
    exponent = number.adjusted()
    if -4 <= exponent < 21:
        return format(number, "f")
    sign, digits, _ = number.as_tuple()
    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(d) for d in digits[1:])
    exp_sign = "+" if exponent >= 0 else "-"
    return f"{'-' if sign else ''}{mantissa}e{exp_sign}{abs(exponent):02d}"


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def _sign(a: Any, b: Any) -> int:
    if a > b:
        return 1
    if a < b:
        return -1
    return 0


def compare(a: Any, b: Any) -> int:
    """Compare two values, returning -1, 0 or 1.

    Strings and datetimes compare natively; other values compare by their
    textual form, numerically when both look like numbers.
    """
    if isinstance(a, str) and isinstance(b, str):
        return _sign(a, b)
    if isinstance(a, datetime) and isinstance(b, datetime):
        return _sign(a, b)

    s1, s2 = _format_value(a), _format_value(b)
    if _NUM_RE.fullmatch(s1) and _NUM_RE.fullmatch(s2):
        return _sign(int(s1), int(s2))
    if _FLOAT_RE.fullmatch(s1) and _FLOAT_RE.fullmatch(s2):
        return _sign(float(s1), float(s2))
    return _sign(s1, s2)


def _parse_float(text: str) -> float:
    if _PARSE_FLOAT_RE.fullmatch(text):
        return float(text)
    return 0.0


def _bitwise_not(number: float | int) -> float | int:
    if isinstance(number, float):
        if not math.isfinite(number):
            return number
        number = int(number)
    if number > 0:
        return ~number & _UINT64_MASK
    return ~number


def _unary_number(op: str, number: float | int) -> Any:
    if op in ("!", "NOT"):
        return 1 if number == 0 else 0
    if op == "-":
        return -number
    if op == "~":
        return _bitwise_not(number)
    return None


def compute_unary(op: str, value: Any) -> Any:
    """Apply the unary operator ``op`` ("!", "NOT", "-" or "~") to ``value``.

    Unknown operators and unsupported value types give back ``value``.
    """
    if isinstance(value, str):
        result = _unary_number(op, _parse_float(value))
    elif isinstance(value, bool):
        if op in ("!", "NOT"):
            return not value
        if op == "-":
            return -1 if value else 0
        if op == "~":
            return ~int(value) & _UINT64_MASK
        return value
    elif isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return value
        result = _unary_number(op, value)
    elif isinstance(value, int):
        result = _unary_number(op, value)
    else:
        return value
    return value if result is None else result


def wrap(wrapper: str, origin: str) -> str:
    """Return ``origin`` enclosed by ``wrapper`` on both sides."""
    return f"{wrapper}{origin}{wrapper}"