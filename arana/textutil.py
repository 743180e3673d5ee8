"""Small string helpers."""

from __future__ import annotations

import unicodedata

__all__ = [
    "first_non_empty_string",
    "must_first_non_empty_string",
    "first_non_zero_int",
    "pad_right",
    "pad_left",
    "is_blank",
]


def first_non_empty_string(*args: str) -> str:
    """Return the first non-empty string, or "" if there is none."""
    return next((s for s in args if s), "")


def must_first_non_empty_string(*args: str) -> str:
    """Return the first non-empty string; raise ValueError if there is none."""
    value = first_non_empty_string(*args)
    if not value:
        raise ValueError("at least one non-empty string required")
    return value


def first_non_zero_int(*args: int) -> int:
    """Return the first non-zero integer, or 0 if there is none."""
    return next((n for n in args if n != 0), 0)


def _check_padding(pad: str, length: int, missing: int) -> None:
    if length < 0:
        raise ValueError(f"negative length {length}")
    if missing > 0 and not pad:
        raise ValueError("pad string must not be empty")


def pad_right(text: str, pad: str, length: int) -> str:
    """Pad ``text`` on the right with ``pad`` up to ``length``, or cut it down."""
    _check_padding(pad, length, length - len(text))
    if len(text) >= length:
        return text[:length]
    repeats = (length - len(text)) // len(pad) + 1
    return (text + pad * repeats)[:length]


def pad_left(text: str, pad: str, length: int) -> str:
    """Pad ``text`` on the left with ``pad`` up to ``length``, or cut it down."""
    _check_padding(pad, length, length - len(text))
    if len(text) >= length:
        return text[:length]
    prefix_len = length - len(text)
    repeats = prefix_len // len(pad) + 1
    return (pad * repeats)[:prefix_len] + text


def _is_space(ch: str) -> bool:
    return ch in "\t\n\v\f\r\x85" or unicodedata.category(ch) in ("Zs", "Zl", "Zp")


def is_blank(text: str) -> bool:
    """Return True if ``text`` is empty or holds only white space."""
    return all(_is_space(ch) for ch in text)