"""The execution mode of the proxy."""

from __future__ import annotations

import enum

__all__ = ["ExecuteMode", "parse_execute_mode"]


class ExecuteMode(enum.IntEnum):
    """How statements are dispatched to the backing databases."""

    SINGLE_DB = 0
    READ_WRITE_SPLITTING = 1
    SHARDING = 2


_NAMES = {
    "singledb": ExecuteMode.SINGLE_DB,
    "readwritesplitting": ExecuteMode.READ_WRITE_SPLITTING,
    "sharding": ExecuteMode.SHARDING,
}


def parse_execute_mode(text: str | bytes) -> ExecuteMode:
    """Parse an execute mode name, ignoring case."""
    if text is None:
        raise ValueError("can't unmarshal a nil execute mode")
    name = text.decode() if isinstance(text, (bytes, bytearray)) else text
    try:
        return _NAMES[name.lower()]
    except KeyError:
        raise ValueError(f"unrecognized execute mode: {name!r}") from None