"""Escaping and unescaping of SQL string literals."""

from __future__ import annotations

import enum

__all__ = ["EscapeFlag", "escape", "unescape"]


class EscapeFlag(enum.IntEnum):
    """Options for :func:`escape`. They are tested bitwise."""

    NONE = 0
    SINGLE_QUOTE = 1
    DOUBLE_QUOTE = 2
    LIKE = 3


_CONTROL = {
    "\n": "\\n",
    "\b": "\\b",
    "\t": "\\t",
    "\r": "\\r",
}

_UNESCAPED = {
    "b": "\b",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "v": "\v",
    '"': '"',
    "'": "'",
}


def escape(text: str, flag: int = EscapeFlag.NONE) -> str:
    """Return ``text`` with control characters, backslashes and quotes escaped."""
    flag = int(flag)
    parts: list[str] = []
    for pos, ch in enumerate(text):
        if ch in _CONTROL:
            parts.append(_CONTROL[ch])
        elif ch == "\\":
            # inside a LIKE literal keep '\%' and '\_' as they are
            like_escape = (
                bool(flag & EscapeFlag.LIKE)
                and pos + 1 < len(text)
                and text[pos + 1] in "%_"
            )
            parts.append("\\" if like_escape else "\\\\")
        elif ch == "'":
            parts.append("\\'" if flag & EscapeFlag.SINGLE_QUOTE else "'")
        elif ch == '"':
            parts.append('\\"' if flag & EscapeFlag.DOUBLE_QUOTE else '"')
        else:
            parts.append(ch)
    return "".join(parts)


def unescape(text: str, *ignores: str) -> str:
    """Resolve backslash escapes in ``text``.

    Characters listed in ``ignores`` keep their leading backslash when
    escaped; other unknown escapes drop it.
    """
    if "\\" not in text:
        return text

    parts: list[str] = []
    escaping = False
    for ch in text:
        if ch == "\\":
            if escaping:
                parts.append("\\")
            escaping = not escaping
            continue

        if not escaping:
            parts.append(ch)
            continue
        escaping = False

        if ch in _UNESCAPED:
            parts.append(_UNESCAPED[ch])
        else:
            if ch in ignores:
                parts.append("\\")
            parts.append(ch)
    return "".join(parts)