"""Operations on database/table bundles.

A bundle maps a database name to a list of table names. ``None`` stands
for "every table of every database" (a full scan), while an empty mapping
matches nothing. The name ``*`` is a wildcard, both for databases and for
tables.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

__all__ = [
    "is_confused",
    "smallest",
    "union",
    "intersection",
    "is_full_scan",
    "is_empty",
    "format_tables",
]

DatabaseTables = Mapping[str, Sequence[str]]

_WILDCARD = "*"
_FLAG_A = 0x01
_FLAG_B = 0x02


def is_confused(tables: Optional[DatabaseTables]) -> bool:
    """Return True if one table name appears more than once in the bundle."""
    if tables is None:
        return False
    seen: set[str] = set()
    for tbls in tables.values():
        for tbl in tbls:
            if tbl in seen:
                return True
            seen.add(tbl)
    return False


def smallest(tables: Optional[DatabaseTables]) -> tuple[str, str]:
    """Return the smallest database name and the smallest table within it."""
    if not tables:
        return "", ""
    db = ""
    for name in tables:
        if db == "" or name < db:
            db = name
    tbl = ""
    for name in tables.get(db, ()):
        if tbl == "" or name < tbl:
            tbl = name
    return db, tbl


def union(
    first: Optional[DatabaseTables], second: Optional[DatabaseTables]
) -> Optional[DatabaseTables]:
    """Return the union of two bundles."""
    if first is None or second is None:
        return None

    if is_empty(first) or is_empty(second):
        return second

    indexes: dict[str, set[str]] = {}
    for bundle in (first, second):
        for db, tbls in bundle.items():
            for tbl in tbls:
                indexes.setdefault(db, set()).add(tbl)

    if _WILDCARD in indexes.get(_WILDCARD, ()):
        return None

    fuzz = indexes.pop(_WILDCARD, set())
    result: dict[str, list[str]] = {}

    for db, tbls in indexes.items():
        if _WILDCARD in tbls:
            result[db] = [_WILDCARD]
            continue
        # tables already matched by the wildcard database are dropped
        kept = sorted(tbl for tbl in tbls if tbl not in fuzz)
        if kept:
            result[db] = kept

    if fuzz:
        result[_WILDCARD] = sorted(fuzz)

    return result


def _cross_fuzz(dbs_fuzz: Mapping[str, int], flag: int) -> list[str]:
    return [t for t, f in dbs_fuzz.items() if t != _WILDCARD and f & flag]


def intersection(
    first: Optional[DatabaseTables], second: Optional[DatabaseTables]
) -> Optional[DatabaseTables]:
    """Return the intersection of two bundles."""
    if first is None:
        return second
    if second is None:
        return first

    merge: dict[str, dict[str, int]] = {}
    for db, tbls in first.items():
        for tbl in tbls:
            merge.setdefault(db, {})[tbl] = _FLAG_A
    for db, tbls in second.items():
        for tbl in tbls:
            entry = merge.setdefault(db, {})
            entry[tbl] = entry.get(tbl, 0) | _FLAG_B

    db_fuzz = merge.pop(_WILDCARD, {})

    full = db_fuzz.get(_WILDCARD, 0)
    if full & _FLAG_A and full & _FLAG_B:
        return None
    if full & _FLAG_A:
        return second
    if full & _FLAG_B:
        return first

    result: dict[str, list[str]] = {}

    def add(db: str, tbl: str) -> None:
        result.setdefault(db, []).append(tbl)

    for db, tbls in merge.items():
        fuzz = tbls.pop(_WILDCARD, 0)

        # wildcard on both sides matches every table of this database
        if fuzz & _FLAG_A and fuzz & _FLAG_B:
            result[db] = [_WILDCARD]
            continue

        if fuzz & _FLAG_A:
            for tbl in _cross_fuzz(db_fuzz, _FLAG_B):
                add(db, tbl)
        elif fuzz & _FLAG_B:
            for tbl in _cross_fuzz(db_fuzz, _FLAG_A):
                add(db, tbl)

        for tbl, flag in tbls.items():
            fa = bool(flag & _FLAG_A)
            fb = bool(flag & _FLAG_B)

            if fa and fb:
                add(db, tbl)
                continue

            if (fa and fuzz & _FLAG_B) or (fb and fuzz & _FLAG_A):
                add(db, tbl)
                continue

            if not db_fuzz:
                continue

            other = db_fuzz.get(tbl, 0)
            if (fa and other & _FLAG_B) or (fb and other & _FLAG_A):
                add(db, tbl)
                continue

            other = db_fuzz.get(_WILDCARD, 0)
            if (fa and other & _FLAG_B) or (fb and other & _FLAG_A):
                add(db, tbl)

    return result


def is_full_scan(tables: Optional[DatabaseTables]) -> bool:
    """Return True if the bundle leads to a full scan."""
    if tables is None:
        return True
    return any(
        db == _WILDCARD or _WILDCARD in tbls for db, tbls in tables.items()
    )


def is_empty(tables: Optional[DatabaseTables]) -> bool:
    """Return True if the bundle matches nothing."""
    return tables is not None and len(tables) == 0


def format_tables(tables: Optional[DatabaseTables]) -> str:
    """Render the bundle as a list of quoted ``db.table`` names."""
    if is_full_scan(tables):
        return '["*"]'
    if is_empty(tables):
        return "[]"
    assert tables is not None
    items = [
        f'"{db}.{tbl}"' for db in sorted(tables) for tbl in tables[db]
    ]
    return "[" + ", ".join(items) + "]"