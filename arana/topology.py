"""The layout of the physical databases and tables behind a logical table."""

from __future__ import annotations

from typing import Callable, Optional

__all__ = ["Topology"]

Renderer = Callable[[int], str]


class Topology:
    """Maps database indexes to their table indexes and renders their names."""

    def __init__(self) -> None:
        self._db_render: Optional[Renderer] = None
        self._tb_render: Optional[Renderer] = None
        self._index: dict[int, list[int]] = {}

    def __repr__(self) -> str:
        return f"Topology({self._index!r})"

    def length(self) -> tuple[int, int]:
        """Return the number of databases and the total number of tables."""
        return len(self._index), sum(len(tables) for tables in self._index.values())

    def set_topology(self, db: int, *tables: int) -> None:
        """Set the tables of database ``db``; with no tables the database is removed."""
        if not tables:
            self._index.pop(db, None)
            return
        self._index[db] = sorted(tables)

    def set_render(self, db_render: Renderer, tb_render: Renderer) -> None:
        """Set the functions that turn indexes into database and table names."""
        self._db_render = db_render
        self._tb_render = tb_render

    def render(self, db_idx: int, tbl_idx: int) -> Optional[tuple[str, str]]:
        """Return the database and table names, or None if no renderers are set."""
        if self._db_render is None or self._tb_render is None:
            return None
        return self._db_render(db_idx), self._tb_render(tbl_idx)