"""Sharding rules: logical tables, their shard metadata and topology."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from .stepper import Stepper
from .topology import Topology

__all__ = ["ShardComputer", "ShardMetadata", "VTable", "Rule"]


@runtime_checkable
class ShardComputer(Protocol):
    """Computes a shard index from a value."""

    def compute(self, value: Any) -> int:
        """Return the shard index of ``value``."""
        ...


@dataclass
class ShardMetadata:
    """How one sharding column maps onto shards."""

    steps: int = 0
    stepper: Optional[Stepper] = None
    computer: Optional[ShardComputer] = None


MetadataPair = tuple[Optional[ShardMetadata], Optional[ShardMetadata]]


class VTable:
    """A logical table spread over several physical databases and tables."""

    def __init__(self, topology: Optional[Topology] = None) -> None:
        self.topology = topology
        self._shards: dict[str, MetadataPair] = {}

    def __repr__(self) -> str:
        return f"VTable(keys={self.shard_keys()!r})"

    def shard_keys(self) -> list[str]:
        """Return the sharding columns."""
        return list(self._shards)

    def shard(self, column: str, value: Any) -> tuple[int, int]:
        """Return the database and table indexes of ``value`` in ``column``."""
        try:
            db_md, tbl_md = self._shards[column]
        except KeyError:
            raise KeyError(f"no shard metadata for column {column}") from None

        db = tbl = 0
        if db_md is not None:
            db = _computer(db_md, column).compute(value)
        if tbl_md is not None:
            tbl = _computer(tbl_md, column).compute(value)
        return db, tbl

    def get_shard_metadata(self, column: str) -> Optional[MetadataPair]:
        """Return the database and table metadata of ``column``, or None.

        A metadata with no steps gets the number of databases or tables of
        the topology.
        """
        pair = self._shards.get(column)
        if pair is None:
            return None
        db_md, tbl_md = pair
        db_len, tbl_len = self.topology.length() if self.topology else (0, 0)
        if db_md is not None and db_md.steps == 0:
            db_md.steps = db_len
        if tbl_md is not None and tbl_md.steps == 0:
            tbl_md.steps = tbl_len
        return db_md, tbl_md

    def set_shard_metadata(
        self,
        column: str,
        db_metadata: Optional[ShardMetadata],
        table_metadata: Optional[ShardMetadata],
    ) -> None:
        """Set the database and table metadata of ``column``."""
        self._shards[column] = (db_metadata, table_metadata)

    def set_topology(self, topology: Topology) -> None:
        """Set the topology."""
        self.topology = topology


def _computer(metadata: ShardMetadata, column: str) -> ShardComputer:
    if metadata.computer is None:
        raise ValueError(f"no shard computer for column {column}")
    return metadata.computer


class Rule:
    """A sharding rule: a set of logical tables by name."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._vtables: dict[str, VTable] = {}

    def has_column(self, table: str, column: str) -> bool:
        """Return True if ``table`` exists and shards by ``column``."""
        vtable = self.vtable(table)
        if vtable is None:
            return False
        return vtable.get_shard_metadata(column) is not None

    def has(self, table: str) -> bool:
        """Return True if ``table`` exists."""
        with self._lock:
            return table in self._vtables

    def remove_vtable(self, table: str) -> None:
        """Remove ``table`` if it exists."""
        with self._lock:
            self._vtables.pop(table, None)

    def set_vtable(self, table: str, vtable: VTable) -> None:
        """Register ``vtable`` under the name ``table``."""
        with self._lock:
            self._vtables[table] = vtable

    def vtable(self, table: str) -> Optional[VTable]:
        """Return the logical table named ``table``, or None."""
        with self._lock:
            return self._vtables.get(table)

    def must_vtable(self, name: str) -> VTable:
        """Return the logical table named ``name``; raise KeyError if missing."""
        vtable = self.vtable(name)
        if vtable is None:
            raise KeyError(f"no such VTable {name}!")
        return vtable