"""Routing of comparisons to shard values and physical tables."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional

from .cmp import Comparative, Comparison
from .rule import Rule, ShardMetadata, VTable
from .ranges import single

__all__ = ["Matcher", "route", "match_tables"]


def _lookup(rule: Rule, table_name: str) -> VTable:
    vtable = rule.vtable(table_name)
    if vtable is None:
        raise KeyError(f"no vtable '{table_name}' found")
    return vtable


def _stepper(metadata: ShardMetadata):
    if metadata.stepper is None:
        raise ValueError("no stepper in shard metadata")
    return metadata.stepper


class Matcher:
    """Finds the sharding values a comparison may match."""

    def __init__(self, vtable: VTable, comparative: Optional[Comparative]) -> None:
        self.vtable = vtable
        self.comparative = comparative

    def eval(self) -> Optional[Iterator[Any]]:
        """Return the candidate values, or None if every value may match."""
        if self.comparative is None:
            return None
        return self._eval(self.comparative)

    def _eval(self, comparative: Comparative) -> Optional[Iterator[Any]]:
        pair = self.vtable.get_shard_metadata(comparative.key)
        if pair is None:
            # not a sharding key
            return None

        try:
            value = comparative.value()
        except ValueError as err:
            raise ValueError(f"eval failed: {err}") from err

        db_md, tbl_md = pair
        md = tbl_md if tbl_md is not None else db_md
        assert md is not None

        op = comparative.comparison
        if op is Comparison.EQ:
            return single(value)
        if op is Comparison.NE:
            return None
        stepper = _stepper(md)
        if op is Comparison.GT:
            return stepper.ascend(stepper.after(value), md.steps)
        if op is Comparison.GTE:
            return stepper.ascend(value, md.steps)
        if op is Comparison.LT:
            return stepper.descend(stepper.before(value), md.steps)
        if op is Comparison.LTE:
            return stepper.descend(value, md.steps)
        raise ValueError(f"unsupported comparison {op}")


def route(rule: Rule, table_name: str, comparative: Optional[Comparative]) -> Matcher:
    """Return a Matcher of ``comparative`` on the logical table ``table_name``."""
    return Matcher(_lookup(rule, table_name), comparative)


def match_tables(
    rule: Rule,
    table_name: str,
    column: str,
    values: Optional[Iterable[Any]],
) -> Optional[dict[str, list[str]]]:
    """Map sharding values of ``column`` to physical databases and tables.

    None for ``values`` means every value, and gives back None.
    """
    vtable = _lookup(rule, table_name)
    if values is None:
        return None

    collected = list(values)
    if not collected:
        return {}

    visited: set[tuple[int, int]] = set()
    result: dict[str, list[str]] = {}
    for value in collected:
        indexes = vtable.shard(column, value)
        if indexes in visited:
            continue
        visited.add(indexes)

        if vtable.topology is None:
            continue
        names = vtable.topology.render(*indexes)
        if names is None:
            continue
        db, tb = names
        result.setdefault(db, []).append(tb)
    return result