"""Evaluation of sharding conditions into physical databases and tables."""

from __future__ import annotations

import abc
import dataclasses
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterator, Mapping, Optional, Sequence

from .cmp import Comparative, Comparison, Kind
from .cmp import new as new_comparative
from .database_tables import format_tables, intersection, is_empty, is_full_scan, union
from .logical import Logical, eval_logical
from .logical import new as new_logical
from .misc import _format_value, compare
from .route import match_tables, route
from .rule import Rule, ShardMetadata
from .stepper import StepUnit

__all__ = [
    "NoRuleMetadataError",
    "Evaluator",
    "KeyedEvaluator",
    "ALWAYS_TRUE_LOGICAL",
    "ALWAYS_FALSE_LOGICAL",
    "new_keyed",
    "evaluate",
]

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DatabaseTables = Optional[Mapping[str, Sequence[str]]]


class NoRuleMetadataError(LookupError):
    """Raised when a column carries no sharding metadata."""


class Evaluator(abc.ABC):
    """Computes the databases and tables a condition can touch."""

    @abc.abstractmethod
    def not_(self) -> Evaluator:
        """Return the evaluator of the negated condition."""

    @abc.abstractmethod
    def eval(self, table_name: str, rule: Rule) -> DatabaseTables:
        """Return the matched databases and tables; None means a full scan."""


class _EmptyEvaluator(Evaluator):
    """Matches nothing."""

    def not_(self) -> Evaluator:
        return _NOOP

    def eval(self, table_name: str, rule: Rule) -> DatabaseTables:
        return {}

    def __str__(self) -> str:
        return "NONE"


class _NoopEvaluator(Evaluator):
    """Matches everything."""

    def not_(self) -> Evaluator:
        return self

    def eval(self, table_name: str, rule: Rule) -> DatabaseTables:
        return None

    def __str__(self) -> str:
        return "FULL"


class _StaticEvaluator(Evaluator):
    """Matches a fixed set of databases and tables."""

    def __init__(self, tables: Mapping[str, Sequence[str]]) -> None:
        self.tables = {db: list(tbls) for db, tbls in tables.items()}

    def not_(self) -> Evaluator:
        return _NOOP

    def eval(self, table_name: str, rule: Rule) -> DatabaseTables:
        return self.tables

    def __str__(self) -> str:
        return format_tables(self.tables)


_EMPTY = _EmptyEvaluator()
_NOOP = _NoopEvaluator()

ALWAYS_TRUE_LOGICAL = new_logical("1", value=_NOOP)
ALWAYS_FALSE_LOGICAL = new_logical("0", value=_EMPTY)

_NEGATED = {
    Comparison.GT: Comparison.LTE,
    Comparison.GTE: Comparison.LT,
    Comparison.LT: Comparison.GTE,
    Comparison.LTE: Comparison.LT,
    Comparison.EQ: Comparison.NE,
    Comparison.NE: Comparison.EQ,
}

_DATE_UNITS = frozenset(
    {StepUnit.MONTH, StepUnit.YEAR, StepUnit.WEEK, StepUnit.DAY, StepUnit.HOUR}
)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class KeyedEvaluator(Evaluator):
    """A comparison of a column against a value."""

    key: str
    op: Comparison
    value: Any

    def __str__(self) -> str:
        return f"{self.key} {self.op} {_format_value(self.value)}"

    def _to_comparative(self, metadata: Optional[ShardMetadata]) -> Optional[Comparative]:
        value = self.value
        if value is None:
            return None
        if isinstance(value, datetime):
            text, kind = value.strftime(_DATE_FORMAT), Kind.DATE
        elif isinstance(value, str):
            text, kind = value, Kind.STRING
        elif _is_integer(value):
            text, kind = str(value), Kind.INT
        elif isinstance(value, float):
            # a division by zero yields NaN or infinity
            text = "0" if math.isnan(value) or math.isinf(value) else str(int(value))
            kind = Kind.INT
        else:
            raise TypeError(f"invalid compare value type {type(value).__name__}!")

        if metadata is not None and metadata.stepper is not None:
            unit = metadata.stepper.unit
            if unit in _DATE_UNITS:
                kind = Kind.DATE
            elif unit is StepUnit.NUM:
                kind = Kind.INT
            elif unit is StepUnit.STR:
                kind = Kind.STRING

        return new_comparative(self.key, self.op, text, kind)

    def to_logical(self) -> Logical:
        """Wrap the evaluator as a logical atom with a sortable key."""
        value = self.value
        if _is_integer(value):
            suffix = format(value, "016X")
        elif isinstance(value, datetime):
            suffix = format(int(value.timestamp()), "016X")
        else:
            suffix = _format_value(value)
        sort_key = f"{self.key}|{int(self.op)}|{suffix}"
        return new_logical(str(self), value=self, sort_key=sort_key)

    def eval(self, table_name: str, rule: Rule) -> DatabaseTables:
        vtable = rule.vtable(table_name)
        if vtable is None:
            raise KeyError(f"no vtable '{table_name}' found")

        pair = vtable.get_shard_metadata(self.key)
        if pair is None or (pair[0] is None and pair[1] is None):
            raise NoRuleMetadataError(
                f"cannot get rule metadata {table_name}.{self.key}"
            )
        db_md, tbl_md = pair
        metadata = tbl_md if tbl_md is not None else db_md

        values = route(rule, table_name, self._to_comparative(metadata)).eval()
        if values is None:
            return None
        return match_tables(rule, table_name, self.key, values)

    def not_(self) -> Evaluator:
        return dataclasses.replace(self, op=_NEGATED[self.op])


def new_keyed(key: str, op: Comparison, value: Any) -> KeyedEvaluator:
    """Create a KeyedEvaluator."""
    return KeyedEvaluator(key, op, value)


def _wrap(tables: DatabaseTables) -> Evaluator:
    if tables is None or is_full_scan(tables):
        return _NOOP
    if is_empty(tables):
        return _EMPTY
    return _StaticEvaluator(tables)


def _to_range(begin: Iterator[Any], end: Iterator[Any]) -> list[Any]:
    lower = list(begin)
    if not lower:
        return []
    sentinel = object()
    upper = next(end, sentinel)
    if upper is sentinel:
        return []
    merged = []
    for value in lower:
        if compare(value, upper) == 1:
            break
        merged.append(value)
    return merged


def _or(table_name: str, rule: Rule, first: Evaluator, second: Evaluator) -> Evaluator:
    if isinstance(first, _NoopEvaluator) or isinstance(second, _NoopEvaluator):
        return _NOOP
    if isinstance(first, _EmptyEvaluator):
        return second
    if isinstance(second, _EmptyEvaluator):
        return first

    for item in (first, second):
        if isinstance(item, KeyedEvaluator) and not rule.has_column(table_name, item.key):
            return _NOOP

    merged = union(first.eval(table_name, rule), second.eval(table_name, rule))
    return _wrap(merged)


def _process_range(
    table_name: str, rule: Rule, begin: KeyedEvaluator, end: KeyedEvaluator
) -> Evaluator:
    vtable = rule.vtable(table_name)
    if vtable is None:
        raise KeyError(f"no vtable '{table_name}' found")

    pair1 = vtable.get_shard_metadata(begin.key)
    if pair1 is None:
        raise NoRuleMetadataError(f"no rule metadata found: field={begin.key}")
    pair2 = vtable.get_shard_metadata(end.key)
    if pair2 is None:
        raise NoRuleMetadataError(f"no rule metadata found: field={end.key}")

    (dbm1, tbm1), (dbm2, tbm2) = pair1, pair2
    if tbm1 is not None and tbm2 is not None:
        m1, m2 = tbm1, tbm2
    elif dbm1 is not None and dbm2 is not None:
        m1, m2 = dbm1, dbm2
    else:
        raise NoRuleMetadataError(
            f"no available rule metadata found: fields=[{begin.key},{end.key}]"
        )

    # a range of strings cannot be enumerated, scan everything instead
    if all(m.stepper is not None and m.stepper.unit is StepUnit.STR for m in (m1, m2)):
        return _NOOP

    begin_values = route(rule, table_name, begin._to_comparative(m1)).eval()
    end_values = route(rule, table_name, end._to_comparative(m2)).eval()
    if begin_values is None or end_values is None:
        return _NOOP

    values = _to_range(begin_values, end_values)
    tables = match_tables(rule, table_name, begin.key, values)
    if tables is None:
        return _NOOP
    if is_empty(tables):
        return _EMPTY
    return _StaticEvaluator(tables)


def _same_key(k1: KeyedEvaluator, k2: KeyedEvaluator) -> tuple[Optional[Evaluator], int]:
    """Combine two comparisons of one key: a result, or a range mode."""
    eq, ne, lt, lte, gt, gte = (
        Comparison.EQ,
        Comparison.NE,
        Comparison.LT,
        Comparison.LTE,
        Comparison.GT,
        Comparison.GTE,
    )
    a, b = k1.op, k2.op

    if a is eq:
        if b is eq:
            return (k1 if k1.value == k2.value else _EMPTY), 0
        if b is ne:
            return (_EMPTY if k1.value == k2.value else k1), 0
        c = compare(k2.value, k1.value)
        if b is lt:
            return (_EMPTY if c in (-1, 0) else k1), 0
        if b is lte:
            return (_EMPTY if c == -1 else k1), 0
        if b is gt:
            return (_EMPTY if c in (1, 0) else k1), 0
        if b is gte:
            return (_EMPTY if c == 1 else k1), 0
        return None, 0

    if a is ne:
        if b is eq:
            return (_EMPTY if k1.value == k2.value else k2), 0
        return None, 0

    if b is ne and a in (lt, lte, gt, gte):
        return k1, 0

    c = compare(k2.value, k1.value)

    if a is lt:
        if b is eq:
            return (_EMPTY if c in (1, 0) else k2), 0
        if b in (gt, gte):
            return (_EMPTY, 0) if c in (1, 0) else (None, -1)
        if b is lt:
            return (k2 if c == -1 else k1), 0
        if b is lte:
            return (k1 if c in (1, 0) else k2), 0
    elif a is lte:
        if b is eq:
            return (_EMPTY if c == 1 else k2), 0
        if b is lt:
            return (k1 if c == 1 else k2), 0
        if b is lte:
            return (k2 if c == -1 else k1), 0
        if b is gt:
            return (_EMPTY, 0) if c in (1, 0) else (None, -1)
        if b is gte:
            if c == 1:
                return _EMPTY, 0
            if c == 0:
                return new_keyed(k1.key, eq, k1.value), 0
            return None, -1
    elif a is gt:
        if b is eq:
            return (k2 if c == 1 else _EMPTY), 0
        if b in (gt, gte):
            return (k2 if c == 1 else k1), 0
        if b in (lt, lte):
            return (_EMPTY, 0) if c in (-1, 0) else (None, 1)
    elif a is gte:
        if b is eq:
            return (k2 if c in (1, 0) else _EMPTY), 0
        if b is gt:
            return (k2 if c in (1, 0) else k1), 0
        if b is gte:
            return (k2 if c == 1 else k1), 0
        if b is lt:
            return (_EMPTY, 0) if c in (-1, 0) else (None, 1)
        if b is lte:
            if c == -1:
                return _EMPTY, 0
            if c == 0:
                return new_keyed(k1.key, eq, k1.value), 0
            return None, 1
    return None, 0


def _and(table_name: str, rule: Rule, first: Evaluator, second: Evaluator) -> Evaluator:
    if isinstance(first, _EmptyEvaluator) or isinstance(second, _EmptyEvaluator):
        return _EMPTY
    if isinstance(first, _NoopEvaluator):
        return second
    if isinstance(second, _NoopEvaluator):
        return first

    if isinstance(first, KeyedEvaluator) and isinstance(second, KeyedEvaluator):
        if first.key == second.key:
            result, range_mode = _same_key(first, second)
            if result is not None:
                return result
            if range_mode == 1:
                return _process_range(table_name, rule, first, second)
            if range_mode == -1:
                return _process_range(table_name, rule, second, first)
        else:
            has_first = rule.has_column(table_name, first.key)
            has_second = rule.has_column(table_name, second.key)
            if has_first and not has_second:
                return first
            if has_second and not has_first:
                return second
            if not has_first and not has_second:
                return _NOOP
            # several sharding keys: take the slow path

    merged = intersection(first.eval(table_name, rule), second.eval(table_name, rule))
    if merged is None:
        return _NOOP
    if is_empty(merged):
        return _EMPTY
    return _StaticEvaluator(merged)


def evaluate(logical: Logical, table_name: str, rule: Rule) -> Evaluator:
    """Fold a logical expression of evaluators into one evaluator."""
    return eval_logical(
        logical,
        lambda a, b: _and(table_name, rule, a, b),
        lambda a, b: _or(table_name, rule, a, b),
        lambda e: e.not_(),
    )