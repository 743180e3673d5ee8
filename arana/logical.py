"""Boolean algebra over keyed items, with simplification."""

from __future__ import annotations

import enum
from typing import Any, Callable

from .textutil import first_non_empty_string, must_first_non_empty_string

__all__ = [
    "Op",
    "Logical",
    "Atom",
    "Composite",
    "new",
    "eval_logical",
    "eval_bool",
]

_AND = "&&"
_OR = "||"
_NOT = "!"


class Op(enum.IntEnum):
    """A logical operator."""

    AND = 1
    OR = 2

    def __str__(self) -> str:
        return self.name


class Logical:
    """A logical expression built from atoms with AND, OR and NOT."""

    def and_(self, other: Logical) -> Logical:
        """Return the conjunction of this expression and ``other``."""
        raise NotImplementedError

    def or_(self, other: Logical) -> Logical:
        """Return the disjunction of this expression and ``other``."""
        raise NotImplementedError

    def not_(self) -> Logical:
        """Return the negation of this expression."""
        raise NotImplementedError

    def to_string(self, and_op: str, or_op: str) -> str:
        """Render the expression with the given operator words."""
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_string(_AND, _OR)


class Atom(Logical):
    """A single named item, possibly negated, carrying a value."""

    def __init__(
        self, key: str, value: Any = None, sort_key: str = "", negated: bool = False
    ) -> None:
        self.key = key
        self.value = value
        self.sort_key = sort_key
        self.negated = negated

    def __repr__(self) -> str:
        return f"Atom({str(self)!r})"

    def _order_key(self) -> str:
        return first_non_empty_string(self.sort_key, self.key)

    def _equals(self, other: Logical) -> bool:
        return (
            isinstance(other, Atom)
            and self.key == other.key
            and self.negated == other.negated
        )

    def not_(self) -> Logical:
        return Atom(self.key, self.value, self.sort_key, not self.negated)

    def to_string(self, and_op: str, or_op: str) -> str:
        return str(self)

    def __str__(self) -> str:
        return _NOT + self.key if self.negated else self.key

    def _pair(self, op: Op, other: Atom) -> Composite:
        mine = first_non_empty_string(self.sort_key, self.key)
        theirs = must_first_non_empty_string(other.sort_key, other.key)
        if mine < theirs:
            return Composite(op, [other, self])
        return Composite(op, [self, other])

    def and_(self, other: Logical) -> Logical:
        if isinstance(other, Composite):
            if other.op is Op.AND:
                # A ∩ (A ∩ B ∩ C) => A ∩ B ∩ C
                rest = [it for it in other.children if not self._equals(it)]
                return Composite(Op.AND, [self, *rest])
            # A ∩ (A ∪ B) => A
            if any(it is self for it in other.children):
                return self
            # A ∩ (B ∪ C) => (A ∩ B) ∪ (A ∩ C)
            return Composite(Op.OR, [self.and_(it) for it in other.children])
        if isinstance(other, Atom):
            if self._equals(other):
                return self
            return self._pair(Op.AND, other)
        raise TypeError(f"unsupported logical {other!r}")

    def or_(self, other: Logical) -> Logical:
        if isinstance(other, Composite):
            if other.op is Op.AND:
                # A ∪ (A ∩ B) => A
                if any(self._equals(it) for it in other.children):
                    return self
                return Composite(Op.OR, [self, other])
            if other._contains(self):
                return other
            return Composite(Op.OR, [self, *other.children])
        if isinstance(other, Atom):
            if self._equals(other):
                return self
            return self._pair(Op.OR, other)
        raise TypeError(f"unsupported logical {other!r}")


def _sort_rank(item: Logical) -> tuple:
    if isinstance(item, Atom):
        return (0, item._order_key())
    return (1,)


class Composite(Logical):
    """A combination of expressions under one operator."""

    def __init__(self, op: Op, children: list[Logical] | None = None) -> None:
        self.op = op
        self.children: list[Logical] = list(children or [])

    def __repr__(self) -> str:
        return f"Composite({str(self)!r})"

    def _contains(self, atom: Atom) -> bool:
        return any(atom._equals(it) for it in self.children)

    def not_(self) -> Logical:
        first, *rest = self.children
        result = first.not_()
        for child in rest:
            if self.op is Op.AND:
                result = result.or_(child.not_())
            else:
                result = result.and_(child.not_())
        return result

    def to_string(self, and_op: str, or_op: str) -> str:
        if not self.children:
            return ""
        word = and_op if self.op is Op.AND else or_op
        inner = f" {word} ".join(c.to_string(and_op, or_op) for c in self.children)
        return f"( {inner} )"

    def and_(self, other: Logical) -> Logical:
        result = self._and(other)
        if isinstance(result, Composite):
            result._optimize()
        return result

    def or_(self, other: Logical) -> Logical:
        result = self._or(other)
        if isinstance(result, Composite):
            result._optimize()
        return result

    def _and(self, other: Logical) -> Logical:
        if isinstance(other, Atom):
            return other.and_(self)
        if not isinstance(other, Composite):
            raise TypeError(f"unsupported logical {other!r}")

        if self.op is Op.AND:
            if other.op is Op.AND:
                # (A ∩ B) ∩ (C ∩ D)
                result: Logical = self
                for child in other.children:
                    result = result.and_(child)
                return result
            # (A ∩ B) ∩ (C ∪ A) => A ∩ B
            for child in self.children:
                if isinstance(child, Atom) and other._contains(child):
                    return self
            # (A ∩ B) ∩ (C ∪ D) => ((A ∩ B) ∩ C) ∪ ((A ∩ B) ∩ D)
            return Composite(Op.OR, [self.and_(child) for child in other.children])

        if other.op is Op.AND:
            # (A ∪ B) ∩ (C ∩ D)
            return Composite(Op.OR, [child.and_(other) for child in self.children])

        # (A ∪ B) ∩ (C ∪ D) => (A ∩ C) ∪ (A ∩ D) ∪ (B ∩ C) ∪ (B ∩ D)
        combined: Logical | None = None
        for left in self.children:
            for right in other.children:
                part = left.and_(right)
                combined = part if combined is None else combined.or_(part)
        if combined is None:
            raise ValueError("cannot combine empty logical expressions")
        return combined

    def _or(self, other: Logical) -> Logical:
        if isinstance(other, Atom):
            return other.or_(self)
        if not isinstance(other, Composite):
            raise TypeError(f"unsupported logical {other!r}")

        if self.op is Op.AND and other.op is Op.AND:
            # (A ∩ B) ∪ (C ∩ D)
            return Composite(Op.OR, [self, other])

        if self.op is Op.OR and other.op is Op.AND:
            # (A ∪ B) ∪ (A ∩ D) => A ∪ B
            for child in self.children:
                if isinstance(child, Atom) and other._contains(child):
                    return self
            return Composite(Op.OR, [*self.children, other])

        # (A ∩ B) ∪ (C ∪ D) and (A ∪ B) ∪ (C ∪ D)
        result: Logical = self
        for child in other.children:
            result = result.or_(child)
        return result

    def _optimize(self) -> int:
        self.children.sort(key=_sort_rank)
        removed: set[int] = set()
        if self.op is Op.OR:
            for i, item in enumerate(self.children):
                if not isinstance(item, Atom):
                    continue
                for j in range(i, len(self.children)):
                    other = self.children[j]
                    if isinstance(other, Composite) and other._contains(item):
                        removed.add(j)
        if removed:
            self.children = [
                c for idx, c in enumerate(self.children) if idx not in removed
            ]
        return len(removed)


def new(key: str, value: Any = None, sort_key: str = "") -> Logical:
    """Create an atomic logical item."""
    return Atom(key, value=value, sort_key=sort_key)


def eval_logical(
    logical: Logical,
    intersection: Callable[[Any, Any], Any],
    union: Callable[[Any, Any], Any],
    negation: Callable[[Any], Any],
) -> Any:
    """Fold the expression over the atoms' values with the given operations."""
    if isinstance(logical, Atom):
        return negation(logical.value) if logical.negated else logical.value
    if isinstance(logical, Composite):
        first, *rest = logical.children
        result = eval_logical(first, intersection, union, negation)
        for child in rest:
            value = eval_logical(child, intersection, union, negation)
            if logical.op is Op.AND:
                result = intersection(result, value)
            else:
                result = union(result, value)
        return result
    raise TypeError(f"unsupported logical {logical!r}")


def eval_bool(logical: Logical) -> bool:
    """Evaluate an expression whose atoms hold booleans."""
    return bool(
        eval_logical(
            logical,
            lambda a, b: bool(a) and bool(b),
            lambda a, b: bool(a) or bool(b),
            lambda v: not v,
        )
    )