"""Small iterators over sharding values."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator

__all__ = ["multiple", "single", "filter_range"]


def multiple(*values: Any) -> Iterator[Any]:
    """Iterate over the given values."""
    return iter(values)


def single(value: Any) -> Iterator[Any]:
    """Iterate over one value."""
    yield value


def filter_range(
    source: Iterable[Any], predicate: Callable[[Any], bool]
) -> Iterator[Any]:
    """Iterate over the values of ``source`` that satisfy ``predicate``."""
    return (value for value in source if predicate(value))