"""Collectors that gather elements into sets."""

from collections.abc import Callable, Hashable
from typing import Any

from foldkit.collectors.containers import OrderedSet, SortedSet, case_insensitive_compare
from foldkit.collectors.helpers import (
    sized_stable_order_from_container,
    sized_unordered_from_container,
    stable_order_from_container,
    unordered_from_container,
)
from foldkit.contracts import Collector


def to_set[T: Hashable](initial_capacity: int | None = None) -> Collector[T, set[T], set[T]]:
    """Unordered set of the unique elements.

    initial_capacity is accepted for symmetry with the other sized
    collectors; builtin sets size themselves.
    """
    if initial_capacity is None:
        return unordered_from_container(set)
    return sized_unordered_from_container(initial_capacity, lambda _capacity: set())


def to_ordered_set[T: Hashable](initial_capacity: int | None = None) -> Collector[T, OrderedSet[T], OrderedSet[T]]:
    """Unique elements in encounter order."""
    if initial_capacity is None:
        return stable_order_from_container(OrderedSet)
    return sized_stable_order_from_container(initial_capacity, lambda capacity: OrderedSet(initial_capacity=capacity))


def to_sorted_set[T](
    comparator: Callable[[T, T], int] | None = None,
    *,
    key: Callable[[T], Any] | None = None,
) -> Collector[T, SortedSet[T], SortedSet[T]]:
    """Unique elements sorted by a comparator or key.

    Values that compare equal are duplicates; the first one seen is kept.
    """
    return stable_order_from_container(lambda: SortedSet(key=key, comparator=comparator))


def to_natural_order_set[T]() -> Collector[T, SortedSet[T], SortedSet[T]]:
    """Unique elements sorted by their natural order."""
    return stable_order_from_container(SortedSet)


def to_case_insensitive_set() -> Collector[str, SortedSet[str], SortedSet[str]]:
    """Unique strings where strings differing only by case are duplicates."""
    return to_sorted_set(case_insensitive_compare)
