"""Insertable, mergeable, iterable containers missing from the standard library.

- OrderedSet: unique elements in first-insertion order
- SortedSet: unique elements under a key or comparator, kept sorted

Both accept an initial_capacity argument so they can be used as sized
factories. The hint is accepted and ignored: Python containers grow on demand.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Callable, Hashable, Iterable, Iterator, MutableSet
from functools import cmp_to_key
from typing import Any


class OrderedSet[T: Hashable](MutableSet[T]):
    """Set that iterates in first-insertion order.

    Re-adding an existing element does not move it.
    """

    def __init__(self, iterable: Iterable[T] = (), initial_capacity: int | None = None) -> None:
        self._items: dict[T, None] = {}
        self.update(iterable)

    def add(self, value: T) -> None:
        self._items.setdefault(value, None)

    def discard(self, value: T) -> None:
        self._items.pop(value, None)

    def update(self, *others: Iterable[T]) -> None:
        for other in others:
            if other is self:
                continue
            for value in other:
                self._items.setdefault(value, None)

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedSet):
            return list(self) == list(other)
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"


class SortedSet[T](MutableSet[T]):
    """Set whose uniqueness and order are defined by a key or a comparator.

    Two values are duplicates when their keys compare equal. The first value
    seen for a key is kept; later equivalents are dropped. With neither key
    nor comparator, values are ordered and deduplicated by their natural order.

    Example:
        s = SortedSet(["b", "B", "a"], key=str.casefold)
        list(s)  # ["a", "b"]
    """

    def __init__(
        self,
        iterable: Iterable[T] = (),
        *,
        key: Callable[[T], Any] | None = None,
        comparator: Callable[[T, T], int] | None = None,
        initial_capacity: int | None = None,
    ) -> None:
        if key is not None and comparator is not None:
            raise ValueError("SortedSet takes a key or a comparator, not both")
        if comparator is not None:
            key = cmp_to_key(comparator)
        self._key: Callable[[T], Any] = key if key is not None else _natural_key
        self._keys: list[Any] = []
        self._values: list[T] = []
        self.update(iterable)

    @property
    def key(self) -> Callable[[T], Any]:
        return self._key

    def _locate(self, value: object) -> tuple[int, bool]:
        k = self._key(value)  # type: ignore[arg-type]
        i = bisect_left(self._keys, k)
        return i, i < len(self._keys) and not (k < self._keys[i])

    def add(self, value: T) -> None:
        i, found = self._locate(value)
        if not found:
            self._keys.insert(i, self._key(value))
            self._values.insert(i, value)

    def discard(self, value: T) -> None:
        i, found = self._locate(value)
        if found:
            del self._keys[i]
            del self._values[i]

    def update(self, *others: Iterable[T]) -> None:
        for other in others:
            if other is self:
                continue
            for value in other:
                self.add(value)

    def _from_iterable(self, iterable: Iterable[T]) -> SortedSet[T]:
        # Set operators (|, &, -) build results through this hook; keep our ordering
        return SortedSet(iterable, key=self._key)

    def first(self) -> T:
        if not self._values:
            raise KeyError("first() on empty SortedSet")
        return self._values[0]

    def last(self) -> T:
        if not self._values:
            raise KeyError("last() on empty SortedSet")
        return self._values[-1]

    def __contains__(self, value: object) -> bool:
        try:
            return self._locate(value)[1]
        except TypeError:
            return False

    def __iter__(self) -> Iterator[T]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> T:
        return self._values[index]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r})"


def _natural_key(value: Any) -> Any:
    return value


def case_insensitive_compare(left: str, right: str) -> int:
    """Compare strings ignoring case, returning -1, 0 or 1."""
    a, b = left.casefold(), right.casefold()
    return (a > b) - (a < b)
