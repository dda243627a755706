"""Collector builders and ready-made collectors."""

from foldkit.collectors.containers import OrderedSet, SortedSet
from foldkit.collectors.helpers import (
    from_container,
    sized_from_container,
    sized_stable_order_from_container,
    sized_unordered_from_container,
    stable_order_from_container,
    unordered_from_container,
)
from foldkit.collectors.lists import to_list
from foldkit.collectors.other import to_existing, to_file, to_iterator
from foldkit.collectors.sets import (
    to_case_insensitive_set,
    to_natural_order_set,
    to_ordered_set,
    to_set,
    to_sorted_set,
)

__all__ = [
    "OrderedSet",
    "SortedSet",
    "from_container",
    "sized_from_container",
    "sized_stable_order_from_container",
    "sized_unordered_from_container",
    "stable_order_from_container",
    "to_case_insensitive_set",
    "to_existing",
    "to_file",
    "to_iterator",
    "to_list",
    "to_natural_order_set",
    "to_ordered_set",
    "to_set",
    "to_sorted_set",
    "unordered_from_container",
]
