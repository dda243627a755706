"""Collectors that gather elements into lists."""

from foldkit.collectors.helpers import sized_stable_order_from_container, stable_order_from_container
from foldkit.contracts import Collector


def to_list[T](initial_capacity: int | None = None) -> Collector[T, list[T], list[T]]:
    """All elements, duplicates included, in encounter order."""
    if initial_capacity is None:
        return stable_order_from_container(list)
    return sized_stable_order_from_container(initial_capacity, lambda _capacity: [])
