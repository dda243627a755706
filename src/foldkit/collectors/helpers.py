"""Builders that assemble collectors from container operations.

Call sites pass a container factory and get back a Collector whose:
- accumulator inserts one element into the container
- combiner merges the right container into the left and returns the left
- finisher is the identity

Insert and merge default to the container's own operations (add/update for
sets, append/extend for sequences). Pass insert= or merge= for containers
that spell them differently. The container's semantics are kept as-is: a set
drops duplicates, a list does not.

Example:
    collector = stable_order_from_container(OrderedSet)
    result = collect(["3", "1", "1", "2"], collector)  # OrderedSet(["3", "1", "2"])
"""

from collections.abc import Callable, Iterable, MutableSequence, MutableSet
from typing import Any

from foldkit.contracts import Characteristic, Collector


def _insert(container: Any, element: Any) -> None:
    if isinstance(container, MutableSet):
        container.add(element)
    elif isinstance(container, MutableSequence):
        container.append(element)
    elif hasattr(container, "add"):
        container.add(element)
    elif hasattr(container, "append"):
        container.append(element)
    else:
        raise TypeError(f"{type(container).__name__} has no add() or append(); pass insert= explicitly")


def _merge_all(container: Any, other: Iterable[Any]) -> None:
    if isinstance(container, MutableSet):
        container |= other  # type: ignore[operator]
    elif isinstance(container, MutableSequence):
        container.extend(other)
    elif hasattr(container, "update"):
        container.update(other)
    elif hasattr(container, "extend"):
        container.extend(other)
    else:
        raise TypeError(f"{type(container).__name__} has no update() or extend(); pass merge= explicitly")


def from_container[T, C](
    factory: Callable[[], C],
    *characteristics: Characteristic,
    insert: Callable[[C, T], None] | None = None,
    merge: Callable[[C, C], None] | None = None,
) -> Collector[T, C, C]:
    """Build a collector that pours elements into containers made by `factory`.

    IDENTITY_FINISH is always declared since the container is the result.

    Args:
        factory: No-arg callable returning an empty container. May be called
            once per partition.
        *characteristics: Characteristics to declare, e.g. UNORDERED
        insert: Adds one element to a container (default: add/append)
        merge: Adds all elements of the second container to the first
            (default: update/extend)

    Returns:
        Collector producing a container of type C
    """
    insert_op = insert if insert is not None else _insert
    merge_op = merge if merge is not None else _merge_all

    def combiner(left: C, right: C) -> C:
        # Sequential engines may hand the same container in twice
        if left is right:
            return left
        merge_op(left, right)
        return left

    return Collector.of(factory, insert_op, combiner, None, *characteristics)


def unordered_from_container[T, C](factory: Callable[[], C]) -> Collector[T, C, C]:
    """Collector for containers with no stable iteration order (e.g. set).

    Declares IDENTITY_FINISH and UNORDERED so engines may skip order
    bookkeeping.
    """
    return from_container(factory, Characteristic.IDENTITY_FINISH, Characteristic.UNORDERED)


def stable_order_from_container[T, C](factory: Callable[[], C]) -> Collector[T, C, C]:
    """Collector for containers whose iteration order must follow encounter order.

    Declares IDENTITY_FINISH only. Engines must combine partitions in
    partition order.
    """
    return from_container(factory, Characteristic.IDENTITY_FINISH)


def sized_from_container[T, C](
    initial_capacity: int,
    sized_factory: Callable[[int], C],
    *characteristics: Characteristic,
) -> Collector[T, C, C]:
    """Like from_container(), but the factory receives a capacity hint.

    The hint is a performance hint only. It is passed through unchanged and
    never affects the contents or order of the result.

    Args:
        initial_capacity: Capacity to reserve in each new container
        sized_factory: One-arg callable taking the capacity
        *characteristics: Characteristics to declare

    Raises:
        ValueError: If initial_capacity is negative
    """
    if initial_capacity < 0:
        raise ValueError(f"initial_capacity must be >= 0, got {initial_capacity}")

    def factory() -> C:
        return sized_factory(initial_capacity)

    return from_container(factory, *characteristics)


def sized_unordered_from_container[T, C](initial_capacity: int, sized_factory: Callable[[int], C]) -> Collector[T, C, C]:
    """sized_from_container() with IDENTITY_FINISH and UNORDERED."""
    return sized_from_container(initial_capacity, sized_factory, Characteristic.IDENTITY_FINISH, Characteristic.UNORDERED)


def sized_stable_order_from_container[T, C](initial_capacity: int, sized_factory: Callable[[int], C]) -> Collector[T, C, C]:
    """sized_from_container() with IDENTITY_FINISH only."""
    return sized_from_container(initial_capacity, sized_factory, Characteristic.IDENTITY_FINISH)
