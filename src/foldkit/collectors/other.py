"""Collectors that do not build a fresh container: iterators, existing containers, files."""

from collections.abc import Iterator, MutableSequence, MutableSet
from os import PathLike
from typing import Any

from foldkit.contracts import Characteristic, Collector, OpenOption
from foldkit.sinks.file_sink import FileSinkCollector


def to_iterator[T]() -> Collector[T, list[T], Iterator[T]]:
    """Buffer the upstream, then hand back an iterator over it.

    Useful when results are read into memory with one fold and streamed out
    with another.
    """

    def combiner(left: list[T], right: list[T]) -> list[T]:
        if left is not right:
            left.extend(right)
        return left

    return Collector.of(list, list.append, combiner, iter)


def to_existing[T, C: MutableSet[Any] | MutableSequence[Any]](existing: C) -> Collector[T, C, C]:
    """Pour the upstream into a container the caller already owns.

    The supplier always returns `existing`, so combining just picks the left
    accumulator. Single-use: partitioned engines run it over one partition.
    """

    def insert(container: C, element: T) -> None:
        if isinstance(container, MutableSet):
            container.add(element)
        else:
            container.append(element)

    return Collector(
        supplier=lambda: existing,
        accumulator=insert,
        combiner=lambda left, _right: left,
        finisher=lambda acc: acc,
        characteristics=frozenset({Characteristic.IDENTITY_FINISH, Characteristic.UNORDERED}),
        single_use=True,
    )


def to_file(dest: str | PathLike[str], *options: OpenOption) -> FileSinkCollector:
    """Write each string element to `dest` as a UTF-8 line.

    The file is opened immediately and closed when the fold finishes.

    Raises:
        SinkIOError: If the file cannot be opened.
    """
    return FileSinkCollector(dest, "utf-8", *options)
