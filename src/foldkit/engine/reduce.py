# src/foldkit/engine/reduce.py
"""Reference driver for collectors.

Runs a collector over a sequence either as one sequential fold or as a fixed
partition fold: the input is cut into contiguous chunks, each chunk is folded
into its own accumulator (optionally on a thread pool), and the partial
accumulators are combined left to right in chunk order. Combining in chunk
order keeps the result order-equivalent to the sequential fold for collectors
that do not declare UNORDERED.

This is not a scheduler. There is no work stealing, no retry, and no
cancellation; the first error raised by any operation propagates unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, cast

import structlog

from foldkit.contracts import Characteristic, CollectorProtocol

if TYPE_CHECKING:
    from foldkit.core.config import EngineSettings

logger = structlog.get_logger(__name__)


def collect[T, A, R](elements: Iterable[T], collector: CollectorProtocol[T, A, R]) -> R:
    """Fold elements sequentially into a single accumulator.

    The finisher is skipped when the collector declares IDENTITY_FINISH.
    """
    acc = collector.supply()
    for element in elements:
        collector.accumulate(acc, element)
    return _finish(collector, acc)


def partition[T](elements: Sequence[T], partitions: int) -> list[Sequence[T]]:
    """Split elements into contiguous, order-preserving chunks.

    Chunk sizes differ by at most one. An empty input yields one empty chunk;
    there are never more chunks than elements otherwise.

    Raises:
        ValueError: If partitions is less than 1.
    """
    if partitions < 1:
        raise ValueError(f"partitions must be >= 1, got {partitions}")
    if not elements:
        return [elements]
    count = min(partitions, len(elements))
    size, remainder = divmod(len(elements), count)
    chunks: list[Sequence[T]] = []
    start = 0
    for i in range(count):
        end = start + size + (1 if i < remainder else 0)
        chunks.append(elements[start:end])
        start = end
    return chunks


def collect_partitioned[T, A, R](
    elements: Iterable[T],
    collector: CollectorProtocol[T, A, R],
    *,
    partitions: int | None = None,
    max_workers: int | None = None,
    settings: EngineSettings | None = None,
) -> R:
    """Fold elements over partitions and combine the partial accumulators.

    Args:
        elements: Input sequence (materialized before splitting)
        collector: Collector to run
        partitions: Number of chunks (default: settings.partitions, else max_workers)
        max_workers: Threads used to accumulate chunks; 1 runs on the caller's thread
        settings: Defaults for partitions and max_workers

    Returns:
        The collector's result

    Single-use collectors are bound to one external resource, so they always
    run as one sequential fold regardless of the partition settings.
    """
    if collector.single_use:
        logger.debug("single_use_collector_sequential", collector=type(collector).__name__)
        return collect(elements, collector)

    workers = max_workers if max_workers is not None else (settings.max_workers if settings is not None else 1)
    if workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {workers}")
    if partitions is None:
        partitions = settings.partitions if settings is not None and settings.partitions is not None else workers

    items = elements if isinstance(elements, Sequence) else list(elements)
    chunks = partition(items, partitions)

    if workers == 1 or len(chunks) == 1:
        partials = [_accumulate_chunk(collector, chunk) for chunk in chunks]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(_accumulate_chunk, collector, chunk) for chunk in chunks]
            # Read in submission order; result() re-raises the worker's error
            partials = [future.result() for future in futures]

    acc = partials[0]
    for partial in partials[1:]:
        acc = collector.combine(acc, partial)
    return _finish(collector, acc)


def _accumulate_chunk[T, A](collector: CollectorProtocol[T, A, Any], chunk: Sequence[T]) -> A:
    acc = collector.supply()
    for element in chunk:
        collector.accumulate(acc, element)
    return acc


def _finish[A, R](collector: CollectorProtocol[Any, A, R], acc: A) -> R:
    if Characteristic.IDENTITY_FINISH in collector.characteristics:
        return cast(R, acc)
    return collector.finish(acc)
