"""The collector contract.

A collector folds a sequence of elements into a result through four
operations:

1. supply() - create a fresh accumulator
2. accumulate(acc, element) - absorb one element, mutating acc in place
3. combine(left, right) - merge two partial accumulators (associative)
4. finish(acc) - turn the completed accumulator into the result

Engines drive these operations; collectors never iterate the sequence
themselves. The declared characteristics tell the engine what it may skip:
with IDENTITY_FINISH the finisher need not be called, with UNORDERED
partitions may be combined in any order.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from foldkit.contracts.enums import Characteristic


@runtime_checkable
class CollectorProtocol[T, A, R](Protocol):
    """Protocol every collector implements.

    Lifecycle (per reduction):
    1. supply() - once per partition
    2. accumulate(acc, element) - once per element, in encounter order within a partition
    3. combine(left, right) - once per pair of adjacent partitions
    4. finish(acc) - exactly once, unless IDENTITY_FINISH is declared

    Collectors with single_use=True are bound to one external resource. Their
    supply() returns the same accumulator every time, so engines must run them
    over a single partition.
    """

    characteristics: frozenset[Characteristic]
    single_use: bool

    def supply(self) -> A:
        """Create (or, for single-use collectors, return) an accumulator."""
        ...

    def accumulate(self, acc: A, element: T) -> None:
        """Absorb one element into the accumulator."""
        ...

    def combine(self, left: A, right: A) -> A:
        """Merge two partial accumulators and return the merged one."""
        ...

    def finish(self, acc: A) -> R:
        """Transform the completed accumulator into the result."""
        ...


def _identity(acc: Any) -> Any:
    return acc


@dataclass(frozen=True)
class Collector[T, A, R]:
    """Immutable, reusable descriptor of a fold.

    Holds the four operations as plain callables. Build instances with
    Collector.of(), which adds IDENTITY_FINISH when no finisher is given.

    Attributes:
        supplier: Zero-argument factory returning a fresh accumulator
        accumulator: Absorbs one element into an accumulator in place
        combiner: Merges two accumulators, returning the merged one
        finisher: Transforms the accumulator into the result
        characteristics: Flags the engine may rely on
    """

    supplier: Callable[[], A]
    accumulator: Callable[[A, T], None]
    combiner: Callable[[A, A], A]
    finisher: Callable[[A], R]
    characteristics: frozenset[Characteristic] = field(default_factory=frozenset)
    single_use: bool = False

    @classmethod
    def of(
        cls,
        supplier: Callable[[], A],
        accumulator: Callable[[A, T], None],
        combiner: Callable[[A, A], A],
        finisher: Callable[[A], R] | Characteristic | None = None,
        *characteristics: Characteristic,
    ) -> "Collector[T, A, R]":
        """Create a collector from its operations.

        Args:
            supplier: Accumulator factory
            accumulator: Element absorber
            combiner: Partial-result merger
            finisher: Final transformation. None means identity, and
                IDENTITY_FINISH is then added to the characteristics. A
                Characteristic in this position is taken as the first flag
                of an identity-finish collector.
            *characteristics: Additional characteristics to declare

        Returns:
            Collector descriptor
        """
        if isinstance(finisher, str):
            characteristics = (Characteristic(finisher), *characteristics)
            finisher = None
        flags = frozenset(Characteristic(c) for c in characteristics)
        if finisher is None:
            return cls(supplier, accumulator, combiner, _identity, flags | {Characteristic.IDENTITY_FINISH})
        return cls(supplier, accumulator, combiner, finisher, flags)

    def supply(self) -> A:
        return self.supplier()

    def accumulate(self, acc: A, element: T) -> None:
        self.accumulator(acc, element)

    def combine(self, left: A, right: A) -> A:
        return self.combiner(left, right)

    def finish(self, acc: A) -> R:
        return self.finisher(acc)

    def has(self, characteristic: Characteristic) -> bool:
        """Check whether a characteristic is declared."""
        return characteristic in self.characteristics


def collecting_and_then[T, A, R, RR](
    collector: CollectorProtocol[T, A, R],
    then: Callable[[R], RR],
) -> Collector[T, A, RR]:
    """Wrap a collector so that its result is passed through `then`.

    The wrapped collector never declares IDENTITY_FINISH since `then` does
    real work. Other characteristics carry over.
    """
    characteristics = collector.characteristics - {Characteristic.IDENTITY_FINISH}

    def finisher(acc: A) -> RR:
        return then(collector.finish(acc))

    return Collector(
        supplier=collector.supply,
        accumulator=collector.accumulate,
        combiner=collector.combine,
        finisher=finisher,
        characteristics=frozenset(characteristics),
        single_use=collector.single_use,
    )
