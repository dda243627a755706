"""Error taxonomy for collectors.

Two families:
- I/O failures (SinkIOError): opening, writing or closing a destination failed.
  The low-level error is the primary cause; errors raised while tearing down
  the remaining handles are attached as secondary errors, never dropped.
- Misuse (CollectorMisuseError): the caller broke the collector contract,
  e.g. operating on a sink that is already closed.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Literal

SinkOperation = Literal["open", "write", "close"]


class CollectorError(Exception):
    """Base class for all foldkit errors."""

    pass


class SinkIOError(CollectorError):
    """An I/O operation on a resource sink failed.

    Attributes:
        path: Destination the sink was bound to
        operation: Which phase failed ("open", "write" or "close")
        cause: The primary low-level error
        secondary_errors: Errors raised while releasing the remaining handles,
            in the order they occurred
    """

    def __init__(
        self,
        path: Path,
        operation: SinkOperation,
        cause: BaseException,
        secondary_errors: Iterable[BaseException] = (),
    ) -> None:
        self.path = path
        self.operation = operation
        self.cause = cause
        self.secondary_errors: tuple[BaseException, ...] = tuple(secondary_errors)
        super().__init__(f"Failed to {operation} {path}: {cause}")
        self.__cause__ = cause
        for secondary in self.secondary_errors:
            self.add_note(f"while releasing {path}: {type(secondary).__name__}: {secondary}")


class CollectorMisuseError(CollectorError):
    """The collector contract was violated by the caller."""

    pass


class CollectorClosedError(CollectorMisuseError):
    """An operation was attempted on a collector that already reached a terminal state."""

    def __init__(self, path: Path, state: str, operation: str) -> None:
        self.path = path
        self.state = state
        self.operation = operation
        super().__init__(f"Cannot {operation}: sink for {path} is already closed (state={state})")
