# src/foldkit/sinks/file_sink.py
"""File sink collector.

Streams string elements into a file, one per line. Unlike container
collectors, the accumulator is a live handle to an open file, made of three
layers owned by the collector:

    TextIOWrapper (encoding) -> BufferedWriter (buffering) -> FileIO (raw file)

The file is opened when the collector is constructed, so the destination
exists even if the upstream turns out to be empty. The layers are closed
exactly once, by whichever comes first:
- finish() at the end of a successful fold
- a write failure inside accumulate()
- an explicit abort()/close(), or leaving a `with` block

IMPORTANT: The collector is single-use. supply() returns the same handle every
time, which is why combine() can just pick one of its arguments. Engines must
run it over one partition; concurrent accumulate() calls are serialized by an
internal lock but their relative order is undefined.
"""

from __future__ import annotations

import codecs
import os
from io import BufferedWriter, FileIO, TextIOWrapper
from os import PathLike
from pathlib import Path
from threading import RLock
from types import TracebackType
from typing import IO, TYPE_CHECKING, NoReturn, Self

import structlog

from foldkit.contracts import (
    CollectorClosedError,
    CollectorMisuseError,
    OpenOption,
    SinkIOError,
    SinkState,
)
from foldkit.contracts.enums import Characteristic
from foldkit.contracts.errors import SinkOperation

if TYPE_CHECKING:
    from foldkit.core.config import FileSinkSettings

logger = structlog.get_logger(__name__)

_DEFAULT_OPTIONS: frozenset[OpenOption] = frozenset({OpenOption.CREATE, OpenOption.TRUNCATE_EXISTING, OpenOption.WRITE})


def open_flags(options: tuple[OpenOption, ...]) -> tuple[int, str]:
    """Translate open options into os.open() flags and a FileIO mode.

    No options means CREATE, TRUNCATE_EXISTING and WRITE.

    Raises:
        ValueError: If the options conflict.
    """
    opts = frozenset(OpenOption(o) for o in options) or _DEFAULT_OPTIONS
    if OpenOption.APPEND in opts and OpenOption.TRUNCATE_EXISTING in opts:
        raise ValueError("APPEND and TRUNCATE_EXISTING cannot be combined")

    flags = os.O_WRONLY | getattr(os, "O_BINARY", 0)
    if OpenOption.CREATE_NEW in opts:
        flags |= os.O_CREAT | os.O_EXCL
    elif OpenOption.CREATE in opts:
        flags |= os.O_CREAT
    if OpenOption.APPEND in opts:
        flags |= os.O_APPEND
    if OpenOption.TRUNCATE_EXISTING in opts:
        flags |= os.O_TRUNC
    if OpenOption.SYNC in opts:
        flags |= getattr(os, "O_SYNC", 0)
    if OpenOption.DSYNC in opts:
        flags |= getattr(os, "O_DSYNC", 0)

    mode = "ab" if OpenOption.APPEND in opts else "wb"
    return flags, mode


class FileSinkCollector:
    """Collector that writes each string element to a file as a line.

    Returns the destination Path as the result. Declares no characteristics:
    finish() does real work (closing), and lines land in encounter order.

    Example:
        sink = FileSinkCollector(tmp / "out.txt", "utf-8")
        path = collect(["alpha", "beta"], sink)

    Args:
        path: Destination file
        encoding: Text encoding of the written lines
        *options: How to open the file (default: create/truncate)
        newline: Line terminator. None writes the platform default.

    Raises:
        SinkIOError: If the destination cannot be opened. No handle is left
            open and no collector object is returned.
    """

    characteristics: frozenset[Characteristic] = frozenset()
    single_use: bool = True

    def __init__(
        self,
        path: str | PathLike[str],
        encoding: str = "utf-8",
        *options: OpenOption,
        newline: str | None = None,
    ) -> None:
        self._path = Path(path)
        self._encoding = encoding
        self._newline = newline
        self._lock = RLock()
        self._state = SinkState.OPEN
        self._supply_count = 0

        self._raw: FileIO | None = None
        self._buffer: BufferedWriter | None = None
        self._writer: IO[str] | None = None

        try:
            flags, mode = open_flags(options)
            codecs.lookup(encoding)
            self._open_layers(flags, mode)
        except (OSError, LookupError, ValueError, TypeError) as e:
            self._teardown_and_raise("open", e, SinkState.FAILED)
        except BaseException as e:
            # Not an open failure: release what was acquired, re-raise unchanged
            for secondary in self._release():
                e.add_note(f"while releasing {self._path}: {type(secondary).__name__}: {secondary}")
            self._state = SinkState.FAILED
            raise

        logger.debug("file_sink_opened", path=str(self._path), encoding=encoding, mode=mode)

    @classmethod
    def from_settings(cls, settings: FileSinkSettings, base_dir: Path | None = None) -> Self:
        """Open a sink described by a FileSinkSettings block."""
        return cls(
            settings.resolved_path(base_dir),
            settings.encoding,
            *settings.options,
            newline=settings.newline,
        )

    def _open_layers(self, flags: int, mode: str) -> None:
        """Acquire the three layers, recording each as soon as it exists.

        Anything recorded here is released by teardown if a later layer fails.
        """
        fd = os.open(self._path, flags, 0o666)
        try:
            self._raw = FileIO(fd, mode, closefd=True)
        except BaseException:
            os.close(fd)
            raise
        self._buffer = BufferedWriter(self._raw)
        self._writer = TextIOWrapper(self._buffer, encoding=self._encoding, newline=self._newline)

    # === Properties ===

    @property
    def path(self) -> Path:
        return self._path

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def state(self) -> SinkState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._state.is_terminal

    @property
    def supply_count(self) -> int:
        """How many times supply() has been called."""
        return self._supply_count

    # === Collector operations ===

    def supply(self) -> IO[str]:
        """Return the pre-opened writer.

        Idempotent: every call returns the same handle, never a second file.

        Raises:
            CollectorClosedError: If the sink already reached a terminal state.
        """
        with self._lock:
            writer = self._live_writer("supply")
            self._supply_count += 1
            if self._supply_count > 1:
                logger.debug("file_sink_supply_repeated", path=str(self._path), count=self._supply_count)
            return writer

    def accumulate(self, acc: IO[str], element: str) -> None:
        """Write element followed by a line terminator.

        A write failure is terminal: all layers are closed, close errors are
        attached to the write error, and the sink moves to FAILED.

        Raises:
            SinkIOError: If the write fails.
            CollectorClosedError: If the sink already reached a terminal state.
            CollectorMisuseError: If acc is not this sink's handle.
        """
        with self._lock:
            writer = self._owned_writer(acc, "accumulate")
            self._state = SinkState.WRITING
            try:
                writer.write(element)
                writer.write("\n")
            except (OSError, UnicodeError) as e:
                self._teardown_and_raise("write", e, SinkState.FAILED)

    def combine(self, left: IO[str], right: IO[str]) -> IO[str]:
        # supply() always returns the single handle, so both sides are the same file
        return left

    def finish(self, acc: IO[str]) -> Path:
        """Close all layers and return the destination path.

        References are released even when closing fails.

        Raises:
            SinkIOError: If flushing or closing fails.
            CollectorClosedError: If the sink already reached a terminal state.
        """
        with self._lock:
            self._owned_writer(acc, "finish")
            errors = self._release()
            self._state = SinkState.FINISHED
            if errors:
                self._raise_collected("close", errors)
            logger.debug("file_sink_finished", path=str(self._path))
            return self._path

    def abort(self) -> None:
        """Close all layers without finishing the fold.

        Idempotent: a no-op once the sink is in any terminal state.

        Raises:
            SinkIOError: If closing fails. The sink is ABORTED regardless.
        """
        with self._lock:
            if self._state.is_terminal:
                return
            errors = self._release()
            self._state = SinkState.ABORTED
            logger.debug("file_sink_aborted", path=str(self._path))
            if errors:
                self._raise_collected("close", errors)

    close = abort

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            self.abort()
        except SinkIOError as e:
            if exc_val is None:
                raise
            # The in-flight error stays primary
            exc_val.add_note(f"also failed to release {self._path}: {e}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={str(self._path)!r}, state={self._state.value!r})"

    # === Internals ===

    def _live_writer(self, operation: str) -> IO[str]:
        if self._state.is_terminal or self._writer is None:
            raise CollectorClosedError(self._path, self._state.value, operation)
        return self._writer

    def _owned_writer(self, acc: IO[str], operation: str) -> IO[str]:
        writer = self._live_writer(operation)
        if acc is not writer:
            raise CollectorMisuseError(f"Cannot {operation}: handle does not belong to the sink for {self._path}")
        return writer

    def _release(self) -> list[BaseException]:
        """Close every layer, outermost first, and drop all references.

        Closing the outer layers normally closes the inner ones too; closing an
        already-closed layer is a no-op. Returns the errors raised, in order.
        """
        layers = (self._writer, self._buffer, self._raw)
        self._writer = None
        self._buffer = None
        self._raw = None

        errors: list[BaseException] = []
        for layer in layers:
            if layer is None:
                continue
            try:
                layer.close()
            except OSError as e:
                errors.append(e)
        return errors

    def _teardown_and_raise(self, operation: SinkOperation, error: BaseException, state: SinkState) -> NoReturn:
        secondary = self._release()
        self._state = state
        logger.error(
            "file_sink_teardown",
            path=str(self._path),
            operation=operation,
            error=str(error),
            secondary_errors=len(secondary),
        )
        raise SinkIOError(self._path, operation, error, secondary) from error

    def _raise_collected(self, operation: SinkOperation, errors: list[BaseException]) -> NoReturn:
        primary, *secondary = errors
        logger.error(
            "file_sink_close_failed",
            path=str(self._path),
            error=str(primary),
            secondary_errors=len(secondary),
        )
        raise SinkIOError(self._path, operation, primary, secondary) from primary
