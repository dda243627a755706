"""Flags, states and options shared across foldkit subsystems.

Every collector declares its characteristics up front. An engine reads them
to decide whether it may skip the finisher or merge partitions out of order.
"""

from enum import StrEnum


class Characteristic(StrEnum):
    """Characteristics a collector can declare.

    Values:
        IDENTITY_FINISH: The finisher is the identity and side-effect free.
            The engine may skip it and return the accumulator directly.
        UNORDERED: The result does not depend on encounter order. Its absence
            is a promise that the result preserves the sequence order.
    """

    IDENTITY_FINISH = "identity_finish"
    UNORDERED = "unordered"


class SinkState(StrEnum):
    """Lifecycle of a resource sink collector.

    OPEN and WRITING are live. FINISHED, FAILED and ABORTED are terminal and
    mutually exclusive: a sink reaches exactly one of them.
    """

    OPEN = "open"
    WRITING = "writing"
    FINISHED = "finished"
    FAILED = "failed"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_SINK_STATES


_TERMINAL_SINK_STATES = frozenset({SinkState.FINISHED, SinkState.FAILED, SinkState.ABORTED})


class OpenOption(StrEnum):
    """How a file sink opens its destination.

    No options means CREATE, TRUNCATE_EXISTING and WRITE.
    """

    WRITE = "write"
    APPEND = "append"
    TRUNCATE_EXISTING = "truncate_existing"
    CREATE = "create"
    CREATE_NEW = "create_new"
    SYNC = "sync"
    DSYNC = "dsync"
