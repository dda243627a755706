"""Shared contracts for collectors.

This package is a LEAF MODULE with no outbound dependencies to core, engine
or sinks. Settings classes live in foldkit.core.config and are NOT
re-exported here.

Import patterns:
    from foldkit.contracts import Characteristic, Collector, SinkIOError
    from foldkit.core.config import EngineSettings
"""

from foldkit.contracts.collector import Collector, CollectorProtocol, collecting_and_then
from foldkit.contracts.enums import Characteristic, OpenOption, SinkState
from foldkit.contracts.errors import (
    CollectorClosedError,
    CollectorError,
    CollectorMisuseError,
    SinkIOError,
)

__all__ = [
    "Characteristic",
    "Collector",
    "CollectorClosedError",
    "CollectorError",
    "CollectorMisuseError",
    "CollectorProtocol",
    "OpenOption",
    "SinkIOError",
    "SinkState",
    "collecting_and_then",
]
