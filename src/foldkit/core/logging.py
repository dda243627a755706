# src/foldkit/core/logging.py
"""Structured logging configuration for foldkit.

Uses structlog for structured logging. Library modules call
structlog.get_logger(__name__) and never configure output themselves;
applications call configure_logging() once.

Architecture:
    This module configures BOTH structlog and stdlib logging to emit
    consistent output (JSON or console). It uses ProcessorFormatter
    to route stdlib log records through structlog's processor chain,
    so modules using logging.getLogger(__name__) produce the same
    output format as modules using structlog.get_logger().
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

from foldkit.core.config import LoggingSettings


def _remove_internal_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Remove internal structlog fields from output.

    ProcessorFormatter ALWAYS adds _record and _from_structlog when processing
    log records. These are internal bookkeeping and should not appear in output.
    """
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def _add_component(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Tag events from foldkit modules with the subsystem that emitted them.

    "foldkit.sinks.file_sink" becomes component="sinks". Events from other
    loggers pass through untouched.
    """
    record = event_dict.get("_record")
    name = record.name if record is not None else getattr(logger, "name", None)
    if isinstance(name, str) and name.startswith("foldkit."):
        event_dict.setdefault("component", name.split(".")[1])
    return event_dict


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    library_level: str | None = None,
) -> None:
    """Configure structlog and stdlib logging for foldkit.

    Args:
        json_output: If True, output JSON. If False, human-readable.
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        library_level: Separate level for foldkit's own loggers, e.g. WARNING
            to hide per-sink debug events while the application logs at DEBUG.
            None inherits `level`.
    """
    log_level = getattr(logging, level.upper())

    # Shared processors applied to ALL log records (structlog and stdlib)
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _add_component,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        final_processors: list[Any] = [
            _remove_internal_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors = [
            _remove_internal_fields,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Caching off so tests can reconfigure
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processors=final_processors,
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers = []
    root.addHandler(handler)
    root.setLevel(log_level)

    library = logging.getLogger("foldkit")
    library.setLevel(getattr(logging, library_level.upper()) if library_level is not None else logging.NOTSET)


def configure_logging_from_settings(settings: LoggingSettings) -> None:
    """Apply a LoggingSettings block."""
    configure_logging(json_output=settings.json_output, level=settings.level, library_level=settings.library_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a bound logger for a module.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Bound structlog logger.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
