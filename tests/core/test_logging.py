# tests/core/test_logging.py
"""Tests for structured logging configuration."""

import json
import logging
from pathlib import Path

import pytest

from foldkit.core.config import LoggingSettings
from foldkit.core.logging import configure_logging, configure_logging_from_settings, get_logger
from foldkit.engine import collect
from foldkit.sinks import FileSinkCollector


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger returns a bound logger."""
        logger = get_logger("test")

        assert hasattr(logger, "info")
        assert hasattr(logger, "error")
        assert hasattr(logger, "bind")

    def test_logger_outputs_structured(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Logger outputs structured JSON."""
        configure_logging(json_output=True)
        logger = get_logger("test")

        logger.info("test message", key="value")

        captured = capsys.readouterr()
        log_line = captured.out.strip().split("\n")[-1]
        data = json.loads(log_line)
        assert data["event"] == "test message"
        assert data["key"] == "value"
        assert "_record" not in data
        assert "_from_structlog" not in data

    def test_logger_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Logger outputs human-readable in console mode."""
        configure_logging(json_output=False)
        logger = get_logger("test")

        logger.info("test message", key="value")

        captured = capsys.readouterr()
        assert "test message" in captured.out
        assert not captured.out.strip().startswith("{")

    def test_logger_binds_context(self) -> None:
        """Logger can bind context."""
        logger = get_logger("test")
        bound = logger.bind(run_id="abc123")

        assert bound is not logger

    def test_level_applied_to_root(self) -> None:
        configure_logging(level="debug")

        assert logging.getLogger().level == logging.DEBUG

    def test_configure_from_settings(self) -> None:
        configure_logging_from_settings(LoggingSettings(level="WARNING"))

        assert logging.getLogger().level == logging.WARNING

    def test_reconfigure_replaces_handlers(self) -> None:
        configure_logging()
        configure_logging()

        assert len(logging.getLogger().handlers) == 1

    def test_stdlib_loggers_emit_json_when_json_output_enabled(self, capsys: pytest.CaptureFixture[str]) -> None:
        """stdlib loggers go through the same processor chain as structlog loggers."""
        configure_logging(json_output=True)

        stdlib_logger = logging.getLogger("test.stdlib.module")
        stdlib_logger.info("message from stdlib logger")

        captured = capsys.readouterr()
        log_line = captured.out.strip().split("\n")[-1]
        data = json.loads(log_line)
        assert data["event"] == "message from stdlib logger"
        assert "level" in data
        assert "timestamp" in data

    def test_sink_events_are_structured(self, capsys: pytest.CaptureFixture[str], output_file: Path) -> None:
        """Library modules log through the configured pipeline."""
        configure_logging(json_output=True, level="DEBUG")

        collect(["row"], FileSinkCollector(output_file))

        captured = capsys.readouterr()
        events = [json.loads(line) for line in captured.out.strip().split("\n") if line.startswith("{")]
        finished = [e for e in events if e["event"] == "file_sink_finished"]
        assert len(finished) == 1
        assert finished[0]["path"] == str(output_file)
        assert finished[0]["level"] == "debug"

    def test_foldkit_events_tagged_with_component(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Events from foldkit modules carry the emitting subsystem."""
        configure_logging(json_output=True)

        get_logger("foldkit.engine.reduce").info("from engine")
        logging.getLogger("foldkit.sinks.file_sink").warning("from stdlib sink logger")
        get_logger("myapp.pipeline").info("from application")

        lines = capsys.readouterr().out.strip().split("\n")
        events = {data["event"]: data for data in map(json.loads, lines)}
        assert events["from engine"]["component"] == "engine"
        assert events["from stdlib sink logger"]["component"] == "sinks"
        assert "component" not in events["from application"]

    def test_library_level_hides_foldkit_debug_events(self, capsys: pytest.CaptureFixture[str], output_file: Path) -> None:
        """The application can log at DEBUG without foldkit's per-sink events."""
        configure_logging(json_output=True, level="DEBUG", library_level="warning")

        collect(["row"], FileSinkCollector(output_file))
        get_logger("myapp").debug("application debug")

        out = capsys.readouterr().out
        assert "file_sink_finished" not in out
        assert "application debug" in out

    def test_library_level_reset_on_reconfigure(self) -> None:
        configure_logging(library_level="ERROR")
        configure_logging()

        assert logging.getLogger("foldkit").level == logging.NOTSET

    def test_library_level_from_settings(self) -> None:
        configure_logging_from_settings(LoggingSettings(level="DEBUG", library_level="error"))  # type: ignore[arg-type]

        assert logging.getLogger("foldkit").level == logging.ERROR
