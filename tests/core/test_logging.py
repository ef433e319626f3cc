# tests/core/test_logging.py
"""Tests for structured logging configuration."""

import json
import logging

import pytest


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger returns a bound logger."""
        from nodequiz.core.logging import get_logger

        logger = get_logger("test")
        assert hasattr(logger, "info")
        assert hasattr(logger, "debug")
        assert hasattr(logger, "bind")

    def test_logger_outputs_structured(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON mode writes one JSON object per line to stderr."""
        from nodequiz.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        get_logger("test").info("test message", key="value")

        captured = capsys.readouterr()
        data = json.loads(captured.err.strip().split("\n")[-1])
        assert data["event"] == "test message"
        assert data["key"] == "value"
        assert data["level"] == "info"
        assert "timestamp" in data

    def test_logs_never_reach_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Command output owns stdout."""
        from nodequiz.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        get_logger("test").warning("careful")

        assert capsys.readouterr().out == ""

    def test_logger_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Console mode is human-readable."""
        from nodequiz.core.logging import configure_logging, get_logger

        configure_logging(json_output=False)
        get_logger("test").info("test message", key="value")

        captured = capsys.readouterr()
        assert "test message" in captured.err
        assert not captured.err.strip().startswith("{")

    def test_level_filters_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Engine decisions at debug level are hidden at INFO."""
        from nodequiz.core.logging import configure_logging, get_logger

        configure_logging(json_output=True, level="INFO")
        get_logger("test").debug("edge_checked")

        assert "edge_checked" not in capsys.readouterr().err

    def test_debug_level_shows_engine_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        from nodequiz.contracts import WorkflowGraph
        from nodequiz.core.catalogue import SchemaCatalogue
        from nodequiz.core.logging import configure_logging
        from nodequiz.core.validation import validate_edge
        from tests.helpers.workflows import invocation, proposal

        configure_logging(json_output=True, level="DEBUG")
        wf = WorkflowGraph(nodes=[invocation("a", "integer"), invocation("b", "float")])
        validate_edge(wf, SchemaCatalogue(), proposal("a", "value", "b", "value"))

        lines = [json.loads(line) for line in capsys.readouterr().err.strip().split("\n")]
        event = next(line for line in lines if line["event"] == "edge_checked")
        assert event["edge_key"] == "a:value->b:value"
        assert event["valid"] is True

    def test_noisy_third_party_loggers_silenced(self) -> None:
        """Third-party loggers stay at WARNING even in DEBUG mode."""
        from nodequiz.core.logging import configure_logging

        configure_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("dynaconf").getEffectiveLevel() >= logging.WARNING

    def test_stdlib_loggers_emit_json_when_json_output_enabled(self, capsys: pytest.CaptureFixture[str]) -> None:
        """stdlib loggers go through the same processor chain."""
        from nodequiz.core.logging import configure_logging

        configure_logging(json_output=True)
        logging.getLogger("test.stdlib.module").info("message from stdlib logger")

        data = json.loads(capsys.readouterr().err.strip().split("\n")[-1])
        assert data["event"] == "message from stdlib logger"
        assert "level" in data

    def test_invocation_context_on_every_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Bound invocation context is merged into each event and replaced on rebind."""
        import structlog

        from nodequiz.core.logging import bind_invocation_context, configure_logging, get_logger

        configure_logging(json_output=True)
        bind_invocation_context(command="hint", quiz_id="q1")
        get_logger("test").info("first")
        bind_invocation_context(command="show")
        get_logger("test").info("second")
        structlog.contextvars.clear_contextvars()

        first, second = (json.loads(line) for line in capsys.readouterr().err.strip().split("\n")[-2:])
        assert (first["command"], first["quiz_id"]) == ("hint", "q1")
        assert second["command"] == "show"
        assert "quiz_id" not in second
