"""
Unit tests for the mazeforge logging infrastructure.
"""

import logging

import pytest

from mazeforge.utils.maze_logging import (
    LoggedOperation,
    MazeFormatter,
    MazeLogger,
    configure_development_logging,
    configure_logging,
    get_logger,
    log_degenerate_input,
    log_generation_configuration,
    log_generation_summary,
)


class ListHandler(logging.Handler):
    """Collects log records."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)

    @property
    def messages(self):
        return [r.getMessage() for r in self.records]


@pytest.fixture
def reset_logging():
    yield
    configure_logging()


@pytest.fixture
def captured(reset_logging):
    configure_logging(level="DEBUG", use_colors=False)
    logger = get_logger("mazeforge.tests.logging")
    handler = ListHandler()
    logger.addHandler(handler)
    yield logger, handler
    logger.removeHandler(handler)


def _record(msg="hello", level=logging.INFO):
    return logging.LogRecord("mazeforge.test", level, __file__, 42, msg, None, None)


class TestMazeLogger:
    """Test logger management."""

    def test_same_logger_returned(self):
        assert get_logger("mazeforge.tests.same") is get_logger("mazeforge.tests.same")

    def test_manager_shares_loggers(self):
        assert MazeLogger.get_logger("mazeforge.tests.shared") is get_logger("mazeforge.tests.shared")

    def test_default_name(self):
        assert get_logger().name == "mazeforge"

    def test_does_not_propagate(self):
        assert get_logger("mazeforge.tests.propagate").propagate is False

    def test_configure_updates_existing_loggers(self, reset_logging):
        logger = get_logger("mazeforge.tests.level")
        configure_logging(level="ERROR")

        assert logger.level == logging.ERROR
        assert all(h.level == logging.ERROR for h in logger.handlers)

    def test_single_console_handler(self, reset_logging):
        logger = get_logger("mazeforge.tests.handlers")
        configure_logging(level="INFO")
        configure_logging(level="DEBUG")

        assert len(logger.handlers) == 1

    def test_log_to_file(self, reset_logging, tmp_path):
        path = tmp_path / "logs" / "run.log"
        configure_logging(level="INFO", log_to_file=True, log_file_path=path, use_colors=True)
        logger = get_logger("mazeforge.tests.file")

        logger.warning("written to disk")
        for handler in logger.handlers:
            handler.flush()

        text = path.read_text()
        assert "written to disk" in text
        assert "\x1b[" not in text


class TestMazeFormatter:
    """Test record formatting."""

    def test_plain(self):
        line = MazeFormatter(use_colors=False).format(_record("plain message"))

        assert "INFO" in line
        assert "plain message" in line
        assert "\x1b[" not in line

    def test_location(self):
        line = MazeFormatter(include_location=True).format(_record())
        assert ":42]" in line

    def test_colors(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        line = MazeFormatter(use_colors=True).format(_record("colored", logging.WARNING))
        assert "\x1b[" in line
        assert "colored" in line


class TestLoggingHelpers:
    """Test the structured logging helpers."""

    def test_degenerate_input_is_warning(self, captured):
        logger, handler = captured
        log_degenerate_input(logger, "decoration", "no decorations are placed")

        record = handler.records[-1]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "No assets available for 'decoration': no decorations are placed"

    def test_generation_configuration(self, captured):
        logger, handler = captured
        log_generation_configuration(logger, {"width": 4, "collectibles": ["a", "b"], "seed": None}, "crypt")

        assert "  width: 4" in handler.messages
        assert "  collectibles: 2 entries" in handler.messages
        assert "  selected style: crypt" in handler.messages
        assert not any("seed" in m for m in handler.messages)

    def test_generation_summary(self, captured):
        logger, handler = captured
        log_generation_summary(logger, {"collectibles": 3}, execution_time=0.5)

        assert "  collectibles: 3" in handler.messages
        assert "  time: 0.500s" in handler.messages


class TestLoggedOperation:
    """Test the timed-operation context manager."""

    def test_success(self, captured):
        logger, handler = captured
        with LoggedOperation(logger, "carving") as op:
            pass

        assert op.duration is not None
        assert handler.messages[0] == "Starting carving"
        assert handler.messages[-1].startswith("Completed carving")

    def test_failure_propagates(self, captured):
        logger, handler = captured
        with pytest.raises(ValueError), LoggedOperation(logger, "placement"):
            raise ValueError("boom")

        assert handler.records[-1].levelno == logging.ERROR
        assert "Failed placement" in handler.messages[-1]
        assert "boom" in handler.messages[-1]


class TestDevelopmentLogging:
    """Test the development preset."""

    def test_debug_level(self, reset_logging):
        configure_development_logging(include_location=False)
        assert get_logger("mazeforge.development").level == logging.DEBUG
