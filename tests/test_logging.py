"""Tests for logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from loguru import logger

from github_connector.logging import (
    bind_owner,
    bind_repo,
    get_logger,
    reset_logging,
    setup_logging,
)

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def _reset_logging_state() -> Generator[None, None, None]:
    """Reset loguru state before and after each test."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def captured() -> Generator[list[str], None, None]:
    """Messages rendered as '{extra} | {message}' after setup_logging(DEBUG)."""
    messages: list[str] = []
    setup_logging(level="DEBUG")
    handler_id = logger.add(
        lambda msg: messages.append(str(msg)),
        format="{extra} | {message}",
    )
    yield messages
    logger.remove(handler_id)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test default INFO level setup."""
        setup_logging(level="INFO")

        logger.bind(name="test").debug("hidden debug")
        logger.bind(name="test").info("shown info")

        err = capsys.readouterr().err
        assert "shown info" in err
        assert "hidden debug" not in err

    def test_setup_logging_verbose_overrides_level(self) -> None:
        """Test that verbose flag sets DEBUG level."""
        messages: list[str] = []
        setup_logging(level="WARNING", verbose=True)

        handler_id = logger.add(lambda msg: messages.append(str(msg)))
        try:
            logger.bind(name="test").debug("debug message")
            assert any("debug message" in msg for msg in messages)
        finally:
            logger.remove(handler_id)

    def test_setup_logging_verbose_takes_precedence(self) -> None:
        """Test verbose takes precedence over quiet when both set."""
        messages: list[str] = []
        setup_logging(level="INFO", verbose=True, quiet=True)

        handler_id = logger.add(lambda msg: messages.append(str(msg)))
        try:
            logger.bind(name="test").debug("debug message")
            assert any("debug message" in msg for msg in messages)
        finally:
            logger.remove(handler_id)

    def test_setup_logging_with_file(self, tmp_path: Path) -> None:
        """Test file logging setup."""
        log_file = tmp_path / "connector.log"
        setup_logging(level="INFO", log_file=log_file)

        logger.bind(name="test").info("Test file message")
        # File sinks are line-buffered, so the record is already on disk
        assert log_file.exists()
        assert "Test file message" in log_file.read_text()

    def test_setup_logging_quiet(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that quiet raises the console level to WARNING."""
        setup_logging(level="INFO", quiet=True)

        logger.bind(name="test").info("quiet info")
        logger.bind(name="test").warning("loud warning")

        err = capsys.readouterr().err
        assert "quiet info" not in err
        assert "loud warning" in err

    def test_unbound_logger_renders(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Records without a bound name still format (default extra)."""
        setup_logging(level="INFO")
        logger.info("no name bound")
        assert "no name bound" in capsys.readouterr().err


class TestInterceptHandler:
    """Tests for stdlib logging interception."""

    def test_intercept_stdlib_logging(self, captured: list[str]) -> None:
        """Test that stdlib logging is routed to loguru."""
        stdlib_logger = logging.getLogger("test_stdlib_intercept")
        stdlib_logger.warning("Hello from stdlib")

        assert any("Hello from stdlib" in msg for msg in captured)
        assert any("test_stdlib_intercept" in msg for msg in captured)

    def test_http_logging_quiet_at_info(self) -> None:
        """httpx/githubkit stay at WARNING unless debugging."""
        setup_logging(level="INFO")

        assert logging.getLogger("httpx").level >= logging.WARNING
        assert logging.getLogger("githubkit").level >= logging.WARNING

    def test_http_logging_verbose_at_debug(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.DEBUG


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_logger(self) -> None:
        """Test that get_logger returns a logger instance."""
        test_logger = get_logger("my_module")
        assert hasattr(test_logger, "info")
        assert hasattr(test_logger, "debug")
        assert hasattr(test_logger, "error")

    def test_get_logger_binds_name(self, captured: list[str]) -> None:
        """Test that get_logger binds the module name."""
        get_logger("my_test_module").info("Test message")
        assert any("my_test_module" in msg for msg in captured)


class TestContextBinding:
    """Tests for context binding helpers."""

    def test_bind_owner(self, captured: list[str]) -> None:
        """Test bind_owner adds owner context."""
        bind_owner("octocat").info("Listing repositories")
        assert any("'owner': 'octocat'" in msg for msg in captured)

    def test_bind_repo(self, captured: list[str]) -> None:
        """Test bind_repo adds repo context."""
        bind_repo("octocat", "hello-world").info("Test repo message")
        assert any("octocat/hello-world" in msg for msg in captured)


class TestLogLevels:
    """Tests for log level handling."""

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR"])
    def test_log_level_accepted(self, level: str, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that various log levels are accepted."""
        setup_logging(level=level)  # type: ignore[arg-type]
        logger.bind(name="test").error("error always shown")
        assert "error always shown" in capsys.readouterr().err


class TestResetLogging:
    """Tests for reset_logging function."""

    def test_reset_logging_removes_sinks(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that reset_logging drops the console sink."""
        setup_logging(level="INFO")
        reset_logging()

        logger.bind(name="test").error("after reset")
        assert "after reset" not in capsys.readouterr().err
