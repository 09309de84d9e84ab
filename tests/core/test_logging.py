"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import structlog

from stylecomplete.config.models import LoggingConfig, LogOutputConfig
from stylecomplete.core.logging import (
    clear_request_id,
    configure_logging,
    get_request_id,
    set_request_id,
)


class TestRequestIdCorrelation:
    """Request ID context variable tests."""

    def setup_method(self) -> None:
        """Clear request ID before each test."""
        clear_request_id()

    def test_given_request_id_when_set_then_can_retrieve(self) -> None:
        """Request ID can be set and retrieved."""
        # When
        result = set_request_id("test-123")

        # Then
        assert result == "test-123"
        assert get_request_id() == "test-123"

    def test_given_no_id_when_set_then_generates_short_hex(self) -> None:
        """Set generates a 12-character id when none is provided."""
        # When
        rid = set_request_id()

        # Then
        assert len(rid) == 12
        int(rid, 16)

    def test_given_set_id_when_clear_then_removes_id(self) -> None:
        """Clear removes the current request ID."""
        # Given
        set_request_id("to-clear")

        # When
        clear_request_id()

        # Then
        assert get_request_id() is None


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_request_id()

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        # Given
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When
        configure_logging(config=config, json_format=False, level="ERROR")
        structlog.get_logger().debug("debug msg")

        # Then
        assert "debug msg" in log_file.read_text()

    def test_given_multi_output_config_when_configure_then_logs_to_all(
        self, tmp_path: Path
    ) -> None:
        """Multiple outputs receive logs according to their levels."""
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="json", destination=str(debug_file)),
            ],
        )

        # When
        configure_logging(config=config)
        logger = structlog.get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        # Then
        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content
        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_given_request_id_when_log_then_included(self, tmp_path: Path) -> None:
        """Active request id appears in JSON records."""
        # Given
        log_file = tmp_path / "req.log"
        configure_logging(
            config=LoggingConfig(
                level="INFO",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        set_request_id("req-1")

        # When
        structlog.get_logger().info("completion_served", count=3)

        # Then
        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "completion_served"
        assert record["request_id"] == "req-1"
        assert record["count"] == 3
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_given_reconfigure_then_replaces_handlers(self, tmp_path: Path) -> None:
        """Reconfiguring does not stack handlers."""
        # Given
        config = LoggingConfig(
            outputs=[LogOutputConfig(format="json", destination=str(tmp_path / "a.log"))]
        )

        # When
        configure_logging(config=config)
        configure_logging(config=config)

        # Then
        assert len(logging.getLogger().handlers) == 1

    def test_watchfiles_debug_is_silenced(self) -> None:
        configure_logging(level="DEBUG")

        assert logging.getLogger("watchfiles.main").level == logging.WARNING
