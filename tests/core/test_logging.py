"""Tests for structured logging."""

from __future__ import annotations

from robo.core.logging import get_logger


class TestStructuredLogging:
    def test_get_logger_returns_bound_logger(self) -> None:
        logger = get_logger("test.module")
        assert logger is not None

    def test_get_logger_same_name_returns_logger(self) -> None:
        logger1 = get_logger("test.same")
        logger2 = get_logger("test.same")
        assert logger1 is not None
        assert logger2 is not None

    def test_log_calls_do_not_raise(self) -> None:
        logger = get_logger("test.events")
        logger.debug("debug_event", planet=1)
        logger.info("info_event", steps=10, accuracy=0.5)
        logger.warning("warning_event", reason="test")
