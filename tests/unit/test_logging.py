"""Tests for logging helpers."""

from unittest.mock import MagicMock

import structlog

from llm_bootcamp.core.logging import LogContext, log_llm_call


class TestLogContext:
    """Tests for LogContext."""

    def test_binds_and_resets(self) -> None:
        """Test values are bound inside the block and removed after it."""
        with LogContext(thread_id="t-1", graph=None):
            assert structlog.contextvars.get_contextvars() == {"thread_id": "t-1"}

        assert "thread_id" not in structlog.contextvars.get_contextvars()

    def test_nested_restores_outer(self) -> None:
        """Test an inner block restores the outer value on exit."""
        with LogContext(thread_id="outer"):
            with LogContext(thread_id="inner"):
                assert structlog.contextvars.get_contextvars()["thread_id"] == "inner"
            assert structlog.contextvars.get_contextvars()["thread_id"] == "outer"


class TestLogLLMCall:
    """Tests for log_llm_call."""

    def test_total_and_rounding(self) -> None:
        """Test the total is derived and latency rounded."""
        logger = MagicMock()

        log_llm_call(logger, "openai", "gpt-4o", input_tokens=12, output_tokens=3, latency_ms=41.26, tool_calls=1)

        logger.info.assert_called_once_with(
            "llm_call",
            provider="openai",
            model="gpt-4o",
            input_tokens=12,
            output_tokens=3,
            total_tokens=15,
            latency_ms=41.3,
            tool_calls=1,
        )

    def test_unknown_usage(self) -> None:
        """Test missing usage stays unknown instead of zero."""
        logger = MagicMock()

        log_llm_call(logger, "anthropic", "claude-sonnet-4")

        assert logger.info.call_args.kwargs["total_tokens"] is None
