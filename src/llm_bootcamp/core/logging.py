"""Structured logging configuration using structlog.

Console output is colored for tutorials run in a terminal; JSON output is
meant for the web server when it runs behind a log collector.
"""

import logging
import sys
from typing import Any, cast

import structlog

from llm_bootcamp.core.config import get_settings


def setup_logging() -> None:
    """Configure structured logging based on settings.

    Call this once at application startup to configure logging.
    """
    settings = get_settings()
    level = getattr(logging, settings.log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=cast(list[structlog.typing.Processor], processors),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a configured logger instance.

    Args:
        name: Optional logger name for identification.

    Returns:
        A bound logger instance.
    """
    return structlog.get_logger(name)


class LogContext:
    """Context manager for adding temporary log context.

    Example:
        with LogContext(graph="travel_swarm", thread_id="t-1"):
            logger.info("graph_step", step=3)
    """

    def __init__(self, **kwargs: Any) -> None:
        self.context = {key: value for key, value in kwargs.items() if value is not None}
        self._tokens: Any = None

    def __enter__(self) -> "LogContext":
        self._tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        if self._tokens is not None:
            structlog.contextvars.reset_contextvars(**self._tokens)


def log_llm_call(
    logger: Any,
    provider: str,
    model: str,
    input_tokens: int | None = None,
    output_tokens: int | None = None,
    latency_ms: float | None = None,
    **kwargs: Any,
) -> None:
    """Log a hosted model call with token usage and latency.

    Args:
        logger: The logger instance to use.
        provider: The provider name (e.g., "openai", "anthropic").
        model: The model name used.
        input_tokens: Number of input tokens (if available).
        output_tokens: Number of output tokens (if available).
        latency_ms: Request latency in milliseconds.
        **kwargs: Additional context to log.
    """
    total_tokens = None
    if input_tokens is not None or output_tokens is not None:
        total_tokens = (input_tokens or 0) + (output_tokens or 0)

    logger.info(
        "llm_call",
        provider=provider,
        model=model,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        total_tokens=total_tokens,
        latency_ms=round(latency_ms, 1) if latency_ms is not None else None,
        **kwargs,
    )
