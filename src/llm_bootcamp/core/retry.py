"""Retry decorators with exponential backoff using tenacity."""

from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

from tenacity import (  # type: ignore[attr-defined]
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from llm_bootcamp.core.config import get_settings
from llm_bootcamp.core.errors import RateLimitError, RetryableError
from llm_bootcamp.core.logging import get_logger

P = ParamSpec("P")
T = TypeVar("T")

logger = get_logger(__name__)


# TimeoutError and ServiceUnavailableError are covered by RetryableError
RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    RetryableError,
    RateLimitError,
    ConnectionError,
)


def create_retry_decorator(
    max_retries: int | None = None,
    min_wait: float | None = None,
    max_wait: float | None = None,
    retryable_exceptions: tuple[type[Exception], ...] = RETRYABLE_EXCEPTIONS,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Create a retry decorator with custom settings.

    Args:
        max_retries: Maximum number of retry attempts. Defaults to config value.
        min_wait: Minimum wait time between retries in seconds.
        max_wait: Maximum wait time between retries in seconds.
        retryable_exceptions: Tuple of exception types to retry on.

    Returns:
        A decorator that adds retry logic to functions.
    """
    settings = get_settings()

    max_retries = max_retries if max_retries is not None else settings.max_retries
    min_wait = min_wait if min_wait is not None else settings.retry_min_wait
    max_wait = max_wait if max_wait is not None else settings.retry_max_wait

    def log_retry(retry_state: Any) -> None:
        exception = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "retry_attempt",
            attempt=retry_state.attempt_number,
            max_attempts=max_retries + 1,
            exception_type=type(exception).__name__ if exception else None,
            exception_message=str(exception) if exception else None,
        )

    return retry(
        stop=stop_after_attempt(max_retries + 1),  # type: ignore[no-untyped-call]
        wait=wait_exponential_jitter(initial=min_wait, max=max_wait, jitter=min_wait),
        retry=retry_if_exception_type(retryable_exceptions),  # type: ignore[no-untyped-call]
        before_sleep=log_retry,
        reraise=True,
    )


def retry_with_backoff(
    max_retries: int | None = None,
    min_wait: float | None = None,
    max_wait: float | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator that adds retry logic with exponential backoff.

    Example:
        @retry_with_backoff(max_retries=2)
        def search(query: str) -> list[SearchResult]:
            ...
    """
    return create_retry_decorator(
        max_retries=max_retries,
        min_wait=min_wait,
        max_wait=max_wait,
    )
