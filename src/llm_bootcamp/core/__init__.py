"""Core utilities: configuration, errors, logging and retry."""

from llm_bootcamp.core.config import Settings, get_settings, graph_config
from llm_bootcamp.core.errors import (
    AuthenticationError,
    BootcampError,
    ConfigurationError,
    ContentFilterError,
    ContextLengthError,
    ModelNotFoundError,
    ProviderError,
    RateLimitError,
    RetryableError,
    ServiceUnavailableError,
    TimeoutError,
    ValidationError,
)
from llm_bootcamp.core.logging import LogContext, get_logger, log_llm_call, setup_logging
from llm_bootcamp.core.retry import create_retry_decorator, retry_with_backoff

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "graph_config",
    # Errors
    "AuthenticationError",
    "BootcampError",
    "ConfigurationError",
    "ContentFilterError",
    "ContextLengthError",
    "ModelNotFoundError",
    "ProviderError",
    "RateLimitError",
    "RetryableError",
    "ServiceUnavailableError",
    "TimeoutError",
    "ValidationError",
    # Logging
    "LogContext",
    "get_logger",
    "log_llm_call",
    "setup_logging",
    # Retry
    "create_retry_decorator",
    "retry_with_backoff",
]
