"""Chat model and embeddings factories configured from settings.

The tutorials never construct ``ChatOpenAI`` or ``ChatAnthropic`` by hand:
``init_chat_model`` reads the provider, model, sampling defaults and API keys
from ``Settings`` and attaches the call logger, so every model call in the
bootcamp is logged with its token usage.

``map_provider_error`` turns the SDK exceptions the LangChain integrations
let through into the bootcamp error hierarchy.
"""

from typing import Any

import anthropic
import openai
from langchain_anthropic import ChatAnthropic
from langchain_core.callbacks import BaseCallbackHandler
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI, OpenAIEmbeddings

from llm_bootcamp.callbacks import LLMCallLogger
from llm_bootcamp.core.config import get_settings
from llm_bootcamp.core.errors import (
    AuthenticationError,
    BootcampError,
    ConfigurationError,
    ContentFilterError,
    ContextLengthError,
    ModelNotFoundError,
    ProviderError,
    RateLimitError,
    ServiceUnavailableError,
    TimeoutError,
)
from llm_bootcamp.core.logging import get_logger

logger = get_logger(__name__)

PROVIDERS = ("openai", "anthropic")


def parse_model_string(model: str | None) -> tuple[str, str]:
    """Split ``"provider:model"``; a bare name uses the configured provider."""
    settings = get_settings()
    if model and ":" in model:
        provider, model_name = model.split(":", 1)
        return provider, model_name
    return settings.default_provider, model or settings.default_model


def init_chat_model(
    model: str | None = None,
    temperature: float | None = None,
    max_tokens: int | None = None,
    callbacks: list[BaseCallbackHandler] | None = None,
    **kwargs: Any,
) -> BaseChatModel:
    """Build a LangChain chat model from a ``"provider:model"`` string.

    Args:
        model: ``"openai:gpt-4o-mini"``, ``"anthropic:claude-3-5-haiku-20241022"``
            or a bare model name. Defaults to the configured model.
        temperature: Sampling temperature. Defaults to the configured value.
        max_tokens: Maximum tokens to generate. Defaults to the configured value.
        callbacks: Extra callback handlers; an ``LLMCallLogger`` is always added.
        **kwargs: Passed through to the integration class.

    Returns:
        A ``ChatOpenAI`` or ``ChatAnthropic`` instance.

    Raises:
        ConfigurationError: For an unknown provider or a missing API key.

    Example:
        model = init_chat_model("anthropic:claude-3-5-haiku-20241022", temperature=0)
    """
    settings = get_settings()
    provider, model_name = parse_model_string(model)
    if provider not in PROVIDERS:
        raise ConfigurationError(f"Unknown provider: {provider}. Available: {list(PROVIDERS)}")

    api_key = kwargs.pop("api_key", None) or (settings.openai_key if provider == "openai" else settings.anthropic_key)
    if not api_key:
        env_var = "OPENAI_API_KEY" if provider == "openai" else "ANTHROPIC_API_KEY"
        raise ConfigurationError(
            f"{provider} API key not found. Set {env_var} environment variable.",
            {"provider": provider},
        )

    parameters: dict[str, Any] = {
        "model": model_name,
        "api_key": api_key,
        "temperature": temperature if temperature is not None else settings.default_temperature,
        "max_tokens": max_tokens or settings.default_max_tokens,
        "max_retries": settings.max_retries,
        "callbacks": [LLMCallLogger(), *(callbacks or [])],
        **kwargs,
    }
    if provider == "openai":
        chat_model: BaseChatModel = ChatOpenAI(stream_usage=True, **parameters)
    else:
        chat_model = ChatAnthropic(**parameters)

    logger.debug("chat_model_initialized", provider=provider, model=model_name)
    return chat_model


def get_embeddings(model: str | None = None, api_key: str | None = None) -> OpenAIEmbeddings:
    """OpenAI embeddings using the configured embedding model.

    Raises:
        ConfigurationError: If no OpenAI API key is available.
    """
    settings = get_settings()
    key = api_key or settings.openai_key
    if not key:
        raise ConfigurationError(
            "OpenAI API key not found. Set OPENAI_API_KEY environment variable.",
            {"provider": "openai"},
        )
    return OpenAIEmbeddings(model=model or settings.embedding_model, api_key=key, max_retries=settings.max_retries)


def _map_openai_error(error: openai.OpenAIError) -> BootcampError:
    provider = "openai"
    if isinstance(error, openai.RateLimitError):
        retry_after = error.response.headers.get("retry-after")
        return RateLimitError(
            str(error),
            provider=provider,
            retry_after=float(retry_after) if retry_after and retry_after.isdigit() else None,
        )
    if isinstance(error, openai.APITimeoutError):
        return TimeoutError(f"OpenAI request timed out: {error}", {"provider": provider})
    if isinstance(error, openai.APIStatusError):
        message = str(error)
        if error.status_code == 401:
            return AuthenticationError(message, provider=provider)
        if error.status_code == 404:
            return ModelNotFoundError(model="unknown", provider=provider)
        if error.status_code == 400 and "context_length" in message.lower():
            return ContextLengthError(message, provider=provider)
        if error.status_code == 400 and "content_filter" in message.lower():
            return ContentFilterError(message, provider=provider)
        if error.status_code >= 500:
            return ServiceUnavailableError(message, {"provider": provider})
        return ProviderError(message, provider=provider)
    if isinstance(error, openai.APIConnectionError):
        return ServiceUnavailableError(f"Connection error: {error}", {"provider": provider})
    return ProviderError(str(error), provider=provider)


def _map_anthropic_error(error: anthropic.AnthropicError) -> BootcampError:
    provider = "anthropic"
    if isinstance(error, anthropic.RateLimitError):
        return RateLimitError(str(error), provider=provider)
    if isinstance(error, anthropic.APITimeoutError):
        return TimeoutError(f"Anthropic request timed out: {error}", {"provider": provider})
    if isinstance(error, anthropic.APIStatusError):
        message = str(error)
        lowered = message.lower()
        if error.status_code == 401:
            return AuthenticationError(message, provider=provider)
        if error.status_code == 404:
            return ModelNotFoundError(model="unknown", provider=provider)
        if error.status_code in (500, 529):
            return ServiceUnavailableError(message, {"provider": provider})
        if "prompt is too long" in lowered:
            return ContextLengthError(message, provider=provider)
        return ProviderError(message, provider=provider)
    if isinstance(error, anthropic.APIConnectionError):
        return ServiceUnavailableError(f"Connection error: {error}", {"provider": provider})
    return ProviderError(str(error), provider=provider)


def map_provider_error(error: Exception) -> BootcampError:
    """Convert an OpenAI or Anthropic SDK exception into a bootcamp error.

    Bootcamp errors are returned unchanged; anything else becomes a generic
    ``BootcampError`` carrying the original type name.
    """
    if isinstance(error, BootcampError):
        return error
    if isinstance(error, openai.OpenAIError):
        return _map_openai_error(error)
    if isinstance(error, anthropic.AnthropicError):
        return _map_anthropic_error(error)
    return BootcampError(str(error), {"error_type": type(error).__name__})
