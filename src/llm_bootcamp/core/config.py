"""Configuration management using Pydantic settings.

Every tutorial and exercise reads its defaults from here, so switching the
whole bootcamp to another provider or model is a single environment variable.
"""

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):  # type: ignore[misc]
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Prefix: LLM_BOOTCAMP_ (e.g., LLM_BOOTCAMP_LOG_LEVEL=DEBUG)
    """

    model_config = SettingsConfigDict(
        env_prefix="LLM_BOOTCAMP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API keys keep the vendors' own variable names
    openai_api_key: SecretStr | None = Field(default=None, alias="OPENAI_API_KEY")
    anthropic_api_key: SecretStr | None = Field(default=None, alias="ANTHROPIC_API_KEY")
    tavily_api_key: SecretStr | None = Field(default=None, alias="TAVILY_API_KEY")

    # Chat model defaults
    default_provider: Literal["openai", "anthropic"] = "openai"
    default_model: str = "gpt-4o-mini"
    default_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    default_max_tokens: int = Field(default=4096, ge=1, le=128000)

    # Embeddings
    embedding_model: str = "text-embedding-3-small"

    # Retry settings
    max_retries: int = Field(default=3, ge=0, le=10)
    retry_min_wait: float = Field(default=1.0, ge=0.1)
    retry_max_wait: float = Field(default=60.0, ge=1.0)

    # Logging settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    # Graph execution
    graph_recursion_limit: int = Field(default=25, ge=1, le=1000)

    # Web search
    search_max_results: int = Field(default=5, ge=1, le=20)
    search_timeout: float = Field(default=20.0, gt=0.0)

    # Shown to end users whenever a call into a model fails
    stream_error_message: str = "Sorry, something went wrong. Please try again."

    @property
    def openai_key(self) -> str | None:
        """Get OpenAI API key as string."""
        return self.openai_api_key.get_secret_value() if self.openai_api_key else None

    @property
    def anthropic_key(self) -> str | None:
        """Get Anthropic API key as string."""
        return self.anthropic_api_key.get_secret_value() if self.anthropic_api_key else None

    @property
    def tavily_key(self) -> str | None:
        """Get Tavily API key as string."""
        return self.tavily_api_key.get_secret_value() if self.tavily_api_key else None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: The application settings singleton.
    """
    return Settings()


def graph_config(thread_id: str | None = None, **configurable: Any) -> dict[str, Any]:
    """Build a LangGraph run config with the configured recursion limit.

    Args:
        thread_id: Conversation thread; required by graphs with a checkpointer.
        **configurable: Extra ``configurable`` entries, e.g. ``checkpoint_id``.
    """
    config: dict[str, Any] = {
        "recursion_limit": get_settings().graph_recursion_limit,
        "configurable": dict(configurable),
    }
    if thread_id is not None:
        config["configurable"]["thread_id"] = thread_id
    return config
