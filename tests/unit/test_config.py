"""Tests for configuration module."""

import os
from unittest.mock import patch

import pytest

from llm_bootcamp.core.config import Settings, get_settings, graph_config


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()

            assert settings.default_provider == "openai"
            assert settings.default_model == "gpt-4o-mini"
            assert settings.default_temperature == 0.7
            assert settings.log_level == "INFO"
            assert settings.max_retries == 3
            assert settings.graph_recursion_limit == 25
            assert settings.search_max_results == 5

    def test_env_override(self) -> None:
        """Test environment variable overrides."""
        env = {
            "LLM_BOOTCAMP_DEFAULT_PROVIDER": "anthropic",
            "LLM_BOOTCAMP_LOG_LEVEL": "DEBUG",
            "LLM_BOOTCAMP_GRAPH_RECURSION_LIMIT": "50",
        }

        with patch.dict(os.environ, env, clear=True):
            settings = Settings()

            assert settings.default_provider == "anthropic"
            assert settings.log_level == "DEBUG"
            assert settings.graph_recursion_limit == 50

    def test_api_keys_from_env(self) -> None:
        """Test API keys use the vendors' own variable names."""
        env = {
            "OPENAI_API_KEY": "sk-test-key",
            "TAVILY_API_KEY": "tvly-test",
        }

        with patch.dict(os.environ, env, clear=True):
            settings = Settings()

            assert settings.openai_key == "sk-test-key"
            assert settings.tavily_key == "tvly-test"
            assert settings.anthropic_key is None

    def test_temperature_validation(self) -> None:
        """Test temperature bounds validation."""
        with patch.dict(os.environ, {"LLM_BOOTCAMP_DEFAULT_TEMPERATURE": "1.5"}, clear=True):
            assert Settings().default_temperature == 1.5

        with patch.dict(os.environ, {"LLM_BOOTCAMP_DEFAULT_TEMPERATURE": "3.0"}, clear=True):
            with pytest.raises(Exception):  # Pydantic ValidationError
                Settings()

    def test_recursion_limit_validation(self) -> None:
        """Test the graph recursion limit must be positive."""
        with patch.dict(os.environ, {"LLM_BOOTCAMP_GRAPH_RECURSION_LIMIT": "0"}, clear=True):
            with pytest.raises(Exception):
                Settings()


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_settings_instance(self) -> None:
        """Test that get_settings returns a Settings instance."""
        assert isinstance(get_settings(), Settings)

    def test_caching(self) -> None:
        """Test that settings are cached."""
        assert get_settings() is get_settings()


class TestGraphConfig:
    """Tests for graph_config function."""

    def test_thread_and_recursion_limit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the run config carries the thread and the configured limit."""
        monkeypatch.setenv("LLM_BOOTCAMP_GRAPH_RECURSION_LIMIT", "12")
        get_settings.cache_clear()

        assert graph_config("trip-1") == {"recursion_limit": 12, "configurable": {"thread_id": "trip-1"}}

    def test_extra_configurable(self) -> None:
        """Test extra entries such as a checkpoint id are passed through."""
        config = graph_config("trip-1", checkpoint_id="abc")

        assert config["configurable"] == {"checkpoint_id": "abc", "thread_id": "trip-1"}

    def test_without_thread(self) -> None:
        """Test graphs without memory get an empty configurable."""
        assert graph_config()["configurable"] == {}
