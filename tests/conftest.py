"""Pytest configuration and fixtures."""

import json
import re
from collections.abc import Callable, Iterator, Sequence
from typing import Any

import pytest
from langchain_core.callbacks import CallbackManagerForLLMRun
from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, AIMessageChunk, BaseMessage
from langchain_core.outputs import ChatGeneration, ChatGenerationChunk, ChatResult
from langchain_core.utils.function_calling import convert_to_openai_tool
from pydantic import Field

USAGE = {"input_tokens": 10, "output_tokens": 5, "total_tokens": 15}


@pytest.fixture(autouse=True)
def mock_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Fast retries and a clean settings cache for every test."""
    from llm_bootcamp.core.config import get_settings

    monkeypatch.setenv("LLM_BOOTCAMP_MAX_RETRIES", "0")
    monkeypatch.setenv("LLM_BOOTCAMP_RETRY_MIN_WAIT", "0.1")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def tool_call_message(name: str, args: dict[str, Any] | None = None, call_id: str = "call_1") -> AIMessage:
    """A scripted model reply asking for one tool call."""
    return AIMessage(
        content="",
        tool_calls=[{"name": name, "args": args or {}, "id": call_id, "type": "tool_call"}],
        usage_metadata=USAGE,
    )


class ScriptedChatModel(BaseChatModel):
    """Chat model replaying scripted replies and recording every request.

    Plain strings become text replies; ``AIMessage`` items are returned as
    given. Streaming splits the reply into word chunks and ends with a chunk
    carrying the tool calls and usage.
    """

    responses: list[Any] = Field(default_factory=list)
    error: Any = None
    calls: list[dict[str, Any]] = Field(default_factory=list)
    model: str = "scripted-model"

    @property
    def _llm_type(self) -> str:
        return "scripted"

    def bind_tools(self, tools: Sequence[Any], **kwargs: Any) -> Any:
        return self.bind(tools=[convert_to_openai_tool(t) for t in tools], **kwargs)

    def _next(self, messages: list[BaseMessage], **kwargs: Any) -> AIMessage:
        tools = [definition["function"]["name"] for definition in kwargs.get("tools") or []]
        self.calls.append({"messages": list(messages), "tools": tools})
        if self.error is not None:
            raise self.error
        if not self.responses:
            raise AssertionError("ScriptedChatModel ran out of scripted responses")
        item = self.responses.pop(0)
        if isinstance(item, str):
            return AIMessage(content=item, usage_metadata=USAGE)
        return item

    def _generate(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None = None,
        run_manager: CallbackManagerForLLMRun | None = None,
        **kwargs: Any,
    ) -> ChatResult:
        return ChatResult(generations=[ChatGeneration(message=self._next(messages, **kwargs))])

    def _stream(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None = None,
        run_manager: CallbackManagerForLLMRun | None = None,
        **kwargs: Any,
    ) -> Iterator[ChatGenerationChunk]:
        reply = self._next(messages, **kwargs)
        for piece in re.findall(r"\S+\s*", reply.text):
            yield ChatGenerationChunk(message=AIMessageChunk(content=piece))
        yield ChatGenerationChunk(
            message=AIMessageChunk(
                content="",
                tool_call_chunks=[
                    {
                        "name": call["name"],
                        "args": json.dumps(call["args"]),
                        "id": call["id"],
                        "index": index,
                        "type": "tool_call_chunk",
                    }
                    for index, call in enumerate(reply.tool_calls)
                ],
                usage_metadata=reply.usage_metadata,
                chunk_position="last",
            )
        )


class KeywordEmbeddings(Embeddings):
    """Deterministic embeddings: one dimension per keyword."""

    def __init__(self, keywords: list[str]) -> None:
        self.keywords = keywords

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [[float(text.lower().count(word)) for word in self.keywords] for text in texts]

    def embed_query(self, text: str) -> list[float]:
        return self.embed_documents([text])[0]


@pytest.fixture
def make_model() -> Callable[..., ScriptedChatModel]:
    """Factory for scripted chat models."""

    def factory(*responses: str | AIMessage, error: Exception | None = None) -> ScriptedChatModel:
        return ScriptedChatModel(responses=list(responses), error=error)

    return factory


@pytest.fixture
def keyword_embeddings() -> KeywordEmbeddings:
    """Embeddings over a small travel vocabulary."""
    return KeywordEmbeddings(["flight", "hotel", "paris", "tokyo", "beach"])


@pytest.fixture
def tool_reply() -> Callable[..., AIMessage]:
    """Builder for scripted tool-call replies."""
    return tool_call_message
