"""Callback handler logging every chat model call with usage and latency."""

import time
from typing import Any
from uuid import UUID

from langchain_core.callbacks import BaseCallbackHandler
from langchain_core.messages import BaseMessage
from langchain_core.outputs import ChatGeneration, LLMResult

from llm_bootcamp.core.logging import get_logger, log_llm_call


def usage_from_result(response: LLMResult) -> dict[str, int]:
    """Sum token usage over the generations of one model call.

    Falls back to the provider's ``token_usage`` block when the messages
    carry no ``usage_metadata``.
    """
    input_tokens = output_tokens = 0
    found = False
    for generations in response.generations:
        for generation in generations:
            usage = generation.message.usage_metadata if isinstance(generation, ChatGeneration) else None
            if usage:
                found = True
                input_tokens += usage.get("input_tokens", 0)
                output_tokens += usage.get("output_tokens", 0)
    if not found:
        token_usage = (response.llm_output or {}).get("token_usage") or {}
        if not token_usage:
            return {}
        input_tokens = token_usage.get("prompt_tokens", 0)
        output_tokens = token_usage.get("completion_tokens", 0)
    return {"input_tokens": input_tokens, "output_tokens": output_tokens}


def _tool_call_count(response: LLMResult) -> int:
    return sum(
        len(getattr(generation.message, "tool_calls", None) or [])
        for generations in response.generations
        for generation in generations
        if isinstance(generation, ChatGeneration)
    )


class LLMCallLogger(BaseCallbackHandler):
    """Log provider, model, token usage and latency when a model call ends.

    Works for ``invoke``, ``ainvoke``, ``stream`` and ``astream`` alike: the
    model aggregates streamed chunks before ``on_llm_end`` fires.
    """

    run_inline = True

    def __init__(self, logger: Any = None) -> None:
        self.logger = logger or get_logger(__name__)
        self._runs: dict[UUID, tuple[float, str, str]] = {}

    def on_chat_model_start(
        self,
        serialized: dict[str, Any],
        messages: list[list[BaseMessage]],
        *,
        run_id: UUID,
        metadata: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        metadata = metadata or {}
        self._runs[run_id] = (
            time.perf_counter(),
            metadata.get("ls_provider") or "unknown",
            metadata.get("ls_model_name") or "unknown",
        )

    def on_llm_end(self, response: LLMResult, *, run_id: UUID, **kwargs: Any) -> None:
        started, provider, model = self._runs.pop(run_id, (None, "unknown", "unknown"))
        usage = usage_from_result(response)
        log_llm_call(
            self.logger,
            provider=provider,
            model=model,
            input_tokens=usage.get("input_tokens"),
            output_tokens=usage.get("output_tokens"),
            latency_ms=(time.perf_counter() - started) * 1000 if started is not None else None,
            tool_calls=_tool_call_count(response),
        )

    def on_llm_error(self, error: BaseException, *, run_id: UUID, **kwargs: Any) -> None:
        self._runs.pop(run_id, None)
        self.logger.warning("llm_call_failed", error_type=type(error).__name__, error=str(error))
