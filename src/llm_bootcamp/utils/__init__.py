"""Token utilities."""

from llm_bootcamp.utils.tokens import (
    count_message_tokens,
    count_messages_tokens,
    count_tokens,
    get_context_window,
    get_encoding_for_model,
    trim_history,
    truncate_to_token_limit,
)

__all__ = [
    "count_message_tokens",
    "count_messages_tokens",
    "count_tokens",
    "get_context_window",
    "get_encoding_for_model",
    "trim_history",
    "truncate_to_token_limit",
]
