"""Token counting and chat-history trimming using tiktoken.

Long-running chat threads grow without bound; ``trim_history`` is what the
memory tutorials use to keep a thread inside the model's context window. It
counts with tiktoken and lets LangChain's ``trim_messages`` pick what to keep.
"""

import json
from collections.abc import Sequence
from functools import lru_cache

import tiktoken
from langchain_core.messages import AIMessage, BaseMessage, trim_messages


# Claude models are approximated with cl100k_base
MODEL_ENCODINGS: dict[str, str] = {
    "gpt-4o": "o200k_base",
    "gpt-4o-mini": "o200k_base",
    "gpt-4.1": "o200k_base",
    "gpt-4.1-mini": "o200k_base",
    "gpt-4-turbo": "cl100k_base",
    "gpt-4": "cl100k_base",
    "gpt-3.5-turbo": "cl100k_base",
    "text-embedding-3-small": "cl100k_base",
    "text-embedding-3-large": "cl100k_base",
    "claude-sonnet-4-20250514": "cl100k_base",
    "claude-opus-4-20250514": "cl100k_base",
    "claude-3-7-sonnet-20250219": "cl100k_base",
    "claude-3-5-haiku-20241022": "cl100k_base",
}

MODEL_CONTEXT_WINDOWS: dict[str, int] = {
    "gpt-4o": 128000,
    "gpt-4o-mini": 128000,
    "gpt-4.1": 1047576,
    "gpt-4.1-mini": 1047576,
    "gpt-4-turbo": 128000,
    "gpt-4": 8192,
    "gpt-3.5-turbo": 16385,
    "claude-sonnet-4-20250514": 200000,
    "claude-opus-4-20250514": 200000,
    "claude-3-7-sonnet-20250219": 200000,
    "claude-3-5-haiku-20241022": 200000,
}

DEFAULT_CONTEXT_WINDOW = 8192

# Per-message framing overhead (<|start|>role<|sep|> ... <|end|>)
TOKENS_PER_MESSAGE = 3
TOKENS_PER_NAME = 1


@lru_cache(maxsize=20)
def get_encoding_for_model(model: str) -> tiktoken.Encoding:
    """Get the tiktoken encoding for a specific model.

    Unknown models fall back to cl100k_base.
    """
    if model in MODEL_ENCODINGS:
        return tiktoken.get_encoding(MODEL_ENCODINGS[model])
    try:
        return tiktoken.encoding_for_model(model)
    except KeyError:
        return tiktoken.get_encoding("cl100k_base")


def count_tokens(text: str, model: str = "gpt-4o") -> int:
    """Count the number of tokens in a text string."""
    return len(get_encoding_for_model(model).encode(text))


def truncate_to_token_limit(
    text: str,
    max_tokens: int,
    model: str = "gpt-4o",
    truncation_marker: str = "...",
) -> str:
    """Truncate text to fit within a token limit.

    Args:
        text: The text to truncate.
        max_tokens: Maximum number of tokens allowed.
        model: The model to use for encoding.
        truncation_marker: Marker to append if truncated.

    Returns:
        The truncated text, or original if within limit.
    """
    encoding = get_encoding_for_model(model)
    tokens = encoding.encode(text)
    if len(tokens) <= max_tokens:
        return text

    available_tokens = max_tokens - len(encoding.encode(truncation_marker))
    if available_tokens <= 0:
        return truncation_marker
    return encoding.decode(tokens[:available_tokens]) + truncation_marker


def get_context_window(model: str) -> int:
    """Get the context window size for a model."""
    return MODEL_CONTEXT_WINDOWS.get(model, DEFAULT_CONTEXT_WINDOW)


def count_message_tokens(message: BaseMessage, model: str = "gpt-4o") -> int:
    """Estimate the prompt tokens one chat message costs, framing included."""
    encoding = get_encoding_for_model(model)
    total = TOKENS_PER_MESSAGE + len(encoding.encode(message.type)) + len(encoding.encode(message.text))
    if message.name:
        total += TOKENS_PER_NAME + len(encoding.encode(message.name))
    if isinstance(message, AIMessage):
        for call in message.tool_calls:
            total += len(encoding.encode(call["name"])) + len(encoding.encode(json.dumps(call["args"])))
    return total


def count_messages_tokens(messages: Sequence[BaseMessage], model: str = "gpt-4o") -> int:
    """Estimate the prompt tokens of a whole conversation."""
    return sum(count_message_tokens(message, model) for message in messages)


def trim_history(
    messages: Sequence[BaseMessage],
    max_tokens: int,
    model: str = "gpt-4o",
    keep_system: bool = True,
) -> list[BaseMessage]:
    """Keep the most recent messages that fit in a token budget.

    A leading system message is kept when ``keep_system`` is set and counts
    against the budget. The kept history starts on a human message, so it
    never opens with a tool result whose assistant tool call was dropped.

    Args:
        messages: The full conversation, oldest first.
        max_tokens: Token budget for the returned messages.
        model: The model whose encoding is used for counting.
        keep_system: Whether to always keep the leading system message.

    Returns:
        A new list, oldest first.
    """

    def counter(batch: list[BaseMessage]) -> int:
        return count_messages_tokens(batch, model)

    return trim_messages(
        list(messages),
        max_tokens=max_tokens,
        token_counter=counter,
        strategy="last",
        start_on="human",
        include_system=keep_system,
    )
