"""Token Streaming Example.

Users should see an answer forming instead of waiting for the whole reply.
This example streams tokens from a bare chat model, from a chain whose
parser passes chunks straight through, and from a graph in "messages" mode
where every token is tagged with the node that produced it.

Features demonstrated:
- ChatModel.stream and astream
- Streaming through prompt | model | StrOutputParser
- StateGraph.stream(stream_mode="messages")
- Generic fallback message when a stream fails midway
"""

import asyncio

from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langgraph.graph import START, MessagesState, StateGraph

from llm_bootcamp import get_logger, get_settings, init_chat_model, map_provider_error, setup_logging

setup_logging()
logger = get_logger(__name__)


def stream_model() -> str:
    """Print tokens from the model as they arrive.

    Returns:
        The complete reply.
    """
    model = init_chat_model(temperature=0.9)
    collected: list[str] = []

    print("Streaming: ", end="", flush=True)
    for chunk in model.stream("Write a two-line poem about night trains."):
        print(chunk.text, end="", flush=True)
        collected.append(chunk.text)
    print()
    return "".join(collected)


async def stream_model_async() -> str:
    """Async version of stream_model.

    Returns:
        The complete reply.
    """
    model = init_chat_model(temperature=0.7)
    collected: list[str] = []

    print("Async streaming: ", end="", flush=True)
    async for chunk in model.astream("List three tips for long-haul flights."):
        print(chunk.text, end="", flush=True)
        collected.append(chunk.text)
    print()
    return "".join(collected)


def stream_chain() -> None:
    """Stream through a chain; the parser yields plain strings."""
    prompt = ChatPromptTemplate.from_messages([("human", "Describe {city} at dawn in one paragraph.")])
    chain = prompt | init_chat_model() | StrOutputParser()

    try:
        for text in chain.stream({"city": "Istanbul"}):
            print(text, end="", flush=True)
    except Exception as e:  # noqa: BLE001
        error = map_provider_error(e)
        logger.error("stream_failed", error=str(error), error_type=type(error).__name__)
        print(f"\n{get_settings().stream_error_message}")
    print()


def stream_graph() -> None:
    """Stream tokens out of a graph node."""
    model = init_chat_model()

    def guide(state: MessagesState) -> dict:
        return {"messages": [model.invoke(state["messages"])]}

    graph = StateGraph(MessagesState)
    graph.add_node("guide", guide)
    graph.add_edge(START, "guide")
    app = graph.compile()

    for chunk, metadata in app.stream(
        {"messages": [("user", "Give me one sentence about Petra.")]},
        stream_mode="messages",
    ):
        if chunk.text:
            print(f"[{metadata['langgraph_node']}] {chunk.text}")


def main() -> None:
    """Run the streaming examples."""
    print("=" * 60)
    print("Streaming Examples")
    print("=" * 60)

    print("\n--- Model Streaming ---")
    result = stream_model()
    print(f"[Total length: {len(result)} characters]")

    print("\n--- Async Streaming ---")
    result = asyncio.run(stream_model_async())
    print(f"[Total length: {len(result)} characters]")

    print("\n--- Chain Streaming ---")
    stream_chain()

    print("\n--- Graph Streaming ---")
    stream_graph()


if __name__ == "__main__":
    main()
