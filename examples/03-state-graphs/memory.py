"""Conversation Memory Example.

Compiling a graph with a checkpointer saves its state after every step under
the ``thread_id`` in the config. Invoking again on the same thread continues
the conversation; a different thread starts from scratch.

Long threads eventually overflow the context window, so the chat node trims
what it sends to the model while the full history stays in the checkpoint.

Features demonstrated:
- MemorySaver and thread_id via graph_config
- Independent threads
- Inspecting saved state with get_state
- Trimming history to a token budget
"""

from langchain_core.messages import SystemMessage
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import START, MessagesState, StateGraph

from llm_bootcamp import get_logger, graph_config, init_chat_model, setup_logging, trim_history

setup_logging()
logger = get_logger(__name__)

SYSTEM_PROMPT = SystemMessage("You are a friendly travel assistant. Keep answers short.")


def build_chatbot():
    """Compile a chatbot that remembers each thread."""
    model = init_chat_model()

    def chat(state: MessagesState) -> dict:
        window = trim_history([SYSTEM_PROMPT, *state["messages"]], max_tokens=2000)
        logger.debug("history_trimmed", kept=len(window), total=len(state["messages"]) + 1)
        return {"messages": [model.invoke(window)]}

    graph = StateGraph(MessagesState)
    graph.add_node("chat", chat)
    graph.add_edge(START, "chat")
    return graph.compile(checkpointer=MemorySaver())


def say(app, thread_id: str, text: str) -> str:
    result = app.invoke({"messages": [("user", text)]}, graph_config(thread_id))
    reply = result["messages"][-1].text
    print(f"[{thread_id}] user: {text}")
    print(f"[{thread_id}] assistant: {reply}")
    return reply


def main() -> None:
    """Run the memory examples."""
    print("=" * 60)
    print("Conversation Memory Examples")
    print("=" * 60)

    app = build_chatbot()

    print("\n--- Same Thread ---")
    say(app, "alice", "Hi, I'm Alice and I'm flying to Nairobi next month.")
    say(app, "alice", "Where am I going?")

    print("\n--- Different Thread ---")
    say(app, "bob", "Where am I going?")

    print("\n--- Saved State ---")
    snapshot = app.get_state(graph_config("alice"))
    print(f"Messages stored for alice: {len(snapshot.values['messages'])}")
    print(f"Checkpoint: {snapshot.config['configurable']['checkpoint_id']}")


if __name__ == "__main__":
    main()
