"""Tests for the FastAPI streaming server."""

import json

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage
from langchain_core.tools import tool
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import START, MessagesState, StateGraph
from langgraph.prebuilt import create_react_agent
from langgraph.types import interrupt

from llm_bootcamp.agents import create_handoff_tool, create_swarm
from llm_bootcamp.core.errors import ConfigurationError
from llm_bootcamp.server import create_app

FALLBACK = "Sorry, something went wrong. Please try again."


@tool
def book_table(restaurant: str) -> str:
    """Book a table at a restaurant."""
    return f"Table booked at {restaurant}"


def sse_events(body: str) -> list[dict]:
    return [json.loads(line[len("data: ") :]) for line in body.splitlines() if line.startswith("data: ")]


def confirmation_graph():
    def confirm(state: MessagesState) -> dict:
        answer = interrupt("Book the 19:30 table?")
        return {"messages": [AIMessage(f"Answer: {answer}")]}

    graph = StateGraph(MessagesState)
    graph.add_node("confirm", confirm)
    graph.add_edge(START, "confirm")
    return graph.compile(checkpointer=MemorySaver())


class TestChatEndpoints:
    """Tests for /chat and /chat/stream."""

    def test_healthz(self, make_model) -> None:
        """Test the health check."""
        client = TestClient(create_app(model=make_model()))

        assert client.get("/healthz").json() == {"status": "ok", "agent": False}

    def test_chat(self, make_model) -> None:
        """Test a chat request returns the assistant reply."""
        model = make_model("Hello, traveller!")
        client = TestClient(create_app(model=model))

        response = client.post(
            "/chat",
            json={"messages": [{"role": "system", "content": "Be warm."}, {"role": "user", "content": "Hi"}]},
        )

        assert response.status_code == 200
        assert response.json()["role"] == "assistant"
        assert response.json()["content"] == "Hello, traveller!"
        assert [m.type for m in model.calls[0]["messages"]] == ["system", "human"]

    def test_chat_requires_messages(self, make_model) -> None:
        """Test an empty conversation is rejected."""
        client = TestClient(create_app(model=make_model()))

        assert client.post("/chat", json={"messages": []}).status_code == 422

    def test_chat_failure_hides_error(self, make_model) -> None:
        """Test model failures return the generic message."""
        client = TestClient(create_app(model=make_model(error=RuntimeError("secret upstream detail"))))

        response = client.post("/chat", json={"messages": [{"role": "user", "content": "Hi"}]})

        assert response.status_code == 502
        assert response.json()["detail"] == FALLBACK

    def test_chat_stream(self, make_model) -> None:
        """Test tokens arrive as SSE events followed by done."""
        client = TestClient(create_app(model=make_model("Lisbon is sunny today")))

        response = client.post("/chat/stream", json={"messages": [{"role": "user", "content": "Weather?"}]})

        events = sse_events(response.text)
        assert response.headers["content-type"].startswith("text/event-stream")
        assert "".join(e["content"] for e in events if e["type"] == "token") == "Lisbon is sunny today"
        assert events[-1]["type"] == "done"
        assert len({e["id"] for e in events}) == 1

    def test_chat_stream_error_event(self, make_model) -> None:
        """Test a failing stream ends with an error event carrying the fallback."""
        client = TestClient(create_app(model=make_model(error=RuntimeError("boom"))))

        response = client.post("/chat/stream", json={"messages": [{"role": "user", "content": "Hi"}]})

        assert sse_events(response.text) == [{"type": "error", "message": FALLBACK}]


class TestAgentEndpoints:
    """Tests for the /agent/threads endpoints."""

    def test_agent_requires_checkpointer(self, make_model) -> None:
        """Test serving an agent without thread memory is refused."""
        with pytest.raises(ConfigurationError):
            create_app(model=make_model(), agent=create_react_agent(make_model(), []))

    def test_no_agent_configured(self, make_model) -> None:
        """Test agent routes 404 without an agent."""
        client = TestClient(create_app(model=make_model()))

        assert client.post("/agent/threads/t1/invoke", json={"message": "Hi"}).status_code == 404

    def test_invoke_keeps_thread_memory(self, make_model) -> None:
        """Test consecutive requests on a thread share history."""
        agent = create_react_agent(make_model("Hi Ada", "You are Ada"), [], checkpointer=MemorySaver())
        client = TestClient(create_app(model=make_model(), agent=agent))

        client.post("/agent/threads/t1/invoke", json={"message": "I'm Ada"})
        response = client.post("/agent/threads/t1/invoke", json={"message": "Who am I?"})

        body = response.json()
        assert body["thread_id"] == "t1"
        assert [m["content"] for m in body["messages"]] == ["I'm Ada", "Hi Ada", "Who am I?", "You are Ada"]
        assert [m["role"] for m in body["messages"]] == ["user", "assistant", "user", "assistant"]
        assert body["next"] == []

    def test_approve_tool_call(self, make_model, tool_reply) -> None:
        """Test a run paused before tools continues on resume."""
        model = make_model(tool_reply("book_table", {"restaurant": "Ramiro"}), "Your table at Ramiro is booked.")
        agent = create_react_agent(model, [book_table], checkpointer=MemorySaver(), interrupt_before=["tools"])
        client = TestClient(create_app(model=make_model(), agent=agent))

        paused = client.post("/agent/threads/t1/invoke", json={"message": "Book Ramiro"}).json()
        assert paused["next"] == ["tools"]
        assert paused["interrupts"] == []

        resumed = client.post("/agent/threads/t1/resume", json={}).json()
        assert resumed["next"] == []
        assert resumed["messages"][-1]["content"] == "Your table at Ramiro is booked."

    def test_answer_interrupt(self, make_model) -> None:
        """Test a pending question is returned and answered through resume."""
        client = TestClient(create_app(model=make_model(), agent=confirmation_graph()))

        paused = client.post("/agent/threads/t1/invoke", json={"message": "Dinner for two"}).json()
        assert paused["interrupts"] == ["Book the 19:30 table?"]
        assert paused["next"] == ["confirm"]

        state = client.get("/agent/threads/t1/state").json()
        assert state["interrupts"] == ["Book the 19:30 table?"]

        resumed = client.post("/agent/threads/t1/resume", json={"value": "yes"}).json()
        assert resumed["messages"][-1]["content"] == "Answer: yes"
        assert resumed["interrupts"] == []

    def test_resume_with_nothing_pending(self, make_model) -> None:
        """Test resuming an idle thread is a conflict."""
        agent = create_react_agent(make_model(), [], checkpointer=MemorySaver())
        client = TestClient(create_app(model=make_model(), agent=agent))

        assert client.post("/agent/threads/idle/resume", json={"value": "yes"}).status_code == 409

    def test_agent_failure_hides_error(self, make_model) -> None:
        """Test agent errors return the generic message."""
        agent = create_react_agent(make_model(error=RuntimeError("boom")), [], checkpointer=MemorySaver())
        client = TestClient(create_app(model=make_model(), agent=agent))

        response = client.post("/agent/threads/t1/invoke", json={"message": "Hi"})

        assert response.status_code == 502
        assert response.json()["detail"] == FALLBACK


class TestAgentStream:
    """Tests for /agent/threads/{thread_id}/stream."""

    def test_tokens_with_node(self, make_model) -> None:
        """Test agent tokens stream with the node that produced them."""
        agent = create_react_agent(make_model("Two seats are left"), [], checkpointer=MemorySaver(), name="concierge")
        client = TestClient(create_app(model=make_model(), agent=agent))

        response = client.post("/agent/threads/t1/stream", json={"message": "Any seats?"})

        events = sse_events(response.text)
        tokens = [e for e in events if e["type"] == "token"]
        assert "".join(e["content"] for e in tokens) == "Two seats are left"
        assert {(e["agent"], e["node"]) for e in tokens} == {(None, "agent")}
        assert events[-1] == {"type": "done"}

    def test_tokens_from_swarm_member(self, make_model, tool_reply) -> None:
        """Test tokens from an agent nested in a swarm are labelled with that agent."""
        flights = create_react_agent(
            make_model(tool_reply("transfer_to_hotels")), [create_handoff_tool("hotels")], name="flights"
        )
        hotels = create_react_agent(make_model("Booked Hotel Lisboa."), [], name="hotels")
        swarm = create_swarm([flights, hotels], default_active_agent="flights").compile(checkpointer=MemorySaver())
        client = TestClient(create_app(model=make_model(), agent=swarm))

        response = client.post("/agent/threads/t1/stream", json={"message": "Book a hotel"})

        tokens = [e for e in sse_events(response.text) if e["type"] == "token"]
        assert "".join(e["content"] for e in tokens) == "Booked Hotel Lisboa."
        assert {e["agent"] for e in tokens} == {"hotels"}

    def test_interrupt_event(self, make_model) -> None:
        """Test a pause is streamed as a single interrupt event."""
        client = TestClient(create_app(model=make_model(), agent=confirmation_graph()))

        response = client.post("/agent/threads/t1/stream", json={"message": "Dinner"})

        events = sse_events(response.text)
        assert [e for e in events if e["type"] == "interrupt"] == [
            {"type": "interrupt", "values": ["Book the 19:30 table?"]}
        ]
        assert events[-1] == {"type": "done"}

    def test_stream_error_event(self, make_model) -> None:
        """Test a failing agent ends the stream with the fallback message."""
        agent = create_react_agent(make_model(error=RuntimeError("boom")), [], checkpointer=MemorySaver())
        client = TestClient(create_app(model=make_model(), agent=agent))

        response = client.post("/agent/threads/t1/stream", json={"message": "Hi"})

        assert sse_events(response.text)[-1] == {"type": "error", "message": FALLBACK}
