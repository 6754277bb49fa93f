"""Tests for handoff tools, swarms and supervisors."""

import pytest
from langchain_core.messages import HumanMessage, ToolMessage
from langchain_core.tools import tool
from langchain_core.utils.function_calling import convert_to_openai_tool
from langgraph.checkpoint.memory import MemorySaver
from langgraph.prebuilt import create_react_agent
from langgraph.types import Command

from llm_bootcamp.agents import create_handoff_tool, create_supervisor, create_swarm
from llm_bootcamp.core.config import graph_config
from llm_bootcamp.core.errors import ValidationError


@tool
def search_flights(origin: str, destination: str) -> list[str]:
    """Search flights between two airports."""
    return [f"{origin}-{destination} 09:40", f"{origin}-{destination} 18:15"]


class TestHandoffTool:
    """Tests for create_handoff_tool."""

    def test_name_and_schema(self) -> None:
        """Test the tool is named after the target and takes no model arguments."""
        handoff = create_handoff_tool("Hotel Desk")

        assert handoff.name == "transfer_to_hotel_desk"
        assert convert_to_openai_tool(handoff)["function"]["parameters"]["properties"] == {}
        assert handoff.metadata == {"handoff_destination": "Hotel Desk"}

    def test_custom_description(self) -> None:
        """Test the description shown to the model can be replaced."""
        handoff = create_handoff_tool("hotels", description="Book rooms and answer hotel questions")

        assert handoff.description == "Book rooms and answer hotel questions"

    def test_returns_parent_command(self) -> None:
        """Test calling the tool jumps to the target in the parent graph."""
        handoff = create_handoff_tool("hotels")
        state = {"messages": [HumanMessage("I need a room", id="m1")]}

        command = handoff.invoke(
            {"type": "tool_call", "name": handoff.name, "args": {"state": state}, "id": "call_9"}
        )

        assert isinstance(command, Command)
        assert command.graph == Command.PARENT
        assert command.goto == "hotels"
        assert command.update["active_agent"] == "hotels"
        first, confirmation = command.update["messages"]
        assert first.id == "m1"
        assert isinstance(confirmation, ToolMessage)
        assert confirmation.tool_call_id == "call_9"
        assert confirmation.content == "Successfully transferred to hotels"


class TestSwarm:
    """Tests for create_swarm."""

    def _swarm(self, make_model, tool_reply, hotel_replies: list[str]):
        flights = create_react_agent(
            make_model(tool_reply("transfer_to_hotels")),
            [search_flights, create_handoff_tool("hotels")],
            name="flights",
        )
        hotels = create_react_agent(
            make_model(*hotel_replies),
            [create_handoff_tool("flights")],
            name="hotels",
        )
        return create_swarm([flights, hotels], default_active_agent="flights").compile(checkpointer=MemorySaver())

    def test_handoff_moves_conversation(self, make_model, tool_reply) -> None:
        """Test the first agent transfers and the second one answers."""
        app = self._swarm(make_model, tool_reply, ["Booked Hotel Lisboa for 3 nights."])

        result = app.invoke({"messages": [("user", "Book me a hotel in Lisbon")]}, graph_config("trip-1"))

        assert result["active_agent"] == "hotels"
        assert result["messages"][-1].content == "Booked Hotel Lisboa for 3 nights."
        assert result["messages"][-1].name == "hotels"
        assert any(m.content == "Successfully transferred to hotels" for m in result["messages"])

    def test_active_agent_remembered(self, make_model, tool_reply) -> None:
        """Test the next turn goes straight to the agent that finished the last one."""
        app = self._swarm(make_model, tool_reply, ["Booked.", "The spa opens at 9."])
        app.invoke({"messages": [("user", "Book me a hotel")]}, graph_config("trip-1"))

        # The flights model has no replies left, so routing to it would fail
        result = app.invoke({"messages": [("user", "When does the spa open?")]}, graph_config("trip-1"))

        assert result["messages"][-1].content == "The spa opens at 9."

    def test_threads_start_with_default_agent(self, make_model) -> None:
        """Test a new thread begins at the default agent."""
        greeter = create_react_agent(make_model("Welcome aboard"), [], name="greeter")
        other = create_react_agent(make_model(), [], name="other")
        app = create_swarm([greeter, other], default_active_agent="greeter").compile()

        result = app.invoke({"messages": [("user", "Hi")]})

        assert result["messages"][-1].content == "Welcome aboard"

    def test_unnamed_agent_rejected(self, make_model) -> None:
        """Test every swarm member needs a name."""
        with pytest.raises(ValidationError, match="name"):
            create_swarm([create_react_agent(make_model(), [])], default_active_agent="x")

    def test_duplicate_names_rejected(self, make_model) -> None:
        """Test agent names must be unique."""
        first = create_react_agent(make_model(), [], name="twin")
        second = create_react_agent(make_model(), [], name="twin")

        with pytest.raises(ValidationError, match="twice"):
            create_swarm([first, second], default_active_agent="twin")

    def test_unknown_default_rejected(self, make_model) -> None:
        """Test the default active agent must be a member."""
        agent = create_react_agent(make_model(), [], name="flights")

        with pytest.raises(ValidationError) as exc_info:
            create_swarm([agent], default_active_agent="hotels")

        assert exc_info.value.field == "default_active_agent"


class TestSupervisor:
    """Tests for create_supervisor."""

    def _worker(self, make_model, tool_reply):
        return create_react_agent(
            make_model(
                tool_reply("search_flights", {"origin": "LIS", "destination": "CDG"}, call_id="call_w"),
                "Booked the 09:40 LIS-CDG flight.",
            ),
            [search_flights],
            name="flight_agent",
        )

    def _supervisor_model(self, make_model, tool_reply):
        return make_model(tool_reply("transfer_to_flight_agent"), "Your flight to Paris is booked.")

    def test_delegates_and_answers(self, make_model, tool_reply) -> None:
        """Test the supervisor hands off, the worker reports back and the supervisor answers."""
        supervisor_model = self._supervisor_model(make_model, tool_reply)
        app = create_supervisor([self._worker(make_model, tool_reply)], supervisor_model).compile()

        result = app.invoke({"messages": [("user", "Book a flight to Paris")]})

        last = result["messages"][-1]
        assert last.content == "Your flight to Paris is booked."
        assert last.name == "supervisor"
        assert result["active_agent"] == "flight_agent"
        assert len(supervisor_model.calls) == 2

    def test_last_message_mode(self, make_model, tool_reply) -> None:
        """Test only the worker's final reply joins the conversation."""
        app = create_supervisor(
            [self._worker(make_model, tool_reply)], self._supervisor_model(make_model, tool_reply)
        ).compile()

        result = app.invoke({"messages": [("user", "Book a flight to Paris")]})

        contents = [m.content for m in result["messages"]]
        assert "Booked the 09:40 LIS-CDG flight." in contents
        assert len(result["messages"]) == 5

    def test_full_history_mode(self, make_model, tool_reply) -> None:
        """Test the worker's tool calls are kept in full_history mode."""
        app = create_supervisor(
            [self._worker(make_model, tool_reply)],
            self._supervisor_model(make_model, tool_reply),
            output_mode="full_history",
        ).compile()

        result = app.invoke({"messages": [("user", "Book a flight to Paris")]})

        assert len(result["messages"]) == 7
        assert any(getattr(m, "tool_call_id", None) == "call_w" for m in result["messages"])

    def test_supervisor_prompt_and_tools(self, make_model, tool_reply) -> None:
        """Test the supervisor prompt leads its requests and the model is offered the handoff tools."""
        supervisor_model = self._supervisor_model(make_model, tool_reply)
        app = create_supervisor(
            [self._worker(make_model, tool_reply)],
            supervisor_model,
            prompt="You manage a travel team.",
        ).compile()

        app.invoke({"messages": [("user", "Book a flight to Paris")]})

        first_call = supervisor_model.calls[0]
        assert first_call["messages"][0].content == "You manage a travel team."
        assert first_call["tools"] == ["transfer_to_flight_agent"]

    def test_worker_sees_conversation(self, make_model, tool_reply) -> None:
        """Test the worker is called with the user's request."""
        worker_model = make_model("Booked.")
        worker = create_react_agent(worker_model, [], name="flight_agent")
        app = create_supervisor([worker], self._supervisor_model(make_model, tool_reply)).compile()

        app.invoke({"messages": [("user", "Book a flight to Paris")]})

        assert worker_model.calls[0]["messages"][0].content == "Book a flight to Paris"

    def test_unknown_output_mode(self, make_model, tool_reply) -> None:
        """Test output_mode is validated."""
        with pytest.raises(ValidationError, match="output_mode"):
            create_supervisor([self._worker(make_model, tool_reply)], make_model(), output_mode="summary")

    def test_worker_name_clash(self, make_model) -> None:
        """Test a worker cannot share the supervisor's name."""
        worker = create_react_agent(make_model(), [], name="supervisor")

        with pytest.raises(ValidationError, match="clashes"):
            create_supervisor([worker], make_model())
