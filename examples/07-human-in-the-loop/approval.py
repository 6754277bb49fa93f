"""Human Approval Example.

Booking a trip spends the customer's money, so a person should see the
request before it is sent. Inside a node, ``interrupt(value)`` stops the run,
saves it, and returns ``value`` to the caller under ``__interrupt__``.
Invoking the same thread with ``Command(resume=answer)`` re-runs that node,
and this time ``interrupt`` returns the answer.

Static breakpoints (``interrupt_before``) pause at a node without any code
inside it; the run continues with ``invoke(None)``.

Features demonstrated:
- interrupt() inside a tool-reviewing node
- Approve, edit and reject paths with Command(resume=...)
- interrupt_before on a prebuilt agent's tools node
- interrupt() inside a tool, paused and resumed through the agent
- Checkpointing is required for any kind of pause
"""

from typing import Any

from langchain_core.messages import ToolMessage
from langchain_core.tools import tool
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, START, MessagesState, StateGraph
from langgraph.prebuilt import ToolNode, create_react_agent
from langgraph.types import Command, interrupt

from llm_bootcamp import get_logger, graph_config, init_chat_model, setup_logging

INTERRUPT = "__interrupt__"

setup_logging()
logger = get_logger(__name__)


@tool
def book_hotel(hotel: str, check_in: str, nights: int) -> str:
    """Book a hotel room.

    Args:
        hotel: Hotel name.
        check_in: Check-in date, YYYY-MM-DD.
        nights: Number of nights.
    """
    return f"Booked {nights} nights at {hotel} from {check_in}."


def build_reviewed_agent():
    """Agent whose booking calls go past a human first."""
    model = init_chat_model(temperature=0).bind_tools([book_hotel])

    def assistant(state: MessagesState) -> dict:
        return {"messages": [model.invoke(state["messages"])]}

    def human_review(state: MessagesState) -> Command:
        call = state["messages"][-1].tool_calls[0]
        decision: dict[str, Any] = interrupt({"question": "Approve this booking?", "tool_call": call["args"]})

        if decision["action"] == "approve":
            return Command(goto="tools")
        if decision["action"] == "edit":
            original = state["messages"][-1]
            fixed_call = {**call, "args": {**call["args"], **decision["args"]}}
            # Same message id, so the reducer replaces the original request
            edited = original.model_copy(update={"tool_calls": [fixed_call]})
            return Command(goto="tools", update={"messages": [edited]})

        reason = decision.get("reason", "no reason given")
        refusal = ToolMessage(f"The user rejected this booking: {reason}", tool_call_id=call["id"])
        return Command(goto="assistant", update={"messages": [refusal]})

    def route(state: MessagesState) -> str:
        return "human_review" if state["messages"][-1].tool_calls else END

    graph = StateGraph(MessagesState)
    graph.add_node("assistant", assistant)
    graph.add_node("human_review", human_review)
    graph.add_node("tools", ToolNode([book_hotel]))
    graph.add_edge(START, "assistant")
    graph.add_conditional_edges("assistant", route, ["human_review", END])
    graph.add_edge("tools", "assistant")
    return graph.compile(checkpointer=MemorySaver())


def review(decision: dict[str, Any], thread_id: str) -> None:
    """Run one request to the pause, then resume with ``decision``."""
    app = build_reviewed_agent()
    config = graph_config(thread_id)

    paused = app.invoke({"messages": [("user", "Book Hotel Lux in Rome for 2 nights from 2025-10-03.")]}, config)
    for pending in paused.get(INTERRUPT, []):
        print(f"Waiting on human: {pending.value}")

    result = app.invoke(Command(resume=decision), config)
    print(f"Final: {result['messages'][-1].text}")


def static_breakpoint() -> None:
    """Pause a prebuilt agent before it runs any tool."""
    agent = create_react_agent(
        init_chat_model(temperature=0),
        [book_hotel],
        checkpointer=MemorySaver(),
        interrupt_before=["tools"],
    )
    config = graph_config("breakpoint")

    agent.invoke({"messages": [("user", "Book Hotel Mar in Faro, 1 night from 2025-07-01.")]}, config)
    snapshot = agent.get_state(config)
    print(f"Paused before: {snapshot.next}")
    print(f"Pending call: {snapshot.values['messages'][-1].tool_calls[0]['args']}")

    result = agent.invoke(None, config)
    print(f"Final: {result['messages'][-1].text}")


@tool
def book_tour(tour: str, day: str) -> str:
    """Book a guided tour after the traveller confirms.

    Args:
        tour: Tour name.
        day: Tour date, YYYY-MM-DD.
    """
    answer = interrupt({"question": f"Book {tour} on {day}?"})
    if answer != "yes":
        return f"The traveller declined {tour}."
    return f"Booked {tour} on {day}."


def confirm_inside_tool() -> None:
    """Ask for confirmation from inside a tool run by a prebuilt agent."""
    agent = create_react_agent(init_chat_model(temperature=0), [book_tour], checkpointer=MemorySaver())
    config = graph_config("tour")

    paused = agent.invoke({"messages": [("user", "Book the Vatican night tour on 2025-10-04.")]}, config)
    for pending in paused.get(INTERRUPT, []):
        print(f"Waiting on human: {pending.value}")

    result = agent.invoke(Command(resume="yes"), config)
    print(f"Final: {result['messages'][-1].text}")


def main() -> None:
    """Run the approval examples."""
    print("=" * 60)
    print("Human Approval Examples")
    print("=" * 60)

    print("\n--- Approve ---")
    review({"action": "approve"}, "approve")

    print("\n--- Edit ---")
    review({"action": "edit", "args": {"nights": 3}}, "edit")

    print("\n--- Reject ---")
    review({"action": "reject", "reason": "Too expensive"}, "reject")

    print("\n--- Static Breakpoint ---")
    static_breakpoint()

    print("\n--- Interrupt Inside A Tool ---")
    confirm_inside_tool()


if __name__ == "__main__":
    main()
