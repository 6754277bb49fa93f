"""State Graph Basics Example.

A graph is a set of named steps sharing one state dict. Each node returns the
keys it wants to change; a reducer decides how a new value merges with the
old one. Edges, fixed or conditional, decide what runs next.

This example builds a small trip-budget planner with no model calls so the
mechanics are easy to follow, then a one-node chatbot.

Features demonstrated:
- TypedDict state with an Annotated reducer
- Fixed and conditional edges
- Parallel nodes writing to the same key
- Streaming "updates" to watch a run step by step
- Rendering the graph as a Mermaid diagram
"""

import operator
from typing import Annotated, TypedDict

from langgraph.graph import END, START, MessagesState, StateGraph

from llm_bootcamp import get_logger, init_chat_model, setup_logging

setup_logging()
logger = get_logger(__name__)


class BudgetState(TypedDict):
    destination: str
    nights: int
    costs: Annotated[list[tuple[str, float]], operator.add]
    verdict: str


NIGHTLY_RATES = {"Lisbon": 110.0, "Tokyo": 160.0, "Oslo": 210.0}


def price_flight(state: BudgetState) -> dict:
    return {"costs": [("flight", 420.0)]}


def price_hotel(state: BudgetState) -> dict:
    rate = NIGHTLY_RATES.get(state["destination"], 150.0)
    return {"costs": [("hotel", rate * state["nights"])]}


def total(state: BudgetState) -> float:
    return sum(amount for _, amount in state["costs"])


def check_budget(state: BudgetState) -> str:
    """Route on the total cost."""
    return "over" if total(state) > 1200 else "ok"


def approve(state: BudgetState) -> dict:
    return {"verdict": f"Approved: {total(state):.0f} EUR"}


def shorten(state: BudgetState) -> dict:
    logger.info("trip_shortened", nights=state["nights"] - 1)
    # costs only ever grows, so a shorter stay is recorded as a refund
    return {"nights": state["nights"] - 1, "costs": [("hotel_refund", -NIGHTLY_RATES.get(state["destination"], 150.0))]}


def build_budget_graph():
    """Build and compile the budget planner."""
    graph = StateGraph(BudgetState)
    graph.add_node("price_flight", price_flight)
    graph.add_node("price_hotel", price_hotel)
    graph.add_node("review", lambda state: None)
    graph.add_node("approve", approve)
    graph.add_node("shorten", shorten)

    # Flight and hotel are priced in the same step
    graph.add_edge(START, "price_flight")
    graph.add_edge(START, "price_hotel")
    graph.add_edge("price_flight", "review")
    graph.add_edge("price_hotel", "review")
    graph.add_conditional_edges("review", check_budget, {"ok": "approve", "over": "shorten"})
    graph.add_edge("shorten", "review")
    graph.add_edge("approve", END)
    return graph.compile(name="budget_planner")


def run_budget(destination: str, nights: int) -> None:
    """Run the planner and print each step's update."""
    app = build_budget_graph()
    for update in app.stream(
        {"destination": destination, "nights": nights, "costs": []},
        stream_mode="updates",
    ):
        for node, values in update.items():
            print(f"  {node}: {values}")


def chatbot() -> str:
    """The smallest useful graph: one node calling a model.

    Returns:
        The assistant's reply.
    """
    model = init_chat_model()

    def chat(state: MessagesState) -> dict:
        return {"messages": [model.invoke(state["messages"])]}

    graph = StateGraph(MessagesState)
    graph.add_node("chat", chat)
    graph.add_edge(START, "chat")
    app = graph.compile()

    result = app.invoke({"messages": [("user", "What is a good first trip abroad?")]})
    return result["messages"][-1].text


def main() -> None:
    """Run the graph examples."""
    print("=" * 60)
    print("State Graph Examples")
    print("=" * 60)

    print("\n--- Within Budget ---")
    run_budget("Lisbon", 5)

    print("\n--- Over Budget ---")
    run_budget("Oslo", 6)

    print("\n--- Graph Structure ---")
    print(build_budget_graph().get_graph().draw_mermaid())

    print("\n--- Chatbot ---")
    print(chatbot())


if __name__ == "__main__":
    main()
