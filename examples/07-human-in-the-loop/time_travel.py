"""Time Travel Example.

Every step of a checkpointed run is kept, not only the latest one. That
makes it possible to look back at how a thread got where it is, to replay
from an earlier step, and to fork: edit an old state and let the run take a
different path from there.

Features demonstrated:
- get_state_history, newest first
- Replaying from a checkpoint_id with invoke(None, config)
- update_state on a past checkpoint, with and without as_node
- Forks recording the checkpoint they branched from as parent
"""

import operator
from typing import Annotated, TypedDict

from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, START, StateGraph

from llm_bootcamp import get_logger, graph_config, setup_logging

setup_logging()
logger = get_logger(__name__)


class ItineraryState(TypedDict):
    city: str
    plan: Annotated[list[str], operator.add]


ACTIVITIES = {
    "Rome": ["Colosseum at opening time", "Trastevere dinner"],
    "Athens": ["Acropolis before the heat", "Plaka rooftop bar"],
}


def choose_city(state: ItineraryState) -> dict:
    return {"plan": [f"Fly to {state['city']}"]}


def morning(state: ItineraryState) -> dict:
    return {"plan": [ACTIVITIES.get(state["city"], ["Walking tour"])[0]]}


def evening(state: ItineraryState) -> dict:
    return {"plan": [ACTIVITIES.get(state["city"], ["", "Local restaurant"])[-1]]}


def build_planner():
    graph = StateGraph(ItineraryState)
    graph.add_node("choose_city", choose_city)
    graph.add_node("morning", morning)
    graph.add_node("evening", evening)
    graph.add_edge(START, "choose_city")
    graph.add_edge("choose_city", "morning")
    graph.add_edge("morning", "evening")
    graph.add_edge("evening", END)
    return graph.compile(checkpointer=MemorySaver())


def main() -> None:
    """Run the time travel example."""
    print("=" * 60)
    print("Time Travel Example")
    print("=" * 60)

    app = build_planner()
    config = graph_config("itinerary")
    app.invoke({"city": "Rome", "plan": []}, config)

    print("\n--- History ---")
    history = list(app.get_state_history(config))
    for snapshot in history:
        print(f"  step {snapshot.step:>2} next={snapshot.next} plan={snapshot.values.get('plan')}")

    print("\n--- Replay From Before 'evening' ---")
    before_evening = next(s for s in history if s.next == ("evening",))
    replayed = app.invoke(None, before_evening.config)
    print(f"  {replayed['plan']}")

    print("\n--- Fork: Switch City ---")
    # Pretend choose_city had picked Athens; its successors run next
    after_choose = next(s for s in history if s.next == ("morning",))
    fork_config = app.update_state(
        after_choose.config,
        {"city": "Athens", "plan": ["Change of plan: fly to Athens"]},
        as_node="choose_city",
    )
    fork = app.get_state(fork_config)
    print(f"  forked from: {fork.parent_config['configurable']['checkpoint_id']}")
    print(f"  next: {fork.next}")
    forked = app.invoke(None, fork_config)
    print(f"  {forked['plan']}")

    print("\n--- Plain Edit ---")
    app.update_state(config, {"plan": ["Buy ferry tickets to Hydra"]})
    print(f"  {app.get_state(config).values['plan']}")
    logger.info("checkpoints_saved", count=len(list(app.get_state_history(config))))


if __name__ == "__main__":
    main()
