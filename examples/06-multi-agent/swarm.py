"""Swarm Multi-Agent Example.

In a swarm there is no coordinator. Each agent carries handoff tools to its
peers and passes the conversation along when a request is outside its
speciality. The graph remembers which agent was active, so the user's next
message goes straight back to whoever they were talking to.

Features demonstrated:
- create_handoff_tool and create_swarm
- active_agent persisted per thread by the checkpointer
- Streaming tokens with the name of the agent speaking
"""

from langchain_core.messages import AIMessage
from langgraph.checkpoint.memory import MemorySaver
from langgraph.prebuilt import create_react_agent

from llm_bootcamp import create_handoff_tool, create_swarm, get_logger, graph_config, init_chat_model, setup_logging

setup_logging()
logger = get_logger(__name__)


def search_flights(origin: str, destination: str) -> str:
    """Search flights between two cities.

    Args:
        origin: Departure city.
        destination: Arrival city.
    """
    return f"{origin} -> {destination}: 07:10 (129 EUR), 13:45 (98 EUR), 20:30 (142 EUR)"


def search_hotels(city: str) -> str:
    """Search hotels in a city.

    Args:
        city: City name.
    """
    return f"{city}: Casa Azul (4*, 140 EUR), Hostel Norte (2*, 38 EUR)"


def build_swarm():
    """Compile a two-agent swarm with thread memory."""
    model = init_chat_model(temperature=0)

    flights = create_react_agent(
        model,
        [search_flights, create_handoff_tool("hotels", "Transfer to the hotel specialist")],
        prompt="You are Fiona, the flight specialist. Hand hotel questions to the hotel specialist.",
        name="flights",
    )
    hotels = create_react_agent(
        model,
        [search_hotels, create_handoff_tool("flights", "Transfer to the flight specialist")],
        prompt="You are Hugo, the hotel specialist. Hand flight questions to the flight specialist.",
        name="hotels",
    )
    return create_swarm([flights, hotels], default_active_agent="flights").compile(checkpointer=MemorySaver())


def chat(app, config: dict, text: str) -> None:
    """Send one message and stream the reply."""
    print(f"user: {text}")
    speaker = None
    # subgraphs=True so tokens from inside each agent come through; the
    # namespace starts with the swarm node, which is the agent's name
    for namespace, (chunk, _) in app.stream(
        {"messages": [("user", text)]}, config, stream_mode="messages", subgraphs=True
    ):
        if not isinstance(chunk, AIMessage) or not chunk.text:
            continue
        agent = namespace[0].split(":")[0] if namespace else None
        if agent != speaker:
            speaker = agent
            print(f"\n{speaker}: ", end="")
        print(chunk.text, end="", flush=True)
    print()

    active = app.get_state(config).values.get("active_agent")
    logger.info("turn_finished", active_agent=active)


def main() -> None:
    """Run the swarm example."""
    print("=" * 60)
    print("Swarm Example")
    print("=" * 60)

    app = build_swarm()
    config = graph_config("swarm-demo")

    chat(app, config, "Any flights from Porto to Madrid tomorrow?")
    chat(app, config, "Great. Now I need somewhere cheap to sleep in Madrid.")
    chat(app, config, "Is there anything nicer?")


if __name__ == "__main__":
    main()
