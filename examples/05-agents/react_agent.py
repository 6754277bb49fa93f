"""ReAct Agent Example.

A ReAct agent alternates between reasoning (a model call) and acting (tool
calls) until the model answers without asking for a tool. The loop from the
tool calling tutorial is packaged as ``create_react_agent``.

Features demonstrated:
- create_react_agent with plain functions and @tool tools
- System prompts as strings or callables
- Streaming the agent's steps in "updates" mode
- Conversation memory with a checkpointer
- A recursion limit as the guard against endless tool loops
"""

from langchain_core.messages import SystemMessage
from langchain_core.tools import tool
from langgraph.checkpoint.memory import MemorySaver
from langgraph.prebuilt import create_react_agent

from llm_bootcamp import get_logger, graph_config, init_chat_model, setup_logging

setup_logging()
logger = get_logger(__name__)


def convert_currency(amount: float, from_currency: str, to_currency: str) -> str:
    """Convert an amount between currencies.

    Args:
        amount: Amount to convert.
        from_currency: ISO code, e.g. EUR.
        to_currency: ISO code, e.g. JPY.
    """
    rates = {"EUR": 1.0, "USD": 1.08, "JPY": 162.5, "GBP": 0.85}
    if from_currency not in rates or to_currency not in rates:
        return f"Unknown currency; supported: {sorted(rates)}"
    converted = amount / rates[from_currency] * rates[to_currency]
    return f"{amount:.2f} {from_currency} = {converted:.2f} {to_currency}"


@tool
def lookup_visa(nationality: str, destination: str) -> str:
    """Check whether a visa is needed for a short tourist stay.

    Args:
        nationality: Traveler's nationality.
        destination: Destination country.
    """
    visa_free = {("portuguese", "japan"), ("american", "japan"), ("british", "portugal")}
    if (nationality.lower(), destination.lower()) in visa_free:
        return f"No visa needed for {nationality} citizens visiting {destination} for up to 90 days."
    return f"Check the {destination} embassy website; a visa may be required."


def build_agent(checkpointer: MemorySaver | None = None):
    """Create the travel helper agent."""
    return create_react_agent(
        init_chat_model(temperature=0),
        [convert_currency, lookup_visa],
        prompt="You are a travel helper. Use tools for rates and visa rules, then answer briefly.",
        checkpointer=checkpointer,
        name="travel_helper",
    )


def run_once(question: str) -> str:
    """Ask one question and print each step of the loop.

    Args:
        question: The user's question.

    Returns:
        The final answer.
    """
    agent = build_agent()
    answer = ""
    for update in agent.stream({"messages": [("user", question)]}, stream_mode="updates"):
        for node, values in update.items():
            for message in values["messages"]:
                if getattr(message, "tool_calls", None):
                    calls = ", ".join(f"{c['name']}({c['args']})" for c in message.tool_calls)
                    print(f"  [{node}] calls {calls}")
                else:
                    print(f"  [{node}] {message.text[:100]}")
                    answer = message.text
    return answer


def run_with_memory() -> None:
    """Follow-up questions rely on the saved thread."""
    agent = build_agent(MemorySaver())
    config = graph_config("trip-42")

    for question in ["I'm Portuguese and going to Japan. Do I need a visa?", "And how much is 300 EUR there?"]:
        result = agent.invoke({"messages": [("user", question)]}, config)
        print(f"Q: {question}\nA: {result['messages'][-1].text}\n")


def run_with_limit() -> None:
    """Stop a run that takes too many steps.

    The prebuilt agent tracks the steps left under the recursion limit and
    answers with a fixed apology instead of starting a step it cannot finish.
    """
    agent = create_react_agent(
        init_chat_model(temperature=0),
        [convert_currency],
        prompt=lambda state: [
            SystemMessage("Convert the amount through every currency you know, one call at a time."),
            *state["messages"],
        ],
    )
    result = agent.invoke({"messages": [("user", "Convert 10 EUR around the world.")]}, {"recursion_limit": 4})
    tool_calls = sum(len(getattr(m, "tool_calls", None) or []) for m in result["messages"])
    logger.warning("agent_stopped", limit=4, tool_calls=tool_calls)
    print(f"Stopped after {tool_calls} tool calls: {result['messages'][-1].text}")


def main() -> None:
    """Run the ReAct agent examples."""
    print("=" * 60)
    print("ReAct Agent Examples")
    print("=" * 60)

    print("\n--- Single Question ---")
    answer = run_once("How much is 250 USD in JPY?")
    print(f"\nFinal Answer: {answer}")

    print("\n--- With Memory ---")
    run_with_memory()

    print("\n--- Recursion Limit ---")
    run_with_limit()


if __name__ == "__main__":
    main()
