"""Tool Calling Example.

Tools let the model ask the application to do something: look up flights,
check the weather, book a hotel. The model never runs code itself. It
returns a tool call with JSON arguments, the application runs the function,
and the result goes back to the model as a tool message.

The booking tool takes a structured request payload described by a pydantic
model; the same model produces the JSON schema the model sees and validates
the arguments it sends back.

Features demonstrated:
- @tool with type hints and Google-style docstrings
- A pydantic args_schema for a travel-booking payload
- bind_tools and reading tool calls off the reply
- Running the tool loop by hand, then with ToolNode
"""

import json
from datetime import date
from typing import Literal

from langchain_core.messages import HumanMessage, SystemMessage, ToolMessage
from langchain_core.tools import tool
from langgraph.graph import END, START, MessagesState, StateGraph
from langgraph.prebuilt import ToolNode, tools_condition
from pydantic import BaseModel, Field, ValidationError

from llm_bootcamp import get_logger, init_chat_model, setup_logging

setup_logging()
logger = get_logger(__name__)


class Traveler(BaseModel):
    first_name: str
    last_name: str
    passport_country: str = Field(description="ISO country code, e.g. PT")


class BookingRequest(BaseModel):
    """Payload for a combined flight and hotel booking."""

    origin: str = Field(description="IATA code of the departure airport")
    destination: str = Field(description="IATA code of the arrival airport")
    departure: date
    return_date: date | None = Field(default=None, description="Omit for one-way trips")
    cabin: Literal["economy", "premium", "business"] = "economy"
    travelers: list[Traveler] = Field(min_length=1)
    hotel_nights: int = Field(default=0, ge=0)


@tool
def search_flights(origin: str, destination: str, day: str) -> list[dict]:
    """Search available flights.

    Args:
        origin: IATA code of the departure airport.
        destination: IATA code of the arrival airport.
        day: Travel date as YYYY-MM-DD.
    """
    # Fixed data so the tutorial runs the same every time
    return [
        {"flight": "TP1350", "origin": origin, "destination": destination, "day": day, "price_eur": 189},
        {"flight": "FR8342", "origin": origin, "destination": destination, "day": day, "price_eur": 74},
    ]


@tool
def get_weather(city: str) -> str:
    """Get the weather forecast for a city.

    Args:
        city: City name.
    """
    return f"{city}: 22C, light breeze, no rain expected"


@tool(args_schema=BookingRequest)
def book_trip(
    origin: str,
    destination: str,
    departure: date,
    return_date: date | None,
    cabin: str,
    travelers: list[Traveler],
    hotel_nights: int,
) -> dict:
    """Book flights (and optionally a hotel) for one or more travelers."""
    names = ", ".join(f"{t.first_name} {t.last_name}" for t in travelers)
    logger.info("trip_booked", origin=origin, destination=destination, travelers=len(travelers))
    return {
        "confirmation": f"BK-{origin}{destination}-{departure:%m%d}",
        "travelers": names,
        "cabin": cabin,
        "return": return_date.isoformat() if return_date else None,
        "hotel_nights": hotel_nights,
    }


TOOLS = [search_flights, get_weather, book_trip]


def show_schemas() -> None:
    """Print the JSON schema the model receives for each tool."""
    for t in TOOLS:
        print(f"{t.name}: {t.description}")
        print(json.dumps(t.tool_call_schema.model_json_schema(), indent=2, default=str)[:400])


def validate_payload() -> None:
    """Arguments are checked against the schema before the function runs."""
    payload = {
        "origin": "LIS",
        "destination": "NRT",
        "departure": "2025-04-02",
        "return_date": "2025-04-16",
        "cabin": "premium",
        "travelers": [{"first_name": "Ana", "last_name": "Costa", "passport_country": "PT"}],
        "hotel_nights": 14,
    }
    print(f"Valid payload -> {book_trip.invoke(payload)}")

    try:
        book_trip.invoke({**payload, "travelers": []})
    except ValidationError as e:
        print(f"Invalid payload -> {type(e).__name__}")


def manual_tool_loop(question: str) -> str:
    """Call the model, run its tool calls, send the results back.

    Args:
        question: The user's request.

    Returns:
        The model's final answer.
    """
    model = init_chat_model(temperature=0).bind_tools(TOOLS)
    by_name = {t.name: t for t in TOOLS}
    messages = [SystemMessage("You are a booking assistant. Use tools for facts."), HumanMessage(question)]

    for _ in range(5):
        reply = model.invoke(messages)
        messages.append(reply)
        if not reply.tool_calls:
            return reply.text

        for call in reply.tool_calls:
            logger.info("tool_requested", tool=call["name"], arguments=call["args"])
            try:
                result = by_name[call["name"]].invoke(call["args"])
                content = json.dumps(result, default=str)
            except (KeyError, ValidationError) as e:
                content = f"Error: {e}"
            messages.append(ToolMessage(content, tool_call_id=call["id"], name=call["name"]))

    return "Stopped after too many tool calls."


def tool_node_graph(question: str) -> str:
    """The same loop as a graph: model node, ToolNode, tools_condition.

    Args:
        question: The user's request.

    Returns:
        The model's final answer.
    """
    model = init_chat_model(temperature=0).bind_tools(TOOLS)

    def assistant(state: MessagesState) -> dict:
        return {"messages": [model.invoke(state["messages"])]}

    graph = StateGraph(MessagesState)
    graph.add_node("assistant", assistant)
    graph.add_node("tools", ToolNode(TOOLS))
    graph.add_edge(START, "assistant")
    graph.add_conditional_edges("assistant", tools_condition, ["tools", END])
    graph.add_edge("tools", "assistant")
    app = graph.compile()

    result = app.invoke({"messages": [("user", question)]})
    return result["messages"][-1].text


def main() -> None:
    """Run the tool calling examples."""
    print("=" * 60)
    print("Tool Calling Examples")
    print("=" * 60)

    print("\n--- Tool Schemas ---")
    show_schemas()

    print("\n--- Payload Validation ---")
    validate_payload()

    print("\n--- Manual Tool Loop ---")
    print(manual_tool_loop("Find me the cheapest flight from Lisbon to Madrid on 2025-05-10."))

    print("\n--- ToolNode Graph ---")
    print(
        tool_node_graph(
            "Book economy LIS to BCN on 2025-06-01 for Rui Alves (PT), back 2025-06-05, with 4 hotel nights."
        )
    )


if __name__ == "__main__":
    main()
