"""Supervisor Multi-Agent Example.

One agent, the supervisor, talks to the user and decides who does the work.
Each worker is an ordinary ReAct agent with its own tools. The supervisor
gets one handoff tool per worker (``transfer_to_flight_agent`` and so on);
calling it runs that worker on the conversation, and the worker's reply
comes back to the supervisor, which may delegate again or answer.

Features demonstrated:
- create_supervisor over named create_react_agent workers
- Travel-booking request payloads passed to worker tools
- output_mode="last_message" vs "full_history"
- Watching delegation with stream_mode="updates"
"""

from langchain_core.tools import tool
from langgraph.prebuilt import create_react_agent
from pydantic import BaseModel, Field

from llm_bootcamp import (
    create_supervisor,
    get_logger,
    get_settings,
    init_chat_model,
    map_provider_error,
    setup_logging,
)

setup_logging()
logger = get_logger(__name__)


class FlightBooking(BaseModel):
    """Request payload for booking a flight."""

    origin: str = Field(description="IATA code, e.g. LIS")
    destination: str = Field(description="IATA code, e.g. CDG")
    date: str = Field(description="YYYY-MM-DD")
    passengers: int = Field(default=1, ge=1, le=9)


class HotelBooking(BaseModel):
    """Request payload for booking a hotel."""

    city: str
    check_in: str = Field(description="YYYY-MM-DD")
    nights: int = Field(ge=1)
    guests: int = Field(default=1, ge=1)


@tool(args_schema=FlightBooking)
def book_flight(origin: str, destination: str, date: str, passengers: int) -> dict:
    """Book a flight."""
    return {"status": "confirmed", "pnr": f"{origin}{destination}{date[-2:]}", "passengers": passengers}


@tool(args_schema=HotelBooking)
def book_hotel(city: str, check_in: str, nights: int, guests: int) -> dict:
    """Book a hotel room."""
    return {"status": "confirmed", "hotel": f"Hotel Central {city}", "check_in": check_in, "nights": nights}


def build_team(output_mode: str = "last_message"):
    """Compile the supervisor and its two workers."""
    model = init_chat_model(temperature=0)

    flight_agent = create_react_agent(
        model,
        [book_flight],
        prompt="You book flights. Confirm the booking reference when done.",
        name="flight_agent",
    )
    hotel_agent = create_react_agent(
        model,
        [book_hotel],
        prompt="You book hotels. Confirm the hotel name when done.",
        name="hotel_agent",
    )

    graph = create_supervisor(
        [flight_agent, hotel_agent],
        model,
        prompt=(
            "You manage a travel desk. Delegate flights to flight_agent and hotels to hotel_agent, "
            "one at a time. When everything is booked, summarise for the user."
        ),
        output_mode=output_mode,
    )
    return graph.compile()


def run(request: str, output_mode: str = "last_message") -> None:
    """Stream a request through the team and print who did what.

    Args:
        request: The user's travel request.
        output_mode: How much of each worker's history is kept.
    """
    app = build_team(output_mode)
    try:
        for update in app.stream({"messages": [("user", request)]}, stream_mode="updates"):
            for node, values in update.items():
                if not values or not values.get("messages"):
                    continue
                last = values["messages"][-1]
                print(f"  [{node}] {last.text[:120] or '(tool call)'}")
    except Exception as e:  # noqa: BLE001
        error = map_provider_error(e)
        logger.error("team_failed", error=str(error), error_type=type(error).__name__)
        print(get_settings().stream_error_message)


def main() -> None:
    """Run the supervisor example."""
    print("=" * 60)
    print("Supervisor Example")
    print("=" * 60)

    request = "Book 2 seats from LIS to CDG on 2025-09-12 and a hotel in Paris for 3 nights from that day."

    print("\n--- last_message ---")
    run(request)

    print("\n--- full_history ---")
    run(request, output_mode="full_history")


if __name__ == "__main__":
    main()
