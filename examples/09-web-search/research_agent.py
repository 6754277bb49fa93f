"""Web Research Agent Example.

Models only know what they were trained on. For anything recent (opening
hours, strikes, events next week) the agent needs to search the web. The
search tool returns titles, URLs and snippets, and the agent is asked to
cite the URLs it used.

Requires TAVILY_API_KEY in addition to OPENAI_API_KEY.

Features demonstrated:
- WebSearchClient used directly
- create_web_search_tool inside a ReAct agent
- Search failures returned to the model as tool errors
"""

from langgraph.prebuilt import create_react_agent

from llm_bootcamp import WebSearchClient, create_web_search_tool, get_logger, init_chat_model, setup_logging
from llm_bootcamp.core.errors import BootcampError, ConfigurationError

setup_logging()
logger = get_logger(__name__)


RESEARCH_PROMPT = """You are a travel researcher.
Search the web before answering anything that may have changed recently.
Keep answers short and list the URLs you relied on at the end."""


def direct_search(client: WebSearchClient) -> None:
    """Call the search API without a model."""
    for result in client.search("Lisbon tram 28 timetable", max_results=3):
        print(f"  {result.score:.2f} {result.title}")
        print(f"       {result.url}")


def research(client: WebSearchClient, question: str) -> str:
    """Answer a question with a search-enabled agent."""
    agent = create_react_agent(
        init_chat_model(temperature=0),
        [create_web_search_tool(client, max_results=4)],
        prompt=RESEARCH_PROMPT,
    )
    result = agent.invoke({"messages": [("user", question)]})

    searches = [
        call["args"]["query"]
        for message in result["messages"]
        for call in getattr(message, "tool_calls", None) or []
        if call["name"] == "web_search"
    ]
    logger.info("research_finished", searches=len(searches))
    for query in searches:
        print(f"  searched: {query}")
    return result["messages"][-1].text


def main() -> None:
    """Run the web research example."""
    print("=" * 60)
    print("Web Research Example")
    print("=" * 60)

    try:
        client = WebSearchClient()
    except ConfigurationError as e:
        print(f"Search is not configured: {e}")
        return

    with client:
        print("\n--- Direct Search ---")
        try:
            direct_search(client)
        except BootcampError as e:
            print(f"Search failed: {e}")
            return

        print("\n--- Research Agent ---")
        answer = research(client, "Are there any public transport strikes planned in Lisbon this month?")
        print(f"\n{answer}")


if __name__ == "__main__":
    main()
