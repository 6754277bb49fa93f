"""Chains Example.

This example composes prompts, chat models and output parsers with the ``|``
operator. Each step's output becomes the next step's input, so a chain reads
top to bottom like the data flow it describes.

Features demonstrated:
- prompt | model | parser chains
- Structured output with PydanticOutputParser
- Parallel branches and RunnablePassthrough.assign
- A generic fallback message when the model call fails
"""

from langchain_core.output_parsers import PydanticOutputParser, StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import RunnableLambda, RunnableParallel, RunnablePassthrough
from pydantic import BaseModel, Field

from llm_bootcamp import get_logger, get_settings, init_chat_model, map_provider_error, setup_logging

setup_logging()
logger = get_logger(__name__)


class TripIdea(BaseModel):
    """A short trip suggestion."""

    destination: str = Field(description="City and country")
    days: int = Field(description="Recommended trip length in days", ge=1)
    highlights: list[str] = Field(description="Three things not to miss")


def simple_chain() -> str:
    """Prompt, model and string parser in one line.

    Returns:
        The model's answer.
    """
    prompt = ChatPromptTemplate.from_messages(
        [
            ("system", "You are a concise travel guide. Answer in two sentences."),
            ("human", "What is {city} best known for?"),
        ]
    )
    chain = prompt | init_chat_model(temperature=0.3) | StrOutputParser()
    print(f"Chain: {chain!r}")

    return chain.invoke({"city": "Kyoto"})


def structured_chain() -> TripIdea:
    """Ask for JSON and parse it into a pydantic model.

    Returns:
        The parsed trip idea.
    """
    parser = PydanticOutputParser(pydantic_object=TripIdea)
    prompt = ChatPromptTemplate.from_messages(
        [
            ("system", "You plan short trips.\n{format_instructions}"),
            ("human", "Suggest a trip for someone who loves {interest}."),
        ]
    ).partial(format_instructions=parser.get_format_instructions())

    chain = prompt | init_chat_model(temperature=0.5) | parser
    idea = chain.invoke({"interest": "street food"})
    logger.info("trip_idea_parsed", destination=idea.destination, days=idea.days)
    return idea


def parallel_chain() -> dict[str, str]:
    """Run two prompts on the same input and combine the results.

    Returns:
        Dict with the city plus both answers.
    """
    model = init_chat_model(temperature=0.3)
    parser = StrOutputParser()

    food = ChatPromptTemplate.from_messages([("human", "Name one dish to try in {city}. One line.")])
    sights = ChatPromptTemplate.from_messages([("human", "Name one sight to see in {city}. One line.")])

    chain = RunnablePassthrough.assign(
        food=food | model | parser,
        sight=sights | model | parser,
    )
    return chain.invoke({"city": "Mexico City"})


def chain_with_fallback(question: str) -> str:
    """Catch model failures and show a generic message instead.

    Args:
        question: The user's question.

    Returns:
        The answer, or the fallback message.
    """
    chain = (
        RunnableLambda(lambda text: [("human", text)])
        | init_chat_model()
        | StrOutputParser()
    )
    try:
        return chain.invoke(question)
    except Exception as e:  # noqa: BLE001
        error = map_provider_error(e)
        logger.error("chain_failed", error=str(error), error_type=type(error).__name__)
        return get_settings().stream_error_message


def main() -> None:
    """Run the chain examples."""
    print("=" * 60)
    print("Chain Examples")
    print("=" * 60)

    print("\n--- Simple Chain ---")
    print(simple_chain())

    print("\n--- Structured Output ---")
    idea = structured_chain()
    print(f"{idea.destination} ({idea.days} days)")
    for highlight in idea.highlights:
        print(f"  - {highlight}")

    print("\n--- Parallel Branches ---")
    result = parallel_chain()
    print(f"{result['city']}: eat {result['food']} / see {result['sight']}")

    print("\n--- Fallback On Failure ---")
    print(chain_with_fallback("Is it safe to swim in the Seine?"))

    branches = RunnableParallel(upper=str.upper, length=len)
    print(f"\nRunnableParallel without a model: {branches.invoke('lisbon')}")


if __name__ == "__main__":
    main()
