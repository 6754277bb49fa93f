"""Prompt Templates Example.

This example shows how prompts are built from reusable templates instead of
f-strings scattered through the code. Nothing here calls a model, so it runs
without an API key.

Features demonstrated:
- PromptTemplate with named variables
- Partial templates for values known up front
- ChatPromptTemplate with system and human messages
- MessagesPlaceholder for splicing in a conversation
"""

from datetime import date

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder, PromptTemplate

from llm_bootcamp import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


def string_template() -> str:
    """Format a plain string template.

    Returns:
        The rendered prompt.
    """
    template = PromptTemplate.from_template(
        "Suggest {count} things to do in {city} for someone who likes {interest}."
    )
    print(f"Variables: {template.input_variables}")

    prompt = template.format(count=3, city="Lisbon", interest="architecture")
    print(f"Rendered: {prompt}")
    return prompt


def partial_template() -> str:
    """Fill in today's date once and reuse the template.

    Returns:
        The rendered prompt.
    """
    template = PromptTemplate.from_template("Today is {today}. Is {city} busy this week?")
    dated = template.partial(today=date.today().isoformat())

    print(f"Still required: {dated.input_variables}")
    return dated.format(city="Porto")


def chat_template() -> list[BaseMessage]:
    """Render a chat template into messages.

    Returns:
        The rendered messages.
    """
    template = ChatPromptTemplate.from_messages(
        [
            ("system", "You are a travel assistant for {company}. Answer in {language}."),
            MessagesPlaceholder("history"),
            ("human", "{question}"),
        ]
    )
    print(f"Variables: {template.input_variables}")

    messages = template.format_messages(
        company="Northwind Travel",
        language="English",
        history=[
            ("human", "I want to visit Japan in April."),
            ("ai", "April is cherry blossom season, a great choice."),
        ],
        question="Which city should I start in?",
    )
    for message in messages:
        print(f"  [{message.type}] {message.content}")
    return messages


def missing_variable() -> None:
    """Show the error raised for a missing variable.

    Templates check their inputs, so a forgotten variable fails before any
    model is called.
    """
    template = ChatPromptTemplate.from_messages([("human", "Book {nights} nights in {city}")])
    try:
        template.invoke({"city": "Kyoto"})
    except KeyError as e:
        logger.warning("prompt_incomplete", error=str(e))
        print(f"Caught: {e}")


def main() -> None:
    """Run the prompt template examples."""
    print("=" * 60)
    print("Prompt Template Examples")
    print("=" * 60)

    print("\n--- String Template ---")
    string_template()

    print("\n--- Partial Template ---")
    print(partial_template())

    print("\n--- Chat Template ---")
    chat_template()

    print("\n--- Missing Variables ---")
    missing_variable()


if __name__ == "__main__":
    main()
