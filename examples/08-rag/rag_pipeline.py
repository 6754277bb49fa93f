"""Retrieval-Augmented Generation Example.

The model does not know our travel policy, so we give it the relevant parts
with every question. Policy documents are split into token-sized chunks,
embedded once into an in-memory vector store, and at question time the
closest chunks are pasted into the prompt.

Features demonstrated:
- Token-sized chunks from a recursive text splitter, with overlap
- OpenAI embeddings and LangChain's InMemoryVectorStore
- Similarity search with scores and metadata filters
- A retriever | prompt | model | parser chain
- Retrieval as a tool for an agent
"""

from langchain_core.documents import Document
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import RunnableParallel, RunnablePassthrough
from langchain_core.vectorstores import InMemoryVectorStore
from langgraph.prebuilt import create_react_agent

from llm_bootcamp import (
    build_vector_store,
    count_tokens,
    format_documents,
    get_logger,
    init_chat_model,
    metadata_filter,
    setup_logging,
    split_documents,
)

setup_logging()
logger = get_logger(__name__)


# Sample knowledge base (in production, this would come from files/databases)
POLICY_DOCUMENTS = [
    Document(
        page_content="""Flights under six hours are booked in economy. Flights of six hours or
        more may be booked in premium economy. Business class needs written approval from a
        director. Always choose the cheapest fare that arrives before the first meeting.""",
        metadata={"title": "Flight class", "section": "flights"},
    ),
    Document(
        page_content="""Hotels are capped at 180 EUR per night in Western Europe and 140 EUR
        elsewhere. Breakfast may be included. Minibar, laundry and spa charges are personal
        expenses. Stays longer than 14 nights should be booked as serviced apartments.""",
        metadata={"title": "Hotel limits", "section": "hotels"},
    ),
    Document(
        page_content="""Meals are reimbursed up to 60 EUR per day with itemised receipts.
        Alcohol is never reimbursed. Client dinners need the client's name and company on
        the expense claim.""",
        metadata={"title": "Meals", "section": "expenses"},
    ),
    Document(
        page_content="""Trains are preferred over flights for journeys under four hours.
        First class rail is allowed for journeys over three hours. Taxis are reimbursed when
        public transport is unavailable or after 22:00.""",
        metadata={"title": "Ground transport", "section": "transport"},
    ),
]


def build_store() -> InMemoryVectorStore:
    """Split the policy and index the chunks.

    Returns:
        The populated vector store.
    """
    chunks = split_documents(POLICY_DOCUMENTS, chunk_size=60, chunk_overlap=15)
    for chunk in chunks[:3]:
        print(f"  [{chunk.metadata['title']} #{chunk.metadata['chunk_index']}] {count_tokens(chunk.page_content)} tokens")

    store = build_vector_store(chunks)
    logger.info("knowledge_base_indexed", documents=len(POLICY_DOCUMENTS), chunks=len(chunks))
    return store


def search(store: InMemoryVectorStore) -> None:
    """Plain similarity search, with and without a filter."""
    for doc, score in store.similarity_search_with_score("Can I fly business class?", k=2):
        print(f"  {score:.3f} {doc.metadata['title']}: {doc.page_content[:70]}...")

    hotel_only = store.similarity_search("what is the limit?", k=1, filter=metadata_filter(section="hotels"))
    print(f"  filtered: {hotel_only[0].page_content[:70]}...")


def rag_chain(store: InMemoryVectorStore):
    """Build a chain that answers from retrieved context."""
    prompt = ChatPromptTemplate.from_messages(
        [
            (
                "system",
                "Answer using only the travel policy below. If the policy does not cover it, say so.\n\n"
                "Policy:\n{context}",
            ),
            ("human", "{question}"),
        ]
    )
    retrieve = RunnableParallel(
        context=store.as_retriever(search_kwargs={"k": 3}) | format_documents,
        question=RunnablePassthrough(),
    )
    return retrieve | prompt | init_chat_model(temperature=0) | StrOutputParser()


def policy_agent(store: InMemoryVectorStore):
    """An agent that decides for itself when to look up the policy."""

    def search_policy(query: str) -> str:
        """Search the company travel policy.

        Args:
            query: What to look up.
        """
        return format_documents(store.similarity_search(query, k=2))

    return create_react_agent(
        init_chat_model(temperature=0),
        [search_policy],
        prompt="You help employees plan trips within the travel policy. Look rules up before answering.",
    )


def main() -> None:
    """Run the RAG example."""
    print("=" * 60)
    print("RAG Example")
    print("=" * 60)

    print("\n--- Indexing ---")
    store = build_store()

    print("\n--- Similarity Search ---")
    search(store)

    print("\n--- RAG Chain ---")
    chain = rag_chain(store)
    for question in [
        "Can I take a taxi from the airport at midnight?",
        "Is a 200 EUR hotel in Paris fine?",
        "Can I bring my dog?",
    ]:
        print(f"\nQ: {question}\nA: {chain.invoke(question)}")

    print("\n--- Retrieval As A Tool ---")
    result = policy_agent(store).invoke(
        {"messages": [("user", "I have a 7 hour flight to Singapore. Which class, and what hotel budget?")]}
    )
    print(result["messages"][-1].text)


if __name__ == "__main__":
    main()
