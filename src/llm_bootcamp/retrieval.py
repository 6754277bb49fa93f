"""Retrieval helpers: chunking, indexing and prompt formatting.

Chunks are measured in tokens rather than characters so a chunk size means
the same thing for the splitter and for the prompt budget. Indexing goes into
LangChain's ``InMemoryVectorStore``, which needs no server and is enough for
the policy-sized corpora the tutorials use.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import InMemoryVectorStore
from langchain_text_splitters import RecursiveCharacterTextSplitter

from llm_bootcamp.chat_models import get_embeddings
from llm_bootcamp.core.errors import ValidationError
from llm_bootcamp.core.logging import get_logger
from llm_bootcamp.utils.tokens import get_encoding_for_model

logger = get_logger(__name__)


def create_text_splitter(
    chunk_size: int = 256,
    chunk_overlap: int = 32,
    model: str = "gpt-4o",
) -> RecursiveCharacterTextSplitter:
    """Recursive splitter measuring chunks with the model's tiktoken encoding.

    Raises:
        ValidationError: If the overlap is negative or not smaller than the chunk size.
    """
    if chunk_size < 1:
        raise ValidationError("chunk_size must be positive", field="chunk_size", value=chunk_size)
    if chunk_overlap < 0 or chunk_overlap >= chunk_size:
        raise ValidationError(
            "chunk_overlap must be at least 0 and smaller than chunk_size",
            field="chunk_overlap",
            value=chunk_overlap,
        )
    return RecursiveCharacterTextSplitter.from_tiktoken_encoder(
        encoding_name=get_encoding_for_model(model).name,
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
    )


def split_documents(
    documents: Iterable[Document],
    chunk_size: int = 256,
    chunk_overlap: int = 32,
    model: str = "gpt-4o",
) -> list[Document]:
    """Split documents into token-sized chunks.

    Each chunk keeps its source document's metadata plus a ``chunk_index``
    counting from 0 within that document.
    """
    splitter = create_text_splitter(chunk_size, chunk_overlap, model)
    chunks: list[Document] = []
    for document in documents:
        pieces = splitter.create_documents([document.page_content], [document.metadata])
        for index, piece in enumerate(pieces):
            piece.metadata["chunk_index"] = index
        chunks.extend(pieces)
    return chunks


def build_vector_store(
    documents: Sequence[Document] = (),
    embeddings: Embeddings | None = None,
) -> InMemoryVectorStore:
    """Index documents in an in-memory vector store.

    Args:
        documents: Documents or chunks to add.
        embeddings: Embedding model. Defaults to ``get_embeddings()``.
    """
    store = InMemoryVectorStore(embeddings or get_embeddings())
    if documents:
        store.add_documents(list(documents))
    logger.info("vector_store_built", documents=len(documents))
    return store


def metadata_filter(**expected: Any) -> Callable[[Document], bool]:
    """Predicate for ``similarity_search(filter=...)`` matching metadata values.

    Example:
        store.similarity_search("limit?", k=1, filter=metadata_filter(section="hotels"))
    """

    def matches(document: Document) -> bool:
        return all(document.metadata.get(key) == value for key, value in expected.items())

    return matches


def format_documents(documents: Sequence[Document]) -> str:
    """Join retrieved documents into one context block for a prompt."""
    parts = []
    for document in documents:
        title = document.metadata.get("title")
        content = " ".join(document.page_content.split())
        parts.append(f"[{title}] {content}" if title else content)
    return "\n\n".join(parts)
