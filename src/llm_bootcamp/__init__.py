"""LLM Bootcamp - glue code for the LangChain and LangGraph tutorials.

The framework pieces (prompt templates, runnables, tools, state graphs,
checkpointers, the prebuilt ReAct agent, vector stores) come straight from
``langchain_core`` and ``langgraph``. This package only holds what every
tutorial shares: settings, structured logging, retries, a chat model factory
with call logging, token helpers, retrieval helpers, a web search tool,
multi-agent builders and a FastAPI streaming server.

Quick start:
    from langchain_core.output_parsers import StrOutputParser
    from langchain_core.prompts import ChatPromptTemplate

    from llm_bootcamp import init_chat_model

    prompt = ChatPromptTemplate.from_messages([
        ("system", "You are a concise travel guide."),
        ("human", "Suggest one thing to do in {city}."),
    ])
    chain = prompt | init_chat_model("openai:gpt-4o-mini") | StrOutputParser()
    print(chain.invoke({"city": "Lisbon"}))
"""

__version__ = "0.1.0"

# Core utilities
from llm_bootcamp.core import (
    BootcampError,
    Settings,
    get_logger,
    get_settings,
    graph_config,
    setup_logging,
)

# Models
from llm_bootcamp.callbacks import LLMCallLogger
from llm_bootcamp.chat_models import get_embeddings, init_chat_model, map_provider_error

# Multi-agent graphs
from llm_bootcamp.agents import SwarmState, create_handoff_tool, create_supervisor, create_swarm

# Retrieval and search
from llm_bootcamp.retrieval import build_vector_store, format_documents, metadata_filter, split_documents
from llm_bootcamp.search import WebSearchClient, create_web_search_tool

# Token utilities
from llm_bootcamp.utils import count_tokens, trim_history

__all__ = [
    # Version
    "__version__",
    # Core
    "BootcampError",
    "Settings",
    "get_logger",
    "get_settings",
    "graph_config",
    "setup_logging",
    # Models
    "LLMCallLogger",
    "get_embeddings",
    "init_chat_model",
    "map_provider_error",
    # Multi-agent graphs
    "SwarmState",
    "create_handoff_tool",
    "create_supervisor",
    "create_swarm",
    # Retrieval and search
    "build_vector_store",
    "format_documents",
    "metadata_filter",
    "split_documents",
    "WebSearchClient",
    "create_web_search_tool",
    # Utils
    "count_tokens",
    "trim_history",
]
