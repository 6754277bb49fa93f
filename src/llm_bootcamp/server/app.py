"""FastAPI app streaming model and agent output to a browser.

Tokens are sent as server-sent events, one JSON object per ``data:`` line:

    data: {"type": "token", "id": "run-...", "content": "Hel"}
    data: {"type": "done", "id": "run-..."}

When the model fails the client gets ``{"type": "error", "message": ...}``
with the generic fallback message; the real error only goes to the log.
"""

import json
from collections.abc import AsyncIterator, Iterator
from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from fastapi.responses import StreamingResponse
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, convert_to_messages
from langgraph.pregel import Pregel
from langgraph.types import Command
from pydantic import BaseModel, Field

from llm_bootcamp.chat_models import init_chat_model, map_provider_error
from llm_bootcamp.core.config import get_settings, graph_config
from llm_bootcamp.core.errors import ConfigurationError
from llm_bootcamp.core.logging import LogContext, get_logger

logger = get_logger(__name__)

INTERRUPT = "__interrupt__"

ROLES = {"human": "user", "ai": "assistant", "system": "system", "tool": "tool"}


class ChatMessageIn(BaseModel):
    id: str | None = None
    role: Literal["system", "user", "assistant", "human", "ai"] = "user"
    content: str


class ChatMessageOut(BaseModel):
    id: str | None
    role: str
    content: str
    name: str | None = None


class ChatRequest(BaseModel):
    messages: list[ChatMessageIn] = Field(min_length=1)


class AgentRequest(BaseModel):
    message: str = Field(min_length=1)


class ResumeRequest(BaseModel):
    value: Any = None


class AgentResponse(BaseModel):
    thread_id: str
    messages: list[ChatMessageOut]
    interrupts: list[Any] = Field(default_factory=list)
    next: list[str] = Field(default_factory=list)


def _message_out(message: BaseMessage) -> ChatMessageOut:
    return ChatMessageOut(
        id=message.id,
        role=ROLES.get(message.type, message.type),
        content=message.text,
        name=message.name,
    )


def _messages_in(request: ChatRequest) -> list[BaseMessage]:
    return convert_to_messages([m.model_dump(exclude_none=True) for m in request.messages])


def _sse(event: dict[str, Any]) -> str:
    return f"data: {json.dumps(event, default=str)}\n\n"


def _log_failure(event: str, error: Exception, **kwargs: Any) -> None:
    mapped = map_provider_error(error)
    logger.error(event, error=str(mapped), error_type=type(mapped).__name__, **kwargs)


def create_app(model: BaseChatModel | None = None, agent: Pregel | None = None) -> FastAPI:
    """Create the web app.

    Args:
        model: Chat model behind ``/chat``. Built from settings on first use
            when omitted.
        agent: Compiled LangGraph agent behind ``/agent/...``. It must have a
            checkpointer so threads survive between requests.

    Raises:
        ConfigurationError: If the agent has no checkpointer.
    """
    if agent is not None and agent.checkpointer is None:
        raise ConfigurationError("The agent served over HTTP needs a checkpointer")

    app = FastAPI(title="LLM Bootcamp", version="0.1.0")
    state: dict[str, Any] = {"model": model}
    fallback = get_settings().stream_error_message

    def get_model() -> BaseChatModel:
        if state["model"] is None:
            state["model"] = init_chat_model()
        return state["model"]

    def require_agent() -> Pregel:
        if agent is None:
            raise HTTPException(status_code=404, detail="No agent is configured")
        return agent

    def agent_response(thread_id: str, result: dict[str, Any]) -> AgentResponse:
        snapshot = require_agent().get_state(graph_config(thread_id))
        return AgentResponse(
            thread_id=thread_id,
            messages=[_message_out(m) for m in result.get("messages") or []],
            interrupts=[pending.value for pending in result.get(INTERRUPT) or []],
            next=list(snapshot.next),
        )

    @app.get("/healthz")
    def healthz() -> dict[str, Any]:
        return {"status": "ok", "agent": agent is not None}

    @app.post("/chat", response_model=ChatMessageOut)
    async def chat(request: ChatRequest) -> ChatMessageOut:
        try:
            reply = await get_model().ainvoke(_messages_in(request))
        except Exception as e:  # noqa: BLE001
            _log_failure("chat_failed", e)
            raise HTTPException(status_code=502, detail=fallback) from e
        return _message_out(reply)

    @app.post("/chat/stream")
    async def chat_stream(request: ChatRequest) -> StreamingResponse:
        messages = _messages_in(request)

        async def events() -> AsyncIterator[str]:
            message_id = None
            try:
                async for chunk in get_model().astream(messages):
                    message_id = chunk.id
                    if chunk.text:
                        yield _sse({"type": "token", "id": chunk.id, "content": chunk.text})
            except Exception as e:  # noqa: BLE001
                _log_failure("chat_stream_failed", e)
                yield _sse({"type": "error", "message": fallback})
                return
            yield _sse({"type": "done", "id": message_id})

        return StreamingResponse(events(), media_type="text/event-stream")

    @app.post("/agent/threads/{thread_id}/invoke", response_model=AgentResponse)
    def agent_invoke(thread_id: str, request: AgentRequest) -> AgentResponse:
        graph = require_agent()
        try:
            with LogContext(thread_id=thread_id):
                result = graph.invoke({"messages": [HumanMessage(request.message)]}, graph_config(thread_id))
        except Exception as e:  # noqa: BLE001
            _log_failure("agent_failed", e, thread_id=thread_id)
            raise HTTPException(status_code=502, detail=fallback) from e
        return agent_response(thread_id, result)

    @app.post("/agent/threads/{thread_id}/resume", response_model=AgentResponse)
    def agent_resume(thread_id: str, request: ResumeRequest) -> AgentResponse:
        graph = require_agent()
        config = graph_config(thread_id)
        snapshot = graph.get_state(config)
        if not snapshot.next:
            raise HTTPException(status_code=409, detail="Nothing to resume on this thread")

        command = Command(resume=request.value) if snapshot.interrupts else None
        try:
            with LogContext(thread_id=thread_id):
                result = graph.invoke(command, config)
        except Exception as e:  # noqa: BLE001
            _log_failure("agent_resume_failed", e, thread_id=thread_id)
            raise HTTPException(status_code=502, detail=fallback) from e
        return agent_response(thread_id, result)

    @app.get("/agent/threads/{thread_id}/state", response_model=AgentResponse)
    def agent_state(thread_id: str) -> AgentResponse:
        snapshot = require_agent().get_state(graph_config(thread_id))
        return AgentResponse(
            thread_id=thread_id,
            messages=[_message_out(m) for m in snapshot.values.get("messages") or []],
            interrupts=[pending.value for pending in snapshot.interrupts],
            next=list(snapshot.next),
        )

    @app.post("/agent/threads/{thread_id}/stream")
    def agent_stream(thread_id: str, request: AgentRequest) -> StreamingResponse:
        graph = require_agent()
        config = graph_config(thread_id)

        def events() -> Iterator[str]:
            try:
                # subgraphs=True so tokens from agents nested in a swarm or supervisor come through
                for namespace, mode, payload in graph.stream(
                    {"messages": [HumanMessage(request.message)]},
                    config,
                    stream_mode=["messages", "updates"],
                    subgraphs=True,
                ):
                    if mode == "updates":
                        if not namespace and INTERRUPT in payload:
                            yield _sse({"type": "interrupt", "values": [pending.value for pending in payload[INTERRUPT]]})
                        continue
                    chunk, metadata = payload
                    if isinstance(chunk, AIMessage) and chunk.text:
                        yield _sse(
                            {
                                "type": "token",
                                "id": chunk.id,
                                "content": chunk.text,
                                "agent": namespace[0].split(":")[0] if namespace else None,
                                "node": metadata.get("langgraph_node"),
                            }
                        )
            except Exception as e:  # noqa: BLE001
                _log_failure("agent_stream_failed", e, thread_id=thread_id)
                yield _sse({"type": "error", "message": fallback})
                return
            yield _sse({"type": "done"})

        return StreamingResponse(events(), media_type="text/event-stream")

    logger.info("app_created", agent=agent is not None)
    return app
