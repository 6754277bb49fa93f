"""Supervisor: one coordinating agent delegating to worker agents."""

from collections.abc import Callable, Sequence
from typing import Any, Literal

from langchain_core.language_models import BaseChatModel
from langchain_core.runnables import RunnableConfig
from langchain_core.tools import BaseTool
from langgraph.graph import END, START, StateGraph
from langgraph.prebuilt import create_react_agent
from langgraph.pregel import Pregel

from llm_bootcamp.agents.handoff import SwarmState, create_handoff_tool
from llm_bootcamp.agents.swarm import agent_names
from llm_bootcamp.core.errors import ValidationError
from llm_bootcamp.core.logging import get_logger

logger = get_logger(__name__)

OutputMode = Literal["last_message", "full_history"]
OUTPUT_MODES = ("last_message", "full_history")


def _worker_node(agent: Pregel, output_mode: OutputMode) -> Callable[..., dict[str, Any]]:
    def call_agent(state: dict[str, Any], config: RunnableConfig) -> dict[str, Any]:
        output = agent.invoke(state, config)
        messages = output["messages"]
        logger.info("worker_finished", agent=agent.name, messages=len(messages))
        if output_mode == "last_message":
            messages = messages[-1:]
        return {"messages": messages}

    return call_agent


def create_supervisor(
    agents: Sequence[Pregel],
    model: BaseChatModel,
    prompt: str | None = None,
    tools: Sequence[BaseTool] | None = None,
    output_mode: OutputMode = "last_message",
    supervisor_name: str = "supervisor",
    state_schema: type = SwarmState,
) -> StateGraph:
    """Build a supervisor graph over worker agents.

    The supervisor is a prebuilt ReAct agent whose tools include one handoff
    tool per worker. A worker runs on the conversation so far and always
    returns control to the supervisor, which decides whether to delegate
    again or answer the user.

    Args:
        agents: Named worker agents.
        model: Model driving the supervisor.
        prompt: Supervisor system prompt.
        tools: Extra tools for the supervisor itself.
        output_mode: "last_message" adds only each worker's final reply to the
            shared conversation, "full_history" adds everything it produced.
        supervisor_name: Node name and message name of the supervisor.
        state_schema: Graph state; must include ``messages`` and ``active_agent``.

    Raises:
        ValidationError: On unnamed or duplicate workers or an unknown output mode.
    """
    if output_mode not in OUTPUT_MODES:
        raise ValidationError(
            f"Unknown output_mode {output_mode!r}; use one of {OUTPUT_MODES}",
            field="output_mode",
            value=output_mode,
        )
    names = agent_names(agents)
    if supervisor_name in names:
        raise ValidationError(
            f"Worker name {supervisor_name!r} clashes with the supervisor",
            field="supervisor_name",
            value=supervisor_name,
        )

    handoffs = [create_handoff_tool(name) for name in names]
    supervisor = create_react_agent(
        model,
        [*handoffs, *(tools or [])],
        prompt=prompt,
        name=supervisor_name,
    )

    builder = StateGraph(state_schema)
    builder.add_node(supervisor_name, supervisor, destinations=(*names, END))
    builder.add_edge(START, supervisor_name)
    for agent in agents:
        builder.add_node(agent.name, _worker_node(agent, output_mode))
        builder.add_edge(agent.name, supervisor_name)
    return builder
