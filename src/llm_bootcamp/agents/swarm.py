"""Swarm: peer agents that hand the conversation to each other."""

from collections.abc import Sequence
from typing import Any

from langgraph.graph import START, StateGraph
from langgraph.pregel import Pregel

from llm_bootcamp.agents.handoff import SwarmState
from llm_bootcamp.core.errors import ValidationError
from llm_bootcamp.core.logging import get_logger

logger = get_logger(__name__)

# Name a compiled graph gets when none is given
DEFAULT_GRAPH_NAME = "LangGraph"


def agent_names(agents: Sequence[Pregel]) -> list[str]:
    """Return agent names, checking each agent is named exactly once."""
    names: list[str] = []
    for agent in agents:
        if not agent.name or agent.name == DEFAULT_GRAPH_NAME:
            raise ValidationError("Every agent in a multi-agent graph needs a name", field="name")
        if agent.name in names:
            raise ValidationError(f"Agent name {agent.name!r} is used twice", field="name", value=agent.name)
        names.append(agent.name)
    return names


def create_swarm(
    agents: Sequence[Pregel],
    default_active_agent: str,
    state_schema: type = SwarmState,
) -> StateGraph:
    """Build a swarm of agents that hand off to each other.

    Each user turn goes to the agent that was active when the previous turn
    ended (``default_active_agent`` on a new thread). Agents move the
    conversation with handoff tools; there is no central coordinator.

    Compile the result with a checkpointer so the active agent is remembered
    between turns.

    Raises:
        ValidationError: If agents are unnamed or duplicated, or the default is unknown.
    """
    names = agent_names(agents)
    if default_active_agent not in names:
        raise ValidationError(
            f"Default active agent {default_active_agent!r} is not one of {names}",
            field="default_active_agent",
            value=default_active_agent,
        )

    def route_to_active_agent(state: dict[str, Any]) -> str:
        active = state.get("active_agent") or default_active_agent
        logger.debug("swarm_routed", active_agent=active)
        return active

    builder = StateGraph(state_schema)
    for agent in agents:
        builder.add_node(agent.name, agent, destinations=tuple(name for name in names if name != agent.name))
    builder.add_conditional_edges(START, route_to_active_agent, names)
    return builder
