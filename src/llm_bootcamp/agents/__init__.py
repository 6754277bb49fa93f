"""Multi-agent graphs built on LangGraph: handoff tools, supervisor and swarm."""

from llm_bootcamp.agents.handoff import SwarmState, create_handoff_tool
from llm_bootcamp.agents.supervisor import create_supervisor
from llm_bootcamp.agents.swarm import create_swarm

__all__ = [
    "create_handoff_tool",
    "create_supervisor",
    "create_swarm",
    "SwarmState",
]
