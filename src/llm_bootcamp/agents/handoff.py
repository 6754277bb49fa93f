"""Handoff tools: how one agent passes the conversation to another."""

import re
from typing import Annotated, Any

from langchain_core.messages import ToolMessage
from langchain_core.tools import BaseTool, InjectedToolCallId, tool
from langgraph.graph import MessagesState
from langgraph.prebuilt import InjectedState
from langgraph.types import Command

HANDOFF_PREFIX = "transfer_to_"
HANDOFF_DESTINATION_KEY = "handoff_destination"


class SwarmState(MessagesState):
    """Conversation plus the name of the agent currently in charge."""

    active_agent: str | None


def handoff_tool_name(agent_name: str) -> str:
    return HANDOFF_PREFIX + re.sub(r"[^A-Za-z0-9_-]+", "_", agent_name.strip()).lower()


def create_handoff_tool(agent_name: str, description: str | None = None) -> BaseTool:
    """Create a tool that transfers control to ``agent_name``.

    Calling the tool ends the current agent's turn: it returns a ``Command``
    addressed to the parent graph that jumps to the target agent, records it
    as ``active_agent`` and appends a tool message confirming the transfer,
    so the conversation stays valid for the next model call.
    """
    name = handoff_tool_name(agent_name)

    @tool(name, description=description or f"Ask agent '{agent_name}' for help")
    def handoff(
        state: Annotated[dict[str, Any], InjectedState],
        tool_call_id: Annotated[str, InjectedToolCallId],
    ) -> Command:
        confirmation = ToolMessage(
            content=f"Successfully transferred to {agent_name}",
            name=name,
            tool_call_id=tool_call_id,
        )
        return Command(
            goto=agent_name,
            graph=Command.PARENT,
            update={"messages": [*state["messages"], confirmation], "active_agent": agent_name},
        )

    handoff.metadata = {HANDOFF_DESTINATION_KEY: agent_name}
    return handoff
