"""LangGraph wiring for the agent -> tools -> agent loop."""

from __future__ import annotations

from typing import Any

from langgraph.graph import END, START, StateGraph

from symptombot.graph.nodes import make_agent_node, route_after_agent, tool_node
from symptombot.graph.state import AgentState


def build_graph(llm_with_tools: Any) -> Any:
    builder = StateGraph(AgentState)

    # --- nodes ---
    builder.add_node("agent", make_agent_node(llm_with_tools))
    builder.add_node("tools", tool_node)

    # --- edges ---
    builder.add_edge(START, "agent")
    builder.add_conditional_edges("agent", route_after_agent, ["tools", END])
    builder.add_edge("tools", "agent")

    return builder.compile(name="symptombot-agent")


def recursion_limit_for(max_rounds: int) -> int:
    # Each round visits agent and tools, plus the final agent visit.
    return 2 * max_rounds + 5
