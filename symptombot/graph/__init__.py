"""Graph exports for the symptom agent."""

from symptombot.graph.graph import build_graph, recursion_limit_for
from symptombot.graph.state import AgentState

__all__ = ["AgentState", "build_graph", "recursion_limit_for"]
