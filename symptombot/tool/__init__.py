"""Tool exports and registry."""

from symptombot.tool.envelope import error_payload, is_error_payload
from symptombot.tool.symptom_tools import (
    lookup_conditions_tool,
    normalize_symptoms_tool,
    risk_assessment_tool,
)

tools = [
    normalize_symptoms_tool,
    lookup_conditions_tool,
    risk_assessment_tool,
]
tools_by_name = {tool.name: tool for tool in tools}

__all__ = [
    "normalize_symptoms_tool",
    "lookup_conditions_tool",
    "risk_assessment_tool",
    "tools",
    "tools_by_name",
    "error_payload",
    "is_error_payload",
]
