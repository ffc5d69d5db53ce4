"""Agent orchestration exports."""

from symptombot.agent.orchestrator import (
    MockOrchestrator,
    ModelOrchestrator,
    Orchestrator,
    TurnResult,
    build_orchestrator,
    get_orchestrator,
    process_turn,
)
from symptombot.errors import AgentError, AgentRoundLimitError, AgentServiceError

__all__ = [
    "AgentError",
    "AgentRoundLimitError",
    "AgentServiceError",
    "MockOrchestrator",
    "ModelOrchestrator",
    "Orchestrator",
    "TurnResult",
    "build_orchestrator",
    "get_orchestrator",
    "process_turn",
]
