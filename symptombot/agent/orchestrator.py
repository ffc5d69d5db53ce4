"""Per-turn orchestration over the three symptom tools.

Two interchangeable strategies implement ``Orchestrator.process_turn``:

- ``ModelOrchestrator`` lets a tool-calling chat model drive the tools
  through the agent graph, bounded by ``AGENT_MAX_ROUNDS``.
- ``MockOrchestrator`` runs normalize -> lookup -> assess directly and
  renders the reply itself.

``get_orchestrator()`` picks one per process, depending on whether a model
backend is configured.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage
from langgraph.errors import GraphRecursionError
from pydantic import BaseModel, Field

from symptombot.agent import responses
from symptombot.config.logger import get_logger, log_stage
from symptombot.config.settings import settings
from symptombot.errors import AgentError, AgentRoundLimitError, AgentServiceError
from symptombot.graph import build_graph, recursion_limit_for
from symptombot.knowledge import KnowledgeBase
from symptombot.llm import get_chat_model
from symptombot.pipeline import assess, lookup, normalize
from symptombot.prompts.prompts import SYSTEM_PROMPT
from symptombot.tool import is_error_payload, tools
from symptombot.utils.messages import history_to_messages, messages_to_history

logger = get_logger(__name__)


class TurnResult(BaseModel):
    response: str
    tool_calls: list[dict[str, Any]] = Field(default_factory=list)
    conversation_history: list[dict[str, Any]] = Field(default_factory=list)
    is_high_risk: bool = False


class Orchestrator(ABC):
    """Strategy contract for handling one chat turn."""

    mode: str = "base"

    @abstractmethod
    async def process_turn(
        self,
        message: str,
        history: list[dict[str, Any]] | None = None,
    ) -> TurnResult:
        """Answer ``message`` given the prior transcript."""


def _tool_record(tool: str, args: dict[str, Any], result: dict[str, Any]) -> dict[str, Any]:
    return {"tool": tool, "args": args, "result": result}


class MockOrchestrator(Orchestrator):
    """Deterministic tool sequencing used when no model backend is configured."""

    mode = "mock"

    def __init__(self, kb: KnowledgeBase | None = None):
        self.kb = kb

    async def process_turn(
        self,
        message: str,
        history: list[dict[str, Any]] | None = None,
    ) -> TurnResult:
        return self.run(message, history)

    def run(self, message: str, history: list[dict[str, Any]] | None = None) -> TurnResult:
        logger.info("[mock] turn start text_len=%s", len(message or ""))
        symptoms = normalize(message, self.kb)
        records = [
            _tool_record(
                "normalize_symptoms",
                {"raw_symptoms": message},
                {"normalized_symptoms": symptoms},
            )
        ]
        log_stage(logger, "mock.normalize_symptoms", symptoms)

        if not symptoms:
            return self._finish(message, history, responses.render_clarification(), records)

        conditions = lookup(symptoms, self.kb)
        records.append(
            _tool_record(
                "lookup_conditions",
                {"symptoms": symptoms},
                {"conditions": [c.view() for c in conditions]},
            )
        )
        log_stage(logger, "mock.lookup_conditions", [c.name for c in conditions])

        names = [c.name for c in conditions]
        risk = assess(symptoms, names, self.kb)
        records.append(
            _tool_record(
                "risk_assessment",
                {"symptoms": symptoms, "conditions": names},
                risk.to_payload(),
            )
        )
        log_stage(logger, "mock.risk_assessment", risk)

        if risk.risk_level == "high":
            reply = responses.render_safety_notice(risk.reason)
            return self._finish(message, history, reply, records, is_high_risk=True)
        if not conditions:
            return self._finish(message, history, responses.render_no_match(symptoms), records)
        return self._finish(
            message, history, responses.render_differential(symptoms, conditions), records
        )

    def _finish(
        self,
        message: str,
        history: list[dict[str, Any]] | None,
        reply: str,
        records: list[dict[str, Any]],
        is_high_risk: bool = False,
    ) -> TurnResult:
        logger.info("[mock] turn end high_risk=%s tools=%s", is_high_risk, len(records))
        transcript = [
            *(history or []),
            {"role": "user", "content": message},
            {"role": "assistant", "content": reply},
        ]
        return TurnResult(
            response=reply,
            tool_calls=records,
            conversation_history=transcript,
            is_high_risk=is_high_risk,
        )


def _any_high_risk(records: list[dict[str, Any]]) -> bool:
    return any(
        record.get("tool") == "risk_assessment"
        and isinstance(record.get("result"), dict)
        and record["result"].get("risk_level") == "high"
        for record in records
    )


class ModelOrchestrator(Orchestrator):
    """Tool-calling loop driven by a chat model."""

    mode = "model"

    def __init__(self, llm: Any, max_rounds: int | None = None):
        self.max_rounds = max_rounds or settings.AGENT_MAX_ROUNDS
        self.graph = build_graph(llm.bind_tools(tools))

    async def process_turn(
        self,
        message: str,
        history: list[dict[str, Any]] | None = None,
    ) -> TurnResult:
        prior = [m for m in history_to_messages(history) if not isinstance(m, SystemMessage)]
        messages = [SystemMessage(content=SYSTEM_PROMPT), *prior, HumanMessage(content=message)]
        logger.info("[model] turn start history=%s max_rounds=%s", len(prior), self.max_rounds)

        try:
            result = await self.graph.ainvoke(
                {
                    "messages": messages,
                    "rounds": 0,
                    "max_rounds": self.max_rounds,
                    "round_limit_exceeded": False,
                    "tool_records": [],
                    "final_response": "",
                },
                config={"recursion_limit": recursion_limit_for(self.max_rounds)},
            )
        except AgentError:
            raise
        except GraphRecursionError as exc:
            raise AgentRoundLimitError(self.max_rounds) from exc
        except Exception as exc:
            logger.exception("[model] turn failed")
            raise AgentServiceError(
                f"Model call failed: {str(exc).strip() or exc.__class__.__name__}"
            ) from exc

        if result.get("round_limit_exceeded"):
            raise AgentRoundLimitError(self.max_rounds)

        records = list(result.get("tool_records", []))
        transcript = [m for m in result["messages"] if not isinstance(m, SystemMessage)]
        is_high_risk = _any_high_risk(records)
        logger.info(
            "[model] turn end rounds=%s tools=%s failed=%s high_risk=%s",
            result.get("rounds"),
            len(records),
            sum(1 for r in records if is_error_payload(r.get("result"))),
            is_high_risk,
        )
        return TurnResult(
            response=result["final_response"],
            tool_calls=records,
            conversation_history=messages_to_history(transcript),
            is_high_risk=is_high_risk,
        )


def build_orchestrator() -> Orchestrator:
    llm = get_chat_model()
    if llm is None:
        logger.info("[orchestrator] mode=mock (no model credential configured)")
        return MockOrchestrator()
    logger.info("[orchestrator] mode=model model=%s", settings.AGENT_MODEL)
    return ModelOrchestrator(llm)


@lru_cache(maxsize=1)
def get_orchestrator() -> Orchestrator:
    return build_orchestrator()


async def process_turn(message: str, history: list[dict[str, Any]] | None = None) -> TurnResult:
    return await get_orchestrator().process_turn(message, history)
