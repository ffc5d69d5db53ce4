"""Tests for the model-driven tool loop with a scripted chat model."""

import asyncio
import sys
from pathlib import Path

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

sys.path.insert(0, str(Path(__file__).parent.parent))

from symptombot.agent import AgentRoundLimitError, AgentServiceError, ModelOrchestrator
from symptombot.prompts.prompts import SYSTEM_PROMPT


def _call(name: str, args: dict, call_id: str) -> dict:
    return {"name": name, "args": args, "id": call_id, "type": "tool_call"}


class ScriptedLLM:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []
        self.bound_tools = None

    def bind_tools(self, tools):
        self.bound_tools = tools
        return self

    async def ainvoke(self, messages):
        self.calls.append(list(messages))
        return self.responses.pop(0)


def test_full_tool_loop_with_high_risk() -> None:
    llm = ScriptedLLM(
        [
            AIMessage(content="", tool_calls=[_call("normalize_symptoms", {"raw_symptoms": "chest pain and shortness of breath"}, "c1")]),
            AIMessage(content="", tool_calls=[_call("lookup_conditions", {"symptoms": ["chest_pain", "dyspnea"]}, "c2")]),
            AIMessage(
                content="",
                tool_calls=[
                    _call(
                        "risk_assessment",
                        {"symptoms": ["chest_pain", "dyspnea"], "conditions": ["Myocardial Infarction"]},
                        "c3",
                    )
                ],
            ),
            AIMessage(content="⚠️ **IMPORTANT SAFETY NOTICE**\n\nPlease seek care."),
        ]
    )
    orchestrator = ModelOrchestrator(llm, max_rounds=5)
    result = asyncio.run(orchestrator.process_turn("I have chest pain and shortness of breath"))

    assert {t.name for t in llm.bound_tools} == {"normalize_symptoms", "lookup_conditions", "risk_assessment"}
    assert result.response.startswith("⚠️ **IMPORTANT SAFETY NOTICE**")
    assert result.is_high_risk
    assert [r["tool"] for r in result.tool_calls] == [
        "normalize_symptoms",
        "lookup_conditions",
        "risk_assessment",
    ]
    assert result.tool_calls[0]["result"] == {"normalized_symptoms": ["chest_pain", "dyspnea"]}
    assert result.tool_calls[2]["result"]["risk_level"] == "high"

    first_call = llm.calls[0]
    assert isinstance(first_call[0], SystemMessage)
    assert first_call[0].content == SYSTEM_PROMPT
    assert isinstance(first_call[-1], HumanMessage)
    assert isinstance(llm.calls[1][-1], ToolMessage)

    roles = [turn["role"] for turn in result.conversation_history]
    assert roles == ["user", "assistant", "tool", "assistant", "tool", "assistant", "tool", "assistant"]
    assert result.conversation_history[1]["tool_calls"][0]["function"]["name"] == "normalize_symptoms"
    assert result.conversation_history[2]["tool_call_id"] == "c1"


def test_direct_answer_without_tools() -> None:
    llm = ScriptedLLM([AIMessage(content="Could you tell me more about your symptoms?")])
    result = asyncio.run(ModelOrchestrator(llm).process_turn("hi"))
    assert result.response == "Could you tell me more about your symptoms?"
    assert result.tool_calls == []
    assert not result.is_high_risk


def test_history_is_replayed_without_system_turns() -> None:
    llm = ScriptedLLM([AIMessage(content="Thanks, noted.")])
    history = [
        {"role": "system", "content": "old prompt"},
        {"role": "user", "content": "I feel tired"},
        {"role": "assistant", "content": "How long?"},
    ]
    result = asyncio.run(ModelOrchestrator(llm).process_turn("Two weeks", history))

    sent = llm.calls[0]
    assert [type(m) for m in sent] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
    assert sent[0].content == SYSTEM_PROMPT
    assert [t["role"] for t in result.conversation_history] == ["user", "assistant", "user", "assistant"]
    assert result.conversation_history[-1]["content"] == "Thanks, noted."


def test_tool_errors_are_fed_back_and_turn_continues() -> None:
    llm = ScriptedLLM(
        [
            AIMessage(content="", tool_calls=[_call("web_search", {"query": "x"}, "c1")]),
            AIMessage(content="I could not use that tool."),
        ]
    )
    result = asyncio.run(ModelOrchestrator(llm).process_turn("hello"))
    assert result.tool_calls[0]["result"]["error"]["code"] == "UNKNOWN_TOOL"
    assert isinstance(llm.calls[1][-1], ToolMessage)
    assert result.response == "I could not use that tool."


def test_round_limit_raises() -> None:
    class LoopingLLM(ScriptedLLM):
        async def ainvoke(self, messages):
            self.calls.append(list(messages))
            n = len(self.calls)
            return AIMessage(content="", tool_calls=[_call("normalize_symptoms", {"raw_symptoms": "tired"}, f"c{n}")])

    llm = LoopingLLM([])
    with pytest.raises(AgentRoundLimitError) as excinfo:
        asyncio.run(ModelOrchestrator(llm, max_rounds=3).process_turn("tired"))
    assert excinfo.value.max_rounds == 3
    assert len(llm.calls) == 3


def test_model_failure_raises_service_error() -> None:
    class FailingLLM(ScriptedLLM):
        async def ainvoke(self, messages):
            raise ConnectionError("upstream unavailable")

    with pytest.raises(AgentServiceError, match="upstream unavailable"):
        asyncio.run(ModelOrchestrator(FailingLLM([])).process_turn("hello"))


def test_empty_model_answer_raises_service_error() -> None:
    llm = ScriptedLLM([AIMessage(content="")])
    with pytest.raises(AgentServiceError, match="empty response"):
        asyncio.run(ModelOrchestrator(llm).process_turn("hello"))
