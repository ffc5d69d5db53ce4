from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any, Literal

from langchain_core.messages import AIMessage, ToolMessage
from langgraph.graph import END

from symptombot.config.logger import get_logger, log_stage
from symptombot.config.settings import settings
from symptombot.errors import AgentServiceError
from symptombot.graph.state import AgentState
from symptombot.tool import error_payload, tools_by_name
from symptombot.utils.messages import latest_ai_message, message_text

logger = get_logger(__name__)


def _has_pending_tool_calls(message: AIMessage | None) -> bool:
    return bool(message and (message.tool_calls or message.invalid_tool_calls))


def make_agent_node(llm_with_tools: Any):
    """Build the node that asks the tool-bound model for its next step."""

    async def agent_node(state: AgentState) -> dict:
        rounds = int(state.get("rounds", 0))
        max_rounds = int(state.get("max_rounds", settings.AGENT_MAX_ROUNDS))
        if rounds >= max_rounds:
            logger.warning("[agent] round limit reached (%s) with tool calls pending", max_rounds)
            return {"round_limit_exceeded": True}

        rounds += 1
        logger.info("[agent] round %s/%s", rounds, max_rounds)
        response = await llm_with_tools.ainvoke(list(state["messages"]))
        if not isinstance(response, AIMessage):
            raise AgentServiceError(f"Unexpected model response type: {type(response).__name__}")

        update: dict[str, Any] = {"messages": [response], "rounds": rounds}
        if _has_pending_tool_calls(response):
            logger.info(
                "[agent] tool calls requested: %s",
                [call["name"] for call in response.tool_calls]
                + [call.get("name") for call in response.invalid_tool_calls],
            )
            return update

        final_response = message_text(response.content).strip()
        if not final_response:
            raise AgentServiceError("Model returned an empty response")
        log_stage(logger, "agent.final", final_response)
        update["final_response"] = final_response
        return update

    return agent_node


async def _run_tool_call(tool_call: dict[str, Any]) -> tuple[dict[str, Any], ToolMessage]:
    tool_name = str(tool_call.get("name", ""))
    tool_call_id = str(tool_call.get("id") or tool_name or "tool_call")
    args = tool_call.get("args", {})
    if not isinstance(args, dict):
        args = {}
    start_ts = time.perf_counter()

    tool_impl = tools_by_name.get(tool_name)
    if tool_impl is None:
        result = error_payload(tool_name, "UNKNOWN_TOOL", f"Unknown tool: {tool_name}", start_ts)
    else:
        try:
            result = await tool_impl.ainvoke(args)
        except Exception as exc:
            logger.warning("[tools] %s failed: %s", tool_name, exc)
            result = error_payload(
                tool_name,
                "TOOL_ERROR",
                f"Tool execution failed: {type(exc).__name__}: {exc}",
                start_ts,
            )

    log_stage(logger, f"tools.{tool_name or 'unknown'}", result)
    record = {"tool": tool_name, "args": args, "result": result}
    message = ToolMessage(
        content=message_text(result),
        tool_call_id=tool_call_id,
        name=tool_name,
    )
    return record, message


def _invalid_call_result(invalid_call: dict[str, Any]) -> tuple[dict[str, Any], ToolMessage]:
    tool_name = str(invalid_call.get("name") or "")
    result = error_payload(
        tool_name,
        "INVALID_ARGUMENTS",
        str(invalid_call.get("error") or "Tool arguments could not be parsed"),
        time.perf_counter(),
    )
    log_stage(logger, f"tools.{tool_name or 'unknown'}", result)
    record = {"tool": tool_name, "args": invalid_call.get("args"), "result": result}
    message = ToolMessage(
        content=message_text(result),
        tool_call_id=str(invalid_call.get("id") or tool_name or "tool_call"),
        name=tool_name,
    )
    return record, message


def _calls_in_request_order(message: AIMessage) -> list[tuple[dict[str, Any], bool]]:
    """Merge parsed and unparseable calls back into the order the model sent them.

    Positions come from the raw wire calls kept in ``additional_kwargs``; calls
    without a known id keep parsed-then-invalid order.
    """
    raw_calls = message.additional_kwargs.get("tool_calls") or []
    position = {
        str(raw.get("id")): index
        for index, raw in enumerate(raw_calls)
        if isinstance(raw, Mapping) and raw.get("id")
    }
    calls = [(call, True) for call in message.tool_calls]
    calls += [(call, False) for call in message.invalid_tool_calls]
    return sorted(calls, key=lambda item: position.get(str(item[0].get("id")), len(position)))


async def tool_node(state: AgentState) -> dict:
    """Execute the latest AI message's tool calls in the order requested."""
    ai_message = latest_ai_message(state)
    if not _has_pending_tool_calls(ai_message):
        return {}

    records: list[dict[str, Any]] = []
    messages: list[ToolMessage] = []
    for call, is_valid in _calls_in_request_order(ai_message):
        if is_valid:
            record, message = await _run_tool_call(call)
        else:
            record, message = _invalid_call_result(call)
        records.append(record)
        messages.append(message)

    return {"messages": messages, "tool_records": records}


def route_after_agent(state: AgentState) -> Literal["tools", "__end__"]:
    if state.get("round_limit_exceeded"):
        return END
    if _has_pending_tool_calls(latest_ai_message(state)):
        return "tools"
    return END
