"""Convert between wire-format conversation turns and langchain messages.

Turns use the OpenAI chat shape, which is what clients replay to us:

    {"role": "assistant", "content": "", "tool_calls": [
        {"id": "call_1", "type": "function",
         "function": {"name": "normalize_symptoms", "arguments": "{...}"}}]}
    {"role": "tool", "tool_call_id": "call_1", "content": "{...}"}
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)


def message_text(content: Any) -> str:
    """Convert message content into a text string."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    try:
        return json.dumps(content, ensure_ascii=False)
    except TypeError:
        return str(content)


def latest_ai_message(state: Mapping[str, Any]) -> AIMessage | None:
    for message in reversed(state.get("messages", [])):
        if isinstance(message, AIMessage):
            return message
    return None


def _parse_tool_call(raw: Mapping[str, Any]) -> tuple[dict | None, dict | None]:
    """Return ``(tool_call, invalid_tool_call)``; exactly one is set."""
    function = raw.get("function")
    if isinstance(function, Mapping):
        name = str(function.get("name", ""))
        arguments = function.get("arguments", "")
    else:
        name = str(raw.get("name", ""))
        arguments = raw.get("args", {})
    call_id = str(raw.get("id", ""))

    if isinstance(arguments, Mapping):
        return {"name": name, "args": dict(arguments), "id": call_id, "type": "tool_call"}, None
    try:
        args = json.loads(arguments or "{}")
    except (TypeError, ValueError) as exc:
        args = None
        error = f"Malformed tool arguments: {exc}"
    else:
        error = "Tool arguments must be a JSON object"
    if isinstance(args, dict):
        return {"name": name, "args": args, "id": call_id, "type": "tool_call"}, None
    return None, {
        "name": name,
        "args": message_text(arguments),
        "id": call_id,
        "error": error,
        "type": "invalid_tool_call",
    }


def history_to_messages(history: list[Mapping[str, Any]] | None) -> list[BaseMessage]:
    messages: list[BaseMessage] = []
    for turn in history or []:
        role = turn.get("role", "user")
        content = message_text(turn.get("content"))
        if role == "system":
            messages.append(SystemMessage(content=content))
        elif role == "assistant":
            raw_calls = [dict(raw) for raw in turn.get("tool_calls") or []]
            tool_calls: list[dict] = []
            invalid_calls: list[dict] = []
            for raw in raw_calls:
                valid, invalid = _parse_tool_call(raw)
                if valid is not None:
                    tool_calls.append(valid)
                else:
                    invalid_calls.append(invalid)
            # Raw calls keep the requested order across valid and invalid ones.
            messages.append(
                AIMessage(
                    content=content,
                    tool_calls=tool_calls,
                    invalid_tool_calls=invalid_calls,
                    additional_kwargs={"tool_calls": raw_calls} if raw_calls else {},
                )
            )
        elif role == "tool":
            messages.append(
                ToolMessage(
                    content=content,
                    tool_call_id=str(turn.get("tool_call_id", "")),
                    name=turn.get("name"),
                )
            )
        else:
            messages.append(HumanMessage(content=content))
    return messages


def _wire_tool_call(call_id: str, name: str, arguments: str) -> dict[str, Any]:
    return {
        "id": call_id,
        "type": "function",
        "function": {"name": name, "arguments": arguments},
    }


def messages_to_history(messages: list[BaseMessage]) -> list[dict[str, Any]]:
    history: list[dict[str, Any]] = []
    for message in messages:
        if isinstance(message, SystemMessage):
            history.append({"role": "system", "content": message_text(message.content)})
        elif isinstance(message, AIMessage):
            turn: dict[str, Any] = {"role": "assistant", "content": message_text(message.content)}
            wire_calls = [
                _wire_tool_call(
                    str(call.get("id") or ""),
                    call["name"],
                    json.dumps(call.get("args", {}), ensure_ascii=False),
                )
                for call in message.tool_calls
            ]
            wire_calls.extend(
                _wire_tool_call(
                    str(call.get("id") or ""),
                    str(call.get("name") or ""),
                    message_text(call.get("args")),
                )
                for call in message.invalid_tool_calls
            )
            if wire_calls:
                turn["tool_calls"] = wire_calls
            history.append(turn)
        elif isinstance(message, ToolMessage):
            turn = {
                "role": "tool",
                "tool_call_id": message.tool_call_id,
                "content": message_text(message.content),
            }
            if message.name:
                turn["name"] = message.name
            history.append(turn)
        else:
            history.append({"role": "user", "content": message_text(message.content)})
    return history
