from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any


def _meta(start_ts: float) -> dict[str, Any]:
    return {
        "version": "1.0",
        "ts": datetime.now(timezone.utc).isoformat(),
        "latency_ms": int((time.perf_counter() - start_ts) * 1000),
    }


def error_payload(tool: str, code: str, message: str, start_ts: float) -> dict[str, Any]:
    """Error result fed back to the model in place of a tool's normal output."""
    return {
        "tool": tool,
        "ok": False,
        "error": {"code": code, "message": message},
        "meta": _meta(start_ts),
    }


def is_error_payload(payload: Any) -> bool:
    return isinstance(payload, dict) and payload.get("ok") is False and "error" in payload
