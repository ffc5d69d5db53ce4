from typing import Any

from pydantic import BaseModel


# Request fields stay loosely typed; api.main rejects bad shapes with 400.
class ChatRequest(BaseModel):
    message: Any = None
    conversationHistory: Any = None


class ToolCallRecord(BaseModel):
    tool: str
    args: Any = None
    result: Any = None


class ChatResponse(BaseModel):
    response: str
    toolCalls: list[ToolCallRecord]
    conversationHistory: list[dict[str, Any]]
    isHighRisk: bool = False


class NormalizeRequest(BaseModel):
    raw_symptoms: Any = None


class LookupRequest(BaseModel):
    symptoms: Any = None


class RiskAssessmentRequest(BaseModel):
    symptoms: Any = None
    conditions: Any = None


class HealthResponse(BaseModel):
    status: str
    hasApiKey: bool
    mode: str
    timestamp: str
