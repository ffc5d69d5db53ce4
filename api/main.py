import time
from datetime import datetime, timezone
from typing import Any

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from api.schemas import (
    ChatRequest,
    ChatResponse,
    HealthResponse,
    LookupRequest,
    NormalizeRequest,
    RiskAssessmentRequest,
)
from symptombot.agent import AgentError, get_orchestrator
from symptombot.config.logger import configure_logging, get_logger
from symptombot.config.settings import settings
from symptombot.pipeline import lookup_conditions, normalize_symptoms, risk_assessment

app = FastAPI(title="SymptomBot")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

configure_logging()
logger = get_logger(__name__)


def _string_list(value: Any) -> list[str] | None:
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return value
    return None


@app.middleware("http")
async def log_requests(request, call_next):
    start = time.perf_counter()
    logger.info("[request.start] %s %s", request.method, request.url.path)
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "[request.end] %s %s status=%s elapsed=%.1fms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.get("/api/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="healthy",
        hasApiKey=settings.has_openai_like_creds(),
        mode=get_orchestrator().mode,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@app.post("/api/chat", response_model=ChatResponse)
async def chat(payload: ChatRequest):
    message = payload.message
    if not isinstance(message, str) or not message.strip():
        raise HTTPException(status_code=400, detail="Message is required")
    history = payload.conversationHistory or []
    if not isinstance(history, list) or not all(isinstance(turn, dict) for turn in history):
        raise HTTPException(status_code=400, detail="conversationHistory must be an array of messages")

    logger.info("[chat] received text_len=%s history=%s", len(message), len(history))
    try:
        result = await get_orchestrator().process_turn(message, history)
    except AgentError as exc:
        logger.exception("[chat] turn failed")
        raise HTTPException(
            status_code=500,
            detail=f"An error occurred processing your request: {exc}",
        ) from exc

    logger.info("[chat] response generated high_risk=%s", result.is_high_risk)
    return ChatResponse(
        response=result.response,
        toolCalls=result.tool_calls,
        conversationHistory=result.conversation_history,
        isHighRisk=result.is_high_risk,
    )


# Individual tool endpoints for debugging
@app.post("/api/tools/normalize-symptoms")
async def normalize_symptoms_endpoint(payload: NormalizeRequest):
    if not isinstance(payload.raw_symptoms, str) or not payload.raw_symptoms:
        raise HTTPException(status_code=400, detail="raw_symptoms is required")
    return normalize_symptoms(payload.raw_symptoms)


@app.post("/api/tools/lookup-conditions")
async def lookup_conditions_endpoint(payload: LookupRequest):
    symptoms = _string_list(payload.symptoms)
    if symptoms is None:
        raise HTTPException(status_code=400, detail="symptoms array is required")
    return lookup_conditions(symptoms)


@app.post("/api/tools/risk-assessment")
async def risk_assessment_endpoint(payload: RiskAssessmentRequest):
    symptoms = _string_list(payload.symptoms)
    if symptoms is None:
        raise HTTPException(status_code=400, detail="symptoms array is required")
    conditions = _string_list(payload.conditions)
    if conditions is None:
        raise HTTPException(status_code=400, detail="conditions array is required")
    return risk_assessment(symptoms, conditions)
