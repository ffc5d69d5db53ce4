"""Static knowledge tables."""

from symptombot.knowledge.loader import (
    build_knowledge_base,
    get_knowledge_base,
    load_knowledge_file,
)
from symptombot.knowledge.models import (
    Condition,
    KnowledgeBase,
    RedFlagPattern,
    RiskAssessment,
    ScoredCondition,
)

__all__ = [
    "Condition",
    "KnowledgeBase",
    "RedFlagPattern",
    "RiskAssessment",
    "ScoredCondition",
    "build_knowledge_base",
    "get_knowledge_base",
    "load_knowledge_file",
]
