"""Red-flag screening over symptoms and candidate conditions."""

from __future__ import annotations

from collections.abc import Iterable

from symptombot.knowledge import KnowledgeBase, RedFlagPattern, RiskAssessment, get_knowledge_base

MIN_MATCHING_SYMPTOMS = 2
STRONG_MATCH_RATIO = 0.8

DEFAULT_REASON = "No high-risk patterns detected based on the symptoms provided."
CRITICAL_CONDITION_REASON = (
    "Some symptoms may be associated with serious conditions. "
    "Consider consulting a healthcare provider for proper evaluation."
)


def _pattern_match(
    pattern: RedFlagPattern,
    symptoms: set[str],
    conditions: set[str],
) -> list[str] | None:
    """Return the flagged symptoms when both evidence gates pass."""
    matching = [s for s in pattern.symptoms if s in symptoms]
    ratio = len(matching) / len(pattern.symptoms)

    if len(matching) < MIN_MATCHING_SYMPTOMS and ratio < 1:
        return None
    # A strong symptom match stands in for a confirmed condition.
    if not conditions.intersection(pattern.conditions) and ratio < STRONG_MATCH_RATIO:
        return None
    return matching


def assess(
    symptoms: Iterable[str],
    conditions: Iterable[str],
    kb: KnowledgeBase | None = None,
) -> RiskAssessment:
    """Evaluate red-flag patterns in table order.

    The first escalation to ``high`` returns immediately. Otherwise the first
    non-low pattern found sets the result. A named critical condition lifts a
    still-low result to ``moderate``.
    """
    kb = kb or get_knowledge_base()
    symptom_set = set(symptoms)
    condition_set = set(conditions)
    has_critical = bool(condition_set & kb.critical_conditions)

    result = RiskAssessment(risk_level="low", reason=DEFAULT_REASON)

    for pattern in kb.red_flags:
        flagged = _pattern_match(pattern, symptom_set, condition_set)
        if flagged is None:
            continue

        escalates = pattern.risk_level == "high" or (
            pattern.risk_level == "moderate_high" and has_critical
        )
        if escalates:
            return RiskAssessment(
                risk_level="high",
                reason=pattern.reason,
                flagged_symptoms=flagged,
                potential_conditions=list(pattern.conditions),
            )
        if result.risk_level == "low":
            result = RiskAssessment(
                risk_level=pattern.risk_level,
                reason=pattern.reason,
                flagged_symptoms=flagged,
                potential_conditions=list(pattern.conditions),
            )

    if has_critical and result.risk_level == "low":
        result = RiskAssessment(risk_level="moderate", reason=CRITICAL_CONDITION_REASON)

    return result


def risk_assessment(symptoms: list[str], conditions: list[str]) -> dict:
    return assess(symptoms, conditions).to_payload()
