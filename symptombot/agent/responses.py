"""Render fallback-mode replies in the chat wire format.

The UI parses these markers back out of the text, so they must not drift:
numbered ``N. **Name** – ...`` lines, a ``**Confidence:** X`` line, an
optional ``→ question`` line, and the bold reason right after the safety
notice header.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from symptombot.knowledge import ScoredCondition
from symptombot.prompts.prompts import (
    CLARIFICATION_REQUEST,
    CONDITION_LINE_TEMPLATE,
    CONFIDENCE_TEMPLATE,
    DEFAULT_FOLLOW_UP_QUESTION,
    DIFFERENTIAL_INTRO,
    DISCLAIMER,
    FOLLOW_UP_QUESTIONS,
    FOLLOW_UP_TEMPLATE,
    NO_MATCH_INTRO,
    SAFETY_NOTICE_TEMPLATE,
    SEVERITY_NOTES,
)

Confidence = Literal["High", "Medium", "Low"]

MAX_DIFFERENTIALS = 4
HIGH_CONFIDENCE_QUALITY = 0.8
MEDIUM_CONFIDENCE_QUALITY = 0.5


def follow_up_question(symptoms: Sequence[str]) -> str:
    present = set(symptoms)
    for triggers, question in FOLLOW_UP_QUESTIONS:
        if present & triggers:
            return question
    return DEFAULT_FOLLOW_UP_QUESTION


def confidence_label(symptoms: Sequence[str], shown: Sequence[ScoredCondition]) -> Confidence:
    """Grade how well the top condition explains the reported symptoms."""
    distinct = set(symptoms)
    if not shown or not distinct:
        return "Low"
    quality = len(shown[0].matching_symptoms) / len(distinct)
    if quality >= HIGH_CONFIDENCE_QUALITY and len(shown) >= 2:
        return "High"
    if quality >= MEDIUM_CONFIDENCE_QUALITY:
        return "Medium"
    return "Low"


def render_condition_line(index: int, scored: ScoredCondition) -> str:
    return CONDITION_LINE_TEMPLATE.format(
        index=index,
        name=scored.name,
        note=SEVERITY_NOTES.get(scored.severity, ""),
        symptoms=", ".join(scored.matching_symptoms),
    )


def render_safety_notice(reason: str) -> str:
    return SAFETY_NOTICE_TEMPLATE.format(reason=reason)


def render_clarification() -> str:
    return CLARIFICATION_REQUEST


def render_no_match(symptoms: Sequence[str]) -> str:
    parts = [
        NO_MATCH_INTRO.format(symptoms=", ".join(symptoms)),
        CONFIDENCE_TEMPLATE.format(confidence="Low"),
        FOLLOW_UP_TEMPLATE.format(question=follow_up_question(symptoms)),
        DISCLAIMER,
    ]
    return "\n\n".join(parts)


def render_differential(symptoms: Sequence[str], conditions: Sequence[ScoredCondition]) -> str:
    shown = list(conditions[:MAX_DIFFERENTIALS])
    lines = "\n".join(render_condition_line(i, c) for i, c in enumerate(shown, start=1))
    confidence = confidence_label(symptoms, shown)

    parts = [DIFFERENTIAL_INTRO, lines, CONFIDENCE_TEMPLATE.format(confidence=confidence)]
    if confidence != "High":
        parts.append(FOLLOW_UP_TEMPLATE.format(question=follow_up_question(symptoms)))
    parts.append(DISCLAIMER)
    return "\n\n".join(parts)
