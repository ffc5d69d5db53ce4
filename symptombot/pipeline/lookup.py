"""Score the condition knowledge base against a set of symptom tokens."""

from __future__ import annotations

from collections.abc import Iterable

from symptombot.knowledge import Condition, KnowledgeBase, ScoredCondition, get_knowledge_base

MAX_RESULTS = 6
MATCH_WEIGHT = 0.7
COVERAGE_WEIGHT = 0.3


def score_condition(condition: Condition, symptoms: list[str]) -> ScoredCondition:
    associated = set(condition.associated_symptoms)
    matching = tuple(s for s in symptoms if s in associated)
    match_ratio = len(matching) / len(symptoms)
    coverage_ratio = len(matching) / len(condition.associated_symptoms)
    return ScoredCondition(
        condition=condition,
        matching_symptoms=matching,
        score=MATCH_WEIGHT * match_ratio + COVERAGE_WEIGHT * coverage_ratio,
    )


def lookup(
    symptoms: Iterable[str],
    kb: KnowledgeBase | None = None,
    limit: int = MAX_RESULTS,
) -> list[ScoredCondition]:
    """Rank conditions by ``0.7 * match_ratio + 0.3 * coverage_ratio``.

    ``match_ratio`` is how much of the complaint a condition explains and
    ``coverage_ratio`` how much of its typical presentation is confirmed.
    Conditions with no overlap are dropped. The sort is stable, so equal
    scores keep knowledge-base declaration order.
    """
    query = list(dict.fromkeys(symptoms))
    if not query:
        return []

    kb = kb or get_knowledge_base()
    scored = [score_condition(c, query) for c in kb.conditions]
    matched = [s for s in scored if s.matching_symptoms]
    matched.sort(key=lambda s: s.score, reverse=True)
    return matched[:limit]


def lookup_conditions(symptoms: list[str]) -> dict:
    return {"conditions": [scored.view() for scored in lookup(symptoms)]}
