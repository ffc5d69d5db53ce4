"""Map free-text symptom descriptions onto canonical symptom tokens."""

from __future__ import annotations

from symptombot.knowledge import KnowledgeBase, get_knowledge_base


def normalize(raw_text: str, kb: KnowledgeBase | None = None) -> list[str]:
    """Return the distinct tokens whose phrases occur in ``raw_text``.

    Matching is plain substring containment on the lowercased text, so
    "stomach ache" and "my stomach aches" both hit. Negation is not
    understood: "no fever" still yields ``fever``. Tokens come back in
    mapping order without duplicates.
    """
    kb = kb or get_knowledge_base()
    text = (raw_text or "").lower()
    found: dict[str, None] = {}

    for phrase, token in kb.symptom_mappings.items():
        if phrase in text:
            found.setdefault(token)

    # Whole-word retry for inputs the substring pass missed.
    if not found:
        for word in text.split():
            token = kb.symptom_mappings.get(word)
            if token:
                found.setdefault(token)

    return list(found)


def normalize_symptoms(raw_symptoms: str) -> dict:
    return {"normalized_symptoms": normalize(raw_symptoms)}
