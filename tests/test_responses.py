"""Tests for fallback reply rendering."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from symptombot.agent import responses
from symptombot.knowledge import Condition, ScoredCondition
from symptombot.pipeline import lookup
from symptombot.prompts.prompts import DEFAULT_FOLLOW_UP_QUESTION, SAFETY_NOTICE_HEADER


def _scored(name: str, severity: str, symptoms: tuple[str, ...], matching: tuple[str, ...]) -> ScoredCondition:
    return ScoredCondition(
        condition=Condition(name=name, commonality="rare", severity=severity, associated_symptoms=symptoms),
        matching_symptoms=matching,
        score=1.0,
    )


def test_condition_line_severity_notes() -> None:
    mild = _scored("Solo", "mild", ("fever",), ("fever",))
    severe = _scored("Bad", "severe", ("fever", "cough"), ("fever", "cough"))
    assert responses.render_condition_line(1, mild) == "1. **Solo** – commonly associated with fever"
    assert responses.render_condition_line(2, severe) == (
        "2. **Bad** (requires evaluation) – commonly associated with fever, cough"
    )


def test_follow_up_priority() -> None:
    assert "diet, sleep patterns" in responses.follow_up_question(["headache", "fatigue"])
    assert "chest pain" in responses.follow_up_question(["cough", "chest_pain"])
    assert "cough" in responses.follow_up_question(["cough"])
    assert "headache located" in responses.follow_up_question(["severe_headache"])
    assert "headache located" in responses.follow_up_question(["dizziness", "headache"])
    assert "dizziness occur" in responses.follow_up_question(["lightheadedness", "abdominal_pain"])
    assert "dizziness occur" in responses.follow_up_question(["dizziness"])
    assert "abdomen" in responses.follow_up_question(["cough", "abdominal_pain"])
    assert responses.follow_up_question(["rash"]) == DEFAULT_FOLLOW_UP_QUESTION
    assert responses.follow_up_question([]) == DEFAULT_FOLLOW_UP_QUESTION


class TestConfidence:
    def test_high_needs_two_conditions(self) -> None:
        solo = _scored("Solo", "mild", ("fever",), ("fever",))
        assert responses.confidence_label(["fever"], [solo]) == "Medium"
        assert responses.confidence_label(["fever"], [solo, solo]) == "High"

    def test_grades_from_lookup(self) -> None:
        assert responses.confidence_label(["headache", "fever"], lookup(["headache", "fever"])[:4]) == "High"
        assert responses.confidence_label(["cough", "rash"], lookup(["cough", "rash"])[:4]) == "Medium"
        query = ["cough", "rash", "pruritus", "urticaria"]
        assert responses.confidence_label(query, lookup(query)[:4]) == "Low"

    def test_nothing_shown_is_low(self) -> None:
        assert responses.confidence_label(["fever"], []) == "Low"


def test_differential_high_confidence_has_no_question() -> None:
    symptoms = ["headache", "fever"]
    text = responses.render_differential(symptoms, lookup(symptoms))
    assert text.startswith("Based on the symptoms provided, here are some possible causes:")
    assert "1. **Influenza** (warrants attention) – commonly associated with headache, fever" in text
    assert "4. **Migraine** (warrants attention) – commonly associated with headache" in text
    assert "5. " not in text
    assert "**Confidence:** High" in text
    assert "→" not in text
    assert "Disclaimer" in text


def test_differential_medium_confidence_asks_one_question() -> None:
    symptoms = ["cough", "rash"]
    text = responses.render_differential(symptoms, lookup(symptoms))
    assert "**Confidence:** Medium" in text
    assert text.count("→ ") == 1
    assert "Is your cough dry or productive?" in text


def test_safety_notice_bolds_reason() -> None:
    text = responses.render_safety_notice("Seek care now.")
    assert text.startswith(SAFETY_NOTICE_HEADER)
    assert "**Seek care now.**" in text


def test_no_match_reply() -> None:
    text = responses.render_no_match(["rash"])
    assert "rash" in text
    assert "**Confidence:** Low" in text
    assert f"→ {DEFAULT_FOLLOW_UP_QUESTION}" in text


def test_differential_low_confidence_asks_one_question() -> None:
    symptoms = ["cough", "rash", "pruritus", "urticaria"]
    text = responses.render_differential(symptoms, lookup(symptoms))
    assert "**Confidence:** Low" in text
    assert text.count("→ ") == 1
    assert "→ Is your cough dry or productive?" in text
    assert text.index("**Confidence:** Low") < text.index("→ ") < text.index("Disclaimer")
