"""Tests for prompt and reply template constants."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from symptombot.prompts import prompts


PROMPT_CONSTANTS = [
    "SYSTEM_PROMPT",
    "SAFETY_NOTICE_HEADER",
    "SAFETY_NOTICE_TEMPLATE",
    "CLARIFICATION_REQUEST",
    "NO_MATCH_INTRO",
    "DIFFERENTIAL_INTRO",
    "CONDITION_LINE_TEMPLATE",
    "CONFIDENCE_TEMPLATE",
    "FOLLOW_UP_TEMPLATE",
    "DISCLAIMER",
    "DEFAULT_FOLLOW_UP_QUESTION",
]


def test_all_prompt_constants_loaded() -> None:
    for name in PROMPT_CONSTANTS:
        value = getattr(prompts, name)
        assert isinstance(value, str)
        assert value


def test_template_placeholders_preserved() -> None:
    assert "{reason}" in prompts.SAFETY_NOTICE_TEMPLATE
    assert "{symptoms}" in prompts.NO_MATCH_INTRO
    assert "{question}" in prompts.FOLLOW_UP_TEMPLATE
    for field in ("{index}", "{name}", "{note}", "{symptoms}"):
        assert field in prompts.CONDITION_LINE_TEMPLATE


def test_system_prompt_names_every_tool() -> None:
    for tool_name in ("normalize_symptoms", "lookup_conditions", "risk_assessment"):
        assert tool_name in prompts.SYSTEM_PROMPT
    assert prompts.SAFETY_NOTICE_HEADER in prompts.SYSTEM_PROMPT
    assert "**Confidence:**" in prompts.SYSTEM_PROMPT


def test_follow_up_table_covers_severity_notes() -> None:
    assert set(prompts.SEVERITY_NOTES) == {"mild", "moderate", "severe", "critical"}
    assert len(prompts.FOLLOW_UP_QUESTIONS) == 6
