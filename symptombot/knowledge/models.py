"""Pydantic models for the static symptom, condition and red-flag tables.

These mirror the JSON files in ``knowledge/data/``:

  - symptom_mappings.json: ordered ``phrase -> token`` dictionary
  - conditions.json: condition knowledge base
  - red_flags.json: red-flag patterns (order matters) plus the critical-condition list
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Commonality = Literal["very_common", "common", "less_common", "rare"]
Severity = Literal["mild", "moderate", "severe", "critical"]
RiskLevel = Literal["low", "moderate", "moderate_high", "high"]

_TOKEN_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


def _check_tokens(tokens: tuple[str, ...]) -> tuple[str, ...]:
    bad = [t for t in tokens if not _TOKEN_PATTERN.match(t)]
    if bad:
        raise ValueError(f"symptom tokens must be lowercase snake_case: {bad}")
    return tokens


class Condition(BaseModel):
    """One entry of the condition knowledge base."""

    model_config = ConfigDict(frozen=True)

    name: str
    commonality: Commonality
    severity: Severity
    associated_symptoms: tuple[str, ...] = Field(min_length=1)

    @field_validator("associated_symptoms")
    @classmethod
    def _snake_case_tokens(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _check_tokens(value)


class ScoredCondition(BaseModel):
    """A condition annotated with the query symptoms it explains.

    ``score`` is internal to lookup ranking; ``view()`` is what leaves the tool.
    """

    model_config = ConfigDict(frozen=True)

    condition: Condition
    matching_symptoms: tuple[str, ...]
    score: float

    @property
    def name(self) -> str:
        return self.condition.name

    @property
    def severity(self) -> Severity:
        return self.condition.severity

    def view(self) -> dict:
        return {
            "name": self.condition.name,
            "commonality": self.condition.commonality,
            "severity": self.condition.severity,
            "matching_symptoms": list(self.matching_symptoms),
        }


class RedFlagPattern(BaseModel):
    model_config = ConfigDict(frozen=True)

    symptoms: tuple[str, ...] = Field(min_length=1)
    conditions: tuple[str, ...] = ()
    risk_level: RiskLevel
    reason: str

    @field_validator("symptoms")
    @classmethod
    def _snake_case_tokens(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _check_tokens(value)


class RiskAssessment(BaseModel):
    """Result of one red-flag evaluation."""

    model_config = ConfigDict(frozen=True)

    risk_level: RiskLevel
    reason: str
    flagged_symptoms: list[str] | None = None
    potential_conditions: list[str] | None = None

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


class KnowledgeBase(BaseModel):
    """All static tables, loaded once and shared read-only."""

    model_config = ConfigDict(frozen=True)

    symptom_mappings: dict[str, str]
    conditions: tuple[Condition, ...]
    red_flags: tuple[RedFlagPattern, ...]
    critical_conditions: frozenset[str]

    @field_validator("symptom_mappings")
    @classmethod
    def _lowercase_phrases(cls, value: dict[str, str]) -> dict[str, str]:
        for phrase, token in value.items():
            if phrase != phrase.lower():
                raise ValueError(f"mapping phrase must be lowercase: {phrase!r}")
            _check_tokens((token,))
        return value

    @model_validator(mode="after")
    def _unique_condition_names(self) -> "KnowledgeBase":
        seen: set[str] = set()
        for condition in self.conditions:
            if condition.name in seen:
                raise ValueError(f"duplicate condition name: {condition.name}")
            seen.add(condition.name)
        return self

    @property
    def vocabulary(self) -> frozenset[str]:
        return frozenset(self.symptom_mappings.values())
