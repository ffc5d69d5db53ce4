"""Deterministic reasoning pipeline: normalize -> lookup -> assess."""

from symptombot.pipeline.lookup import lookup, lookup_conditions
from symptombot.pipeline.normalizer import normalize, normalize_symptoms
from symptombot.pipeline.risk import assess, risk_assessment

__all__ = [
    "assess",
    "lookup",
    "lookup_conditions",
    "normalize",
    "normalize_symptoms",
    "risk_assessment",
]
