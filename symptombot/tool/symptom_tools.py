"""Pipeline stages exposed as model-callable tools."""

from typing import Annotated

from langchain_core.tools import tool

from symptombot.pipeline import lookup_conditions, normalize_symptoms, risk_assessment


@tool("normalize_symptoms")
def normalize_symptoms_tool(
    raw_symptoms: Annotated[str, "The raw symptom description from the user."],
) -> dict:
    """Convert user language into standardized medical symptom terms.

    Call this first with the user's own words.
    Returns `normalized_symptoms`: a list of snake_case symptom tokens (may be empty).
    """
    return normalize_symptoms(raw_symptoms)


@tool("lookup_conditions")
def lookup_conditions_tool(
    symptoms: Annotated[list[str], "Array of normalized symptom terms."],
) -> dict:
    """Retrieve possible conditions associated with symptoms.

    Returns `conditions`: up to 6 entries ranked by how well they explain the
    symptoms, each with name, commonality, severity and matching_symptoms.
    """
    return lookup_conditions(symptoms)


@tool("risk_assessment")
def risk_assessment_tool(
    symptoms: Annotated[list[str], "Array of normalized symptom terms."],
    conditions: Annotated[list[str], "Array of condition names to assess."],
) -> dict:
    """Identify red-flag combinations that require caution.

    Returns `risk_level` (low, moderate, moderate_high or high) and `reason`,
    plus `flagged_symptoms` and `potential_conditions` when a pattern matched.
    """
    return risk_assessment(symptoms, conditions)
