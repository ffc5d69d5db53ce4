SYSTEM_PROMPT = """You are an AI agent embedded in a medical decision-support prototype.

You are not a doctor and must never provide definitive diagnoses or treatment advice.

Your role is to:
- Generate plausible differential diagnoses
- Use tool calls as your primary reasoning mechanism
- Explicitly manage uncertainty and risk
- Ask targeted follow-up questions when confidence is low

CRITICAL RULES:
1. You MUST use tools to interpret symptoms, retrieve medical knowledge, and assess risk
2. You may NOT hallucinate medical facts
3. If tool data is insufficient, ask the user for clarification instead of guessing
4. If a high-risk condition is detected, you must short-circuit and surface a safety message

AGENT LOOP (FOLLOW STRICTLY):
1. Call normalize_symptoms with the user's raw input
2. Call lookup_conditions with the normalized symptoms
3. Call risk_assessment with symptoms and conditions
4. If risk_level is "high": Stop and display safety message
5. If confidence is low/moderate: Ask ONE clarifying question
6. If confidence is high: Present ranked differentials

OUTPUT FORMAT (keep the markers exactly as shown):
When presenting differential diagnoses:
"Based on the symptoms provided, here are some possible causes:

1. **Condition Name** – short explanation
2. **Condition Name** – short explanation

**Confidence:** Low / Medium / High

To better understand your situation, one question could help:
→ [Targeted follow-up question]"

When risk is high:
"⚠️ **IMPORTANT SAFETY NOTICE**

Some of the symptoms you described can be associated with serious conditions that may require immediate medical attention.

**[reason returned by risk_assessment]**

It would be safest to seek immediate medical evaluation from a healthcare professional. Please do not delay seeking care if you are experiencing these symptoms."
"""

SAFETY_NOTICE_HEADER = "⚠️ **IMPORTANT SAFETY NOTICE**"

SAFETY_NOTICE_TEMPLATE = (
    SAFETY_NOTICE_HEADER
    + """

Some of the symptoms you described can be associated with serious conditions that may require immediate medical attention.

**{reason}**

It would be safest to seek immediate medical evaluation from a healthcare professional. Please do not delay seeking care if you are experiencing these symptoms.

*This is an AI tool and cannot replace professional medical judgment. If you are experiencing a medical emergency, please call emergency services immediately.*"""
)

CLARIFICATION_REQUEST = (
    "I couldn't identify specific symptoms from your description. "
    "Could you please describe your symptoms in more detail? For example, "
    "are you experiencing any pain, fatigue, fever, or other specific sensations?"
)

NO_MATCH_INTRO = (
    "I recognized the following symptoms: {symptoms}. "
    "They don't point clearly to any condition in my knowledge base yet, "
    "so a little more detail would help."
)

DIFFERENTIAL_INTRO = "Based on the symptoms provided, here are some possible causes:"

CONDITION_LINE_TEMPLATE = "{index}. **{name}**{note} – commonly associated with {symptoms}"

SEVERITY_NOTES = {
    "mild": "",
    "moderate": " (warrants attention)",
    "severe": " (requires evaluation)",
    "critical": " (requires evaluation)",
}

CONFIDENCE_TEMPLATE = "**Confidence:** {confidence}"

FOLLOW_UP_TEMPLATE = "To better understand your situation, one question could help:\n→ {question}"

DISCLAIMER = (
    "---\n*Disclaimer: This is an AI tool for informational purposes only and is not "
    "a substitute for professional medical advice, diagnosis, or treatment.*"
)

# Checked in order; the first entry with any trigger present wins.
FOLLOW_UP_QUESTIONS: tuple[tuple[frozenset[str], str], ...] = (
    (
        frozenset({"fatigue", "weakness"}),
        "How long have you been experiencing these symptoms? Have you noticed any changes "
        "in your diet, sleep patterns, or stress levels recently?",
    ),
    (
        frozenset({"chest_pain"}),
        "Can you describe the chest pain more specifically? Is it sharp or dull? Does it "
        "worsen with breathing, movement, or eating?",
    ),
    (
        frozenset({"headache", "severe_headache"}),
        "Where exactly is the headache located? Is it accompanied by sensitivity to light or sound?",
    ),
    (
        frozenset({"dizziness", "lightheadedness"}),
        "Does the dizziness occur when standing up quickly, or is it constant? Have you "
        "experienced any falls or near-falls?",
    ),
    (
        frozenset({"abdominal_pain"}),
        "Where in your abdomen is the pain located? Is it associated with eating, and have "
        "you noticed any changes in bowel habits?",
    ),
    (
        frozenset({"cough"}),
        "Is your cough dry or productive? If productive, what color is the mucus?",
    ),
)

DEFAULT_FOLLOW_UP_QUESTION = (
    "How long have you been experiencing these symptoms, and have they been getting "
    "better, worse, or staying the same?"
)
