"""SymptomBot: symptom normalization, condition lookup and red-flag screening behind a tool-calling agent."""
