"""Prompt and response templates."""

from symptombot.prompts.prompts import SAFETY_NOTICE_HEADER, SYSTEM_PROMPT

__all__ = ["SAFETY_NOTICE_HEADER", "SYSTEM_PROMPT"]
