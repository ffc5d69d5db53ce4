"""LLM module."""

from symptombot.llm.model_factory import ModelFactory, get_chat_model

__all__ = ["ModelFactory", "get_chat_model"]
