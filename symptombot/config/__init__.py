"""Configuration exports."""

from symptombot.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
