from abc import ABC, abstractmethod
from typing import Any

from symptombot.config.logger import get_logger
from symptombot.config.settings import settings

_logger = get_logger(__name__)


class BaseModelProvider(ABC):
    """Abstract provider contract for chat model creation."""

    name: str = "base"

    @abstractmethod
    def is_available(self) -> bool:
        """Whether this provider is configured for use."""

    @abstractmethod
    def create(self, model: str, temperature: float) -> Any:
        """Create provider-specific langchain chat model instance."""


class OpenAIProvider(BaseModelProvider):
    name = "openai"

    def is_available(self) -> bool:
        return settings.has_openai_like_creds()

    def create(self, model: str, temperature: float) -> Any:
        from langchain_openai import ChatOpenAI

        kwargs: dict[str, Any] = {
            "model": model,
            "api_key": settings.OPENAI_API_KEY,
            "temperature": temperature,
            "timeout": settings.AGENT_REQUEST_TIMEOUT,
            "max_retries": 1,
        }
        base_url = settings.get_agent_base_url(provider_hint=self.name)
        if base_url:
            kwargs["base_url"] = base_url
        return ChatOpenAI(**kwargs)


class OllamaProvider(BaseModelProvider):
    name = "ollama"

    def is_available(self) -> bool:
        # No credential to check; only used when selected explicitly.
        return True

    def create(self, model: str, temperature: float) -> Any:
        from langchain_ollama import ChatOllama

        return ChatOllama(
            model=model,
            base_url=settings.get_agent_base_url(provider_hint=self.name),
            temperature=temperature,
        )


class ModelFactory:
    """Provider registry + resolution strategy."""

    def __init__(self) -> None:
        self.providers: dict[str, BaseModelProvider] = {
            OpenAIProvider.name: OpenAIProvider(),
            OllamaProvider.name: OllamaProvider(),
        }

    def resolve_provider(self, explicit_provider: str = "") -> BaseModelProvider | None:
        provider_name = (explicit_provider or "").strip().lower()
        if provider_name and provider_name != "auto":
            provider = self.providers.get(provider_name)
            if provider is None:
                raise ValueError(f"Unknown provider: {provider_name}")
            return provider

        # Auto strategy: a configured credential selects the hosted model.
        openai = self.providers["openai"]
        if openai.is_available():
            return openai
        return None

    def create_chat_model(self, model: str, temperature: float) -> Any | None:
        provider = self.resolve_provider(settings.get_agent_provider())
        if provider is None:
            return None
        _logger.info("[model_factory] provider=%s model=%s", provider.name, model)
        return provider.create(model=model, temperature=temperature)


_FACTORY = ModelFactory()


def get_chat_model(
    model: str | None = None,
    temperature: float | None = None,
) -> Any | None:
    """Build the agent's chat model, or return None when no backend is configured."""
    return _FACTORY.create_chat_model(
        model=model or settings.AGENT_MODEL,
        temperature=settings.AGENT_TEMPERATURE if temperature is None else temperature,
    )
