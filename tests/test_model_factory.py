"""Tests for chat model provider selection."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from unittest.mock import patch

from symptombot.agent import MockOrchestrator, ModelOrchestrator, orchestrator
from symptombot.config.settings import settings
from symptombot.llm import ModelFactory, get_chat_model


@pytest.fixture
def no_credentials(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")
    monkeypatch.setattr(settings, "AGENT_PROVIDER", "")


class TestModelFactory:
    """Provider resolution."""

    def test_no_credentials_means_no_model(self, no_credentials):
        assert ModelFactory().resolve_provider("") is None
        assert get_chat_model() is None

    def test_auto_picks_openai_with_key(self, monkeypatch, no_credentials):
        monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
        provider = ModelFactory().resolve_provider("auto")
        assert provider is not None
        assert provider.name == "openai"

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            ModelFactory().resolve_provider("bogus")

    @patch("langchain_openai.ChatOpenAI")
    def test_openai_model_built_from_settings(self, mock_chat_openai, monkeypatch, no_credentials):
        monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
        monkeypatch.setattr(settings, "OPENAI_BASE_URL", "https://example.invalid/v1")

        model = get_chat_model(model="gpt-test", temperature=0.0)

        assert model is mock_chat_openai.return_value
        mock_chat_openai.assert_called_once_with(
            model="gpt-test",
            api_key="sk-test",
            temperature=0.0,
            timeout=settings.AGENT_REQUEST_TIMEOUT,
            max_retries=1,
            base_url="https://example.invalid/v1",
        )

    @patch("langchain_ollama.ChatOllama")
    def test_ollama_only_when_selected(self, mock_chat_ollama, monkeypatch, no_credentials):
        monkeypatch.setattr(settings, "AGENT_PROVIDER", "ollama")
        monkeypatch.setattr(settings, "OLLAMA_BASE_URL", "http://ollama:11434")

        model = get_chat_model(model="llama3")

        assert model is mock_chat_ollama.return_value
        mock_chat_ollama.assert_called_once_with(
            model="llama3",
            base_url="http://ollama:11434",
            temperature=settings.AGENT_TEMPERATURE,
        )


class TestOrchestratorSelection:
    def test_mock_without_model(self, monkeypatch):
        monkeypatch.setattr(orchestrator, "get_chat_model", lambda *args, **kwargs: None)
        built = orchestrator.build_orchestrator()
        assert isinstance(built, MockOrchestrator)
        assert built.mode == "mock"

    def test_model_when_configured(self, monkeypatch):
        class FakeLLM:
            def bind_tools(self, _tools):
                return self

        monkeypatch.setattr(orchestrator, "get_chat_model", lambda *args, **kwargs: FakeLLM())
        built = orchestrator.build_orchestrator()
        assert isinstance(built, ModelOrchestrator)
        assert built.mode == "model"
        assert built.max_rounds == settings.AGENT_MAX_ROUNDS
