"""
Application-wide settings using pydantic-settings.
All runtime env access in symptombot/ should go through this module.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = PROJECT_ROOT / ".env"

_OLLAMA_DEFAULT_BASE_URL = "http://localhost:11434"


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    LOG_DIR: str = "./logs"
    LOG_FILE_NAME: str = "symptombot.debug.log"
    LOG_FILE_WHEN: str = "midnight"
    LOG_FILE_INTERVAL: int = 1
    LOG_FILE_BACKUP_COUNT: int = 7
    LOG_FILE_ENCODING: str = "utf-8"
    LOG_FILE_LEVEL: str = "DEBUG"

    # LLM credentials
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = ""
    OLLAMA_BASE_URL: str = _OLLAMA_DEFAULT_BASE_URL

    # Agent loop
    AGENT_PROVIDER: str = ""
    AGENT_MODEL: str = "gpt-4-turbo-preview"
    AGENT_TEMPERATURE: float = 0.2
    AGENT_REQUEST_TIMEOUT: float = 60.0
    AGENT_MAX_ROUNDS: int = 10

    # Runtime
    AGENT_LOG_TRUNCATE: int = 600

    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def get_agent_provider(self) -> str:
        return (self.AGENT_PROVIDER or "").strip().lower()

    def get_agent_base_url(self, provider_hint: str = "") -> str:
        hint = (provider_hint or "").strip().lower()
        if hint == "ollama":
            return self.OLLAMA_BASE_URL or _OLLAMA_DEFAULT_BASE_URL
        return self.OPENAI_BASE_URL

    def has_openai_like_creds(self) -> bool:
        return bool((self.OPENAI_API_KEY or "").strip())


settings = Settings()
