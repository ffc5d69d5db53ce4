import json
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from symptombot.config.settings import settings

_BASE_LOGGER_NAME = "uvicorn.error"
_CONFIGURED = False
_DEBUG_FILE_HANDLER_MARK = "_symptombot_debug_file"


def _parse_level(level_name: str) -> int | None:
    level = getattr(logging, (level_name or "").strip().upper(), None)
    return level if isinstance(level, int) else None


def _level_or_default(
    base_logger: logging.Logger,
    setting_name: str,
    level_name: str,
    default: int,
) -> int:
    level = _parse_level(level_name)
    if level is not None:
        return level
    base_logger.warning(
        "[logger] Invalid %s '%s', fallback to %s",
        setting_name,
        level_name,
        logging.getLevelName(default),
    )
    return default


def _ensure_debug_file_handler(base_logger: logging.Logger) -> None:
    if any(getattr(h, _DEBUG_FILE_HANDLER_MARK, False) for h in base_logger.handlers):
        return

    backup_count = settings.LOG_FILE_BACKUP_COUNT
    if backup_count < 0:
        base_logger.warning(
            "[logger] Invalid LOG_FILE_BACKUP_COUNT '%s', fallback to 7",
            backup_count,
        )
        backup_count = 7

    file_level = _level_or_default(
        base_logger, "LOG_FILE_LEVEL", settings.LOG_FILE_LEVEL, logging.DEBUG
    )

    try:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=str(log_dir / settings.LOG_FILE_NAME),
            when=settings.LOG_FILE_WHEN,
            interval=settings.LOG_FILE_INTERVAL,
            backupCount=backup_count,
            encoding=settings.LOG_FILE_ENCODING,
        )
    except (OSError, ValueError) as exc:
        base_logger.warning(
            "[logger] Failed to configure debug file logging at '%s': %s",
            settings.LOG_DIR,
            exc,
        )
        return

    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
    setattr(file_handler, _DEBUG_FILE_HANDLER_MARK, True)
    base_logger.addHandler(file_handler)


def configure_logging() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    base_logger = logging.getLogger(_BASE_LOGGER_NAME)
    if not base_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
        base_logger.addHandler(handler)
        base_logger.propagate = False

    base_logger.setLevel(
        _level_or_default(base_logger, "LOG_LEVEL", settings.LOG_LEVEL, logging.INFO)
    )
    _ensure_debug_file_handler(base_logger)

    _CONFIGURED = True


def get_logger(name: str | None = None) -> logging.Logger:
    configure_logging()
    base_logger = logging.getLogger(_BASE_LOGGER_NAME)
    if not name:
        return base_logger
    return base_logger.getChild(name)


def _stringify_log_content(content: Any) -> str:
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, BaseModel):
        content = content.model_dump(mode="json", exclude_none=True)
    try:
        return json.dumps(content, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(content)


def log_stage(logger: logging.Logger, stage: str, content: Any) -> None:
    text = _stringify_log_content(content)

    if not text:
        logger.info("[%s] output: [EMPTY]", stage)
        return

    limit = settings.AGENT_LOG_TRUNCATE
    if len(text) > limit:
        text = f"{text[:limit]} ...[truncated {len(text) - limit} chars]"

    logger.info("[%s] output: %s", stage, text)
