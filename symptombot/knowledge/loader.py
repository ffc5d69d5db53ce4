"""Load the static knowledge tables from ``knowledge/data``."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from symptombot.config.logger import get_logger
from symptombot.knowledge.models import KnowledgeBase

_DATA_DIR = Path(__file__).resolve().parent / "data"

logger = get_logger(__name__)


def load_knowledge_file(file_name: str) -> Any:
    path = _DATA_DIR / file_name
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise RuntimeError(f"Failed to load knowledge file: {path}") from exc


def build_knowledge_base(
    symptom_mappings: dict[str, str],
    conditions: list[dict[str, Any]],
    red_flags: dict[str, Any],
) -> KnowledgeBase:
    try:
        return KnowledgeBase(
            symptom_mappings=symptom_mappings,
            conditions=conditions,
            red_flags=red_flags.get("patterns", []),
            critical_conditions=red_flags.get("critical_conditions", []),
        )
    except ValidationError as exc:
        raise RuntimeError(f"Invalid knowledge tables: {exc}") from exc


@lru_cache(maxsize=1)
def get_knowledge_base() -> KnowledgeBase:
    """Load all tables once per process."""
    kb = build_knowledge_base(
        symptom_mappings=load_knowledge_file("symptom_mappings.json"),
        conditions=load_knowledge_file("conditions.json"),
        red_flags=load_knowledge_file("red_flags.json"),
    )
    logger.info(
        "[knowledge] loaded phrases=%s conditions=%s red_flags=%s",
        len(kb.symptom_mappings),
        len(kb.conditions),
        len(kb.red_flags),
    )
    return kb
