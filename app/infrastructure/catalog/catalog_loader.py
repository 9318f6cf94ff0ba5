"""
Question catalog loader.

Reads question definitions from YAML and builds the immutable catalog. A
malformed catalog is fatal: it is reported once at startup and never
repaired or partially loaded.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from app.core.utils.logging import get_logger, log_execution_time
from app.domain.entities.question import Question
from app.domain.enums.assessment import AnswerType, QuestionCategory
from app.domain.exceptions import ConfigurationError
from app.domain.services.question_catalog import QuestionCatalog

logger = get_logger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "questions.yaml"


def question_from_mapping(entry: Any, position: int) -> Question:
    """
    Build a question from one YAML entry.

    Raises:
        ConfigurationError: If a field is missing or has the wrong type
    """
    if not isinstance(entry, Mapping):
        raise ConfigurationError(f"Catalog entry #{position} is not a mapping")

    question_id = entry.get("id")
    if not isinstance(question_id, str):
        raise ConfigurationError(f"Catalog entry #{position} has no string id")

    try:
        answer_type = AnswerType(entry.get("type"))
        category = QuestionCategory(entry.get("category"))
    except ValueError as e:
        raise ConfigurationError(f"Question '{question_id}': {e}") from e

    def string_list(key: str) -> tuple[str, ...]:
        value = entry.get(key) or []
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigurationError(f"Question '{question_id}': '{key}' must be a list of strings")
        return tuple(value)

    scored = entry.get("scored", True)
    if not isinstance(scored, bool):
        raise ConfigurationError(f"Question '{question_id}': 'scored' must be true or false")

    return Question(
        id=question_id,
        text=str(entry.get("text") or ""),
        answer_type=answer_type,
        category=category,
        options=string_list("options"),
        sub_category=entry.get("sub_category"),
        conditions=string_list("conditions"),
        scale_reference=entry.get("scale_reference"),
        negative_options=frozenset(string_list("negative_options")),
        scored=scored,
    )


@log_execution_time
def load_catalog(path: str | Path | None = None) -> QuestionCatalog:
    """
    Load and validate a question catalog.

    Args:
        path: YAML file to read; the bundled catalog when omitted

    Returns:
        The validated catalog

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    catalog_file = Path(path) if path else DEFAULT_CATALOG_PATH
    if not catalog_file.is_file():
        raise ConfigurationError(f"Question catalog not found: {catalog_file}")

    try:
        with catalog_file.open("r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Error parsing question catalog {catalog_file}: {e}")
        raise ConfigurationError(f"Question catalog is not valid YAML: {catalog_file}") from e

    if not isinstance(config, dict) or not isinstance(config.get("questions"), list):
        raise ConfigurationError(
            f"Invalid format in question catalog {catalog_file}: expected a 'questions' list"
        )

    questions = [
        question_from_mapping(entry, position)
        for position, entry in enumerate(config["questions"], start=1)
    ]
    catalog = QuestionCatalog(questions)
    logger.info(f"Loaded {len(catalog)} questions from {catalog_file}")
    return catalog
