"""
Question Catalog.

Immutable registry of the scripted questions. The catalog is built once at
process start and shared by reference between sessions; it is never copied
or mutated per session.
"""

import logging
from collections.abc import Iterable, Iterator, Sequence
from types import MappingProxyType

from app.domain.entities.question import Question
from app.domain.exceptions import ConfigurationError, QuestionNotFoundError

logger = logging.getLogger(__name__)


class QuestionCatalog:
    """Read-only, ordered collection of questions keyed by id."""

    def __init__(self, questions: Iterable[Question]) -> None:
        """
        Build and validate the catalog.

        Args:
            questions: Question definitions in authoring order

        Raises:
            ConfigurationError: On duplicate ids, malformed questions or an
                empty catalog
        """
        ordered: list[Question] = []
        by_id: dict[str, Question] = {}

        for question in questions:
            question.validate()
            if question.is_follow_up:
                raise ConfigurationError(
                    f"Catalog question '{question.id}' must not be a follow-up question"
                )
            if question.id in by_id:
                raise ConfigurationError(f"Duplicate question id in catalog: {question.id}")
            by_id[question.id] = question
            ordered.append(question)

        if not ordered:
            raise ConfigurationError("Question catalog is empty")

        self._ordered: tuple[Question, ...] = tuple(ordered)
        self._by_id = MappingProxyType(by_id)
        logger.info("Question catalog loaded with %d questions", len(self._ordered))

    def get(self, question_id: str) -> Question:
        """
        Look up a question by id.

        Raises:
            QuestionNotFoundError: If the id is not in the catalog
        """
        try:
            return self._by_id[question_id]
        except KeyError:
            raise QuestionNotFoundError(question_id) from None

    def ordered(self) -> Sequence[Question]:
        """Questions in authoring order; this order is the default script."""
        return self._ordered

    def conditions(self) -> tuple[str, ...]:
        """Every condition tag used by a scored question, in first-seen order."""
        seen: dict[str, None] = {}
        for question in self._ordered:
            if question.scored:
                for condition in question.conditions:
                    seen.setdefault(condition, None)
        return tuple(seen)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._by_id

    def __iter__(self) -> Iterator[Question]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)
