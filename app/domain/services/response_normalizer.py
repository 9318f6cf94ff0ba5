"""
Response Normalizer.

Turns a raw submitted value into a typed answer and scores that answer
against every condition tagged on the question. A single answer contributes
at most ``MAX_CONTRIBUTION`` to any condition.
"""

import math
from collections.abc import Mapping
from typing import Any

from app.domain.entities.question import SCALE_MAX, SCALE_MIN, Question
from app.domain.enums.assessment import AnswerType
from app.domain.exceptions import InvalidResponseError
from app.domain.utils.numeric import clamp, round_half_up
from app.domain.value_objects.answer import (
    ANSWER_VARIANTS,
    Answer,
    MultiSelectAnswer,
    ScaleAnswer,
    SingleSelectAnswer,
    YesNoAnswer,
)

MAX_CONTRIBUTION = 3

SCALE_SEVERE_AT = 7
SCALE_MODERATE_AT = 5


class ResponseNormalizer:
    """Validates answers and converts them to per-condition contributions."""

    def parse(self, question: Question, value: Any) -> Answer:
        """
        Convert a raw JSON value into the answer variant the question expects.

        Raises:
            InvalidResponseError: If the value does not fit the answer type
        """
        if isinstance(value, ANSWER_VARIANTS):
            self._check_variant(question, value)
            return self.parse(question, value.to_primitive())

        answer_type = question.answer_type
        if answer_type is AnswerType.SCALE:
            return self._parse_scale(question, value)
        if answer_type is AnswerType.YES_NO:
            if not isinstance(value, bool):
                raise self._mismatch(question, value, "a boolean")
            return YesNoAnswer(value)
        if answer_type is AnswerType.SINGLE_SELECT:
            if not isinstance(value, str):
                raise self._mismatch(question, value, "one option string")
            if value not in question.options:
                raise InvalidResponseError(
                    f"'{value}' is not an option of question '{question.id}'",
                    question_id=question.id,
                    value=value,
                )
            return SingleSelectAnswer(value)
        if answer_type is AnswerType.MULTI_SELECT:
            return self._parse_multi_select(question, value)
        raise TypeError(f"Unsupported answer type: {answer_type!r}")

    def score(self, question: Question, value: Any) -> dict[str, int]:
        """
        Score an answer against each condition tagged on the question.

        Args:
            question: The question that was answered
            value: A raw value or an already parsed answer

        Returns:
            Mapping of condition name to a contribution in ``[0, 3]``; empty
            for questions that are not scored
        """
        answer = self.parse(question, value)
        if not question.scored:
            return {}
        contribution = self.contribution(question, answer)
        return {condition: contribution for condition in question.conditions}

    def contribution(self, question: Question, answer: Answer) -> int:
        """Severity contribution of one answer, identical for every tag."""
        if isinstance(answer, ScaleAnswer):
            if answer.value >= SCALE_SEVERE_AT:
                return 3
            if answer.value >= SCALE_MODERATE_AT:
                return 2
            return 1
        if isinstance(answer, YesNoAnswer):
            return MAX_CONTRIBUTION if answer.value else 0
        if isinstance(answer, SingleSelectAnswer):
            return MAX_CONTRIBUTION if answer.value in question.negative_options else 1
        if isinstance(answer, MultiSelectAnswer):
            if not answer.values:
                return 0
            ratio = len(answer.values) / len(question.options)
            return int(clamp(round_half_up(ratio * MAX_CONTRIBUTION), 0, MAX_CONTRIBUTION))
        raise TypeError(f"Unsupported answer variant: {type(answer).__name__}")

    def symptom_labels(self, question: Question, answer: Answer) -> list[str]:
        """Human-readable symptom labels an answer adds to its conditions."""
        if isinstance(answer, ScaleAnswer):
            rating = f"{answer.to_primitive()}/{SCALE_MAX}"
            if answer.value >= SCALE_SEVERE_AT:
                return [f"Severe {question.topic} symptoms ({rating})"]
            if answer.value >= SCALE_MODERATE_AT:
                return [f"Moderate {question.topic} symptoms ({rating})"]
            return []
        if isinstance(answer, YesNoAnswer):
            return [question.text] if answer.value else []
        if isinstance(answer, SingleSelectAnswer):
            if answer.value in question.negative_options:
                return [f"{question.topic.capitalize()}: {answer.value}"]
            return []
        if isinstance(answer, MultiSelectAnswer):
            return list(answer.values)
        raise TypeError(f"Unsupported answer variant: {type(answer).__name__}")

    def _parse_scale(self, question: Question, value: Any) -> ScaleAnswer:
        # bool is an int subclass; true/false is never a rating
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._mismatch(question, value, f"a number from {SCALE_MIN} to {SCALE_MAX}")
        if not math.isfinite(value) or not SCALE_MIN <= value <= SCALE_MAX:
            raise InvalidResponseError(
                f"Scale answer for question '{question.id}' must be between "
                f"{SCALE_MIN} and {SCALE_MAX}",
                question_id=question.id,
                value=value,
            )
        return ScaleAnswer(value)

    def _parse_multi_select(self, question: Question, value: Any) -> MultiSelectAnswer:
        if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, (list, tuple)):
            raise self._mismatch(question, value, "a list of option strings")
        if not all(isinstance(item, str) for item in value):
            raise self._mismatch(question, value, "a list of option strings")
        if len(set(value)) != len(value):
            raise InvalidResponseError(
                f"Duplicate selections for question '{question.id}'",
                question_id=question.id,
                value=value,
            )
        unknown = [item for item in value if item not in question.options]
        if unknown:
            raise InvalidResponseError(
                f"Unknown options for question '{question.id}': {unknown}",
                question_id=question.id,
                value=value,
            )
        return MultiSelectAnswer(tuple(value))

    def _check_variant(self, question: Question, answer: Answer) -> None:
        if answer.answer_type is not question.answer_type:
            raise InvalidResponseError(
                f"Question '{question.id}' expects a {question.answer_type.value} answer, "
                f"got {answer.answer_type.value}",
                question_id=question.id,
            )

    @staticmethod
    def _mismatch(question: Question, value: Any, expected: str) -> InvalidResponseError:
        return InvalidResponseError(
            f"Question '{question.id}' ({question.answer_type.value}) expects {expected}, "
            f"got {type(value).__name__}",
            question_id=question.id,
            value=value,
        )
