"""
Question entity.

A question is defined once, when the catalog is loaded, and never mutated.
Follow-up questions are built from templates at runtime and carry the id of
the catalog question that triggered them.
"""

from dataclasses import dataclass, field

from app.domain.enums.assessment import AnswerType, QuestionCategory
from app.domain.exceptions import ConfigurationError

SCALE_MIN = 1
SCALE_MAX = 10


@dataclass(frozen=True, kw_only=True)
class Question:
    """A single question posed during an assessment session."""

    id: str
    text: str
    answer_type: AnswerType
    category: QuestionCategory
    options: tuple[str, ...] = ()
    sub_category: str | None = None
    conditions: tuple[str, ...] = ()
    scale_reference: str | None = None
    # singleSelect options that count as a negative outcome
    negative_options: frozenset[str] = field(default_factory=frozenset)
    scored: bool = True
    follows_up: str | None = None

    @property
    def is_follow_up(self) -> bool:
        return self.follows_up is not None

    @property
    def topic(self) -> str:
        """Short human-readable subject used in labels and follow-up text."""
        if self.sub_category:
            return self.sub_category.replace("-", " ").replace("_", " ")
        return "this"

    def validate(self) -> None:
        """
        Check the definition is internally consistent.

        Raises:
            ConfigurationError: If the question cannot be asked or scored
        """
        if not self.id or not self.id.strip():
            raise ConfigurationError("Question id must be a non-empty string")
        if not self.text or not self.text.strip():
            raise ConfigurationError(f"Question '{self.id}' has no prompt text")

        if self.answer_type.is_select:
            if not self.options:
                raise ConfigurationError(
                    f"Question '{self.id}' is {self.answer_type.value} but has no options"
                )
            if len(set(self.options)) != len(self.options):
                raise ConfigurationError(f"Question '{self.id}' has duplicate options")
        elif self.options:
            raise ConfigurationError(
                f"Question '{self.id}' is {self.answer_type.value} and must not define options"
            )

        unknown_negative = self.negative_options.difference(self.options)
        if unknown_negative:
            raise ConfigurationError(
                f"Question '{self.id}' marks unknown options as negative: {sorted(unknown_negative)}"
            )

        if self.scored and not self.conditions:
            raise ConfigurationError(
                f"Question '{self.id}' is scored but has no clinical condition tags"
            )
        if len(set(self.conditions)) != len(self.conditions):
            raise ConfigurationError(f"Question '{self.id}' has duplicate condition tags")
