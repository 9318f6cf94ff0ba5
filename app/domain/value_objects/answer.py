"""
Answer value objects.

Each answer type has its own immutable variant so the scoring code can
dispatch on the variant instead of inspecting raw JSON values.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Union

from app.domain.enums.assessment import AnswerType


@dataclass(frozen=True)
class ScaleAnswer:
    """A rating on the 1-10 scale."""

    value: float
    answer_type: ClassVar[AnswerType] = AnswerType.SCALE

    def to_primitive(self) -> Any:
        return int(self.value) if float(self.value).is_integer() else self.value


@dataclass(frozen=True)
class YesNoAnswer:
    """A yes/no endorsement."""

    value: bool
    answer_type: ClassVar[AnswerType] = AnswerType.YES_NO

    def to_primitive(self) -> Any:
        return self.value


@dataclass(frozen=True)
class SingleSelectAnswer:
    """Exactly one of the question's options."""

    value: str
    answer_type: ClassVar[AnswerType] = AnswerType.SINGLE_SELECT

    def to_primitive(self) -> Any:
        return self.value


@dataclass(frozen=True)
class MultiSelectAnswer:
    """Zero or more distinct options; order carries no meaning."""

    values: tuple[str, ...]
    answer_type: ClassVar[AnswerType] = AnswerType.MULTI_SELECT

    def to_primitive(self) -> Any:
        return list(self.values)


Answer = Union[ScaleAnswer, YesNoAnswer, SingleSelectAnswer, MultiSelectAnswer]

ANSWER_VARIANTS: tuple[type, ...] = (
    ScaleAnswer,
    YesNoAnswer,
    SingleSelectAnswer,
    MultiSelectAnswer,
)
