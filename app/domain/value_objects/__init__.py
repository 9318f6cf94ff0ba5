"""Domain value objects."""

from app.domain.value_objects.answer import (
    ANSWER_VARIANTS,
    Answer,
    MultiSelectAnswer,
    ScaleAnswer,
    SingleSelectAnswer,
    YesNoAnswer,
)
from app.domain.value_objects.history_comparison import HistoryComparison

__all__ = [
    "ANSWER_VARIANTS",
    "Answer",
    "HistoryComparison",
    "MultiSelectAnswer",
    "ScaleAnswer",
    "SingleSelectAnswer",
    "YesNoAnswer",
]
