"""Response entity: one recorded answer to one question."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.entities.question import Question
from app.domain.utils.datetime_utils import now_utc
from app.domain.value_objects.answer import Answer


@dataclass(frozen=True, kw_only=True)
class Response:
    """An immutable answer; the ordered list of these is the response history."""

    question: Question
    answer: Answer
    recorded_at: datetime = field(default_factory=now_utc)

    @property
    def question_id(self) -> str:
        return self.question.id
