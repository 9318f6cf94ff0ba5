"""
Branching Selector.

Decides after every recorded response whether to ask a follow-up, the next
scripted catalog question, or nothing at all. The decision is a pure
function of the response history and the catalog, so the same history
always yields the same next step.

Only scored catalog questions can trigger a follow-up.

Termination: every catalog question is answered once and can trigger at
most one follow-up, and follow-ups never trigger further follow-ups, so a
session is complete after at most ``2 * len(catalog)`` responses.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from app.domain.entities.question import Question
from app.domain.entities.response import Response
from app.domain.enums.assessment import BranchState
from app.domain.services.follow_up_templates import build_follow_up
from app.domain.services.question_catalog import QuestionCatalog
from app.domain.value_objects.answer import (
    Answer,
    MultiSelectAnswer,
    ScaleAnswer,
    SingleSelectAnswer,
    YesNoAnswer,
)


@dataclass(frozen=True)
class ConcernRules:
    """Per-answer-type thresholds that mark an answer as concerning."""

    scale_low: float = 3
    scale_high: float = 8
    multi_select_min: int = 2

    def __post_init__(self) -> None:
        if self.multi_select_min < 1:
            raise ValueError("multi_select_min must be at least 1")
        if self.scale_low >= self.scale_high:
            raise ValueError("scale_low must be below scale_high")


@dataclass(frozen=True)
class BranchDecision:
    """Next step of a session."""

    state: BranchState
    question: Question | None = None
    # id of the catalog question whose answer triggered a follow-up
    triggered_by: str | None = None

    @property
    def complete(self) -> bool:
        return self.state is BranchState.COMPLETE


class BranchingSelector:
    """Deterministic state machine over the response history."""

    def __init__(self, catalog: QuestionCatalog, concern_rules: ConcernRules | None = None) -> None:
        self.catalog = catalog
        self.concern_rules = concern_rules or ConcernRules()

    @property
    def max_steps(self) -> int:
        """Upper bound on responses in one session."""
        return 2 * len(self.catalog)

    def first(self) -> BranchDecision:
        return BranchDecision(BranchState.AWAITING_NEXT, self.catalog.ordered()[0])

    def is_concern(self, question: Question, answer: Answer) -> bool:
        rules = self.concern_rules
        if isinstance(answer, ScaleAnswer):
            return answer.value <= rules.scale_low or answer.value >= rules.scale_high
        if isinstance(answer, YesNoAnswer):
            return answer.value
        if isinstance(answer, MultiSelectAnswer):
            return len(answer.values) >= rules.multi_select_min
        if isinstance(answer, SingleSelectAnswer):
            return answer.value in question.negative_options
        raise TypeError(f"Unsupported answer variant: {type(answer).__name__}")

    def decide(self, history: Sequence[Response]) -> BranchDecision:
        """
        Pick the step that follows ``history``.

        Args:
            history: Responses recorded so far, oldest first

        Returns:
            A follow-up decision, the next scripted question, or completion
        """
        if not history:
            return self.first()

        last = history[-1]
        question = last.question
        if (
            question.scored
            and not question.is_follow_up
            and self.is_concern(question, last.answer)
            and not self._has_follow_up(history, question.id)
        ):
            return BranchDecision(
                BranchState.FOLLOW_UP_PENDING,
                build_follow_up(question, last.answer),
                triggered_by=question.id,
            )

        scripted = sum(1 for response in history if not response.question.is_follow_up)
        ordered = self.catalog.ordered()
        if scripted < len(ordered):
            return BranchDecision(BranchState.AWAITING_NEXT, ordered[scripted])
        return BranchDecision(BranchState.COMPLETE)

    @staticmethod
    def _has_follow_up(history: Sequence[Response], parent_id: str) -> bool:
        return any(r.question.follows_up == parent_id for r in history)
