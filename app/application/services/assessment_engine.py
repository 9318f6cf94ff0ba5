"""
Adaptive assessment engine.

Orchestrates one assessment session: every answer is validated, scored,
recorded and followed by a branching decision before the next answer is
accepted. When the branching selector reaches ``COMPLETE`` the session's
scores are finalized into a report and compared with prior history.

The engine itself is stateless apart from its configuration; all mutable
state lives in the ``AssessmentSession`` it hands out, so one engine can
serve many isolated sessions.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from app.application.services.history_parser import HistoryParser
from app.core.interfaces.services.question_generator_interface import (
    QuestionGeneratorInterface,
)
from app.domain.entities.assessment_report import AssessmentReport
from app.domain.entities.question import Question
from app.domain.entities.response import Response
from app.domain.enums.assessment import BranchState
from app.domain.exceptions import (
    CollaboratorUnavailableError,
    InvalidResponseError,
    ValidationError,
)
from app.domain.services.branching_selector import BranchingSelector, ConcernRules
from app.domain.services.follow_up_templates import question_from_proposal
from app.domain.services.historical_comparator import HistoricalComparator
from app.domain.services.mood_screening import MoodScreening, screen_mood
from app.domain.services.question_catalog import QuestionCatalog
from app.domain.services.recommendation_generator import RecommendationGenerator
from app.domain.services.response_normalizer import ResponseNormalizer
from app.domain.services.risk_markers import warning_signals_for
from app.domain.services.score_accumulator import SCALE_FACTOR, ScoreAccumulator
from app.domain.services.severity_classifier import SeverityClassifier
from app.domain.utils.datetime_utils import now_utc
from app.domain.value_objects.history_comparison import HistoryComparison

logger = logging.getLogger(__name__)

DEFAULT_GENERATOR_TIMEOUT = 5.0


@dataclass(kw_only=True)
class AssessmentSession:
    """All state owned by one assessment run."""

    id: UUID = field(default_factory=uuid4)
    accumulator: ScoreAccumulator
    history: list[Response] = field(default_factory=list)
    prior_reports: list[AssessmentReport] = field(default_factory=list)
    prior_history_supplied: bool = False
    state: BranchState = BranchState.AWAITING_NEXT
    pending_question: Question | None = None
    mood: MoodScreening = field(default_factory=MoodScreening)
    # free text (mood description, voice journal); never scored
    context_notes: list[str] = field(default_factory=list)
    warning_signals: list[str] = field(default_factory=list)
    report: AssessmentReport | None = None
    history_delta: HistoryComparison | None = None
    created_at: datetime = field(default_factory=now_utc)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    @property
    def complete(self) -> bool:
        return self.state is BranchState.COMPLETE


@dataclass(frozen=True)
class SessionStart:
    session: AssessmentSession
    question: Question


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of one submitted answer."""

    session: AssessmentSession
    state: BranchState
    question: Question | None = None
    report: AssessmentReport | None = None
    history_delta: HistoryComparison | None = None

    @property
    def complete(self) -> bool:
        return self.state is BranchState.COMPLETE


class AssessmentEngine:
    """Runs assessment sessions against a shared, read-only question catalog."""

    def __init__(
        self,
        catalog: QuestionCatalog,
        *,
        concern_rules: ConcernRules | None = None,
        scale_factor: float = SCALE_FACTOR,
        classifier: SeverityClassifier | None = None,
        question_generator: QuestionGeneratorInterface | None = None,
        generator_timeout: float = DEFAULT_GENERATOR_TIMEOUT,
    ):
        """
        Initialize the engine.

        Args:
            catalog: The question catalog shared by every session
            concern_rules: Thresholds that trigger follow-up questions
            scale_factor: Normalization constant of the score accumulator
            classifier: Severity classifier, default thresholds if omitted
            question_generator: Optional service proposing follow-up wording
            generator_timeout: Seconds to wait for the question generator
        """
        if generator_timeout <= 0:
            raise ValueError("generator_timeout must be positive")

        self.catalog = catalog
        self.scale_factor = scale_factor
        self.classifier = classifier or SeverityClassifier()
        self.normalizer = ResponseNormalizer()
        self.selector = BranchingSelector(catalog, concern_rules)
        self.recommendations = RecommendationGenerator(self.classifier)
        self.comparator = HistoricalComparator()
        self.history_parser = HistoryParser(self.classifier)
        self.question_generator = question_generator
        self.generator_timeout = generator_timeout

    def start(
        self,
        prior_history: Sequence[Any] | None = None,
        mood_description: str | None = None,
        mood_rating: float | None = None,
    ) -> SessionStart:
        """
        Open a new session.

        Args:
            prior_history: Caller-owned prior reports in any order; unreadable
                entries are skipped
            mood_description: Optional free-text description of current mood
            mood_rating: Optional 1-10 mood rating, 1 being the worst

        Returns:
            The new session and its first question

        Raises:
            InvalidResponseError: If the mood rating is outside 1-10
        """
        mood = screen_mood(mood_description, mood_rating)
        session = AssessmentSession(
            accumulator=ScoreAccumulator(self.scale_factor),
            prior_reports=self.history_parser.parse(prior_history),
            prior_history_supplied=bool(prior_history),
            mood=mood,
        )
        if mood_description and mood_description.strip():
            session.context_notes.append(mood_description.strip())

        decision = self.selector.first()
        session.state = decision.state
        session.pending_question = decision.question
        logger.info(
            f"Assessment session {session.id} started with "
            f"{len(session.prior_reports)} prior report(s)"
        )
        return SessionStart(session=session, question=decision.question)

    async def submit(self, session: AssessmentSession, question_id: str, value: Any) -> SubmissionResult:
        """
        Record an answer to the pending question and advance the session.

        Args:
            session: The session being answered
            question_id: Id of the question being answered
            value: Raw answer value

        Returns:
            The next question, or the report once the session is complete

        Raises:
            InvalidResponseError: If the session is complete, the answer is
                for another question, or the value does not fit the question.
                The session is left unchanged.
        """
        async with session.lock:
            if session.complete:
                raise InvalidResponseError(
                    f"Assessment session {session.id} is already complete",
                    question_id=question_id,
                )
            question = session.pending_question
            if question is None or question_id != question.id:
                expected = question.id if question else None
                raise InvalidResponseError(
                    f"Expected an answer to question '{expected}', got '{question_id}'",
                    question_id=question_id,
                )

            # validate and score before touching the session
            answer = self.normalizer.parse(question, value)
            contributions = self.normalizer.score(question, answer)
            labels = self.normalizer.symptom_labels(question, answer)
            signals = warning_signals_for(question, answer, labels)
            history = [*session.history, Response(question=question, answer=answer)]

            decision = self.selector.decide(history)
            next_question = decision.question
            if decision.state is BranchState.FOLLOW_UP_PENDING and self.question_generator:
                next_question = await self._generate_follow_up(history, decision.question)

            # commit in one step, no await below
            session.accumulator.apply(question, contributions)
            session.accumulator.record_symptoms(question.conditions, labels)
            for signal in signals:
                if signal not in session.warning_signals:
                    session.warning_signals.append(signal)
            session.history = history
            session.state = decision.state
            session.pending_question = next_question
            logger.debug(
                f"Session {session.id}: answered '{question.id}', "
                f"state {decision.state.value}, next '{next_question.id if next_question else None}'"
            )

            if decision.complete:
                self._finalize(session)

            return SubmissionResult(
                session=session,
                state=session.state,
                question=session.pending_question,
                report=session.report,
                history_delta=session.history_delta,
            )

    def attach_transcript(self, session: AssessmentSession, text: str) -> None:
        """
        Attach a voice-journal transcript as free-text mood context.

        The transcript is screened like the mood description; it is never
        scored.

        Raises:
            InvalidResponseError: If the session is already complete
        """
        if session.complete:
            raise InvalidResponseError(f"Assessment session {session.id} is already complete")
        text = text.strip()
        if not text:
            return

        session.context_notes.append(text)
        screening = screen_mood(text)
        session.mood = MoodScreening(
            indicated_conditions=tuple(
                dict.fromkeys(session.mood.indicated_conditions + screening.indicated_conditions)
            ),
            self_harm_flagged=session.mood.self_harm_flagged or screening.self_harm_flagged,
        )
        logger.info(f"Voice journal transcript attached to session {session.id}")

    def _finalize(self, session: AssessmentSession) -> None:
        session.report = self.recommendations.build_report(
            session.accumulator,
            warning_signals=session.warning_signals,
            context_texts=session.context_notes,
            indicated_conditions=session.mood.indicated_conditions,
        )
        if session.prior_history_supplied:
            session.history_delta = self.comparator.compare_with_history(
                session.report, session.prior_reports
            )
        logger.info(
            f"Assessment session {session.id} complete after {len(session.history)} responses, "
            f"risk level {session.report.risk_level.value}"
        )

    async def _generate_follow_up(self, history: Sequence[Response], template: Question) -> Question:
        """Ask the question generator for better wording, keeping the template on any failure."""
        try:
            proposal = await asyncio.wait_for(
                self.question_generator.propose_follow_up(
                    question_payload(template), history_payload(history)
                ),
                timeout=self.generator_timeout,
            )
        except CollaboratorUnavailableError as e:
            logger.warning(f"Question generator unavailable, using template follow-up: {e.message}")
            return template
        except TimeoutError:
            logger.warning(
                f"Question generator timed out after {self.generator_timeout}s, "
                "using template follow-up"
            )
            return template
        except Exception as e:
            logger.warning(f"Question generator failed, using template follow-up: {e!s}")
            return template

        if proposal is None:
            return template
        try:
            return question_from_proposal(proposal, template)
        except ValidationError as e:
            logger.warning(f"Discarding generated follow-up for '{template.id}': {e.message}")
            return template


def question_payload(question: Question) -> dict[str, Any]:
    return {
        "id": question.id,
        "text": question.text,
        "type": question.answer_type.value,
        "category": question.category.value,
        "subCategory": question.sub_category,
        "options": list(question.options),
    }


def history_payload(history: Sequence[Response]) -> list[dict[str, Any]]:
    return [
        {
            "questionId": response.question_id,
            "question": response.question.text,
            "value": response.answer.to_primitive(),
        }
        for response in history
    ]
