"""
Tests for the adaptive assessment engine.
"""

import asyncio

import pytest

from app.application.services.assessment_engine import AssessmentEngine
from app.domain.enums.assessment import BranchState, OverallTrend, RiskLevel, SeverityBand, Trend
from app.domain.exceptions import CollaboratorUnavailableError, InvalidResponseError
from app.domain.services.branching_selector import ConcernRules
from app.domain.services.recommendation_generator import CRISIS_RESOURCES
from app.domain.services.risk_markers import SELF_HARM_WARNING
from app.infrastructure.ml import MockQuestionGenerator

THREE_SLEEP_PROBLEMS = ["Trouble falling asleep", "Waking up during the night", "Waking up too early"]


async def answer_all(engine, session, values):
    """Submit ``values`` in order, answering whatever question is pending."""
    result = None
    for value in values:
        result = await engine.submit(session, session.pending_question.id, value)
    return result


class TestStart:
    def test_start_returns_first_question(self, engine):
        started = engine.start()

        assert started.question.id == "dep-mood"
        assert started.session.state is BranchState.AWAITING_NEXT
        assert started.session.pending_question == started.question
        assert started.session.history == []

    def test_sessions_are_isolated(self, engine):
        first = engine.start().session
        second = engine.start().session

        assert first.id != second.id
        assert first.accumulator is not second.accumulator

    def test_mood_context_is_screened(self, engine):
        started = engine.start(mood_description="Feeling anxious and tired", mood_rating=3)

        assert started.session.mood.indicated_conditions == ("depression", "anxiety")
        assert started.session.context_notes == ["Feeling anxious and tired"]

    def test_invalid_mood_rating_rejected(self, engine):
        with pytest.raises(InvalidResponseError):
            engine.start(mood_rating=12)

    def test_unreadable_history_is_skipped(self, engine):
        started = engine.start(prior_history=[{"nonsense": 1}, "text"])

        assert started.session.prior_reports == []
        assert started.session.prior_history_supplied

    def test_generator_timeout_must_be_positive(self, small_catalog):
        with pytest.raises(ValueError):
            AssessmentEngine(small_catalog, generator_timeout=0)


class TestExampleScenario:
    @pytest.mark.asyncio
    async def test_depression_scale_then_sleep(self, engine):
        session = engine.start().session

        first = await engine.submit(session, "dep-mood", 9)
        assert first.state is BranchState.FOLLOW_UP_PENDING
        assert first.question.id == "dep-mood-followup"

        second = await engine.submit(session, "dep-mood-followup", "Nearly every day")
        assert second.state is BranchState.AWAITING_NEXT
        assert second.question.id == "sleep"

        third = await engine.submit(session, "sleep", THREE_SLEEP_PROBLEMS)
        assert third.state is BranchState.FOLLOW_UP_PENDING
        assert third.question.follows_up == "sleep"

        result = await engine.submit(session, third.question.id, "Several days")

        assert result.complete
        assert result.question is None
        report = result.report
        assert report.conditions["depression"].score == 8.0
        assert report.conditions["depression"].severity is SeverityBand.SEVERE
        assert report.conditions["anxiety"].score == 7.0
        assert report.conditions["anxiety"].severity is SeverityBand.MODERATE
        assert report.risk_level is RiskLevel.HIGH
        assert "Severe mood symptoms (9/10)" in report.conditions["depression"].symptoms
        assert any(s.startswith("High score on") for s in report.warning_signals)
        assert result.history_delta is None
        assert len(session.history) == 4

    @pytest.mark.asyncio
    async def test_follow_ups_are_not_scored(self, engine):
        session = engine.start().session

        await answer_all(engine, session, [9, "Nearly every day"])

        state = session.accumulator.state("depression")
        assert state.count == 1
        assert state.raw_total == 3


class TestSubmitValidation:
    @pytest.mark.asyncio
    async def test_unknown_option_leaves_session_unchanged(self, engine):
        session = engine.start().session
        await engine.submit(session, "dep-mood", 5)
        before = session.accumulator.state("depression")

        with pytest.raises(InvalidResponseError):
            await engine.submit(session, "sleep", ["Trouble falling asleep", "Sleepwalking"])

        after = session.accumulator.state("depression")
        assert (after.raw_total, after.count) == (before.raw_total, before.count)
        assert session.accumulator.state("anxiety").count == 0
        assert len(session.history) == 1
        assert session.pending_question.id == "sleep"
        assert session.state is BranchState.AWAITING_NEXT

    @pytest.mark.asyncio
    async def test_answer_for_other_question_rejected(self, engine):
        session = engine.start().session

        with pytest.raises(InvalidResponseError, match="Expected an answer"):
            await engine.submit(session, "sleep", [])

        assert session.history == []

    @pytest.mark.asyncio
    async def test_submit_after_complete_rejected(self, engine):
        session = engine.start().session
        await answer_all(engine, session, [5, []])
        assert session.complete

        with pytest.raises(InvalidResponseError, match="already complete"):
            await engine.submit(session, "dep-mood", 5)

    @pytest.mark.asyncio
    async def test_resubmission_after_rejection_is_accepted(self, engine):
        session = engine.start().session

        with pytest.raises(InvalidResponseError):
            await engine.submit(session, "dep-mood", "nine")
        result = await engine.submit(session, "dep-mood", 4)

        assert result.question.id == "sleep"

    @pytest.mark.asyncio
    async def test_concurrent_submissions_are_serialized(self, engine):
        session = engine.start().session

        results = await asyncio.gather(
            engine.submit(session, "dep-mood", 5),
            engine.submit(session, "dep-mood", 6),
            return_exceptions=True,
        )

        assert sum(isinstance(r, InvalidResponseError) for r in results) == 1
        assert len(session.history) == 1


class TestSelfHarmOverride:
    @pytest.mark.asyncio
    async def test_mood_text_forces_high_risk(self, engine):
        session = engine.start(mood_description="Some days I just want to die").session

        result = await answer_all(engine, session, [4, []])

        report = result.report
        assert all(c.severity is SeverityBand.MINIMAL for c in report.conditions.values())
        assert report.risk_level is RiskLevel.HIGH
        assert report.self_harm_flagged
        assert SELF_HARM_WARNING in report.warning_signals
        assert set(CRISIS_RESOURCES) <= set(report.recommendations.immediate)

    @pytest.mark.asyncio
    async def test_transcript_forces_high_risk(self, engine):
        session = engine.start().session
        engine.attach_transcript(session, "  I have thought about suicide lately  ")

        result = await answer_all(engine, session, [4, []])

        assert result.report.risk_level is RiskLevel.HIGH

    @pytest.mark.asyncio
    async def test_transcript_rejected_after_completion(self, engine):
        session = engine.start().session
        await answer_all(engine, session, [4, []])

        with pytest.raises(InvalidResponseError):
            engine.attach_transcript(session, "too late")

    def test_transcript_merges_indicated_conditions(self, engine):
        session = engine.start(mood_description="sad").session

        engine.attach_transcript(session, "so anxious and sad")

        assert session.mood.indicated_conditions == ("depression", "anxiety")
        assert session.context_notes == ["sad", "so anxious and sad"]


class TestHistoryDelta:
    @pytest.mark.asyncio
    async def test_delta_against_latest_prior_report(self, engine):
        history = [
            {"timestamp": "2026-07-01T09:00:00Z", "conditions": {"depression": 2}},
            {"timestamp": "2026-08-01T09:00:00Z", "conditions": {"depression": {"score": 4}}},
        ]
        session = engine.start(prior_history=history).session

        result = await answer_all(engine, session, [9, "Several days", THREE_SLEEP_PROBLEMS, "Several days"])

        delta = result.history_delta
        assert delta.trends == {"depression": Trend.SIGNIFICANT_WORSENING, "anxiety": Trend.INITIAL}
        assert delta.score_changes == {"depression": 4.0}
        assert delta.overall_trend is OverallTrend.WORSENING
        assert session.history_delta is delta

    @pytest.mark.asyncio
    async def test_newest_first_history_compares_latest(self, engine):
        history = [
            {"timestamp": "2026-08-01T09:00:00Z", "conditions": {"depression": {"score": 4}}},
            {"timestamp": "2026-07-01T09:00:00Z", "conditions": {"depression": 2}},
        ]
        session = engine.start(prior_history=history).session

        result = await answer_all(engine, session, [9, "Several days", THREE_SLEEP_PROBLEMS, "Several days"])

        assert result.history_delta.score_changes == {"depression": 4.0}

    @pytest.mark.asyncio
    async def test_all_entries_malformed_gives_initial(self, engine):
        session = engine.start(prior_history=[{"conditions": "?"}]).session

        result = await answer_all(engine, session, [5, []])

        assert set(result.history_delta.trends.values()) == {Trend.INITIAL}
        assert result.history_delta.overall_trend is OverallTrend.STABLE


class TestMultiSelectThreshold:
    @pytest.mark.asyncio
    async def test_higher_threshold_skips_follow_up(self, small_catalog):
        engine = AssessmentEngine(small_catalog, concern_rules=ConcernRules(multi_select_min=5))
        session = engine.start().session

        result = await answer_all(engine, session, [5, THREE_SLEEP_PROBLEMS])

        assert result.complete


class TestQuestionGenerator:
    PROPOSAL = {
        "text": "How often has your low mood kept you from things you enjoy?",
        "type": "singleSelect",
        "category": "emotional",
        "options": ["Rarely", "Sometimes", "Most days"],
        "negativeOptions": ["Most days"],
    }

    @pytest.mark.asyncio
    async def test_valid_proposal_replaces_template(self, small_catalog):
        generator = MockQuestionGenerator(proposal=self.PROPOSAL)
        engine = AssessmentEngine(small_catalog, question_generator=generator)
        session = engine.start().session

        result = await engine.submit(session, "dep-mood", 9)

        assert result.question.text == self.PROPOSAL["text"]
        assert result.question.id == "dep-mood-followup"
        template, history = generator.calls[0]
        assert template["id"] == "dep-mood-followup"
        assert history == [
            {"questionId": "dep-mood", "question": session.history[0].question.text, "value": 9}
        ]

        follow_up = await engine.submit(session, "dep-mood-followup", "Most days")
        assert follow_up.question.id == "sleep"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "generator",
        [
            MockQuestionGenerator(error=CollaboratorUnavailableError("down", service="question-generator")),
            MockQuestionGenerator(error=RuntimeError("unexpected")),
            MockQuestionGenerator(proposal=None),
            MockQuestionGenerator(proposal={"text": "", "type": "scale"}),
            MockQuestionGenerator(proposal={"text": "Pick", "type": "multiSelect"}),
        ],
    )
    async def test_failures_fall_back_to_template(self, small_catalog, generator):
        engine = AssessmentEngine(small_catalog, question_generator=generator)
        template_engine = AssessmentEngine(small_catalog)
        session = engine.start().session
        template_session = template_engine.start().session

        result = await engine.submit(session, "dep-mood", 9)
        expected = await template_engine.submit(template_session, "dep-mood", 9)

        assert result.state is BranchState.FOLLOW_UP_PENDING
        assert result.question == expected.question

    @pytest.mark.asyncio
    async def test_timeout_falls_back_to_template(self, small_catalog):
        generator = MockQuestionGenerator(proposal=self.PROPOSAL, delay=1.0)
        engine = AssessmentEngine(small_catalog, question_generator=generator, generator_timeout=0.05)
        session = engine.start().session

        result = await engine.submit(session, "dep-mood", 9)

        assert result.question.text.startswith("You rated mood at 9/10.")

    @pytest.mark.asyncio
    async def test_cancelled_submit_leaves_session_unchanged(self, small_catalog):
        generator = MockQuestionGenerator(proposal=self.PROPOSAL, delay=60.0)
        engine = AssessmentEngine(small_catalog, question_generator=generator, generator_timeout=30.0)
        session = engine.start().session

        task = asyncio.create_task(engine.submit(session, "dep-mood", 9))
        while not generator.calls:
            await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert session.history == []
        assert session.accumulator.state("depression").count == 0
        assert session.warning_signals == []
        assert session.pending_question.id == "dep-mood"

        generator.delay = 0.0
        result = await engine.submit(session, "dep-mood", 9)

        assert result.question.id == "dep-mood-followup"
        assert len(session.history) == 1
        assert session.accumulator.state("depression").count == 1

    @pytest.mark.asyncio
    async def test_generator_not_called_without_concern(self, small_catalog):
        generator = MockQuestionGenerator(proposal=self.PROPOSAL)
        engine = AssessmentEngine(small_catalog, question_generator=generator)
        session = engine.start().session

        await engine.submit(session, "dep-mood", 5)

        assert generator.calls == []
