"""
Recommendation & Report Generator.

Deterministic templates that turn severity bands and the overall risk level
into action lists, and assemble the final assessment report. Nothing here
depends on the order answers were given, only on the finalized scores.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from app.domain.entities.assessment_report import (
    AssessmentReport,
    ConditionResult,
    Recommendations,
)
from app.domain.enums.assessment import RiskLevel, SeverityBand
from app.domain.services.risk_markers import SELF_HARM_WARNING
from app.domain.services.score_accumulator import ScoreAccumulator
from app.domain.services.severity_classifier import SeverityClassifier


@dataclass(frozen=True)
class RecommendationSet:
    immediate: tuple[str, ...] = ()
    short_term: tuple[str, ...] = ()
    long_term: tuple[str, ...] = ()
    professional: tuple[str, ...] = ()


_MILD, _MODERATE, _SEVERE = SeverityBand.MILD, SeverityBand.MODERATE, SeverityBand.SEVERE

CONDITION_RECOMMENDATIONS: dict[tuple[str, SeverityBand], RecommendationSet] = {
    ("depression", _MILD): RecommendationSet(
        short_term=("Set small, achievable daily goals", "Schedule enjoyable activities"),
        long_term=("Stay connected with supportive people",),
    ),
    ("depression", _MODERATE): RecommendationSet(
        short_term=(
            "Set small, achievable daily goals",
            "Stay connected with supportive people",
            "Schedule enjoyable activities",
        ),
        long_term=("Consider talking therapy such as CBT",),
        professional=("Complete PHQ-9 assessment", "Consider psychotherapy referral"),
    ),
    ("depression", _SEVERE): RecommendationSet(
        immediate=("Urgent mental health evaluation recommended", "Evaluate for suicidal ideation"),
        short_term=("Stay connected with supportive people", "Set small, achievable daily goals"),
        long_term=("Follow a structured treatment plan with a clinician",),
        professional=(
            "Complete PHQ-9 assessment",
            "Consider psychotherapy referral",
            "Psychiatric evaluation for medication",
        ),
    ),
    ("anxiety", _MILD): RecommendationSet(
        short_term=("Practice deep breathing exercises", "Limit caffeine and alcohol"),
        long_term=("Build a regular relaxation routine",),
    ),
    ("anxiety", _MODERATE): RecommendationSet(
        short_term=(
            "Practice deep breathing exercises",
            "Use grounding techniques",
            "Limit caffeine and alcohol",
        ),
        long_term=("Consider cognitive behavioural therapy",),
        professional=("Complete GAD-7 assessment", "Consider CBT referral"),
    ),
    ("anxiety", _SEVERE): RecommendationSet(
        immediate=("Urgent mental health evaluation recommended",),
        short_term=("Use grounding techniques", "Practice deep breathing exercises"),
        long_term=("Follow a structured treatment plan with a clinician",),
        professional=(
            "Complete GAD-7 assessment",
            "Evaluate for panic symptoms",
            "Consider CBT referral",
        ),
    ),
    ("bipolar", _MILD): RecommendationSet(
        short_term=("Track your mood daily",),
        long_term=("Maintain consistent daily routines",),
    ),
    ("bipolar", _MODERATE): RecommendationSet(
        short_term=("Track your mood daily", "Maintain consistent daily routines"),
        long_term=("Avoid making major decisions during mood episodes",),
        professional=("Complete mood disorder evaluation", "Consider YMRS assessment"),
    ),
    ("bipolar", _SEVERE): RecommendationSet(
        immediate=("Urgent mental health evaluation recommended",),
        short_term=("Track your mood daily", "Maintain consistent daily routines"),
        long_term=("Avoid making major decisions during mood episodes",),
        professional=(
            "Complete mood disorder evaluation",
            "Evaluate need for mood stabilizers",
        ),
    ),
    ("stress", _MILD): RecommendationSet(
        short_term=("Practice stress management techniques",),
    ),
    ("stress", _MODERATE): RecommendationSet(
        short_term=("Practice stress management techniques", "Take regular breaks during the day"),
        long_term=("Review workload and sources of pressure",),
        professional=("Consider counselling for stress management",),
    ),
    ("stress", _SEVERE): RecommendationSet(
        immediate=("Reduce immediate demands where possible",),
        short_term=("Practice stress management techniques", "Take regular breaks during the day"),
        long_term=("Review workload and sources of pressure",),
        professional=("Consider counselling for stress management",),
    ),
    ("adhd", _MILD): RecommendationSet(
        short_term=("Break tasks into smaller steps",),
    ),
    ("adhd", _MODERATE): RecommendationSet(
        short_term=("Break tasks into smaller steps", "Use reminders and written lists"),
        long_term=("Build consistent routines for daily tasks",),
        professional=("Consider a structured ADHD screening (ASRS)",),
    ),
    ("adhd", _SEVERE): RecommendationSet(
        short_term=("Break tasks into smaller steps", "Use reminders and written lists"),
        long_term=("Build consistent routines for daily tasks",),
        professional=(
            "Consider a structured ADHD screening (ASRS)",
            "Specialist evaluation for attention difficulties",
        ),
    ),
}

# conditions without their own table
GENERIC_RECOMMENDATIONS: dict[SeverityBand, RecommendationSet] = {
    _MILD: RecommendationSet(short_term=("Monitor how these symptoms change over time",)),
    _MODERATE: RecommendationSet(
        short_term=("Monitor how these symptoms change over time",),
        professional=("Discuss these symptoms with a general practitioner",),
    ),
    _SEVERE: RecommendationSet(
        immediate=("Urgent mental health evaluation recommended",),
        professional=("Discuss these symptoms with a mental health professional",),
    ),
}

RISK_RECOMMENDATIONS: dict[RiskLevel, RecommendationSet] = {
    RiskLevel.LOW: RecommendationSet(
        long_term=("Repeat this check-in periodically to track changes",),
    ),
    RiskLevel.MODERATE: RecommendationSet(
        short_term=("Share how you are feeling with someone you trust",),
        professional=("Schedule an appointment with a mental health professional",),
    ),
    RiskLevel.HIGH: RecommendationSet(
        immediate=(
            "Urgent mental health evaluation recommended",
            "Consider crisis intervention",
            "Establish safety plan",
        ),
        professional=("Seek a mental health professional as soon as possible",),
    ),
}

BASELINE_SELF_CARE = (
    "Maintain regular sleep schedule",
    "Engage in daily physical activity",
    "Practice stress management techniques",
)

CRISIS_RESOURCES = (
    "If you are in immediate danger, contact local emergency services",
    "Call or text a suicide and crisis helpline to speak to someone now",
    "Stay with someone you trust and remove means of self-harm",
)

WHEN_TO_SEEK_HELP = (
    "Thoughts of self-harm or suicide",
    "Symptoms interfere with daily functioning",
    "Feeling overwhelmed by emotions",
    "Significant changes in sleep or appetite",
    "Unable to maintain work or relationships",
)

NO_CONCERNS_SUMMARY = "No significant mental health concerns identified at this time."


def _dedupe(items: Iterable[str]) -> tuple[str, ...]:
    """Drop repeats, keeping first-seen order."""
    return tuple(dict.fromkeys(items))


class RecommendationGenerator:
    """Pure mapping from finalized scores to recommendations and a report."""

    def __init__(self, classifier: SeverityClassifier | None = None) -> None:
        self.classifier = classifier or SeverityClassifier()

    def recommend(
        self,
        bands: Mapping[str, SeverityBand],
        risk_level: RiskLevel,
        self_harm_flagged: bool = False,
    ) -> Recommendations:
        """
        Select recommendations for the given bands and risk level.

        Condition tables are consulted in ``bands`` order, then the risk
        table. Crisis resources are included whenever risk is high or a
        self-harm marker was seen.
        """
        sets: list[RecommendationSet] = []
        for condition, band in bands.items():
            if band is SeverityBand.MINIMAL:
                continue
            sets.append(
                CONDITION_RECOMMENDATIONS.get((condition, band), GENERIC_RECOMMENDATIONS[band])
            )
        sets.append(RISK_RECOMMENDATIONS[risk_level])

        immediate: list[str] = []
        if self_harm_flagged or risk_level is RiskLevel.HIGH:
            immediate.extend(CRISIS_RESOURCES)

        return Recommendations(
            immediate=_dedupe([*immediate, *(i for s in sets for i in s.immediate)]),
            short_term=_dedupe([*BASELINE_SELF_CARE, *(i for s in sets for i in s.short_term)]),
            long_term=_dedupe(i for s in sets for i in s.long_term),
            professional_support=_dedupe(i for s in sets for i in s.professional),
            when_to_seek_help=WHEN_TO_SEEK_HELP,
        )

    def summarize(self, results: Mapping[str, ConditionResult], risk_level: RiskLevel) -> str:
        concerns = [
            f"{result.severity.value} {condition} symptoms"
            for condition, result in results.items()
            if result.severity is not SeverityBand.MINIMAL
        ]
        if not concerns:
            if risk_level is RiskLevel.HIGH:
                return (
                    "Responses indicate a possible risk to your safety. "
                    "Professional evaluation is strongly recommended."
                )
            return NO_CONCERNS_SUMMARY

        advice = (
            "Professional evaluation is strongly recommended."
            if risk_level is RiskLevel.HIGH
            else "Consider following the recommended support steps."
        )
        return f"Assessment indicates {', '.join(concerns)}. {advice}"

    def build_report(
        self,
        accumulator: ScoreAccumulator,
        warning_signals: Iterable[str] = (),
        context_texts: Iterable[str] = (),
        indicated_conditions: Iterable[str] = (),
    ) -> AssessmentReport:
        """
        Finalize a session's scores into an assessment report.

        Args:
            accumulator: The session's score state
            warning_signals: Signals raised by individual answers
            context_texts: Free text such as the mood description or a
                voice journal transcript; checked for self-harm markers only
            indicated_conditions: Conditions suggested by mood screening

        Returns:
            The immutable report
        """
        results: dict[str, ConditionResult] = {}
        for condition in accumulator.scored_conditions():
            score = accumulator.normalized(condition)
            state = accumulator.state(condition)
            results[condition] = ConditionResult(
                condition=condition,
                score=score,
                severity=self.classifier.classify(score, condition),
                symptoms=tuple(state.symptoms),
                contributing_questions=state.count,
            )

        warnings = list(warning_signals)
        endorsed = [s for r in results.values() for s in r.symptoms]
        endorsed.extend(warnings)
        endorsed.extend(t for t in context_texts if t)

        bands = {condition: r.severity for condition, r in results.items()}
        self_harm = self.classifier.self_harm_flagged(endorsed)
        risk_level = self.classifier.risk_level(bands, endorsed)
        if self_harm:
            warnings.append(SELF_HARM_WARNING)

        return AssessmentReport(
            conditions=results,
            risk_level=risk_level,
            recommendations=self.recommend(bands, risk_level, self_harm),
            warning_signals=_dedupe(warnings),
            overall_score=accumulator.overall(),
            self_harm_flagged=self_harm,
            summary=self.summarize(results, risk_level),
            indicated_conditions=_dedupe(indicated_conditions),
        )
