"""
Historical Comparator.

Compares a new report with the most recent prior report. A higher score
means greater severity, so a positive change is a worsening.
"""

from collections.abc import Sequence

from app.domain.entities.assessment_report import AssessmentReport
from app.domain.enums.assessment import OverallTrend, Trend
from app.domain.value_objects.history_comparison import HistoryComparison

SIGNIFICANT_CHANGE = 3
SLIGHT_CHANGE = 1


def classify_change(delta: float) -> Trend:
    """Trend for a signed ``current - previous`` score difference."""
    if abs(delta) >= SIGNIFICANT_CHANGE:
        return Trend.SIGNIFICANT_WORSENING if delta > 0 else Trend.SIGNIFICANT_IMPROVEMENT
    if abs(delta) >= SLIGHT_CHANGE:
        return Trend.SLIGHT_WORSENING if delta > 0 else Trend.SLIGHT_IMPROVEMENT
    return Trend.STABLE


def overall_trend(trends: Sequence[Trend]) -> OverallTrend:
    worsening = Trend.SIGNIFICANT_WORSENING in trends
    improving = Trend.SIGNIFICANT_IMPROVEMENT in trends
    if worsening and not improving:
        return OverallTrend.WORSENING
    if improving and not worsening:
        return OverallTrend.IMPROVING
    return OverallTrend.STABLE


class HistoricalComparator:
    """Per-condition deltas between two reports."""

    def compare(
        self,
        current: AssessmentReport,
        previous: AssessmentReport | None,
    ) -> HistoryComparison:
        """
        Compare ``current`` with ``previous``.

        Conditions the previous report did not score are ``initial``. With
        no previous report every condition is ``initial`` and the overall
        trend is ``stable``.
        """
        trends: dict[str, Trend] = {}
        changes: dict[str, float] = {}

        for condition, result in current.conditions.items():
            previous_score = previous.score_of(condition) if previous is not None else None
            if previous_score is None:
                trends[condition] = Trend.INITIAL
                continue
            delta = round(result.score - previous_score, 2)
            changes[condition] = delta
            trends[condition] = classify_change(delta)

        return HistoryComparison(
            trends=trends,
            score_changes=changes,
            overall_trend=overall_trend(list(trends.values())),
            previous_report_id=previous.id if previous is not None else None,
            previous_timestamp=previous.timestamp if previous is not None else None,
        )

    def compare_with_history(
        self,
        current: AssessmentReport,
        history: Sequence[AssessmentReport],
    ) -> HistoryComparison:
        """
        Compare against the newest report in ``history`` by timestamp.

        ``history`` may be in any order; on a timestamp tie the later entry wins.
        """
        latest = max(reversed(history), key=lambda report: report.timestamp, default=None)
        return self.compare(current, latest)
