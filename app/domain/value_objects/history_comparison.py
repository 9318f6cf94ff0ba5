"""Result of comparing an assessment report with the previous one."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from app.domain.enums.assessment import OverallTrend, Trend


@dataclass(frozen=True, kw_only=True)
class HistoryComparison:
    """Per-condition trends plus the overall direction of change."""

    trends: dict[str, Trend] = field(default_factory=dict)
    # signed current - previous; absent for conditions with no prior score
    score_changes: dict[str, float] = field(default_factory=dict)
    overall_trend: OverallTrend = OverallTrend.STABLE
    previous_report_id: UUID | None = None
    previous_timestamp: datetime | None = None

    @property
    def has_baseline(self) -> bool:
        return self.previous_timestamp is not None or self.previous_report_id is not None
