"""
Assessment report entity.

An immutable snapshot produced once per completed session. Prior reports
are read back from caller-supplied history for trend comparison.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from app.domain.enums.assessment import RiskLevel, SeverityBand
from app.domain.utils.datetime_utils import now_utc


@dataclass(frozen=True, kw_only=True)
class ConditionResult:
    """Normalized score, band and symptom labels for one condition."""

    condition: str
    score: float
    severity: SeverityBand
    symptoms: tuple[str, ...] = ()
    contributing_questions: int = 0


@dataclass(frozen=True, kw_only=True)
class Recommendations:
    """Action lists attached to a report."""

    immediate: tuple[str, ...] = ()
    short_term: tuple[str, ...] = ()
    long_term: tuple[str, ...] = ()
    professional_support: tuple[str, ...] = ()
    when_to_seek_help: tuple[str, ...] = ()


@dataclass(frozen=True, kw_only=True)
class AssessmentReport:
    """Finalized result of one assessment session."""

    conditions: dict[str, ConditionResult]
    risk_level: RiskLevel
    recommendations: Recommendations = field(default_factory=Recommendations)
    warning_signals: tuple[str, ...] = ()
    overall_score: float = 0.0
    self_harm_flagged: bool = False
    summary: str = ""
    indicated_conditions: tuple[str, ...] = ()
    id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=now_utc)

    @property
    def high_risk(self) -> bool:
        return self.risk_level is RiskLevel.HIGH

    def score_of(self, condition: str) -> float | None:
        result = self.conditions.get(condition)
        return result.score if result is not None else None
