"""Domain enumerations."""

from app.domain.enums.assessment import (
    AnswerType,
    BranchState,
    OverallTrend,
    QuestionCategory,
    RiskLevel,
    SeverityBand,
    Trend,
)

__all__ = [
    "AnswerType",
    "BranchState",
    "OverallTrend",
    "QuestionCategory",
    "RiskLevel",
    "SeverityBand",
    "Trend",
]
