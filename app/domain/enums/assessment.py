"""
Enumerations used by the adaptive assessment engine.

Values are part of the JSON wire contract and must not be renamed.
"""

from enum import Enum


class AnswerType(str, Enum):
    """Shape of the answer a question expects."""

    SCALE = "scale"
    YES_NO = "yesNo"
    SINGLE_SELECT = "singleSelect"
    MULTI_SELECT = "multiSelect"

    @property
    def is_select(self) -> bool:
        return self in (AnswerType.SINGLE_SELECT, AnswerType.MULTI_SELECT)


class QuestionCategory(str, Enum):
    """Broad domain a question belongs to."""

    EMOTIONAL = "emotional"
    COGNITIVE = "cognitive"
    BEHAVIORAL = "behavioral"


class SeverityBand(str, Enum):
    """
    Severity of a single condition, totally ordered from minimal to severe.

    Comparison operators follow clinical order rather than string order.
    """

    MINIMAL = "minimal"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SeverityBand):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, SeverityBand):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, SeverityBand):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, SeverityBand):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_ORDER = (
    SeverityBand.MINIMAL,
    SeverityBand.MILD,
    SeverityBand.MODERATE,
    SeverityBand.SEVERE,
)


class RiskLevel(str, Enum):
    """Overall risk level of a completed assessment."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class Trend(str, Enum):
    """Per-condition change relative to the previous assessment."""

    INITIAL = "initial"
    SIGNIFICANT_IMPROVEMENT = "significant improvement"
    SLIGHT_IMPROVEMENT = "slight improvement"
    STABLE = "stable"
    SLIGHT_WORSENING = "slight worsening"
    SIGNIFICANT_WORSENING = "significant worsening"


class OverallTrend(str, Enum):
    """Direction of the assessment as a whole."""

    IMPROVING = "improving"
    STABLE = "stable"
    WORSENING = "worsening"


class BranchState(str, Enum):
    """States of the branching selector."""

    AWAITING_NEXT = "AWAITING_NEXT"
    FOLLOW_UP_PENDING = "FOLLOW_UP_PENDING"
    COMPLETE = "COMPLETE"
