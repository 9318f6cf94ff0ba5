"""
Domain entities package.

Entities and value objects of the adaptive assessment engine.
"""

from app.domain.entities.assessment_report import (
    AssessmentReport,
    ConditionResult,
    Recommendations,
)
from app.domain.entities.question import SCALE_MAX, SCALE_MIN, Question
from app.domain.entities.response import Response

__all__ = [
    "SCALE_MAX",
    "SCALE_MIN",
    "AssessmentReport",
    "ConditionResult",
    "Question",
    "Recommendations",
    "Response",
]
