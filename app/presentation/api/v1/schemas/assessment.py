"""
API schemas for assessment endpoints.

This module contains Pydantic models for request and response serialization
of the assessment API. All JSON field names are camelCase; Python attribute
names stay snake_case.
"""

import base64
import binascii
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.domain.entities.assessment_report import AssessmentReport, ConditionResult
from app.domain.entities.question import Question
from app.domain.enums.assessment import (
    AnswerType,
    BranchState,
    OverallTrend,
    QuestionCategory,
    RiskLevel,
    SeverityBand,
    Trend,
)
from app.domain.value_objects.history_comparison import HistoryComparison

MAX_AUDIO_BYTES = 25 * 1024 * 1024


class CamelModel(BaseModel):
    """Base model serializing to camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ======== Questions ========


class QuestionSchema(CamelModel):
    id: str
    text: str
    type: AnswerType
    category: QuestionCategory
    sub_category: str | None = None
    options: list[str] = Field(default_factory=list)
    conditions: list[str] = Field(default_factory=list)
    scale_reference: str | None = None
    scored: bool = True
    follows_up: str | None = None

    @classmethod
    def from_entity(cls, question: Question) -> "QuestionSchema":
        return cls(
            id=question.id,
            text=question.text,
            type=question.answer_type,
            category=question.category,
            sub_category=question.sub_category,
            options=list(question.options),
            conditions=list(question.conditions),
            scale_reference=question.scale_reference,
            scored=question.scored,
            follows_up=question.follows_up,
        )


# ======== Reports ========


class ConditionResultSchema(CamelModel):
    score: float
    severity: SeverityBand
    symptoms: list[str] = Field(default_factory=list)
    contributing_questions: int = 0

    @classmethod
    def from_entity(cls, result: ConditionResult) -> "ConditionResultSchema":
        return cls(
            score=result.score,
            severity=result.severity,
            symptoms=list(result.symptoms),
            contributing_questions=result.contributing_questions,
        )


class RecommendationsSchema(CamelModel):
    immediate: list[str] = Field(default_factory=list)
    short_term: list[str] = Field(default_factory=list)
    long_term: list[str] = Field(default_factory=list)
    professional_support: list[str] = Field(default_factory=list)
    when_to_seek_help: list[str] = Field(default_factory=list)


class AssessmentReportSchema(CamelModel):
    """Serialized report; this shape is also accepted back as history."""

    id: UUID
    timestamp: datetime
    conditions: dict[str, ConditionResultSchema]
    risk_level: RiskLevel
    high_risk: bool
    overall_score: float
    self_harm_flagged: bool = False
    warning_signals: list[str] = Field(default_factory=list)
    indicated_conditions: list[str] = Field(default_factory=list)
    summary: str = ""
    recommendations: RecommendationsSchema

    @classmethod
    def from_entity(cls, report: AssessmentReport) -> "AssessmentReportSchema":
        recs = report.recommendations
        return cls(
            id=report.id,
            timestamp=report.timestamp,
            conditions={
                name: ConditionResultSchema.from_entity(result)
                for name, result in report.conditions.items()
            },
            risk_level=report.risk_level,
            high_risk=report.high_risk,
            overall_score=report.overall_score,
            self_harm_flagged=report.self_harm_flagged,
            warning_signals=list(report.warning_signals),
            indicated_conditions=list(report.indicated_conditions),
            summary=report.summary,
            recommendations=RecommendationsSchema(
                immediate=list(recs.immediate),
                short_term=list(recs.short_term),
                long_term=list(recs.long_term),
                professional_support=list(recs.professional_support),
                when_to_seek_help=list(recs.when_to_seek_help),
            ),
        )


class HistoryComparisonSchema(CamelModel):
    trends: dict[str, Trend]
    score_changes: dict[str, float] = Field(default_factory=dict)
    overall_trend: OverallTrend
    previous_report_id: UUID | None = None
    previous_timestamp: datetime | None = None

    @classmethod
    def from_value(cls, comparison: HistoryComparison) -> "HistoryComparisonSchema":
        return cls(
            trends=dict(comparison.trends),
            score_changes=dict(comparison.score_changes),
            overall_trend=comparison.overall_trend,
            previous_report_id=comparison.previous_report_id,
            previous_timestamp=comparison.previous_timestamp,
        )


# ======== Requests ========


class StartAssessmentRequest(CamelModel):
    # entries are validated one by one; unreadable ones are skipped
    prior_history: list[Any] = Field(default_factory=list)
    mood_description: str | None = Field(default=None, max_length=5000)
    mood_rating: float | None = Field(default=None, ge=1, le=10)


class SubmitResponseRequest(CamelModel):
    question_id: str = Field(min_length=1)
    # shape is checked against the pending question by the engine
    value: Any = None


class VoiceJournalRequest(CamelModel):
    audio_base64: str = Field(min_length=1)
    filename: str = "journal.webm"
    content_type: str = "audio/webm"

    @field_validator("audio_base64")
    @classmethod
    def audio_must_be_base64(cls, v: str) -> str:
        try:
            decoded = base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("audioBase64 is not valid base64")
        if len(decoded) > MAX_AUDIO_BYTES:
            raise ValueError("audio recording is too large")
        return v

    def audio_bytes(self) -> bytes:
        return base64.b64decode(self.audio_base64)


class CompareReportsRequest(CamelModel):
    current: dict[str, Any]
    previous: dict[str, Any] | None = None


# ======== Responses ========


class StartAssessmentResponse(CamelModel):
    session_id: UUID
    state: BranchState
    question: QuestionSchema
    indicated_conditions: list[str] = Field(default_factory=list)


class SubmitResponseResponse(CamelModel):
    session_id: UUID
    state: BranchState
    complete: bool
    question: QuestionSchema | None = None
    report: AssessmentReportSchema | None = None
    history_delta: HistoryComparisonSchema | None = None


class SessionStatusResponse(CamelModel):
    session_id: UUID
    state: BranchState
    complete: bool
    answered: int
    created_at: datetime
    question: QuestionSchema | None = None
    indicated_conditions: list[str] = Field(default_factory=list)
    report: AssessmentReportSchema | None = None
    history_delta: HistoryComparisonSchema | None = None


class VoiceJournalResponse(CamelModel):
    attached: bool
    characters: int
