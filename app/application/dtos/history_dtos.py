"""
Assessment history Data Transfer Objects (DTOs) module.

Prior reports arrive from the caller as plain JSON. These DTOs describe the
accepted shape of one history entry; anything that does not fit is treated
as missing rather than rejected.
"""

import math
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.domain.enums.assessment import RiskLevel, SeverityBand


class ConditionHistoryDTO(BaseModel):
    """DTO representing one condition result of a prior report."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    score: float = Field(ge=0, le=10)
    severity: SeverityBand | None = None
    symptoms: list[str] = Field(default_factory=list)

    @field_validator("score")
    @classmethod
    def score_must_be_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("score must be a finite number")
        return v


class HistoryEntryDTO(BaseModel):
    """DTO representing a prior assessment report supplied by the caller."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: UUID | None = None
    timestamp: datetime
    risk_level: RiskLevel | None = None
    overall_score: float | None = None
    # validated per condition so that one bad condition does not drop the entry
    conditions: dict[str, Any] = Field(default_factory=dict)
    warning_signals: list[str] = Field(default_factory=list)
