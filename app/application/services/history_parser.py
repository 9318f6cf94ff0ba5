"""
History parser.

Turns caller-supplied assessment history (raw JSON) into report entities.
A malformed entry is dropped and a malformed condition inside an otherwise
valid entry is dropped on its own, so the comparison degrades to
``initial`` for what could not be read instead of failing the session.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from app.application.dtos.history_dtos import ConditionHistoryDTO, HistoryEntryDTO
from app.domain.entities.assessment_report import AssessmentReport, ConditionResult
from app.domain.exceptions import IncompleteHistoryError
from app.domain.services.severity_classifier import SeverityClassifier
from app.domain.utils.datetime_utils import to_utc

logger = logging.getLogger(__name__)


class HistoryParser:
    """Reads prior assessment reports, skipping what cannot be read."""

    def __init__(self, classifier: SeverityClassifier | None = None):
        self.classifier = classifier or SeverityClassifier()

    def parse(self, entries: Sequence[Any] | None) -> list[AssessmentReport]:
        """
        Parse every readable entry, keeping the order supplied.

        Args:
            entries: Raw history entries as supplied by the caller

        Returns:
            Reports for the entries that could be read
        """
        reports: list[AssessmentReport] = []
        for index, entry in enumerate(entries or []):
            try:
                reports.append(self.parse_entry(entry, index=index))
            except IncompleteHistoryError as e:
                logger.warning(f"Skipping assessment history entry {index}: {e.message}")
        return reports

    def parse_entry(self, entry: Any, index: int | None = None) -> AssessmentReport:
        """
        Parse one history entry.

        The entry is either a report object or ``{"report": {...}}`` with the
        originating answers alongside.

        Raises:
            IncompleteHistoryError: If the entry is not a usable report
        """
        if isinstance(entry, Mapping) and isinstance(entry.get("report"), Mapping):
            entry = entry["report"]
        if not isinstance(entry, Mapping):
            raise IncompleteHistoryError("History entry is not an object", index=index)

        try:
            dto = HistoryEntryDTO.model_validate(entry)
        except PydanticValidationError as e:
            raise IncompleteHistoryError(
                f"History entry has {e.error_count()} invalid field(s)", index=index
            ) from e

        conditions: dict[str, ConditionResult] = {}
        for name, raw in dto.conditions.items():
            try:
                conditions[name] = self._parse_condition(name, raw)
            except IncompleteHistoryError as e:
                logger.warning(f"Ignoring condition in history entry {index}: {e.message}")

        bands = {name: result.severity for name, result in conditions.items()}
        return AssessmentReport(
            id=dto.id or uuid4(),
            timestamp=to_utc(dto.timestamp),
            conditions=conditions,
            risk_level=dto.risk_level or self.classifier.risk_level(bands),
            warning_signals=tuple(dto.warning_signals),
            overall_score=dto.overall_score or 0.0,
        )

    def _parse_condition(self, name: str, raw: Any) -> ConditionResult:
        # a bare number is shorthand for {"score": n}
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            raw = {"score": raw}
        if not isinstance(raw, Mapping):
            raise IncompleteHistoryError(f"Condition '{name}' is not an object")
        try:
            dto = ConditionHistoryDTO.model_validate(raw)
        except PydanticValidationError as e:
            raise IncompleteHistoryError(
                f"Condition '{name}' has {e.error_count()} invalid field(s)"
            ) from e

        return ConditionResult(
            condition=name,
            score=dto.score,
            severity=dto.severity or self.classifier.classify(dto.score, name),
            symptoms=tuple(dto.symptoms),
        )
