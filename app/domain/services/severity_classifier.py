"""
Severity Classifier.

Maps normalized condition scores to severity bands with a fixed threshold
table and derives the overall risk level. The self-harm marker check can
only raise the risk level, never lower it.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from app.domain.enums.assessment import RiskLevel, SeverityBand
from app.domain.services.risk_markers import contains_self_harm_marker
from app.domain.services.score_accumulator import MAX_NORMALIZED_SCORE
from app.domain.utils.numeric import clamp


@dataclass(frozen=True)
class SeverityThresholds:
    """Lower bounds (inclusive) of each band on the normalized 0-10 scale."""

    severe: float = 8
    moderate: float = 6
    mild: float = 4

    def __post_init__(self) -> None:
        if not 0 <= self.mild <= self.moderate <= self.severe <= MAX_NORMALIZED_SCORE:
            raise ValueError(
                "Severity thresholds must satisfy 0 <= mild <= moderate <= severe <= 10"
            )


DEFAULT_THRESHOLDS = SeverityThresholds()


class SeverityClassifier:
    """Pure classification of scores and overall risk."""

    def __init__(self, overrides: Mapping[str, SeverityThresholds] | None = None) -> None:
        self._overrides = dict(overrides or {})

    def thresholds_for(self, condition: str | None = None) -> SeverityThresholds:
        if condition is None:
            return DEFAULT_THRESHOLDS
        return self._overrides.get(condition, DEFAULT_THRESHOLDS)

    def classify(self, normalized_score: float, condition: str | None = None) -> SeverityBand:
        """
        Band for a normalized score; total over ``[0, 10]``.

        Scores outside the range are clamped first.

        Raises:
            ValueError: If the score is NaN or infinite
        """
        if not math.isfinite(normalized_score):
            raise ValueError(f"Score must be finite, got {normalized_score!r}")
        score = clamp(normalized_score, 0, MAX_NORMALIZED_SCORE)
        thresholds = self.thresholds_for(condition)

        if score >= thresholds.severe:
            return SeverityBand.SEVERE
        if score >= thresholds.moderate:
            return SeverityBand.MODERATE
        if score >= thresholds.mild:
            return SeverityBand.MILD
        return SeverityBand.MINIMAL

    def risk_level(
        self,
        bands: Mapping[str, SeverityBand],
        endorsed_texts: Iterable[str] = (),
    ) -> RiskLevel:
        """
        Overall risk level.

        ``high`` when any condition is severe or any endorsed text carries a
        self-harm marker; ``moderate`` when any condition is moderate;
        otherwise ``low``.
        """
        if self.self_harm_flagged(endorsed_texts):
            return RiskLevel.HIGH
        if any(band is SeverityBand.SEVERE for band in bands.values()):
            return RiskLevel.HIGH
        if any(band is SeverityBand.MODERATE for band in bands.values()):
            return RiskLevel.MODERATE
        return RiskLevel.LOW

    @staticmethod
    def self_harm_flagged(endorsed_texts: Iterable[str]) -> bool:
        return any(contains_self_harm_marker(text) for text in endorsed_texts)
