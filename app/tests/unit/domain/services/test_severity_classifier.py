"""
Tests for the Severity Classifier.
"""

import pytest

from app.domain.enums.assessment import RiskLevel, SeverityBand
from app.domain.services.severity_classifier import SeverityClassifier, SeverityThresholds


class TestClassify:
    @pytest.mark.parametrize(
        "score, band",
        [
            (0, SeverityBand.MINIMAL),
            (3.99, SeverityBand.MINIMAL),
            (4, SeverityBand.MILD),
            (5.5, SeverityBand.MILD),
            (6, SeverityBand.MODERATE),
            (7.9, SeverityBand.MODERATE),
            (8, SeverityBand.SEVERE),
            (10, SeverityBand.SEVERE),
        ],
    )
    def test_default_thresholds(self, classifier, score, band):
        assert classifier.classify(score) is band

    def test_monotonic_over_range(self, classifier):
        scores = [i / 10 for i in range(0, 101)]
        bands = [classifier.classify(s) for s in scores]

        assert all(a <= b for a, b in zip(bands, bands[1:]))

    def test_out_of_range_is_clamped(self, classifier):
        assert classifier.classify(-2) is SeverityBand.MINIMAL
        assert classifier.classify(14) is SeverityBand.SEVERE

    def test_nan_rejected(self, classifier):
        with pytest.raises(ValueError):
            classifier.classify(float("nan"))

    def test_per_condition_override(self):
        classifier = SeverityClassifier({"bipolar": SeverityThresholds(severe=7, moderate=5, mild=3)})

        assert classifier.classify(7, "bipolar") is SeverityBand.SEVERE
        assert classifier.classify(7, "depression") is SeverityBand.MODERATE

    def test_thresholds_must_be_ordered(self):
        with pytest.raises(ValueError):
            SeverityThresholds(severe=5, moderate=6, mild=4)

    def test_bands_are_ordered_clinically(self):
        assert SeverityBand.MINIMAL < SeverityBand.MILD < SeverityBand.MODERATE < SeverityBand.SEVERE
        assert max([SeverityBand.MODERATE, SeverityBand.SEVERE, SeverityBand.MILD]) is SeverityBand.SEVERE


class TestRiskLevel:
    def test_severe_condition_is_high(self, classifier):
        bands = {"depression": SeverityBand.SEVERE, "anxiety": SeverityBand.MILD}

        assert classifier.risk_level(bands) is RiskLevel.HIGH

    def test_moderate_condition_is_moderate(self, classifier):
        bands = {"depression": SeverityBand.MODERATE, "anxiety": SeverityBand.MINIMAL}

        assert classifier.risk_level(bands) is RiskLevel.MODERATE

    def test_otherwise_low(self, classifier):
        assert classifier.risk_level({"stress": SeverityBand.MILD}) is RiskLevel.LOW
        assert classifier.risk_level({}) is RiskLevel.LOW

    @pytest.mark.parametrize(
        "text",
        [
            "Sometimes I think everyone would be better off dead without me",
            "I have had SUICIDAL thoughts",
            "I want to hurt myself",
        ],
    )
    def test_self_harm_marker_overrides_scores(self, classifier, text):
        bands = {"depression": SeverityBand.MINIMAL}

        assert classifier.risk_level(bands, [text]) is RiskLevel.HIGH

    def test_marker_never_lowers_risk(self, classifier):
        bands = {"depression": SeverityBand.SEVERE}

        assert classifier.risk_level(bands, ["feeling fine"]) is RiskLevel.HIGH
