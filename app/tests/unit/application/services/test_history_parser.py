"""
Tests for the assessment history parser.
"""

from uuid import uuid4

import pytest

from app.application.services.history_parser import HistoryParser
from app.domain.enums.assessment import RiskLevel, SeverityBand
from app.domain.exceptions import IncompleteHistoryError


@pytest.fixture
def parser(classifier) -> HistoryParser:
    return HistoryParser(classifier)


def history_entry(**overrides) -> dict:
    entry = {
        "id": str(uuid4()),
        "timestamp": "2026-09-01T10:00:00Z",
        "riskLevel": "moderate",
        "overallScore": 5.5,
        "conditions": {
            "depression": {"score": 6, "severity": "moderate", "symptoms": ["Fatigue"]},
            "anxiety": {"score": 5},
        },
    }
    entry.update(overrides)
    return entry


class TestParseEntry:
    def test_full_entry(self, parser):
        raw = history_entry()

        report = parser.parse_entry(raw)

        assert str(report.id) == raw["id"]
        assert report.timestamp.tzinfo is not None
        assert report.risk_level is RiskLevel.MODERATE
        assert report.overall_score == 5.5
        assert report.conditions["depression"].symptoms == ("Fatigue",)
        assert report.conditions["depression"].severity is SeverityBand.MODERATE

    def test_missing_severity_is_classified(self, parser):
        report = parser.parse_entry(history_entry())

        assert report.conditions["anxiety"].severity is SeverityBand.MILD

    def test_bare_number_condition(self, parser):
        report = parser.parse_entry(history_entry(conditions={"stress": 9}))

        assert report.score_of("stress") == 9
        assert report.conditions["stress"].severity is SeverityBand.SEVERE

    def test_wrapped_report_with_answers(self, parser):
        raw = {"report": history_entry(), "answers": [{"questionId": "dep-1", "value": 7}]}

        report = parser.parse_entry(raw)

        assert set(report.conditions) == {"depression", "anxiety"}

    def test_snake_case_fields_accepted(self, parser):
        raw = history_entry()
        raw["risk_level"] = raw.pop("riskLevel")

        assert parser.parse_entry(raw).risk_level is RiskLevel.MODERATE

    def test_missing_risk_level_is_derived(self, parser):
        raw = history_entry(conditions={"depression": {"score": 9}})
        del raw["riskLevel"]

        assert parser.parse_entry(raw).risk_level is RiskLevel.HIGH

    def test_bad_condition_is_dropped_alone(self, parser):
        report = parser.parse_entry(
            history_entry(
                conditions={
                    "depression": {"score": 42},
                    "anxiety": "very high",
                    "stress": {"score": 3},
                }
            )
        )

        assert list(report.conditions) == ["stress"]

    @pytest.mark.parametrize(
        "raw",
        [
            "not an object",
            42,
            {"conditions": {}},
            {"timestamp": "yesterday-ish"},
            {"timestamp": "2026-09-01T10:00:00Z", "riskLevel": "catastrophic"},
        ],
    )
    def test_unreadable_entry_raises(self, parser, raw):
        with pytest.raises(IncompleteHistoryError):
            parser.parse_entry(raw, index=3)


class TestParse:
    def test_skips_unreadable_entries(self, parser):
        good = history_entry()

        reports = parser.parse([{"garbage": True}, good, None])

        assert len(reports) == 1
        assert str(reports[0].id) == good["id"]

    def test_none_and_empty(self, parser):
        assert parser.parse(None) == []
        assert parser.parse([]) == []

    def test_order_is_kept(self, parser):
        first = history_entry(timestamp="2026-08-01T10:00:00Z")
        second = history_entry(timestamp="2026-09-01T10:00:00Z")

        reports = parser.parse([first, second])

        assert [str(r.id) for r in reports] == [first["id"], second["id"]]
