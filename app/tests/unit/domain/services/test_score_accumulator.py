"""
Tests for the Score Accumulator.
"""

import random

import pytest

from app.domain.services.score_accumulator import ScoreAccumulator


class TestScoreAccumulator:
    def test_untouched_condition_scores_zero(self):
        accumulator = ScoreAccumulator()

        assert accumulator.normalized("depression") == 0.0
        assert accumulator.overall() == 0.0
        assert accumulator.scored_conditions() == []

    def test_apply_updates_total_and_count(self, mood_question):
        accumulator = ScoreAccumulator()

        accumulator.apply(mood_question, {"depression": 3})
        accumulator.apply(mood_question, {"depression": 2})

        state = accumulator.state("depression")
        assert state.raw_total == 5
        assert state.count == 2

    def test_zero_contribution_still_counts(self, sleep_question):
        accumulator = ScoreAccumulator()

        accumulator.apply(sleep_question, {"depression": 0, "anxiety": 0})

        assert accumulator.state("anxiety").count == 1
        assert accumulator.scored_conditions() == ["depression", "anxiety"]

    def test_normalization_rounds_half_up(self, mood_question, sleep_question):
        accumulator = ScoreAccumulator()

        accumulator.apply(mood_question, {"depression": 3})
        accumulator.apply(sleep_question, {"depression": 2, "anxiety": 2})

        # (3 + 2) / 2 * 3.33 = 8.325
        assert accumulator.normalized("depression") == 8.0
        # 2 * 3.33 = 6.66
        assert accumulator.normalized("anxiety") == 7.0
        assert accumulator.overall() == 7.5

    def test_all_maximum_answers_reach_ten(self, mood_question):
        accumulator = ScoreAccumulator()

        for _ in range(4):
            accumulator.apply(mood_question, {"depression": 3})

        assert accumulator.normalized("depression") == 10.0

    def test_normalized_score_never_exceeds_bounds(self, mood_question):
        accumulator = ScoreAccumulator(scale_factor=5)
        rng = random.Random(7)

        for _ in range(200):
            accumulator.apply(mood_question, {"depression": rng.randint(0, 3)})
            assert 0 <= accumulator.normalized("depression") <= 10

    def test_out_of_range_contribution_rejected_without_mutation(self, sleep_question):
        accumulator = ScoreAccumulator()

        with pytest.raises(ValueError):
            accumulator.apply(sleep_question, {"depression": 1, "anxiety": 4})

        assert accumulator.state("depression").count == 0

    def test_scale_factor_must_be_positive(self):
        with pytest.raises(ValueError):
            ScoreAccumulator(scale_factor=0)

    def test_symptoms_are_deduplicated_in_order(self):
        accumulator = ScoreAccumulator()

        accumulator.record_symptoms(["depression"], ["Fatigue", "Insomnia"])
        accumulator.record_symptoms(["depression"], ["Insomnia", "Low appetite"])

        assert accumulator.symptoms("depression") == ("Fatigue", "Insomnia", "Low appetite")

    def test_state_is_a_copy(self, mood_question):
        accumulator = ScoreAccumulator()
        accumulator.apply(mood_question, {"depression": 1})

        snapshot = accumulator.state("depression")
        snapshot.raw_total = 99

        assert accumulator.state("depression").raw_total == 1
