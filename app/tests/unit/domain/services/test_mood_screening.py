"""
Tests for mood description screening.
"""

import pytest

from app.domain.exceptions import InvalidResponseError
from app.domain.services.mood_screening import screen_mood


def test_empty_input_indicates_nothing():
    screening = screen_mood(None)

    assert screening.indicated_conditions == ()
    assert not screening.self_harm_flagged


def test_keywords_indicate_conditions_in_table_order():
    screening = screen_mood("Worried all the time, and honestly pretty sad and scattered")

    assert screening.indicated_conditions == ("depression", "anxiety", "adhd")


def test_matching_is_case_insensitive():
    assert screen_mood("My MOOD SWINGS are wild").indicated_conditions == ("bipolar",)


@pytest.mark.parametrize("rating, indicated", [(1, True), (4, True), (4.5, False), (10, False)])
def test_low_rating_indicates_depression(rating, indicated):
    screening = screen_mood("", rating)

    assert ("depression" in screening.indicated_conditions) is indicated


def test_rating_and_keyword_do_not_duplicate():
    screening = screen_mood("feeling hopeless", 2)

    assert screening.indicated_conditions == ("depression",)


@pytest.mark.parametrize("rating", [0, 11, True])
def test_rating_out_of_range_rejected(rating):
    with pytest.raises(InvalidResponseError):
        screen_mood("fine", rating)


def test_self_harm_marker_is_flagged():
    screening = screen_mood("I keep thinking there is no reason to live")

    assert screening.self_harm_flagged
