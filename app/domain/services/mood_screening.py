"""
Mood screening.

Keyword screening of the optional mood description given at session start.
The result only lists conditions worth attention; it is never scored.
"""

from dataclasses import dataclass

from app.domain.entities.question import SCALE_MAX, SCALE_MIN
from app.domain.exceptions import InvalidResponseError
from app.domain.services.risk_markers import contains_self_harm_marker

LOW_MOOD_RATING = 4

MOOD_KEYWORDS: dict[str, tuple[str, ...]] = {
    "depression": ("sad", "hopeless", "depressed", "tired", "empty"),
    "anxiety": ("anxious", "worried", "nervous", "panic", "stress"),
    "adhd": ("distracted", "unfocused", "scattered", "disorganized"),
    "bipolar": ("mood swings", "high and low", "up and down", "manic"),
}


@dataclass(frozen=True)
class MoodScreening:
    """Outcome of screening a free-text mood description."""

    indicated_conditions: tuple[str, ...] = ()
    self_harm_flagged: bool = False


def screen_mood(description: str | None, rating: float | None = None) -> MoodScreening:
    """
    Screen a mood description and an optional 1-10 mood rating.

    A rating of ``LOW_MOOD_RATING`` or lower (1 is the worst mood) indicates
    depression.

    Raises:
        InvalidResponseError: If the rating is outside 1-10
    """
    conditions: dict[str, None] = {}

    if rating is not None:
        if isinstance(rating, bool) or not SCALE_MIN <= rating <= SCALE_MAX:
            raise InvalidResponseError(
                f"Mood rating must be between {SCALE_MIN} and {SCALE_MAX}", value=rating
            )
        if rating <= LOW_MOOD_RATING:
            conditions["depression"] = None

    text = (description or "").lower()
    for condition, keywords in MOOD_KEYWORDS.items():
        if any(keyword in text for keyword in keywords):
            conditions.setdefault(condition, None)

    return MoodScreening(
        indicated_conditions=tuple(conditions),
        self_harm_flagged=contains_self_harm_marker(description),
    )
