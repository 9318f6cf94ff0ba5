"""
Score Accumulator.

Holds every piece of session-scoped mutable scoring state. One accumulator
belongs to exactly one session and is never shared or pooled.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from app.domain.entities.question import Question
from app.domain.services.response_normalizer import MAX_CONTRIBUTION
from app.domain.utils.numeric import clamp, round_half_up

SCALE_FACTOR = 3.33
MAX_NORMALIZED_SCORE = 10


@dataclass
class ConditionScoreState:
    """Running total and contribution count for one condition."""

    raw_total: int = 0
    count: int = 0
    symptoms: list[str] = field(default_factory=list)


class ScoreAccumulator:
    """Per-session running totals, normalized to a 0-10 scale on read."""

    def __init__(self, scale_factor: float = SCALE_FACTOR) -> None:
        if scale_factor <= 0:
            raise ValueError("scale_factor must be positive")
        self.scale_factor = scale_factor
        self._states: dict[str, ConditionScoreState] = {}

    def apply(self, question: Question, contributions: Mapping[str, int]) -> None:
        """
        Add one answer's contributions.

        Each named condition's raw total grows by its contribution and its
        count by one, even when the contribution is zero.

        Raises:
            ValueError: If a contribution is outside ``[0, MAX_CONTRIBUTION]``
        """
        for condition, value in contributions.items():
            if not 0 <= value <= MAX_CONTRIBUTION:
                raise ValueError(
                    f"Contribution for '{condition}' from question '{question.id}' "
                    f"out of range: {value}"
                )

        for condition, value in contributions.items():
            state = self._states.setdefault(condition, ConditionScoreState())
            state.raw_total += value
            state.count += 1

    def record_symptoms(self, conditions: Iterable[str], labels: Iterable[str]) -> None:
        """Attach symptom labels to conditions, ignoring repeats."""
        labels = list(labels)
        if not labels:
            return
        for condition in conditions:
            state = self._states.setdefault(condition, ConditionScoreState())
            for label in labels:
                if label not in state.symptoms:
                    state.symptoms.append(label)

    def normalized(self, condition: str) -> float:
        """Condition score on the 0-10 scale; 0.0 for untouched conditions."""
        state = self._states.get(condition)
        if state is None:
            return 0.0
        mean = state.raw_total / max(1, state.count)
        return float(clamp(round_half_up(mean * self.scale_factor), 0, MAX_NORMALIZED_SCORE))

    def overall(self) -> float:
        """Mean normalized score over conditions that received at least one answer."""
        scored = self.scored_conditions()
        if not scored:
            return 0.0
        return round(sum(self.normalized(c) for c in scored) / len(scored), 2)

    def scored_conditions(self) -> list[str]:
        """Conditions with count > 0, in the order they were first scored."""
        return [name for name, state in self._states.items() if state.count > 0]

    def state(self, condition: str) -> ConditionScoreState:
        """A copy of the state for ``condition`` (empty if never touched)."""
        state = self._states.get(condition, ConditionScoreState())
        return ConditionScoreState(state.raw_total, state.count, list(state.symptoms))

    def symptoms(self, condition: str) -> tuple[str, ...]:
        state = self._states.get(condition)
        return tuple(state.symptoms) if state else ()
