"""
Risk marker detection.

Hard-coded self-harm / suicidality markers and the warning signals an
individual answer raises. Matching is a case-insensitive substring check.
"""

from app.domain.entities.question import SCALE_MAX, Question
from app.domain.value_objects.answer import Answer, ScaleAnswer, YesNoAnswer

SELF_HARM_MARKERS: tuple[str, ...] = (
    "suicid",
    "self-harm",
    "self harm",
    "kill myself",
    "end my life",
    "want to die",
    "better off dead",
    "hurting yourself",
    "hurt myself",
    "harm myself",
    "no reason to live",
)

# sub-categories whose "yes" answers are treated as risk factors
RISK_SUB_CATEGORIES = frozenset({"self-harm", "risk"})

HIGH_SCALE_WARNING_AT = 8

SELF_HARM_WARNING = "Self-harm or suicidal thoughts reported"


def contains_self_harm_marker(text: str | None) -> bool:
    """True when ``text`` contains any self-harm marker."""
    if not text:
        return False
    lowered = text.lower()
    return any(marker in lowered for marker in SELF_HARM_MARKERS)


def warning_signals_for(question: Question, answer: Answer, labels: list[str]) -> list[str]:
    """
    Warning signals raised by a single answer.

    Args:
        question: The answered question
        answer: The parsed answer
        labels: Symptom labels the answer produced
    """
    signals: list[str] = []

    if isinstance(answer, ScaleAnswer) and answer.value >= HIGH_SCALE_WARNING_AT:
        signals.append(
            f"High score on '{question.text}': {answer.to_primitive()}/{SCALE_MAX}"
        )

    if (
        isinstance(answer, YesNoAnswer)
        and answer.value
        and question.sub_category in RISK_SUB_CATEGORIES
    ):
        signals.append(f"Risk factor endorsed: {question.text}")

    if any(contains_self_harm_marker(label) for label in labels):
        signals.append(SELF_HARM_WARNING)

    return signals
