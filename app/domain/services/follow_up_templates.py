"""
Follow-up question templates.

Follow-up questions are drawn from a fixed table keyed by the triggering
question's category and answer type, so the branching selector stays
deterministic and testable offline. Proposals from an external
question-generation service are validated against the same schema before
they may replace a template question.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from app.domain.entities.question import SCALE_MAX, Question
from app.domain.enums.assessment import AnswerType, QuestionCategory
from app.domain.exceptions import ConfigurationError, ValidationError
from app.domain.value_objects.answer import (
    Answer,
    MultiSelectAnswer,
    ScaleAnswer,
    SingleSelectAnswer,
    YesNoAnswer,
)

FOLLOW_UP_SUFFIX = "-followup"

FREQUENCY_OPTIONS = (
    "Not at all",
    "Several days",
    "More than half the days",
    "Nearly every day",
)
FREQUENT = frozenset({"More than half the days", "Nearly every day"})

IMPACT_OPTIONS = ("No impact", "Minor impact", "Moderate impact", "Severe impact")
HIGH_IMPACT = frozenset({"Moderate impact", "Severe impact"})

LIFE_AREAS = (
    "Work or studies",
    "Relationships",
    "Self-care",
    "Sleep",
    "Leisure activities",
)

COGNITIVE_SETTINGS = (
    "At work or school",
    "During conversations",
    "While reading",
    "When making decisions",
    "Managing daily tasks",
)


@dataclass(frozen=True)
class FollowUpTemplate:
    """Text pattern and answer shape of a follow-up question."""

    text: str
    answer_type: AnswerType
    options: tuple[str, ...] = ()
    negative_options: frozenset[str] = field(default_factory=frozenset)


FOLLOW_UP_TEMPLATES: dict[tuple[QuestionCategory, AnswerType], FollowUpTemplate] = {
    (QuestionCategory.EMOTIONAL, AnswerType.SCALE): FollowUpTemplate(
        "You rated {topic} at {answer}. Over the past two weeks, how often have you felt this way?",
        AnswerType.SINGLE_SELECT,
        FREQUENCY_OPTIONS,
        FREQUENT,
    ),
    (QuestionCategory.EMOTIONAL, AnswerType.YES_NO): FollowUpTemplate(
        'You answered yes to "{text}" How strongly has this affected you recently, '
        "from 1 (barely) to 10 (overwhelmingly)?",
        AnswerType.SCALE,
    ),
    (QuestionCategory.EMOTIONAL, AnswerType.SINGLE_SELECT): FollowUpTemplate(
        'You described {topic} as "{answer}". Has this lasted longer than two weeks?',
        AnswerType.YES_NO,
    ),
    (QuestionCategory.EMOTIONAL, AnswerType.MULTI_SELECT): FollowUpTemplate(
        "You selected {answer} of the listed experiences. "
        "How distressing have they been overall, from 1 to 10?",
        AnswerType.SCALE,
    ),
    (QuestionCategory.COGNITIVE, AnswerType.SCALE): FollowUpTemplate(
        "You rated {topic} at {answer}. Where do you notice this the most?",
        AnswerType.MULTI_SELECT,
        COGNITIVE_SETTINGS,
    ),
    (QuestionCategory.COGNITIVE, AnswerType.YES_NO): FollowUpTemplate(
        'You answered yes to "{text}" How often does this happen?',
        AnswerType.SINGLE_SELECT,
        FREQUENCY_OPTIONS,
        FREQUENT,
    ),
    (QuestionCategory.COGNITIVE, AnswerType.SINGLE_SELECT): FollowUpTemplate(
        'You chose "{answer}". How much does this interfere with your daily tasks, from 1 to 10?',
        AnswerType.SCALE,
    ),
    (QuestionCategory.COGNITIVE, AnswerType.MULTI_SELECT): FollowUpTemplate(
        "You selected {answer} cognitive difficulties. "
        "Have they become noticeably worse in the past month?",
        AnswerType.YES_NO,
    ),
    (QuestionCategory.BEHAVIORAL, AnswerType.SCALE): FollowUpTemplate(
        "You rated {topic} at {answer}. How much is this affecting your work, studies or relationships?",
        AnswerType.SINGLE_SELECT,
        IMPACT_OPTIONS,
        HIGH_IMPACT,
    ),
    (QuestionCategory.BEHAVIORAL, AnswerType.YES_NO): FollowUpTemplate(
        'You answered yes to "{text}" Which areas of daily life has this affected?',
        AnswerType.MULTI_SELECT,
        LIFE_AREAS,
    ),
    (QuestionCategory.BEHAVIORAL, AnswerType.SINGLE_SELECT): FollowUpTemplate(
        'You chose "{answer}". Have others noticed or commented on this change?',
        AnswerType.YES_NO,
    ),
    (QuestionCategory.BEHAVIORAL, AnswerType.MULTI_SELECT): FollowUpTemplate(
        "You selected {answer} changes. How often have they occurred over the past two weeks?",
        AnswerType.SINGLE_SELECT,
        FREQUENCY_OPTIONS,
        FREQUENT,
    ),
}


def follow_up_id(parent_id: str) -> str:
    return f"{parent_id}{FOLLOW_UP_SUFFIX}"


def describe_answer(answer: Answer) -> str:
    """Short rendering of an answer for use inside follow-up text."""
    if isinstance(answer, ScaleAnswer):
        return f"{answer.to_primitive()}/{SCALE_MAX}"
    if isinstance(answer, YesNoAnswer):
        return "yes" if answer.value else "no"
    if isinstance(answer, SingleSelectAnswer):
        return answer.value
    if isinstance(answer, MultiSelectAnswer):
        return str(len(answer.values))
    raise TypeError(f"Unsupported answer variant: {type(answer).__name__}")


def build_follow_up(parent: Question, answer: Answer) -> Question:
    """
    Build the template follow-up for a triggering answer.

    The follow-up inherits the parent's category, sub-category and condition
    tags, is never scored, and records the parent id in ``follows_up``.
    """
    template = FOLLOW_UP_TEMPLATES[(parent.category, parent.answer_type)]
    text = template.text.format(
        topic=parent.topic,
        answer=describe_answer(answer),
        text=parent.text,
    )
    question = Question(
        id=follow_up_id(parent.id),
        text=text,
        answer_type=template.answer_type,
        category=parent.category,
        options=template.options,
        sub_category=parent.sub_category,
        conditions=parent.conditions,
        scale_reference=parent.scale_reference,
        negative_options=template.negative_options,
        scored=False,
        follows_up=parent.id,
    )
    question.validate()
    return question


def question_from_proposal(proposal: Mapping[str, Any], template: Question) -> Question:
    """
    Validate a generated follow-up against the question schema.

    Identity, condition tags and lineage always come from ``template``; the
    proposal may only change the prompt text, answer type, category and
    options.

    Raises:
        ValidationError: If the proposal does not describe a valid question
    """
    if not isinstance(proposal, Mapping):
        raise ValidationError("Generated question must be a JSON object")

    text = proposal.get("text")
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Generated question has no text")

    try:
        answer_type = AnswerType(proposal.get("type", template.answer_type.value))
        category = QuestionCategory(proposal.get("category", template.category.value))
    except ValueError as e:
        raise ValidationError(f"Generated question has an unsupported type or category: {e}")

    options: tuple[str, ...] = ()
    negative: frozenset[str] = frozenset()
    if answer_type.is_select:
        raw_options = proposal.get("options")
        if not isinstance(raw_options, list) or not raw_options:
            raise ValidationError("Generated select question has no options")
        if not all(isinstance(o, str) and o.strip() for o in raw_options):
            raise ValidationError("Generated question options must be non-empty strings")
        options = tuple(o.strip() for o in raw_options)
        raw_negative = proposal.get("negativeOptions") or []
        if not isinstance(raw_negative, list):
            raise ValidationError("Generated negativeOptions must be a list")
        negative = frozenset(o for o in raw_negative if isinstance(o, str))

    question = Question(
        id=template.id,
        text=text.strip(),
        answer_type=answer_type,
        category=category,
        options=options,
        sub_category=template.sub_category,
        conditions=template.conditions,
        scale_reference=template.scale_reference,
        negative_options=negative,
        scored=False,
        follows_up=template.follows_up,
    )
    try:
        question.validate()
    except ConfigurationError as e:
        raise ValidationError(f"Generated question is invalid: {e}") from e
    return question
