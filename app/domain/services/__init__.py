"""Domain services of the adaptive assessment engine."""

from app.domain.services.branching_selector import BranchDecision, BranchingSelector, ConcernRules
from app.domain.services.historical_comparator import HistoricalComparator, classify_change
from app.domain.services.mood_screening import MoodScreening, screen_mood
from app.domain.services.question_catalog import QuestionCatalog
from app.domain.services.recommendation_generator import RecommendationGenerator
from app.domain.services.response_normalizer import ResponseNormalizer
from app.domain.services.score_accumulator import ScoreAccumulator
from app.domain.services.severity_classifier import SeverityClassifier, SeverityThresholds

__all__ = [
    "BranchDecision",
    "BranchingSelector",
    "ConcernRules",
    "HistoricalComparator",
    "MoodScreening",
    "QuestionCatalog",
    "RecommendationGenerator",
    "ResponseNormalizer",
    "ScoreAccumulator",
    "SeverityClassifier",
    "SeverityThresholds",
    "classify_change",
    "screen_mood",
]
