"""Follow-up question generation collaborators."""

from app.infrastructure.ml.question_generation.mock import MockQuestionGenerator
from app.infrastructure.ml.question_generation.ollama_question_generator import (
    OllamaQuestionGenerator,
)

__all__ = ["MockQuestionGenerator", "OllamaQuestionGenerator"]
