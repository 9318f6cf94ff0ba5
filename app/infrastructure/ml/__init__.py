"""
Machine Learning Infrastructure Package.

This package provides implementations of the external text services used by
the assessment engine: follow-up question generation and voice journal
transcription.
"""

from app.infrastructure.ml.question_generation import (
    MockQuestionGenerator,
    OllamaQuestionGenerator,
)
from app.infrastructure.ml.transcription import (
    MockTranscriptionService,
    WhisperTranscriptionService,
)

__all__ = [
    "MockQuestionGenerator",
    "MockTranscriptionService",
    "OllamaQuestionGenerator",
    "WhisperTranscriptionService",
]
