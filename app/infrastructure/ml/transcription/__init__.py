"""Voice journal transcription collaborators."""

from app.infrastructure.ml.transcription.mock import MockTranscriptionService
from app.infrastructure.ml.transcription.whisper_transcription_service import (
    WhisperTranscriptionService,
)

__all__ = ["MockTranscriptionService", "WhisperTranscriptionService"]
