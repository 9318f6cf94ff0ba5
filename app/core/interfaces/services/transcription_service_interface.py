"""
Transcription Service Interface.

This module defines the contract for services that turn a recorded voice
journal into text.
"""

from abc import ABC, abstractmethod


class TranscriptionServiceInterface(ABC):
    """Interface for speech-to-text services."""

    @abstractmethod
    async def transcribe(
        self,
        audio: bytes,
        filename: str = "journal.webm",
        content_type: str = "audio/webm",
    ) -> str:
        """
        Transcribe recorded audio.

        Args:
            audio: Raw audio bytes
            filename: Original file name, used by the service to detect the format
            content_type: MIME type of the audio

        Returns:
            The transcribed text

        Raises:
            CollaboratorUnavailableError: If transcription fails
        """
        pass
