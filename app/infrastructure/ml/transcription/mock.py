"""Mock transcription service returning a fixed transcript."""

from app.core.interfaces.services.transcription_service_interface import (
    TranscriptionServiceInterface,
)


class MockTranscriptionService(TranscriptionServiceInterface):
    """In-process stand-in for a speech-to-text service."""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.received: list[bytes] = []

    async def transcribe(
        self,
        audio: bytes,
        filename: str = "journal.webm",
        content_type: str = "audio/webm",
    ) -> str:
        self.received.append(audio)
        if self.error is not None:
            raise self.error
        return self.text
