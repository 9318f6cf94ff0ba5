"""
Whisper transcription service.

Sends a recorded voice journal to an OpenAI-compatible
``/v1/audio/transcriptions`` endpoint and returns the text.
"""

import logging

import httpx

from app.core.interfaces.services.transcription_service_interface import (
    TranscriptionServiceInterface,
)
from app.domain.exceptions import CollaboratorUnavailableError

logger = logging.getLogger(__name__)

SERVICE_NAME = "transcription"


class WhisperTranscriptionService(TranscriptionServiceInterface):
    """Speech-to-text over HTTP multipart upload."""

    def __init__(
        self,
        base_url: str,
        model: str = "whisper-1",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._transport = transport

    async def transcribe(
        self,
        audio: bytes,
        filename: str = "journal.webm",
        content_type: str = "audio/webm",
    ) -> str:
        if not audio:
            raise CollaboratorUnavailableError("No audio provided", service=SERVICE_NAME)

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    "/v1/audio/transcriptions",
                    data={"model": self.model, "response_format": "json"},
                    files={"file": (filename, audio, content_type)},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise CollaboratorUnavailableError(
                f"Transcription service returned HTTP {e.response.status_code}",
                service=SERVICE_NAME,
            ) from e
        except httpx.HTTPError as e:
            raise CollaboratorUnavailableError(
                f"Transcription request failed: {e!s}", service=SERVICE_NAME
            ) from e
        except ValueError as e:
            raise CollaboratorUnavailableError(
                "Transcription service returned a non-JSON body", service=SERVICE_NAME
            ) from e

        text = data.get("text") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise CollaboratorUnavailableError(
                "Transcription response has no text", service=SERVICE_NAME
            )
        logger.info(f"Transcribed {len(audio)} bytes of audio into {len(text)} characters")
        return text.strip()
