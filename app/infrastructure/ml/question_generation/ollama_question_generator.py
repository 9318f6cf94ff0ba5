"""
Ollama question generator.

Asks a locally hosted language model (Ollama ``/api/generate``) to reword a
follow-up question. The model output is parsed as JSON and mapped onto the
question shape; validating that shape is left to the assessment engine.
"""

import json
import logging
from typing import Any

import httpx

from app.core.interfaces.services.question_generator_interface import (
    QuestionGeneratorInterface,
)
from app.domain.exceptions import CollaboratorUnavailableError

logger = logging.getLogger(__name__)

SERVICE_NAME = "question-generator"

PROMPT_TEMPLATE = """You are assisting a structured mental health self-assessment.
The person has just answered the questions below. Rewrite the planned follow-up
question so that it reads naturally after their answers. Keep the same intent.
Never give a diagnosis.

Answers so far:
{history}

Planned follow-up question:
{template}

Respond with JSON only, in this format:
{{
  "text": "the follow-up question",
  "type": "scale|yesNo|singleSelect|multiSelect",
  "category": "emotional|cognitive|behavioral",
  "options": ["only for singleSelect and multiSelect"]
}}"""


class OllamaQuestionGenerator(QuestionGeneratorInterface):
    """Follow-up wording from an Ollama-compatible text generation server."""

    def __init__(
        self,
        base_url: str,
        model: str = "mistral",
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the generator.

        Args:
            base_url: Server root, e.g. ``http://localhost:11434``
            model: Model name passed to the server
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._transport = transport

    def build_prompt(self, template: dict[str, Any], history: list[dict[str, Any]]) -> str:
        history_lines = "\n".join(
            f"- {item['question']} -> {json.dumps(item['value'])}" for item in history
        )
        return PROMPT_TEMPLATE.format(
            history=history_lines or "- (none)",
            template=json.dumps(template, indent=2),
        )

    async def propose_follow_up(
        self,
        template: dict[str, Any],
        history: list[dict[str, Any]],
    ) -> dict[str, Any] | None:
        payload = {
            "model": self.model,
            "prompt": self.build_prompt(template, history),
            "stream": False,
            "format": "json",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post("/api/generate", json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise CollaboratorUnavailableError(
                f"Question generator returned HTTP {e.response.status_code}",
                service=SERVICE_NAME,
            ) from e
        except httpx.HTTPError as e:
            raise CollaboratorUnavailableError(
                f"Question generator request failed: {e!s}", service=SERVICE_NAME
            ) from e
        except ValueError as e:
            raise CollaboratorUnavailableError(
                "Question generator returned a non-JSON body", service=SERVICE_NAME
            ) from e

        raw = data.get("response") if isinstance(data, dict) else None
        if not isinstance(raw, str) or not raw.strip():
            logger.info("Question generator returned no proposal")
            return None

        try:
            proposal = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CollaboratorUnavailableError(
                "Question generator output is not valid JSON", service=SERVICE_NAME
            ) from e
        if not isinstance(proposal, dict):
            raise CollaboratorUnavailableError(
                "Question generator output is not a JSON object", service=SERVICE_NAME
            )

        # older prompts used "question" for the prompt text
        if "text" not in proposal and "question" in proposal:
            proposal["text"] = proposal.pop("question")
        return proposal
