"""
Question Generator Interface.

This module defines the contract for optional services that propose the
wording of a follow-up question. Proposals are untrusted: the assessment
engine validates them before use and falls back to its own template.
"""

from abc import ABC, abstractmethod
from typing import Any


class QuestionGeneratorInterface(ABC):
    """Interface for follow-up question generation services."""

    @abstractmethod
    async def propose_follow_up(
        self,
        template: dict[str, Any],
        history: list[dict[str, Any]],
    ) -> dict[str, Any] | None:
        """
        Propose an alternative follow-up question.

        Args:
            template: The deterministic follow-up the engine would ask,
                as ``{"id", "text", "type", "category", "options"}``
            history: Answers so far as ``{"questionId", "question", "value"}``

        Returns:
            A question-shaped mapping, or None to keep the template

        Raises:
            CollaboratorUnavailableError: If the service cannot be reached
                or returns something that is not JSON
        """
        pass
