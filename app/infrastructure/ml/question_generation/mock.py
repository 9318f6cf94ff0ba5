"""
Mock question generator.

Returns a fixed proposal (or raises a fixed error) without any network
access. Calls are recorded for assertions.
"""

import asyncio
from typing import Any

from app.core.interfaces.services.question_generator_interface import (
    QuestionGeneratorInterface,
)


class MockQuestionGenerator(QuestionGeneratorInterface):
    """In-process stand-in for a question generation service."""

    def __init__(
        self,
        proposal: dict[str, Any] | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ):
        self.proposal = proposal
        self.error = error
        self.delay = delay
        self.calls: list[tuple[dict[str, Any], list[dict[str, Any]]]] = []

    async def propose_follow_up(
        self,
        template: dict[str, Any],
        history: list[dict[str, Any]],
    ) -> dict[str, Any] | None:
        self.calls.append((template, history))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return dict(self.proposal) if self.proposal is not None else None
