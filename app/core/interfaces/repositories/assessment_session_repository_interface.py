"""
Assessment Session Repository Interface.

Contract for storing in-progress assessment sessions between requests.
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from uuid import UUID

from app.application.services.assessment_engine import AssessmentSession


class IAssessmentSessionRepository(ABC):
    """Interface for assessment session storage."""

    @abstractmethod
    async def add(self, session: AssessmentSession) -> None:
        """Store a new session."""
        pass

    @abstractmethod
    async def get(self, session_id: UUID) -> AssessmentSession:
        """
        Get a session by its ID.

        Raises:
            SessionNotFoundError: If no session has this ID
        """
        pass

    @abstractmethod
    async def remove(self, session_id: UUID) -> None:
        """
        Discard a session.

        Raises:
            SessionNotFoundError: If no session has this ID
        """
        pass

    @abstractmethod
    async def remove_expired(self, max_age: timedelta) -> int:
        """
        Discard sessions older than ``max_age``.

        Returns:
            Number of sessions removed
        """
        pass
