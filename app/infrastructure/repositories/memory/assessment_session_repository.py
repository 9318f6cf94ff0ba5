"""
In-memory implementation of the assessment session repository.

Sessions live in process memory and are lost on restart, which matches the
engine's contract: the caller owns persistence of completed reports.
"""

from datetime import timedelta
from uuid import UUID

from app.application.services.assessment_engine import AssessmentSession
from app.core.interfaces.repositories.assessment_session_repository_interface import (
    IAssessmentSessionRepository,
)
from app.domain.exceptions import SessionNotFoundError
from app.domain.utils.datetime_utils import now_utc


class InMemoryAssessmentSessionRepository(IAssessmentSessionRepository):
    """Dictionary-backed session storage for a single process."""

    def __init__(self):
        self._sessions: dict[UUID, AssessmentSession] = {}

    async def add(self, session: AssessmentSession) -> None:
        self._sessions[session.id] = session

    async def get(self, session_id: UUID) -> AssessmentSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    async def remove(self, session_id: UUID) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)

    async def remove_expired(self, max_age: timedelta) -> int:
        cutoff = now_utc() - max_age
        expired = [sid for sid, s in self._sessions.items() if s.created_at < cutoff]
        for session_id in expired:
            del self._sessions[session_id]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)
