"""
In-Memory Repository Implementations.

This package contains in-memory implementations of repository interfaces,
used where persistent storage is not required.
"""

from app.infrastructure.repositories.memory.assessment_session_repository import (
    InMemoryAssessmentSessionRepository,
)

__all__ = ["InMemoryAssessmentSessionRepository"]
