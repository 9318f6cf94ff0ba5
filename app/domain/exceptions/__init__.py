"""
Exception classes for the application domain.

Every error the assessment engine raises derives from ``BaseApplicationError``;
the API layer maps each concrete type to one HTTP status.
"""

from app.domain.exceptions.assessment_exceptions import (
    CollaboratorUnavailableError,
    IncompleteHistoryError,
    InvalidResponseError,
    QuestionNotFoundError,
    SessionNotFoundError,
)
from app.domain.exceptions.base_exceptions import (
    BaseApplicationError,
    ConfigurationError,
    IntegrationError,
    ValidationError,
)

__all__ = [
    "BaseApplicationError",
    "CollaboratorUnavailableError",
    "ConfigurationError",
    "IncompleteHistoryError",
    "IntegrationError",
    "InvalidResponseError",
    "QuestionNotFoundError",
    "SessionNotFoundError",
    "ValidationError",
]
