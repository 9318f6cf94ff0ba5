"""
Assessment engine exceptions.

Errors raised while loading the question catalog, accepting answers,
talking to optional collaborators and reading prior assessment history.
"""

from typing import Any

from app.domain.exceptions.base_exceptions import (
    BaseApplicationError,
    IntegrationError,
)


class QuestionNotFoundError(BaseApplicationError):
    """Raised when a question id is not present in the catalog."""

    def __init__(self, question_id: str) -> None:
        super().__init__(f"Question not found: {question_id}")
        self.question_id = question_id


class InvalidResponseError(BaseApplicationError):
    """Raised when a submitted answer does not fit the pending question."""

    def __init__(
        self,
        message: str = "Invalid response",
        question_id: str | None = None,
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.question_id = question_id
        self.value = value


class CollaboratorUnavailableError(IntegrationError):
    """Raised when an external text-generation or transcription service fails."""

    def __init__(self, message: str = "Collaborator unavailable", service: str | None = None) -> None:
        super().__init__(message)
        self.service = service


class IncompleteHistoryError(BaseApplicationError):
    """Raised when a prior assessment history entry cannot be read."""

    def __init__(self, message: str = "Incomplete history entry", index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class SessionNotFoundError(BaseApplicationError):
    """Raised when an assessment session id is unknown to the host."""

    def __init__(self, session_id: Any) -> None:
        super().__init__(f"Assessment session not found: {session_id}")
        self.session_id = session_id
