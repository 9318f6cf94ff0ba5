"""
Base exception classes for the application.

Roots of the exception hierarchy. ``message`` is returned to API clients as
the error detail.
"""


class BaseApplicationError(Exception):
    """Base class for all application exceptions."""

    def __init__(self, message: str = "An application error occurred") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(BaseApplicationError):
    """Error raised when validation fails."""

    def __init__(self, message: str = "Validation failed") -> None:
        super().__init__(message)


class ConfigurationError(BaseApplicationError):
    """Error raised when configuration is invalid."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message)


class IntegrationError(BaseApplicationError):
    """Error raised when an integration with an external system fails."""

    def __init__(self, message: str = "Integration failed") -> None:
        super().__init__(message)
