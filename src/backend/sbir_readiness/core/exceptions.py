"""
Custom exception classes for the application.

Provides structured error handling with consistent error codes
and HTTP status mappings.
"""

from typing import Any


class AppException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for client handling
        status_code: HTTP status code to return
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        error_code: str = "APP_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API response."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


class EntityNotFoundException(AppException):
    """Raised when a requested entity is not found."""

    def __init__(
        self,
        entity_type: str,
        entity_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = f"{entity_type} not found"
        if entity_id:
            message = f"{entity_type} with id '{entity_id}' not found"
        super().__init__(message, "ENTITY_NOT_FOUND", 404, details)


# Validation Exceptions
class ValidationException(AppException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message, "VALIDATION_ERROR", 422, {"field_errors": field_errors or {}})


class ConfigurationException(AppException):
    """
    Raised when a solicitation rulepack or technology-area catalog
    cannot be parsed. The previously loaded document stays active.
    """

    def __init__(
        self,
        document: str,
        message: str,
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(
            f"Invalid {document} JSON: {message}",
            "CONFIG_PARSE_ERROR",
            422,
            {"document": document, "errors": errors or []},
        )


# External Service Exceptions
class ExternalServiceException(AppException):
    """Raised when an external service call fails."""

    def __init__(
        self,
        service_name: str,
        message: str = "External service call failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"{service_name}: {message}",
            "EXTERNAL_SERVICE_ERROR",
            500,
            {"service": service_name, **(details or {})},
        )


class AIServiceException(ExternalServiceException):
    """Raised when the OpenAI scoring call fails."""

    def __init__(self, message: str = "Section scoring failed") -> None:
        super().__init__("OpenAI", message)
        self.reason = message


class ScoringInProgressException(AppException):
    """Raised when a scoring request arrives while another is still pending."""

    def __init__(self) -> None:
        super().__init__(
            "A scoring request is already in progress",
            "SCORING_IN_PROGRESS",
            409,
        )
