"""
Custom exception classes and structured error responses.

Every error leaves the service as JSON shaped like::

    {"error": "Pet not found", "message": "Pet not found: 64f...", "code": "ERR_2001", ...}

``error`` is a short label suitable for display, ``message`` carries the
longer diagnostic text.
"""

from datetime import datetime
from typing import Any

from fastapi import HTTPException, status
from pydantic import BaseModel

from petcare.core.correlation import get_correlation_id


class ErrorCode:
    """Error codes for programmatic error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "ERR_1000"
    VALIDATION_ERROR = "ERR_1001"
    NOT_FOUND = "ERR_1002"
    UNAUTHORIZED = "ERR_1003"
    CONFLICT = "ERR_1004"

    # Pet errors (2xxx)
    PET_NOT_FOUND = "ERR_2001"
    PET_NOT_AVAILABLE = "ERR_2002"

    # Adoption application errors (3xxx)
    APPLICATION_NOT_FOUND = "ERR_3001"
    APPLICATION_INVALID = "ERR_3002"

    # Database errors (5xxx)
    DATABASE_ERROR = "ERR_5001"

    # Authentication errors (8xxx)
    AUTH_TOKEN_INVALID = "ERR_8001"


class ErrorDetail(BaseModel):
    """Structured error detail for API responses."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Structured error response for API."""

    error: str  # Short human-readable label
    message: str  # Longer diagnostic message
    code: str  # Error code for programmatic handling
    details: list[ErrorDetail] | None = None
    correlation_id: str | None = None
    timestamp: str  # ISO 8601 timestamp
    path: str | None = None

    @classmethod
    def create(
        cls,
        error: str,
        code: str,
        message: str,
        details: list[ErrorDetail] | None = None,
        path: str | None = None,
    ) -> "ErrorResponse":
        """Create an error response with current timestamp and correlation ID."""
        return cls(
            error=error,
            code=code,
            message=message,
            details=details,
            correlation_id=get_correlation_id(),
            timestamp=datetime.utcnow().isoformat() + "Z",
            path=path,
        )


class PetCareException(HTTPException):
    """Base exception for all adoption service errors."""

    error_code: str = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        error: str,
        message: str | None = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        error_code: str | None = None,
        details: list[ErrorDetail] | None = None,
    ):
        self.error = error
        self.message = message or error
        self.error_code = error_code or self.__class__.error_code
        error_response = ErrorResponse.create(
            error=error, code=self.error_code, message=self.message, details=details
        )
        super().__init__(status_code=status_code, detail=error_response.model_dump())

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(PetCareException):
    """Raised when required input is missing or malformed."""

    error_code = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        error: str,
        message: str | None = None,
        details: list[ErrorDetail] | None = None,
    ):
        super().__init__(
            error=error,
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class InvalidApplicationError(ValidationError):
    """Raised when an adoption application payload lacks required blocks."""

    error_code = ErrorCode.APPLICATION_INVALID

    def __init__(self, details: list[ErrorDetail] | None = None):
        super().__init__(
            error="Missing required fields",
            message="The adoption application is missing required fields",
            details=details,
        )


# =============================================================================
# Not Found Errors
# =============================================================================


class NotFoundError(PetCareException):
    """Base class for not found errors."""

    error_code = ErrorCode.NOT_FOUND

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            error=f"{resource} not found",
            message=f"{resource} not found: {identifier}",
            status_code=status.HTTP_404_NOT_FOUND,
        )


class PetNotFoundError(NotFoundError):
    """Raised when an application references a pet that does not exist."""

    error_code = ErrorCode.PET_NOT_FOUND

    def __init__(self, pet_id: str):
        super().__init__(resource="Pet", identifier=pet_id)


class ApplicationNotFoundError(NotFoundError):
    """Raised when an adoption application is not found."""

    error_code = ErrorCode.APPLICATION_NOT_FOUND

    def __init__(self, application_id: str):
        super().__init__(resource="Application", identifier=application_id)


# =============================================================================
# Conflict Errors
# =============================================================================


class ConflictError(PetCareException):
    """
    Raised when the request is well formed but the current state forbids it.

    Reported as HTTP 400 to keep the public contract of the adoption API.
    """

    error_code = ErrorCode.CONFLICT

    def __init__(self, error: str, message: str | None = None):
        super().__init__(error=error, message=message, status_code=status.HTTP_400_BAD_REQUEST)


class PetNotAvailableError(ConflictError):
    """Raised when a pet cannot currently receive adoption applications."""

    error_code = ErrorCode.PET_NOT_AVAILABLE

    def __init__(self, pet_id: str):
        super().__init__(
            error="This pet is not available for adoption",
            message=f"Pet {pet_id} is not available for adoption",
        )


# =============================================================================
# Operation Errors
# =============================================================================


class DatabaseOperationError(PetCareException):
    """Raised when a database operation fails."""

    error_code = ErrorCode.DATABASE_ERROR

    def __init__(self, detail: str, error: str = "Database operation failed"):
        super().__init__(
            error=error,
            message=f"Database operation failed: {detail}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


# =============================================================================
# Authentication Errors
# =============================================================================


class AuthenticationError(PetCareException):
    """Base class for authentication errors."""

    error_code = ErrorCode.UNAUTHORIZED

    def __init__(self, message: str):
        super().__init__(
            error="Unauthorized", message=message, status_code=status.HTTP_401_UNAUTHORIZED
        )


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token cannot be verified."""

    error_code = ErrorCode.AUTH_TOKEN_INVALID

    def __init__(self):
        super().__init__(message="Invalid authentication token")
