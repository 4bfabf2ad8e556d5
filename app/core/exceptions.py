"""
Custom exceptions for the application.

Every error a service can raise maps to one HTTP status and one
machine-readable code; routers turn them into JSON error bodies.
"""

from typing import Optional

from fastapi import status
from fastapi.responses import JSONResponse


class VantageException(Exception):
    """Base exception for Vantage application."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


# ═══════════════════════════════════════════════════════════════════════════
# CLIENT ERRORS
# ═══════════════════════════════════════════════════════════════════════════


class ValidationError(VantageException):
    """Raised when input is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class NotFoundError(VantageException):
    """Raised when a record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ConflictError(VantageException):
    """Raised when a unique key is already taken."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "CONFLICT"


class UnauthorizedError(VantageException):
    """
    Raised when credentials or a bearer token do not check out.

    Reported as 400 like other client errors; routes that require a bearer
    token answer 401 through HTTPException instead.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    code = "UNAUTHORIZED"


# ═══════════════════════════════════════════════════════════════════════════
# PROVIDER & DEPLOYMENT ERRORS
# ═══════════════════════════════════════════════════════════════════════════


class UpstreamUnavailableError(VantageException):
    """
    Raised when a third-party provider fails or cannot be reached.

    When the provider answered with a status, it is kept on the exception
    and becomes the response status.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "UPSTREAM_UNAVAILABLE"

    def __init__(
            self,
            message: str = "Upstream provider unavailable",
            provider_status: Optional[int] = None,
    ):
        super().__init__(message)
        self.provider_status = provider_status
        if provider_status is not None:
            self.status_code = provider_status


class ExternalResponseMalformedError(VantageException):
    """Raised when a provider reply cannot be parsed into the expected shape."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "MALFORMED_RESPONSE"


class ConfigurationError(VantageException):
    """Raised when a deployment secret needed by an operation is missing."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "CONFIGURATION_ERROR"


# ═══════════════════════════════════════════════════════════════════════════
# HTTP RESPONSE HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def error_response(exc: VantageException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code},
    )


def internal_error(detail: str = "An unexpected error occurred") -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": detail, "code": "INTERNAL_ERROR"},
    )
