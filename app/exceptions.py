from typing import Any, Mapping, Optional


class ServiceError(Exception):
    """Base class for errors surfaced to API callers.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Service error"
    default_code: Optional[str] = None

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "VALIDATION_ERROR"


class UnauthorizedError(ServiceError):
    """Raised when the caller is not authenticated (missing/invalid token or credentials)."""

    http_status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"


class ForbiddenError(ServiceError):
    """Raised when an authenticated caller lacks a required role."""

    http_status = 403
    default_message = "Forbidden"
    default_code = "FORBIDDEN"


class NotFoundError(ServiceError):
    """Raised when a requested resource or referenced foreign key was not found."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class ConflictError(ServiceError):
    """Raised when a resource conflict occurs (e.g., duplicate natural key)."""

    http_status = 409
    default_message = "Conflict"
    default_code = "CONFLICT"


class ServerConfigurationError(ServiceError):
    """Raised when a required deployment setting is missing or invalid."""

    http_status = 500
    default_message = "Server configuration error"
    default_code = "SERVER_CONFIGURATION"
