"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and security primitives.
"""

from app.config import settings, get_settings
from app.exceptions import (
    ServiceError,
    ServiceValidationError,
    NotFoundError,
    ConflictError,
    UnauthorizedError,
    ForbiddenError,
    ServerConfigurationError,
)

__all__ = [
    "settings",
    "get_settings",
    "ServiceError",
    "ServiceValidationError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "ForbiddenError",
    "ServerConfigurationError",
]
