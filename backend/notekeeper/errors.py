"""
Error taxonomy shared by the auth and notes services.

Services raise these; the HTTP layer (see main.py) maps each one to a status code.
"""
from __future__ import annotations


class ApplicationError(Exception):
    """Base exception for all service errors."""

    code = "SYS_INTERNAL_ERROR"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.__class__.__doc__ or "Application error"
        super().__init__(self.message)


class NotFound(ApplicationError):
    """Resource not found"""

    code = "RES_NOT_FOUND"


class AlreadyExists(ApplicationError):
    """Resource already exists"""

    code = "RES_CONFLICT"


class Unauthorized(ApplicationError):
    """Invalid credentials"""

    code = "AUTH_UNAUTHORIZED"


class InvalidCredentials(Unauthorized):
    """Invalid credentials"""

    code = "AUTH_INVALID_CREDENTIALS"


class InvalidToken(Unauthorized):
    """Invalid token"""

    code = "AUTH_INVALID_TOKEN"


class TokenExpired(InvalidToken):
    """Token expired"""

    code = "AUTH_TOKEN_EXPIRED"


class StorageError(ApplicationError):
    """Storage error"""

    code = "SYS_STORAGE_ERROR"


class StorageTimeout(StorageError):
    """Storage operation timed out"""

    code = "SYS_STORAGE_TIMEOUT"


class ConfigurationError(ApplicationError):
    """Service is misconfigured"""

    code = "SYS_CONFIGURATION_ERROR"
