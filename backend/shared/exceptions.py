"""
Base exception classes for the Solicitudes backend.

Each module should define its own exceptions that inherit from these bases.
Every base carries an ErrorKind; the API layer maps kinds to HTTP responses,
so services never deal with status codes themselves.
"""

from enum import Enum
from typing import Optional, Any


class ErrorKind(str, Enum):
    """Category of failure crossing a component boundary."""

    VALIDATION = "validation"  # Bad caller input, detected before any store access
    AUTH = "auth"              # Missing/invalid credentials or token
    CONFLICT = "conflict"      # Duplicate email, lost claim race, unknown claim target
    INTERNAL = "internal"      # Store or hashing failure


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions should inherit from this class (through one of
    the kind-specific bases below).
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }


class ValidationError(AppError):
    """Input validation failed."""

    kind = ErrorKind.VALIDATION


class AuthenticationError(AppError):
    """Authentication failed (invalid or missing credentials)."""

    kind = ErrorKind.AUTH


class ConflictError(AppError):
    """The requested change conflicts with the current state of the store."""

    kind = ErrorKind.CONFLICT


class InternalError(AppError):
    """Unexpected failure. The message is never shown to callers."""

    kind = ErrorKind.INTERNAL


class DatabaseError(InternalError):
    """Error communicating with the durable store."""

    def __init__(
        self,
        message: str,
        operation: str,
        code: Optional[str] = "DATABASE_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.operation = operation
        self.details["operation"] = operation
