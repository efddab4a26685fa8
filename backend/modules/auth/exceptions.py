"""
Authentication module exceptions.

These exceptions are raised by the auth module and the session gate and
are mapped to HTTP responses by the API error handlers.
"""

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    InternalError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a token is invalid, malformed or fails verification."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(InvalidTokenError):
    """Raised when a token has expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)
        self.code = "TOKEN_EXPIRED"


class MissingTokenError(AuthenticationError):
    """Raised when no usable token is provided."""

    def __init__(self, message: str = "Missing token"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """
    Raised when login fails.

    Unknown email and wrong password both raise this exact error so callers
    cannot tell which one happened.
    """

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class UserNotFoundError(AuthenticationError):
    """Raised when the authenticated user no longer exists in the store."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class MissingFieldsError(ValidationError):
    """Raised when required fields are missing or blank."""

    def __init__(self, fields: list[str]):
        super().__init__(
            f"Missing required fields: {', '.join(fields)}",
            code="MISSING_FIELDS",
            details={"fields": fields},
        )


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when an email is already used by another account."""

    def __init__(self, email: str):
        super().__init__(
            "Email is already registered",
            code="EMAIL_TAKEN",
            details={"email": email},
        )


class PasswordHashingError(InternalError):
    """Raised when the hashing primitive fails."""

    def __init__(self, message: str = "Password hashing failed"):
        super().__init__(message, code="HASHING_ERROR")


class AuthConfigurationError(InternalError):
    """Raised when the token secret is not configured."""

    def __init__(self):
        super().__init__(
            "Server authentication not configured",
            code="AUTH_NOT_CONFIGURED",
        )
