"""
Authentication module.

Handles registration, login, bearer token issuance/validation and user
profiles.

Public API:
- IAuthService: Interface for auth operations
- User: User profile as exposed to callers
- TokenPayload: Decoded token claims
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import User, UserRecord, TokenPayload
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    UserNotFoundError,
    MissingFieldsError,
    EmailAlreadyRegisteredError,
    PasswordHashingError,
    AuthConfigurationError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "User",
    "UserRecord",
    "TokenPayload",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "UserNotFoundError",
    "MissingFieldsError",
    "EmailAlreadyRegisteredError",
    "PasswordHashingError",
    "AuthConfigurationError",
]
