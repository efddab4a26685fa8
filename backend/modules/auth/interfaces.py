"""
Authentication module interface.

Other modules and the API layer should depend on IAuthService, not the
concrete implementation. This enables testing with mocks.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from shared.models import Identity

from .models import User


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def register(self, name: str, email: str, password: str) -> tuple[User, str]:
        """
        Create an account and sign the new user in.

        Returns:
            The created user (without password hash) and a fresh token

        Raises:
            ValidationError: If any field is empty
            ConflictError: If the email is already registered
        """
        ...

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """
        Verify credentials and issue a new token.

        Earlier tokens of the same user stay valid until they expire.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
                (indistinguishable on purpose)
        """
        ...

    def issue_token(self, user: User, issued_at: Optional[datetime] = None) -> str:
        """
        Sign a token for the user, valid for the configured lifetime.
        """
        ...

    async def validate_token(self, token: str) -> Identity:
        """
        Validate a token and return the identity encoded in it.

        Raises:
            MissingTokenError: If the token is empty
            ExpiredTokenError: If the token has expired
            InvalidTokenError: If the token is malformed or badly signed
        """
        ...

    async def get_profile(self, identity: Identity) -> User:
        """
        Load the stored profile of an authenticated identity.

        Raises:
            UserNotFoundError: If the user no longer exists
        """
        ...

    async def update_profile(self, identity: Identity, name: str, email: str) -> User:
        """
        Change the name and email of an authenticated identity.

        Raises:
            ValidationError: If a field is empty
            ConflictError: If the email belongs to another account
            UserNotFoundError: If the user no longer exists
        """
        ...
