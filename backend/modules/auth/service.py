"""
Authentication service implementation.

Registers and signs in users against the credential store, and issues and
validates the HS256 bearer tokens carried by every protected request.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings, get_settings
from shared.models import Identity

from .exceptions import (
    AuthConfigurationError,
    EmailAlreadyRegisteredError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingFieldsError,
    MissingTokenError,
    UserNotFoundError,
)
from .hashing import PasswordHasher
from .interfaces import IAuthService
from .models import TokenPayload, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["id", "email", "iat", "exp"]


def _require_fields(**fields: Optional[str]) -> dict[str, str]:
    """Strip every field and raise MissingFieldsError listing the blank ones."""
    cleaned = {name: (value or "").strip() for name, value in fields.items()}
    missing = [name for name, value in cleaned.items() if not value]
    if missing:
        raise MissingFieldsError(missing)
    return cleaned


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Users live in the Supabase users table; passwords are bcrypt hashes;
    tokens are stateless JWTs signed with the process-wide secret.
    """

    def __init__(
        self,
        users: UserRepository,
        hasher: Optional[PasswordHasher] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or get_settings()
        self._users = users
        self._hasher = hasher or PasswordHasher(self._settings.bcrypt_rounds)

    async def register(self, name: str, email: str, password: str) -> tuple[User, str]:
        """
        Create an account and return it with a fresh token.

        The up-front email lookup gives the common case a clean error; the
        unique constraint still catches two registrations racing each other.
        """
        fields = _require_fields(name=name, email=email, password=password)
        email = fields["email"]

        if await asyncio.to_thread(self._users.get_by_email, email) is not None:
            raise EmailAlreadyRegisteredError(email)

        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        record = await asyncio.to_thread(
            self._users.create_user, fields["name"], email, password_hash
        )
        logger.info("Registered user %s", record.id)

        user = record.to_user()
        return user, self.issue_token(user)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        fields = _require_fields(email=email, password=password)

        record = await asyncio.to_thread(self._users.get_by_email, fields["email"])
        if record is None:
            await asyncio.to_thread(self._hasher.dummy_verify)
            logger.info("Login rejected: invalid credentials")
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(self._hasher.verify, password, record.password_hash)
        if not matches:
            logger.info("Login rejected: invalid credentials")
            raise InvalidCredentialsError()

        user = record.to_user()
        return user, self.issue_token(user)

    def issue_token(self, user: User, issued_at: Optional[datetime] = None) -> str:
        """
        Sign {id, email, iat, exp, jti} for the user.

        The random jti makes every token distinct, even two issued to the
        same user within the same second.
        """
        secret = self._require_secret()
        now = issued_at or datetime.now(timezone.utc)
        expires = now + timedelta(hours=self._settings.token_ttl_hours)

        payload = {
            "id": user.id,
            "email": user.email,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, secret, algorithm=self._settings.jwt_algorithm)

    async def validate_token(self, token: str) -> Identity:
        """
        Validate a token and return the identity exactly as it was encoded.
        """
        if not token:
            raise MissingTokenError()

        secret = self._require_secret()
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self._settings.jwt_algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
            claims = TokenPayload(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except (jwt.InvalidTokenError, PydanticValidationError) as e:
            logger.debug("Token rejected: %s", e)
            raise InvalidTokenError()

        return Identity(id=claims.id, email=claims.email)

    async def get_profile(self, identity: Identity) -> User:
        record = await asyncio.to_thread(self._users.get_by_id, identity.id)
        if record is None:
            raise UserNotFoundError(identity.id)
        return record.to_user()

    async def update_profile(self, identity: Identity, name: str, email: str) -> User:
        fields = _require_fields(name=name, email=email)
        email = fields["email"]

        existing = await asyncio.to_thread(self._users.get_by_email, email)
        if existing is not None and existing.id != identity.id:
            raise EmailAlreadyRegisteredError(email)

        record = await asyncio.to_thread(
            self._users.update_profile, identity.id, fields["name"], email
        )
        if record is None:
            raise UserNotFoundError(identity.id)
        logger.info("Updated profile of user %s", identity.id)
        return record.to_user()

    def _require_secret(self) -> str:
        if not self._settings.jwt_secret:
            logger.error("JWT_SECRET is not set; refusing to issue or validate tokens")
            raise AuthConfigurationError()
        return self._settings.jwt_secret
