"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    """
    Decoded bearer token claims.

    Tokens are issued and verified by AuthService only.
    """

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email at issuance")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
    jti: Optional[str] = Field(None, description="Unique token ID")


class User(BaseModel):
    """A registered user as exposed outside the auth module (never the hash)."""

    id: str = Field(..., description="User ID (UUID)")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    created_at: Optional[datetime] = Field(None, description="Registration time")


class UserRecord(User):
    """
    A user row including the stored password hash.

    Only the repository and the auth service handle this model.
    """

    password_hash: str = Field(..., repr=False)

    def to_user(self) -> User:
        return User(
            id=self.id,
            name=self.name,
            email=self.email,
            created_at=self.created_at,
        )


# -----------------------------------------------------------------------------
# Request / response models
# -----------------------------------------------------------------------------
# Request fields are optional so that missing values reach the service and
# are reported as ValidationError (400), like any other empty field.


class RegisterRequest(BaseModel):
    """Body of POST /api/auth/register."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Body of POST /api/auth/login."""

    email: Optional[str] = None
    password: Optional[str] = None


class UpdateProfileRequest(BaseModel):
    """Body of PUT /api/profile."""

    name: Optional[str] = None
    email: Optional[str] = None


class AuthResponse(BaseModel):
    """Returned by register and login."""

    message: str
    user: User
    token: str


class ProfileResponse(BaseModel):
    """Returned by the profile endpoints."""

    user: User
