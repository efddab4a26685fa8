"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, Field


class Identity(BaseModel):
    """
    The verified caller of a protected operation.

    Populated from token claims by the session gate and handed to route
    handlers via dependency injection. It is a snapshot taken when the
    token was issued: it is never re-read from the store, so a later
    profile change is not reflected until the user logs in again.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(..., description="Email encoded in the token")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
