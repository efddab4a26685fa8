"""
Session gate.

Turns the bearer credentials of a request into a verified Identity, or
rejects the request. Protected routes declare it explicitly with
Depends(get_current_user).
"""

import logging
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from modules.auth.exceptions import InvalidTokenError, MissingTokenError
from modules.auth.interfaces import IAuthService
from shared.models import Identity

from ..dependencies import get_auth_service

logger = logging.getLogger(__name__)

# Bearer token extractor; failures are raised by the gate, not by FastAPI
bearer_scheme = HTTPBearer(auto_error=False)


def extract_token(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    """
    Return the token of a "Bearer <token>" header.

    HTTPBearer yields None when the header is absent, has no token part or
    uses another scheme.

    Raises:
        MissingTokenError: If there is no usable token
    """
    if credentials is None or not credentials.credentials.strip():
        raise MissingTokenError()
    return credentials.credentials


async def authorize(
    credentials: Optional[HTTPAuthorizationCredentials],
    auth: IAuthService,
) -> Identity:
    """
    Validate the bearer credentials and return the caller's identity.

    Every validation failure (malformed, badly signed, expired) is reported
    with the same InvalidTokenError so callers learn nothing about the cause.

    Raises:
        MissingTokenError: If no token is present
        InvalidTokenError: If the token does not validate
    """
    token = extract_token(credentials)
    try:
        return await auth.validate_token(token)
    except InvalidTokenError as e:
        logger.debug("Rejected bearer token: %s", e.code)
        raise InvalidTokenError()


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Identity:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: Identity = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    return await authorize(credentials, auth)
