"""
Authentication API endpoints.

Public endpoints for creating an account and signing in. Both return the
user together with a bearer token for subsequent calls.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service

from .interfaces import IAuthService
from .models import AuthResponse, LoginRequest, RegisterRequest

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Register a new user.
    """
    user, token = await service.register(request.name, request.email, request.password)
    return AuthResponse(message="User registered", user=user, token=token)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Sign in with email and password.
    """
    user, token = await service.login(request.email, request.password)
    return AuthResponse(message="Login successful", user=user, token=token)
