"""
Shared infrastructure for the Solicitudes backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes and error kinds
- repository: Base repository with store-error translation

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import create_supabase_client, get_supabase_client, reset_client_cache
from .exceptions import (
    ErrorKind,
    AppError,
    ValidationError,
    AuthenticationError,
    ConflictError,
    InternalError,
    DatabaseError,
)
from .models import Identity

__all__ = [
    "Settings",
    "get_settings",
    "create_supabase_client",
    "get_supabase_client",
    "reset_client_cache",
    "ErrorKind",
    "AppError",
    "ValidationError",
    "AuthenticationError",
    "ConflictError",
    "InternalError",
    "DatabaseError",
    "Identity",
]
