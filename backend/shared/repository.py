"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the translation of store failures into
DatabaseError, so nothing driver-specific leaks past a repository.
"""

import logging
from typing import Any, TypeVar, Generic

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import DatabaseError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - _execute() wrapping every query so failures surface as DatabaseError
    - Generic type parameter for model type hints

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally.

    Example:
        class UserRepository(BaseRepository[UserRecord]):
            def get_by_email(self, email: str) -> Optional[UserRecord]:
                query = self._db.table("users").select("*").eq("email", email)
                result = self._execute(query, "get_by_email")
                if not result.data:
                    return None
                return self._map_to_record(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, query: Any, operation: str) -> Any:
        """
        Execute a PostgREST query builder.

        Args:
            query: Any builder exposing execute().
            operation: Short name used in logs and error details.

        Raises:
            DatabaseError: If the store rejects the query or is unreachable.
                For PostgREST errors the SQLSTATE is kept in details["sqlstate"].
        """
        try:
            return query.execute()
        except APIError as e:
            logger.error("Store rejected %s: %s (code=%s)", operation, e.message, e.code)
            raise DatabaseError(
                f"Database operation failed: {operation}",
                operation=operation,
                details={"sqlstate": e.code},
            ) from e
        except httpx.HTTPError as e:
            logger.exception("Store unreachable during %s", operation)
            raise DatabaseError(
                f"Database unavailable: {operation}",
                operation=operation,
            ) from e

    @staticmethod
    def _is_unique_violation(error: DatabaseError) -> bool:
        """Whether a DatabaseError was caused by a unique constraint."""
        return error.details.get("sqlstate") == UNIQUE_VIOLATION
