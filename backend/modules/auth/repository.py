"""
User repository (credential store).

Encapsulates all Supabase queries and data mapping for the users table.
"""

from typing import Optional, Any

from shared.exceptions import DatabaseError
from shared.repository import BaseRepository

from .exceptions import EmailAlreadyRegisteredError
from .models import UserRecord

USERS_TABLE = "users"


class UserRepository(BaseRepository[UserRecord]):
    """
    Repository for user data access.

    Email uniqueness is enforced by the table's unique constraint; a
    violation on insert or update surfaces as EmailAlreadyRegisteredError.
    """

    def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        """
        Insert a new user.

        Returns:
            The created user with generated ID and timestamp.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken.
        """
        data = {"name": name, "email": email, "password_hash": password_hash}
        try:
            result = self._execute(self._db.table(USERS_TABLE).insert(data), "create_user")
        except DatabaseError as e:
            if self._is_unique_violation(e):
                raise EmailAlreadyRegisteredError(email) from e
            raise
        return self._map_to_record(result.data[0])

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        """Get a user by email, or None if no account uses it."""
        query = self._db.table(USERS_TABLE).select("*").eq("email", email)
        result = self._execute(query, "get_by_email")
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        """Get a user by ID, or None if not found."""
        query = self._db.table(USERS_TABLE).select("*").eq("id", user_id)
        result = self._execute(query, "get_by_id")
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def update_profile(self, user_id: str, name: str, email: str) -> Optional[UserRecord]:
        """
        Update a user's name and email.

        Returns:
            The updated user, or None if the ID does not exist.

        Raises:
            EmailAlreadyRegisteredError: If the new email belongs to someone else.
        """
        query = (
            self._db.table(USERS_TABLE)
            .update({"name": name, "email": email})
            .eq("id", user_id)
        )
        try:
            result = self._execute(query, "update_profile")
        except DatabaseError as e:
            if self._is_unique_violation(e):
                raise EmailAlreadyRegisteredError(email) from e
            raise
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def _map_to_record(self, data: dict[str, Any]) -> UserRecord:
        """Map database row to UserRecord model."""
        return UserRecord(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            password_hash=data["password_hash"],
            created_at=data.get("created_at"),
        )
