"""
Password hashing.

Thin wrapper over passlib's bcrypt context. The rest of the auth module
treats it as an opaque one-way hash + verify capability.
"""

from passlib.context import CryptContext

from .exceptions import PasswordHashingError


class PasswordHasher:
    """Salted bcrypt hashing with a configurable work factor."""

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        try:
            return self._context.hash(password)
        except (ValueError, TypeError) as e:
            raise PasswordHashingError() from e

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        Raises:
            PasswordHashingError: If the stored hash is unreadable
        """
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError) as e:
            raise PasswordHashingError("Stored password hash is unreadable") from e

    def dummy_verify(self) -> None:
        """Spend the same time as a real verification (for unknown users)."""
        self._context.dummy_verify()
