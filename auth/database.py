"""Database operations for authentication (users table)."""

from uuid import UUID

from clients.postgres_client import PostgresClient
from auth.types import StoredUser, User


class AuthDatabase:
    """Database operations for authentication."""

    def __init__(self, postgres: PostgresClient):
        self._db = postgres

    def get_user_by_email(self, email: str) -> StoredUser | None:
        """Find user by email (case-insensitive), including the password hash."""
        row = self._db.execute_single(
            """SELECT id, name, email, password AS password_hash, is_active
               FROM users WHERE email = lower(%s)""",
            (email,),
        )
        if row is None:
            return None
        return StoredUser.model_validate(row)

    def get_user_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID."""
        row = self._db.execute_single(
            "SELECT id, name, email, is_active FROM users WHERE id = %s",
            (user_id,),
        )
        if row is None:
            return None
        return User.model_validate(row)

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        """Create a user (email lowercased). Used by seeding scripts and tests."""
        rows = self._db.execute_returning(
            """INSERT INTO users (name, email, password)
               VALUES (%s, lower(%s), %s)
               RETURNING id, name, email, is_active""",
            (name, email, password_hash),
        )
        return User.model_validate(rows[0])
