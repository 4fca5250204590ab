from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Absence is always reported as None; store failures propagate unchanged.
    """
    async def exists(self, email: str) -> bool:
        """Return True if a user with this email exists."""
        ...

    async def insert(self, email: str, password: str, full_name: str) -> User:
        """Insert a new unverified user and return it with its assigned id."""
        ...

    async def find_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    async def update_by_id(self, user_id: str, fields: dict) -> User | None:
        """Apply a partial update and return the post-update User, or None if not found.

        `fields` uses domain attribute names (full_name, password, email).
        """
        ...
