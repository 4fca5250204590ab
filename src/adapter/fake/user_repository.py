"""In-memory implementation of UserRepository for testing."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    async def insert(self, email: str, password: str, full_name: str) -> User:
        user_id = uuid.uuid4().hex[:24]
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            email=email,
            password=password,
            full_name=full_name,
            is_verified=False,
            created_at=now,
            updated_at=now,
        )
        self.store[user_id] = user
        return replace(user)

    async def update_by_id(self, user_id: str, fields: dict) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None

        for key, value in fields.items():
            setattr(user, key, value)
        user.updated_at = datetime.now(timezone.utc)
        return replace(user)

    # ── read operations ──────────────────────────────────────

    async def exists(self, email: str) -> bool:
        return any(u.email == email for u in self.store.values())

    async def find_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return replace(user)
        return None

    async def find_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return replace(user) if user else None
