from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Domain model representing a registered user.

    `password` always holds a bcrypt hash, never the plaintext.
    """
    id: str
    email: str
    password: str
    full_name: str
    is_verified: bool = False
    last_login: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
