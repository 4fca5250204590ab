"""Service settings read from environment variables (and an optional .env file)."""

import os
from dataclasses import dataclass
from datetime import timedelta

from dotenv import load_dotenv

from adapter.queue.redis_transport import DEFAULT_REPLY_TTL_SECONDS, DEFAULT_REQUEST_QUEUE
from services.token_service import DEFAULT_ALGORITHM


def _require(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} environment variable is required")
    return value


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e


@dataclass(frozen=True)
class Settings:
    mongo_url: str
    redis_url: str
    jwt_secret_key: str
    mongodb_database: str = 'auth'
    jwt_algorithm: str = DEFAULT_ALGORITHM
    jwt_expiration_seconds: int | None = None
    request_queue: str = DEFAULT_REQUEST_QUEUE
    reply_ttl_seconds: int = DEFAULT_REPLY_TTL_SECONDS
    log_level: str = 'INFO'

    @property
    def jwt_expires_in(self) -> timedelta | None:
        if not self.jwt_expiration_seconds:
            return None
        return timedelta(seconds=self.jwt_expiration_seconds)

    @classmethod
    def from_env(cls, dotenv: bool = True) -> 'Settings':
        """Build settings from the environment.

        Raises:
            ValueError: a required variable is missing or a number is malformed
        """
        if dotenv:
            load_dotenv()

        reply_ttl = _optional_int('RPC_REPLY_TTL_SECONDS')
        return cls(
            mongo_url=_require('MONGO_URL'),
            redis_url=_require('REDIS_URL'),
            # Generate a secure key with: openssl rand -hex 32
            jwt_secret_key=_require('JWT_SECRET_KEY'),
            mongodb_database=os.getenv('MONGODB_DATABASE', 'auth'),
            jwt_algorithm=os.getenv('JWT_ALGORITHM', DEFAULT_ALGORITHM),
            jwt_expiration_seconds=_optional_int('JWT_EXPIRATION_SECONDS'),
            request_queue=os.getenv('RPC_REQUEST_QUEUE', DEFAULT_REQUEST_QUEUE),
            reply_ttl_seconds=reply_ttl if reply_ttl is not None else DEFAULT_REPLY_TTL_SECONDS,
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        )
