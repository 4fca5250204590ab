"""Account service: registration, login, lookups, updates and token checks.

Pure business logic with no transport dependencies.
Raises domain errors that the dispatcher serializes as `{code, message}`.
"""

import asyncio
import logging
from dataclasses import dataclass

import bcrypt

from domain.model.errors import (
    AlreadyExistsError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    NotFoundError,
)
from domain.model.user import User
from port.user_repository import UserRepository
from services.token_service import TokenService

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10
# bcrypt only reads the first 72 bytes; newer releases reject longer input.
BCRYPT_MAX_PASSWORD_BYTES = 72


def _encode_password(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def _hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode_password(password), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_encode_password(plain), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


@dataclass
class LoginResult:
    token: str
    user: User


class AccountService:
    def __init__(self, repo: UserRepository, tokens: TokenService):
        self.repo = repo
        self.tokens = tokens

    async def register(self, email: str, password: str, full_name: str) -> User:
        """Register a new user.

        The email check and the insert are not atomic; the unique index on
        `email` rejects the loser of a concurrent race with a store error.

        Raises:
            AlreadyExistsError: email already registered
        """
        if await self.repo.exists(email):
            raise AlreadyExistsError()

        password_hash = await asyncio.to_thread(_hash_password, password)
        user = await self.repo.insert(email=email, password=password_hash, full_name=full_name)

        logger.info("User registered", extra={"userId": user.id})
        return user

    async def login(self, email: str, password: str) -> LoginResult:
        """Check credentials and issue a token whose subject is the email.

        Raises:
            InvalidCredentialsError: unknown email or wrong password (deliberately vague)
        """
        user = await self.repo.find_by_email(email)
        if not user:
            raise InvalidCredentialsError()

        if not await asyncio.to_thread(_verify_password, password, user.password):
            raise InvalidCredentialsError()

        token = self.tokens.issue(user.email)
        logger.info("User logged in", extra={"userId": user.id})
        return LoginResult(token=token, user=user)

    async def get_user_by_id(self, user_id: str) -> User | None:
        return await self.repo.find_by_id(user_id)

    async def get_user_by_email(self, email: str) -> User:
        """Unlike get_user_by_id, absence is an error here.

        Raises:
            NotFoundError: no user with this email
        """
        user = await self.repo.find_by_email(email)
        if not user:
            raise NotFoundError()
        return user

    async def update_user(self, user_id: str, fields: dict) -> User:
        """Apply a partial update of full_name, password and/or email.

        A new password is hashed the same way as in register.

        Raises:
            NotFoundError: no user with this id
            AlreadyExistsError: the new email belongs to another user
        """
        target = await self.repo.find_by_id(user_id)
        if not target:
            raise NotFoundError()
        if not fields:
            return target

        changes = dict(fields)
        if changes.get('email') is not None:
            owner = await self.repo.find_by_email(changes['email'])
            # Compare store ids; the caller's id may not be in canonical form
            if owner and owner.id != target.id:
                raise AlreadyExistsError()
        if changes.get('password') is not None:
            changes['password'] = await asyncio.to_thread(_hash_password, changes['password'])

        user = await self.repo.update_by_id(user_id, changes)
        if not user:
            raise NotFoundError()

        logger.info("User updated", extra={"userId": user.id, "fields": sorted(changes)})
        return user

    async def get_user_by_token(self, token: str | None) -> User:
        """Resolve a bearer token to its user.

        Raises:
            MissingTokenError: token is None or empty
            InvalidTokenError: bad signature, malformed or expired token, or unknown subject
        """
        if not token:
            raise MissingTokenError()

        email = self.tokens.decode_subject(token)
        try:
            return await self.get_user_by_email(email)
        except NotFoundError as e:
            raise InvalidTokenError() from e

    verify_token = get_user_by_token
