"""JWT issue and verification."""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.errors import InvalidTokenError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"


class TokenService:
    """Signs and verifies bearer tokens whose subject is the user's email.

    When `expires_in` is None, tokens carry no `exp` claim and never expire.
    """

    def __init__(self, secret_key: str, algorithm: str = DEFAULT_ALGORITHM, expires_in: timedelta | None = None):
        if not secret_key:
            raise ValueError("A non-empty JWT secret key is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, subject: str) -> str:
        """Create a signed token for `subject`."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": subject,
            "iat": now,
        }
        if self.expires_in is not None:
            payload["exp"] = now + self.expires_in
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_subject(self, token: str) -> str:
        """Verify `token` and return its subject.

        Raises:
            InvalidTokenError: bad signature, malformed, expired, or no subject
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise InvalidTokenError() from e

        subject = payload.get("sub")
        if not subject or not isinstance(subject, str):
            logger.debug("JWT verification failed: missing subject")
            raise InvalidTokenError()
        return subject
