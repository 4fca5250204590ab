"""Domain-level exceptions.

Every error carries a stable `code` and a human-readable `message`.
The dispatcher serializes them to the caller as `{code, message}` unchanged.
"""


class DomainError(Exception):
    """Base class for all domain errors."""

    code = 'domain-error'
    default_message = 'Domain error'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {'code': self.code, 'message': self.message}


class AlreadyExistsError(DomainError):
    """A user with the same email already exists."""

    code = 'user-already-exists'
    default_message = 'User already exists'


class InvalidCredentialsError(DomainError):
    """Unknown email or wrong password. Deliberately does not say which."""

    code = 'invalid-credentials'
    default_message = 'Invalid credentials'


class NotFoundError(DomainError):
    """Requested user does not exist."""

    code = 'user-not-found'
    default_message = 'User not found'


class MissingTokenError(DomainError):
    code = 'missing-token'
    default_message = 'Missing token'


class InvalidTokenError(DomainError):
    """Bad signature, malformed or expired token, or unknown subject."""

    code = 'invalid-token'
    default_message = 'Invalid token'


class ValidationError(DomainError):
    """Input payload failed shape validation."""

    code = 'validation-error'
    default_message = 'Validation failed'


class CommandNotFoundError(DomainError):
    code = 'command-not-found'

    def __init__(self, cmd: str):
        self.cmd = cmd
        super().__init__(f"No handler for command '{cmd}'")
