"""Pydantic models for RPC request/response payloads.

Wire field names are camelCase (`fullName`, `isVerified`, ...); snake_case
attribute names are accepted too.
"""

from datetime import datetime
from typing import Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from domain.model.errors import ValidationError
from domain.model.user import User

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(WireModel):
    """Request model for register-user."""
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    full_name: str = Field(..., min_length=1)


class LoginRequest(WireModel):
    """Request model for login-user."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenRequest(WireModel):
    """Request model for get-me and verify-token. A null token is allowed here."""
    token: Optional[str] = None


class GetUserRequest(WireModel):
    id: str = Field(..., min_length=1)


class UpdateUserRequest(WireModel):
    """Request model for update-user: `id` plus any subset of the mutable fields."""
    id: str = Field(..., min_length=1)
    full_name: Optional[str] = Field(None, min_length=1)
    password: Optional[str] = Field(None, min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    email: Optional[EmailStr] = None

    def changes(self) -> dict:
        """Fields that were actually supplied, keyed by domain attribute name."""
        return self.model_dump(exclude={'id'}, exclude_unset=True, exclude_none=True)


class UserResponse(WireModel):
    """Response model for a user. The password hash is never included."""
    id: str
    email: str
    full_name: str
    is_verified: bool = False
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


M = TypeVar('M', bound=BaseModel)


def _format_error(error: dict) -> str:
    location = '.'.join(str(part) for part in error.get('loc', ()))
    return f"{location}: {error['msg']}" if location else error['msg']


def validate_payload(model: type[M], data) -> M:
    """Validate a raw payload against `model`.

    Raises:
        ValidationError: payload does not match the model
    """
    try:
        return model.model_validate(data if data is not None else {})
    except PydanticValidationError as e:
        raise ValidationError('; '.join(_format_error(err) for err in e.errors())) from e


def to_user_response(user: User) -> dict:
    """Convert domain User to its JSON-ready wire form (without password)."""
    return UserResponse(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        is_verified=user.is_verified,
        last_login=user.last_login,
        created_at=user.created_at,
        updated_at=user.updated_at,
    ).model_dump(mode='json', by_alias=True)
