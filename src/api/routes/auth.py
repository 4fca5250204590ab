"""Auth service commands (ping, register, login, lookups, update, token checks)."""

import logging

from api.models import (
    GetUserRequest,
    LoginRequest,
    RegisterRequest,
    TokenRequest,
    UpdateUserRequest,
    to_user_response,
    validate_payload,
)
from api.router import MessageRouter
from domain.model.errors import NotFoundError
from services.account_service import AccountService

logger = logging.getLogger(__name__)

router = MessageRouter()


@router.command("ping")
async def ping(data, service: AccountService) -> dict:
    """Liveness check."""
    return {"status": "ok"}


@router.command("get-me")
async def get_me(data, service: AccountService) -> dict:
    """Resolve the caller's bearer token to their user."""
    request = validate_payload(TokenRequest, data)
    user = await service.get_user_by_token(request.token)
    return to_user_response(user)


@router.command("register-user")
async def register(data, service: AccountService) -> dict:
    request = validate_payload(RegisterRequest, data)
    user = await service.register(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
    )
    return to_user_response(user)


@router.command("login-user")
async def login(data, service: AccountService) -> dict:
    request = validate_payload(LoginRequest, data)
    result = await service.login(email=request.email, password=request.password)
    return {"token": result.token, "user": to_user_response(result.user)}


@router.command("get-user")
async def get_user(data, service: AccountService) -> dict:
    """Look up a user by id. Accepts `{id}` or a bare id string.

    Raises:
        NotFoundError: no user with this id
    """
    if isinstance(data, str):
        data = {"id": data}
    request = validate_payload(GetUserRequest, data)

    user = await service.get_user_by_id(request.id)
    if not user:
        raise NotFoundError()
    return to_user_response(user)


@router.command("update-user")
async def update_user(data, service: AccountService) -> dict:
    request = validate_payload(UpdateUserRequest, data)
    user = await service.update_user(request.id, request.changes())
    return to_user_response(user)


@router.command("verify-token")
async def verify_token(data, service: AccountService) -> dict:
    request = validate_payload(TokenRequest, data)
    user = await service.verify_token(request.token)
    return to_user_response(user)
