"""Command-name routing and dispatch for RPC-style requests."""

import logging
from typing import Any, Awaitable, Callable

from domain.model.errors import CommandNotFoundError, DomainError
from domain.model.message import RpcReply, RpcRequest
from services.account_service import AccountService

logger = logging.getLogger(__name__)

Handler = Callable[[Any, AccountService], Awaitable[Any]]

INTERNAL_ERROR = {'code': 'internal-error', 'message': 'Internal server error'}


class MessageRouter:
    """Maps command names to async handlers taking `(data, service)`."""

    def __init__(self):
        self.handlers: dict[str, Handler] = {}

    def command(self, name: str) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            if name in self.handlers:
                raise ValueError(f"Command '{name}' is already registered")
            self.handlers[name] = handler
            return handler
        return decorator

    def include_router(self, other: 'MessageRouter') -> None:
        for name, handler in other.handlers.items():
            self.command(name)(handler)

    def get(self, name: str) -> Handler | None:
        return self.handlers.get(name)

    @property
    def commands(self) -> list[str]:
        return sorted(self.handlers)


class Dispatcher:
    """Runs the handler for a request and turns its outcome into a reply.

    Domain errors are returned as `{code, message}` unchanged; anything else
    is logged and reported as a generic internal error.
    """

    def __init__(self, router: MessageRouter, service: AccountService):
        self.router = router
        self.service = service

    async def dispatch(self, request: RpcRequest) -> RpcReply:
        try:
            handler = self.router.get(request.cmd)
            if handler is None:
                raise CommandNotFoundError(request.cmd)
            response = await handler(request.data, self.service)
            logger.debug("Request handled", extra=request.log_extra)
            return RpcReply(id=request.id, response=response)
        except DomainError as e:
            logger.info("Request rejected", extra={**request.log_extra, "code": e.code})
            return RpcReply(id=request.id, err=e.to_dict())
        except Exception as e:
            logger.error(
                "Request failed",
                extra={**request.log_extra, "error": str(e)[:200], "errorType": type(e).__name__},
                exc_info=True,
            )
            return RpcReply(id=request.id, err=dict(INTERNAL_ERROR))
