"""Port definition for the inbound RPC transport."""

from typing import Awaitable, Callable, Protocol

from domain.model.message import RpcReply, RpcRequest

RequestHandler = Callable[[RpcRequest], Awaitable[RpcReply]]


class MessageTransport(Protocol):
    async def receive(self, timeout: int = 1) -> RpcRequest | None: ...
    async def reply(self, request: RpcRequest, reply: RpcReply) -> bool: ...
    async def ping(self) -> bool: ...


class RemoteError(Exception):
    """Error reply received from the auth service, carrying its `{code, message}`."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}")
