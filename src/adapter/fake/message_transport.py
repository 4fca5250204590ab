"""In-memory implementation of MessageTransport for testing."""

import asyncio
from collections import deque

from domain.model.message import RpcReply, RpcRequest


class FakeMessageTransport:
    """Serves queued requests, records replies, and sets `drained` once the inbox is empty."""

    def __init__(self, requests: list[RpcRequest] | None = None):
        self.inbox: deque[RpcRequest] = deque(requests or [])
        self.replies: list[tuple[RpcRequest, RpcReply]] = []
        self.drained = asyncio.Event()

    async def receive(self, timeout: int = 1) -> RpcRequest | None:
        if self.inbox:
            return self.inbox.popleft()
        self.drained.set()
        await asyncio.sleep(0)
        return None

    async def reply(self, request: RpcRequest, reply: RpcReply) -> bool:
        self.replies.append((request, reply))
        return request.reply_to is not None

    async def ping(self) -> bool:
        return True

    def reply_for(self, request_id: str) -> RpcReply | None:
        for _, reply in self.replies:
            if reply.id == request_id:
                return reply
        return None
