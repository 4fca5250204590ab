"""RPC message envelopes exchanged with calling services."""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class RpcRequest:
    """Typed container for an inbound request. Parses and validates raw dict once."""

    cmd: str
    data: Any = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    reply_to: str | None = None

    @classmethod
    def from_dict(cls, raw: dict) -> 'RpcRequest | None':
        """Create RpcRequest from queue data. Returns None if invalid."""
        if not isinstance(raw, dict):
            logger.error("Invalid request envelope", extra={"envelopeType": type(raw).__name__})
            return None

        cmd = raw.get('cmd')
        request_id = raw.get('id')
        if not isinstance(cmd, str) or not cmd or not request_id:
            logger.error("Invalid request envelope", extra={"requestId": request_id, "cmd": cmd})
            return None

        return cls(
            cmd=cmd,
            data=raw.get('data'),
            id=str(request_id),
            reply_to=raw.get('reply_to'),
        )

    def to_dict(self) -> dict:
        return {'id': self.id, 'cmd': self.cmd, 'data': self.data, 'reply_to': self.reply_to}

    @property
    def log_extra(self) -> dict:
        """Common extra fields for structured logging."""
        return {"requestId": self.id, "cmd": self.cmd}


@dataclass
class RpcReply:
    """Outbound reply: exactly one of `response` or `err` is meaningful."""

    id: str
    response: Any = None
    err: dict | None = None

    @property
    def ok(self) -> bool:
        return self.err is None

    def to_dict(self) -> dict:
        if self.err is not None:
            return {'id': self.id, 'err': self.err}
        return {'id': self.id, 'response': self.response}

    @classmethod
    def from_dict(cls, raw: dict) -> 'RpcReply':
        return cls(id=str(raw.get('id')), response=raw.get('response'), err=raw.get('err'))
