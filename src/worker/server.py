"""Serve loop: receive requests from the transport, dispatch, reply.

    Redis list → receive() → dispatch() → AccountService
                                 ↓
                             reply() → reply_to list

Each request runs in its own task, so one slow request (bcrypt, a slow
query) does not hold up the next.
"""

import asyncio
import logging

from api.router import Dispatcher
from domain.model.message import RpcRequest
from port.message_transport import MessageTransport

logger = logging.getLogger(__name__)

ERROR_DELAY_SECONDS = 5.0


async def handle_request(transport: MessageTransport, dispatcher: Dispatcher, request: RpcRequest) -> None:
    reply = await dispatcher.dispatch(request)
    await transport.reply(request, reply)


async def run_server(
    transport: MessageTransport,
    dispatcher: Dispatcher,
    stop: asyncio.Event | None = None,
    receive_timeout: int = 1,
    error_delay: float = ERROR_DELAY_SECONDS,
) -> None:
    """Process requests until `stop` is set or the task is cancelled.

    Transport errors are logged and retried after `error_delay` seconds.
    In-flight requests are awaited before returning.
    """
    stop = stop or asyncio.Event()
    pending: set[asyncio.Task] = set()
    logger.info("Server started, waiting for requests...", extra={"commands": dispatcher.router.commands})

    try:
        while not stop.is_set():
            try:
                request = await transport.receive(timeout=receive_timeout)
            except Exception as e:
                logger.error(f"Error receiving request: {e}", exc_info=True)
                await asyncio.sleep(error_delay)
                continue

            if request is None:
                continue

            task = asyncio.create_task(handle_request(transport, dispatcher, request))
            pending.add(task)
            task.add_done_callback(pending.discard)
    finally:
        if pending:
            logger.info("Waiting for in-flight requests", extra={"count": len(pending)})
            await asyncio.gather(*pending, return_exceptions=True)
        logger.info("Server stopped")
