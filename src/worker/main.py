"""Auth service entry point."""

import asyncio
import logging
import signal
import sys

from adapter.mongodb.connection import open_database
from adapter.mongodb.indexes import ensure_all_indexes
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.queue.redis_transport import RedisMessageTransport, open_redis
from api.router import Dispatcher, MessageRouter
from api.routes import auth
from services.account_service import AccountService
from services.token_service import TokenService
from utils.config import Settings
from utils.logging import setup_structured_logging
from worker.server import run_server

logger = logging.getLogger(__name__)


def build_router() -> MessageRouter:
    router = MessageRouter()
    router.include_router(auth.router)
    return router


def build_service(db, settings: Settings) -> AccountService:
    """Wire the store accessor and token primitive into the account service."""
    tokens = TokenService(
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_in=settings.jwt_expires_in,
    )
    return AccountService(MongoUserRepository(db), tokens)


async def serve(settings: Settings, stop: asyncio.Event | None = None) -> None:
    """Hold the Mongo and Redis connections for the lifetime of the serve loop."""
    async with open_database(settings.mongo_url, settings.mongodb_database) as db:
        if await ensure_all_indexes(db):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")

        async with open_redis(settings.redis_url) as client:
            transport = RedisMessageTransport(
                client,
                queue_name=settings.request_queue,
                reply_ttl=settings.reply_ttl_seconds,
            )
            dispatcher = Dispatcher(build_router(), build_service(db, settings))
            await run_server(transport, dispatcher, stop=stop)


async def _run(settings: Settings) -> None:
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows event loops have no signal handlers
            pass
    await serve(settings, stop)


def main():
    """Main entry point for the auth service."""
    try:
        settings = Settings.from_env()
    except ValueError as e:
        setup_structured_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    setup_structured_logging(settings.log_level)
    logger.info("Starting auth service...", extra={"queue": settings.request_queue})

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Auth service stopped")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
