import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Suppress verbose PyMongo logs
# Set pymongo logger to WARNING to reduce noise from driver-level logs
pymongo_logger = logging.getLogger('pymongo')
pymongo_logger.setLevel(logging.WARNING)

USERS_COLLECTION_NAME = 'users'


def create_mongodb_client(mongo_url: str) -> AsyncMongoClient:
    """Build an AsyncMongoClient. No I/O happens until the first command."""
    return AsyncMongoClient(
        mongo_url,
        tz_aware=True,  # Return stored datetimes as UTC-aware
        serverSelectionTimeoutMS=5000,  # 5s timeout for server selection
        connectTimeoutMS=5000,  # 5s timeout for initial connection
        socketTimeoutMS=30000,  # 30s timeout for operations
        maxPoolSize=10,
        minPoolSize=0,   # Don't maintain idle connections
        maxIdleTimeMS=30000,  # Close idle connections after 30s
        waitQueueTimeoutMS=10000,  # Wait up to 10s for available connection
        retryWrites=True,
        retryReads=True,
        compressors=['zlib'],
        zlibCompressionLevel=1  # Fast compression (speed over ratio)
    )


@asynccontextmanager
async def open_database(mongo_url: str, database_name: str) -> AsyncIterator[AsyncDatabase]:
    """Connect, verify with a ping, yield the database handle, close on exit.

    Raises:
        ConnectionFailure / PyMongoError: the server could not be reached
    """
    if not mongo_url:
        raise ValueError("MONGO_URL is not configured")

    client = create_mongodb_client(mongo_url)
    try:
        await client.admin.command('ping')  # Verify connection works
        logger.info(f"[MONGODB] Connected successfully to {database_name}")
    except (ConnectionFailure, PyMongoError) as e:
        logger.error(f"[MONGODB] Initial connection failed: {str(e)[:200]}")
        await client.close()
        raise

    try:
        yield client[database_name]
    finally:
        await client.close()
        logger.info("[MONGODB] Connection closed")
