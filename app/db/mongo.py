"""
app/db/mongo.py

Purpose: MongoDB connection setup

- Initializes Motor client when MONGODB_URL is configured
- Single collection: leads (keyed by user_id)
- Health checks
- An unreachable server at startup is logged, not fatal
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError
from typing import Optional
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

# Global MongoDB client
_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None


async def connect_to_mongo() -> bool:
    """
    Creates the MongoDB client.
    Called during application startup.

    The client is kept even when the first ping fails: Motor reconnects
    on its own and the lead store tolerates an unavailable server.

    Returns:
        True if the server answered the ping
    """
    global _client, _database

    if not settings.has_store:
        logger.info("MONGODB_URL not set, running in cache-only mode")
        return False

    if _client is not None:
        logger.warning("MongoDB client already initialized")
        return True

    # Fix URL encoding for special characters
    mongodb_url = settings.MONGODB_URL.replace("%%", "%25")

    _client = AsyncIOMotorClient(
        mongodb_url,
        maxPoolSize=20,
        serverSelectionTimeoutMS=settings.STORE_TIMEOUT_MS,
        connectTimeoutMS=settings.STORE_TIMEOUT_MS,
        retryWrites=True,
        retryReads=True,
    )
    _database = _client[settings.MONGODB_DB_NAME]

    try:
        await _client.admin.command("ping")
        logger.info(f"✅ Successfully connected to MongoDB: {settings.MONGODB_DB_NAME}")
        return True
    except (ConnectionFailure, ServerSelectionTimeoutError) as e:
        logger.error(f"MongoDB is not reachable yet, lead writes will be best-effort: {e}")
        return False


async def close_mongo_connection():
    """
    Closes the MongoDB connection.
    Called during application shutdown.
    """
    global _client, _database

    if _client:
        logger.info("Closing MongoDB connection")
        _client.close()
        _client = None
        _database = None
        logger.info("MongoDB connection closed")


async def check_database_health() -> bool:
    """
    Checks if the database connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    try:
        if _client is None:
            return False

        await _client.admin.command("ping")
        return True

    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        return False


def get_leads_collection() -> Optional[AsyncIOMotorCollection]:
    """
    Returns the leads collection, or None in cache-only mode.

    Fields:
    - user_id: int (unique key)
    - username, first_name, last_name: str | None
    - status: anxiety | anger | apathy
    - frequency: rare | weekly | daily
    - last_step: start | technique | frequency | offer | booked
    - created_at, updated_at: datetime
    """
    if _database is None:
        return None
    return _database[settings.LEADS_COLLECTION]
