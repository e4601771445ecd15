"""
Database initialization script - lead store

Run once to create the leads collection indexes and check connectivity:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.db.mongo import connect_to_mongo, close_mongo_connection, get_leads_collection
from app.db.indexes import create_indexes

setup_logging()
logger = get_logger("init_db")


async def main() -> int:
    if not settings.has_store:
        logger.error("❌ MONGODB_URL must be set in .env file")
        return 1

    try:
        if not await connect_to_mongo():
            return 1

        if not await create_indexes():
            return 1

        leads = get_leads_collection()
        count = await leads.count_documents({})
        logger.info(f"📊 {settings.LEADS_COLLECTION}: {count} document(s)")
        return 0

    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
