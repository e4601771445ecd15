"""
Quick check of the lead store against a real MongoDB server

Writes a probe lead through LeadStore, reads it back, then removes it.

Run: python scripts/check_store.py
"""

import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.db.mongo import connect_to_mongo, close_mongo_connection, get_leads_collection
from app.services.lead_service import LeadStore

setup_logging()
logger = get_logger("check_store")

PROBE_USER_ID = -1


async def check_store() -> int:
    if not settings.has_store:
        logger.error("❌ MONGODB_URL must be set in .env file")
        return 1

    try:
        logger.info("🔌 Connecting to MongoDB...")
        if not await connect_to_mongo():
            return 1

        collection = get_leads_collection()
        store = LeadStore(collection, timeout_seconds=settings.store_timeout_seconds)

        logger.info("🧪 Testing lead upsert...")
        await store.upsert(PROBE_USER_ID, {
            "username": "probe",
            "status": "anxiety",
            "frequency": "weekly",
            "last_step": "offer",
        })

        lead = await store.get(PROBE_USER_ID)
        if lead is None or lead.frequency != "weekly":
            logger.error(f"❌ Probe lead not read back: {lead}")
            return 1
        logger.info(f"📄 Lead data: {lead.model_dump()}")

        await collection.delete_one({"user_id": PROBE_USER_ID})

        count = await collection.count_documents({})
        logger.info(f"📊 {settings.LEADS_COLLECTION}: {count} document(s)")
        logger.info("✅ Lead store works")
        return 0

    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    sys.exit(asyncio.run(check_store()))
