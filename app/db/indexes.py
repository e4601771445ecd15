"""
app/db/indexes.py

Purpose: Database index management

- Unique index on leads.user_id (the upsert key)
- Index on last_step for funnel reporting
"""

from app.db.mongo import get_leads_collection
from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes() -> bool:
    """
    Creates the lead indexes.
    Idempotent; a failure is logged and does not stop startup.

    Returns:
        True if the indexes exist afterwards
    """
    leads = get_leads_collection()
    if leads is None:
        logger.debug("No lead store configured, skipping indexes")
        return False

    try:
        await leads.create_index("user_id", unique=True, name="user_id_unique")
        logger.debug("Created unique index on leads.user_id")

        await leads.create_index("last_step", name="last_step_idx")
        logger.debug("Created index on leads.last_step")

        logger.info("✅ Lead indexes ready")
        return True

    except Exception as e:
        logger.error(f"Error creating indexes: {str(e)}")
        return False
