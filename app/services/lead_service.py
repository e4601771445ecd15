"""
app/services/lead_service.py

Purpose: Durable lead persistence

- Upserts lead progress keyed by user_id
- Reads a lead back for operator notifications
- Every call is bounded by STORE_TIMEOUT_MS
- Never raises: failures are logged and swallowed
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import ValidationError as PydanticValidationError

from app.core.background import run_with_timeout
from app.core.logging import get_logger, LogContext
from app.models.lead import Lead

logger = get_logger(__name__)


class LeadStore:
    """
    Best-effort adapter over the ``leads`` collection.

    A store without a collection is disabled: writes are skipped and
    reads return None, which callers treat as "use the cache".
    """

    def __init__(self, collection: Optional[AsyncIOMotorCollection], timeout_seconds: float = 4.0):
        self.collection = collection
        self.timeout_seconds = timeout_seconds

    @property
    def enabled(self) -> bool:
        return self.collection is not None

    async def upsert(self, user_id: int, patch: Dict[str, Any]) -> None:
        """
        Merges patch into the lead, inserting it if absent.

        Args:
            user_id: Lead key
            patch: Fields to set (user_id inside the patch is ignored)
        """
        if not self.enabled:
            return

        now = datetime.now(timezone.utc)
        fields = {key: value for key, value in patch.items() if key != "user_id"}
        fields["updated_at"] = now

        with LogContext(user_id=user_id):
            try:
                await run_with_timeout(
                    self.collection.update_one(
                        {"user_id": user_id},
                        {
                            "$set": fields,
                            "$setOnInsert": {"created_at": now}
                        },
                        upsert=True
                    ),
                    self.timeout_seconds,
                    label="lead upsert"
                )
                logger.debug(f"Lead upserted: {sorted(fields)}")
            except asyncio.TimeoutError:
                logger.error(f"Lead upsert timed out after {self.timeout_seconds}s")
            except Exception as e:
                logger.error(f"Lead upsert failed: {e}")

    async def get(self, user_id: int) -> Optional[Lead]:
        """
        Fetches the lead for user_id.

        Returns:
            Lead, or None on timeout, error, not-found or an unreadable document
        """
        if not self.enabled:
            return None

        with LogContext(user_id=user_id):
            try:
                document = await run_with_timeout(
                    self.collection.find_one({"user_id": user_id}, {"_id": 0}),
                    self.timeout_seconds,
                    label="lead select"
                )
            except asyncio.TimeoutError:
                logger.error(f"Lead select timed out after {self.timeout_seconds}s")
                return None
            except Exception as e:
                logger.error(f"Lead select failed: {e}")
                return None

            if not document:
                logger.debug("Lead not found")
                return None

            try:
                return Lead.model_validate(document)
            except PydanticValidationError as e:
                logger.error(f"Stored lead is not readable: {e}")
                return None
