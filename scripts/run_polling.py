"""
Run the bot with long polling instead of a webhook

Useful locally where Telegram cannot reach the webhook URL.
Removes any registered webhook (dropping pending updates) first.

Usage: python scripts/run_polling.py
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings, validate_settings
from app.core.exceptions import TelegramAPIError
from app.core.logging import setup_logging, get_logger
from app.db.mongo import connect_to_mongo, close_mongo_connection, get_leads_collection
from app.db.indexes import create_indexes
from app.flow.dispatcher import build_services, dispatch_update
from app.services.session_cache import get_session_cache
from app.services.telegram_service import create_telegram_service

setup_logging()
logger = get_logger("polling")

POLL_TIMEOUT_SECONDS = 30
ERROR_BACKOFF_SECONDS = 5


async def run():
    validate_settings()

    if settings.has_store:
        await connect_to_mongo()
        await create_indexes()

    telegram = create_telegram_service()
    services = build_services(
        settings,
        telegram,
        collection=get_leads_collection(),
        cache=get_session_cache(),
    )

    await telegram.delete_webhook(drop_pending_updates=True)
    logger.info("Bot is running (long polling)...")
    for name, enabled in settings.feature_flags().items():
        logger.info(f"{name}: {'on' if enabled else 'off'}")

    offset = None
    try:
        while True:
            try:
                updates = await telegram.get_updates(offset=offset, timeout=POLL_TIMEOUT_SECONDS)
            except TelegramAPIError as e:
                logger.error(f"getUpdates failed: {e}")
                await asyncio.sleep(ERROR_BACKOFF_SECONDS)
                continue

            for update in updates:
                offset = update["update_id"] + 1
                await dispatch_update(update, services)
    finally:
        await services.tasks.drain(timeout=10)
        await telegram.close()
        await close_mongo_connection()


if __name__ == "__main__":
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Stopped")
