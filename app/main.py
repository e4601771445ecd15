"""
app/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Wires the bot services (Telegram client, lead store, cache, notifier)
- Registers API routes (webhook)
- Manages application lifecycle (startup/shutdown)
"""

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import time

from app.core.config import settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.db.mongo import connect_to_mongo, close_mongo_connection, check_database_health, get_leads_collection
from app.db.indexes import create_indexes
from app.flow.dispatcher import build_services
from app.services.session_cache import get_session_cache
from app.services.telegram_service import create_telegram_service
from app.api import webhook

# Initialize logging first
setup_logging()
logger = get_logger(__name__)

SHUTDOWN_DRAIN_SECONDS = 10.0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("🚀 Starting Opora bot...")

    try:
        validate_settings()
        logger.info(
            "Feature check: " + ", ".join(
                f"{name}={'on' if enabled else 'off'}"
                for name, enabled in settings.feature_flags().items()
            )
        )

        if settings.has_store:
            await connect_to_mongo()
            await create_indexes()

        telegram = create_telegram_service()
        app.state.bot_services = build_services(
            settings,
            telegram,
            collection=get_leads_collection(),
            cache=get_session_cache(),
        )

        if settings.TELEGRAM_WEBHOOK_URL:
            await telegram.set_webhook(
                settings.TELEGRAM_WEBHOOK_URL,
                secret_token=settings.TELEGRAM_WEBHOOK_SECRET,
                drop_pending_updates=True
            )
            logger.info("✅ Telegram webhook registered")

        logger.info("🎉 Opora bot started successfully!")
        logger.info(f"Environment: {settings.ENVIRONMENT}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield  # Application runs here

    logger.info("🛑 Shutting down Opora bot...")

    try:
        services = app.state.bot_services
        left = await services.tasks.drain(timeout=SHUTDOWN_DRAIN_SECONDS)
        logger.info(f"✅ Background tasks drained ({left} left)")

        await services.telegram.close()
        await close_mongo_connection()

        logger.info("👋 Opora bot shut down successfully")

    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}", exc_info=True)


app = FastAPI(
    title="Opora - lead qualification bot",
    description="Telegram bot guiding users from an emotional check-in to a booking",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
)

add_exception_handlers(app)

app.include_router(webhook.router, prefix=settings.API_PREFIX, tags=["Webhook"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - basic info."""
    return {
        "name": "Opora bot",
        "version": "1.0.0",
        "status": "running",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Feature flags and store connectivity.
    A store that is down only degrades the bot, it keeps serving users.
    """
    health_status = {
        "status": "healthy",
        "timestamp": time.time(),
        "environment": settings.ENVIRONMENT,
        "features": settings.feature_flags(),
        "checks": {}
    }

    if settings.has_store:
        db_healthy = await check_database_health()
        health_status["checks"]["database"] = "healthy" if db_healthy else "unhealthy"
        if not db_healthy:
            health_status["status"] = "degraded"
    else:
        health_status["checks"]["database"] = "disabled"

    return JSONResponse(content=health_status, status_code=200)


@app.get("/live", tags=["Health"])
async def liveness_check():
    """
    Liveness probe - indicates if app is alive.
    """
    return {"status": "alive"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
