"""
app/api/webhook.py

Purpose: Telegram webhook endpoint

- Receives updates from Telegram
- Verifies the secret token header when one is configured
- Passes control to the flow dispatcher
- Always acknowledges accepted updates so Telegram does not redeliver them
"""

import hmac
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Header, Request

from app.core.config import settings
from app.core.exceptions import AuthenticationError, OporaError
from app.core.logging import get_logger
from app.flow.context import BotServices
from app.flow.dispatcher import dispatch_update
from app.schemas.response import WebhookAck

logger = get_logger(__name__)
router = APIRouter()


def get_bot_services(request: Request) -> BotServices:
    services = getattr(request.app.state, "bot_services", None)
    if services is None:
        raise OporaError("Bot is not initialized", code="NOT_READY", status_code=503)
    return services


def verify_secret_token(
    x_telegram_bot_api_secret_token: Optional[str] = Header(default=None)
):
    """Rejects calls that do not carry TELEGRAM_WEBHOOK_SECRET."""
    expected = settings.TELEGRAM_WEBHOOK_SECRET
    if not expected:
        return
    if not x_telegram_bot_api_secret_token or not hmac.compare_digest(
        x_telegram_bot_api_secret_token, expected
    ):
        logger.warning("Webhook call with invalid secret token rejected")
        raise AuthenticationError("Invalid webhook secret token")


@router.post(
    "/telegram/webhook",
    response_model=WebhookAck,
    dependencies=[Depends(verify_secret_token)]
)
async def telegram_webhook(
    payload: Dict[str, Any] = Body(...),
    services: BotServices = Depends(get_bot_services),
):
    """
    Unified webhook endpoint for Telegram updates.

    The update is fully processed before answering; failures are logged by
    the dispatcher and never turn into an error response.
    """
    result = await dispatch_update(payload, services)
    return WebhookAck(status=result["status"])


@router.get("/telegram/webhook")
async def webhook_status():
    """
    Webhook availability check.
    """
    return {"status": "ok", "message": "Webhook endpoint is active"}
