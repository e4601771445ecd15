"""
app/services/telegram_service.py

Purpose: Telegram Bot API calls

- Sends and edits messages
- Answers callback queries
- Webhook registration and long polling for the runners
- Every failure surfaces as TelegramAPIError
"""

import httpx
from typing import Dict, Any, Optional, List, Union

from app.core.config import settings
from app.core.exceptions import TelegramAPIError
from app.core.logging import get_logger

logger = get_logger(__name__)

ChatId = Union[int, str]


class TelegramService:
    """Service for talking to the Telegram Bot API"""

    def __init__(
        self,
        bot_token: str,
        base_url: str = "https://api.telegram.org",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.base_url = f"{base_url.rstrip('/')}/bot{bot_token}"
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self):
        """Closes the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _call(self, method: str, payload: Dict[str, Any], timeout: Optional[float] = None) -> Any:
        """
        Calls a Bot API method and returns its ``result``.

        Raises:
            TelegramAPIError: On transport errors, timeouts and ok=false answers
        """
        url = f"{self.base_url}/{method}"
        data = {key: value for key, value in payload.items() if value is not None}

        try:
            response = await self._get_client().post(url, json=data, timeout=timeout or self.timeout)
        except httpx.TimeoutException as e:
            raise TelegramAPIError(method, "request timed out") from e
        except httpx.HTTPError as e:
            raise TelegramAPIError(method, f"transport error: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise TelegramAPIError(method, f"non-JSON response ({response.status_code})") from e

        if not body.get("ok"):
            raise TelegramAPIError(
                method,
                body.get("description") or f"HTTP {response.status_code}",
                details={"error_code": body.get("error_code")}
            )

        return body.get("result")

    async def send_message(
        self,
        chat_id: ChatId,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Sends a text message.

        Args:
            chat_id: Target chat
            text: Message text (plain, no parse mode)
            reply_markup: Optional inline keyboard

        Returns:
            The sent Message object
        """
        logger.debug(f"📤 sendMessage to {chat_id}")
        return await self._call("sendMessage", {
            "chat_id": chat_id,
            "text": text,
            "reply_markup": reply_markup,
        })

    async def edit_message_text(
        self,
        chat_id: ChatId,
        message_id: int,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Replaces the text (and keyboard) of an existing message."""
        logger.debug(f"✏️ editMessageText {chat_id}/{message_id}")
        return await self._call("editMessageText", {
            "chat_id": chat_id,
            "message_id": message_id,
            "text": text,
            "reply_markup": reply_markup,
        })

    async def answer_callback_query(self, callback_query_id: str, text: Optional[str] = None) -> bool:
        """Stops the button's loading spinner, optionally showing a toast."""
        return await self._call("answerCallbackQuery", {
            "callback_query_id": callback_query_id,
            "text": text,
        })

    async def get_updates(self, offset: Optional[int] = None, timeout: int = 30) -> List[Dict[str, Any]]:
        """Long-polls for updates (only usable while no webhook is set)."""
        return await self._call(
            "getUpdates",
            {
                "offset": offset,
                "timeout": timeout,
                "allowed_updates": ["message", "callback_query"],
            },
            timeout=timeout + self.timeout
        )

    async def set_webhook(
        self,
        url: str,
        secret_token: Optional[str] = None,
        drop_pending_updates: bool = True
    ) -> bool:
        return await self._call("setWebhook", {
            "url": url,
            "secret_token": secret_token,
            "drop_pending_updates": drop_pending_updates,
            "allowed_updates": ["message", "callback_query"],
        })

    async def delete_webhook(self, drop_pending_updates: bool = True) -> bool:
        return await self._call("deleteWebhook", {"drop_pending_updates": drop_pending_updates})


def create_telegram_service() -> TelegramService:
    """Builds a client from application settings."""
    return TelegramService(
        bot_token=settings.BOT_TOKEN or "",
        base_url=settings.TELEGRAM_API_URL,
        timeout=settings.TELEGRAM_REQUEST_TIMEOUT
    )
