"""
app/flow/context.py

Purpose: Per-update handler context

- Bundles the services a handler needs (injectable for tests)
- Reply, edit and acknowledge helpers bound to the inbound event
- Fire-and-forget lead persistence
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.core.background import BackgroundTaskRunner
from app.core.config import Settings
from app.schemas.telegram import InboundEvent
from app.services.delivery_service import DeliveryFallbackSender
from app.services.lead_service import LeadStore
from app.services.notification_service import OperatorNotifier
from app.services.session_cache import SessionCache
from app.services.telegram_service import TelegramService
from app.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class BotServices:
    settings: Settings
    telegram: TelegramService
    cache: SessionCache
    store: LeadStore
    tasks: BackgroundTaskRunner
    delivery: DeliveryFallbackSender
    notifier: OperatorNotifier


class FlowContext:
    """
    What a step handler sees: the event plus bound transport helpers.
    """

    def __init__(self, event: InboundEvent, services: BotServices):
        self.event = event
        self.services = services

    @property
    def user_id(self) -> int:
        return self.event.user_id

    @property
    def settings(self) -> Settings:
        return self.services.settings

    @property
    def cache(self) -> SessionCache:
        return self.services.cache

    async def reply(self, text: str, reply_markup: Optional[Dict[str, Any]] = None):
        """
        Sends a message to the chat the update came from.

        Raises:
            TelegramAPIError: If the send fails
            ValueError: If the update carries no chat
        """
        if self.event.chat_id is None:
            raise ValueError("update has no chat to reply to")
        return await self.services.telegram.send_message(self.event.chat_id, text, reply_markup)

    async def send_to_chat(self, text: str, reply_markup: Optional[Dict[str, Any]] = None):
        """Sends a message to the resolved chat id (chat, else the sender)."""
        return await self.services.telegram.send_message(self.event.resolved_chat_id, text, reply_markup)

    async def reply_safely(self, text: str) -> bool:
        """
        Last-resort user message from a failed handler.
        Never raises; returns whether the message went out.
        """
        try:
            await self.send_to_chat(text)
            return True
        except Exception as e:
            logger.error(f"Could not send error message: {e}")
            return False

    @property
    def can_edit(self) -> bool:
        return self.event.message_id is not None and self.event.chat_id is not None

    async def edit_message(self, text: str, reply_markup: Optional[Dict[str, Any]] = None):
        """Edits the message that carried the pressed button."""
        if not self.can_edit:
            raise ValueError("update has no message to edit")
        return await self.services.telegram.edit_message_text(
            self.event.chat_id, self.event.message_id, text, reply_markup
        )

    def acknowledge(self, text: Optional[str] = None):
        """Answers the callback query in the background."""
        if not self.event.callback_query_id:
            return
        self.services.tasks.spawn(
            self.services.telegram.answer_callback_query(self.event.callback_query_id, text),
            name="answer_callback_query"
        )

    def persist(self, **patch):
        """
        Submits a background upsert of user metadata plus ``patch``.
        The handler never waits for it.
        """
        payload = {**self.event.user_meta(), **patch}
        self.services.tasks.spawn(
            self.services.store.upsert(self.user_id, payload),
            name=f"lead_upsert:{patch.get('last_step', 'patch')}"
        )

    def notify_operator(self):
        """Submits the operator notification in the background."""
        self.services.tasks.spawn(
            self.services.notifier.notify_operator(self.event.user),
            name="notify_operator"
        )
