"""
app/services/notification_service.py

Purpose: Operator notifications

- Resolves the most complete view of a lead (store first, cache second)
- Formats the new-lead summary
- Sends it to the operator chat, best-effort
- Test ping for diagnostics
"""

from dataclasses import dataclass
from typing import Optional

from app.core.logging import get_logger, LogContext
from app.models.lead import Lead, SessionEntry
from app.schemas.telegram import TelegramUser
from app.services.lead_service import LeadStore
from app.services.session_cache import SessionCache
from app.services.telegram_service import TelegramService
from utils.constants import (
    STATE_LABELS,
    FREQUENCY_LABELS,
    OPERATOR_TITLE,
    NO_USERNAME,
    EMPTY_VALUE,
    PING_OPERATOR_MESSAGE,
)
from utils.telegram_utils import profile_link

logger = get_logger(__name__)


@dataclass
class LeadView:
    user_id: int
    username: Optional[str] = None
    status: Optional[str] = None
    frequency: Optional[str] = None


def resolve_lead_view(
    user: TelegramUser,
    lead: Optional[Lead],
    entry: Optional[SessionEntry]
) -> LeadView:
    """
    Merges store, cache and update identity field by field.
    A stored value wins over a cached one whenever it is present.
    """
    lead = lead or Lead(user_id=user.id)
    entry = entry or SessionEntry()

    return LeadView(
        user_id=lead.user_id or user.id,
        username=lead.username or user.username,
        status=lead.status or entry.status,
        frequency=lead.frequency or entry.frequency,
    )


def human_label(value: Optional[str], labels: dict) -> str:
    """Display label for an enum value, the raw value if unknown, a dash if empty."""
    if not value:
        return EMPTY_VALUE
    return labels.get(value, value)


def build_operator_text(view: LeadView) -> str:
    uname = f"@{view.username}" if view.username else NO_USERNAME
    lines = [
        OPERATOR_TITLE,
        f"Пользователь: {uname} (id: {view.user_id})",
        f"Состояние: {human_label(view.status, STATE_LABELS)}",
        f"Частота: {human_label(view.frequency, FREQUENCY_LABELS)}",
    ]
    link = profile_link(view.username)
    if link:
        lines.append(f"Профиль: {link}")
    return "\n".join(lines) + "\n"


class OperatorNotifier:
    """Relays new-lead summaries to the configured operator chat."""

    def __init__(
        self,
        telegram: TelegramService,
        store: LeadStore,
        cache: SessionCache,
        admin_chat_id: Optional[str]
    ):
        self.telegram = telegram
        self.store = store
        self.cache = cache
        self.admin_chat_id = admin_chat_id

    @property
    def enabled(self) -> bool:
        return bool(self.admin_chat_id)

    async def notify_operator(self, user: TelegramUser) -> bool:
        """
        Sends the lead summary for ``user``.
        Never raises: the user already has their reply when this runs.

        Returns:
            True if the summary was sent
        """
        if not self.enabled:
            return False

        with LogContext(user_id=user.id):
            try:
                entry = self.cache.get(user.id)
                lead = await self.store.get(user.id)
                view = resolve_lead_view(user, lead, entry)

                await self.telegram.send_message(self.admin_chat_id, build_operator_text(view))
                logger.info("📣 Operator notified about new lead")
                return True

            except Exception as e:
                logger.error(f"[admin notify] send failed: {e}")
                return False

    async def ping_operator(self) -> bool:
        """Sends a test message to the operator chat."""
        if not self.enabled:
            return False
        try:
            await self.telegram.send_message(self.admin_chat_id, PING_OPERATOR_MESSAGE)
            return True
        except Exception as e:
            logger.error(f"[pingadmin] send failed: {e}")
            return False
