"""
app/flow/handlers/diagnostics.py

Handles: service commands

- /id: shows the chat id (to configure ADMIN_CHAT_ID)
- /health: which optional features are active
- /pingadmin: test message to the operator chat
"""

from app.flow.context import FlowContext
from utils.constants import HEALTH_TITLE, PING_NOT_CONFIGURED, PING_SENT, PING_FAILED
from app.core.logging import get_logger

logger = get_logger(__name__)


def format_health(flags: dict) -> str:
    lines = [HEALTH_TITLE]
    lines.extend(f"{name}: {'on' if enabled else 'off'}" for name, enabled in flags.items())
    return "\n".join(lines)


async def handle_id(ctx: FlowContext):
    await ctx.reply(f"chat_id: {ctx.event.resolved_chat_id}")


async def handle_health(ctx: FlowContext):
    await ctx.reply(format_health(ctx.settings.feature_flags()))


async def handle_ping_admin(ctx: FlowContext):
    notifier = ctx.services.notifier
    if not notifier.enabled:
        await ctx.reply(PING_NOT_CONFIGURED)
        return

    sent = await notifier.ping_operator()
    await ctx.reply(PING_SENT if sent else PING_FAILED)
