"""
app/services/delivery_service.py

Purpose: Guaranteed-effort delivery of the final confirmation

- Ordered delivery strategies: edit, direct send, reply
- Stops at the first strategy that succeeds
- Each failure is logged, never raised
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from app.core.logging import get_logger

if TYPE_CHECKING:
    from app.flow.context import FlowContext

logger = get_logger(__name__)

Markup = Optional[Dict[str, Any]]
# A strategy returns False when it does not apply, raises when it fails
Strategy = Callable[["FlowContext", str, Markup], Awaitable[bool]]


async def edit_triggering_message(ctx: "FlowContext", text: str, reply_markup: Markup) -> bool:
    if not ctx.can_edit:
        return False
    await ctx.edit_message(text, reply_markup)
    return True


async def send_to_resolved_chat(ctx: "FlowContext", text: str, reply_markup: Markup) -> bool:
    await ctx.send_to_chat(text, reply_markup)
    return True


async def reply_to_update(ctx: "FlowContext", text: str, reply_markup: Markup) -> bool:
    await ctx.reply(text, reply_markup)
    return True


DEFAULT_STRATEGIES: List[Tuple[str, Strategy]] = [
    ("editMessageText", edit_triggering_message),
    ("sendMessage", send_to_resolved_chat),
    ("reply", reply_to_update),
]


class DeliveryFallbackSender:
    """Tries each delivery strategy in order until one succeeds."""

    def __init__(self, strategies: Optional[List[Tuple[str, Strategy]]] = None):
        self.strategies = list(strategies or DEFAULT_STRATEGIES)

    async def deliver_final(self, ctx: "FlowContext", text: str, reply_markup: Markup = None) -> bool:
        """
        Delivers text through the first strategy that works.

        Args:
            ctx: Handler context of the triggering update
            text: Message text
            reply_markup: Optional inline keyboard

        Returns:
            True if any strategy delivered the message
        """
        logger.info(f"Delivering final message to chat {ctx.event.resolved_chat_id}")

        for name, strategy in self.strategies:
            try:
                if await strategy(ctx, text, reply_markup):
                    logger.info(f"✅ Final message delivered via {name}")
                    return True
                logger.debug(f"Delivery strategy {name} not applicable")
            except Exception as e:
                logger.error(f"[delivery] {name} failed: {e}")

        logger.error(f"❌ Final message for user {ctx.user_id} could not be delivered through any channel")
        return False
