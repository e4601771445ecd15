"""
app/flow/handlers/frequency.py

Handles: STEP 2 and 3 – Technique done, frequency selection

- "done" moves on to the frequency question
- Frequency is cached and stored in the background
- Offer text depends on frequency: rare gets the soft offer,
  weekly and daily share the regular one
"""

from app.flow.context import FlowContext
from app.flow.states import Action, Frequency, get_transition
from utils.constants import (
    AFTER_TECHNIQUE_MESSAGE,
    OFFER_RARE_MESSAGE,
    OFFER_REGULAR_MESSAGE,
    CALLBACK_ACK,
    ERROR_CONTINUE_MESSAGE,
    ERROR_RESTART_MESSAGE,
)
from utils.telegram_utils import frequencies_menu, book_keyboard
from app.core.logging import get_logger, LogContext

logger = get_logger(__name__)


async def handle_done(ctx: FlowContext):
    """User confirmed the technique; ask how often this happens."""
    transition = get_transition(Action.DONE)

    with LogContext(user_id=ctx.user_id, state=transition.to_state.value):
        logger.info("Technique completed")

        try:
            ctx.acknowledge(CALLBACK_ACK)
            ctx.persist(last_step=transition.step.value)
            await ctx.reply(AFTER_TECHNIQUE_MESSAGE, frequencies_menu())

        except Exception as e:
            logger.error(f"[done handler] error: {e}", exc_info=True)
            await ctx.reply_safely(ERROR_CONTINUE_MESSAGE)


def offer_text_for(frequency: Frequency) -> str:
    if frequency == Frequency.RARE:
        return OFFER_RARE_MESSAGE
    return OFFER_REGULAR_MESSAGE


async def handle_frequency_choice(ctx: FlowContext, frequency: Frequency):
    """
    Args:
        ctx: Handler context
        frequency: Chosen frequency
    """
    transition = get_transition(Action.FREQUENCY)

    with LogContext(user_id=ctx.user_id, state=transition.to_state.value):
        logger.info(f"Frequency selected: {frequency.value}")

        try:
            ctx.acknowledge(CALLBACK_ACK)

            ctx.cache.set(ctx.user_id, frequency=frequency.value)
            ctx.persist(frequency=frequency.value, last_step=transition.step.value)

            await ctx.reply(offer_text_for(frequency), book_keyboard())

        except Exception as e:
            logger.error(f"[freq handler] error: {e}", exc_info=True)
            await ctx.reply_safely(ERROR_RESTART_MESSAGE)
