"""
app/flow/handlers/technique.py

Handles: STEP 1 – Emotional state selection

- Caches the chosen state
- Stores it in the background (last_step=technique)
- After a short pause sends the explanation, then the technique with a "done" button
"""

import asyncio

from app.flow.context import FlowContext
from app.flow.states import Action, EmotionalState, get_transition
from utils.constants import (
    STATE_EXPLANATIONS,
    STATE_TECHNIQUES,
    CALLBACK_ACK,
    ERROR_RESTART_MESSAGE,
)
from utils.telegram_utils import done_keyboard
from app.core.logging import get_logger, LogContext

logger = get_logger(__name__)


async def handle_state_choice(ctx: FlowContext, status: EmotionalState):
    """
    Args:
        ctx: Handler context
        status: Chosen emotional state
    """
    transition = get_transition(Action.STATE)

    with LogContext(user_id=ctx.user_id, state=transition.to_state.value):
        logger.info(f"Emotional state selected: {status.value}")

        try:
            ctx.acknowledge(CALLBACK_ACK)

            # Cache before the background write is even started
            ctx.cache.set(ctx.user_id, status=status.value)
            ctx.persist(status=status.value, last_step=transition.step.value)

            await asyncio.sleep(ctx.settings.TECHNIQUE_PAUSE_SECONDS)
            await ctx.reply(STATE_EXPLANATIONS[status.value])
            await ctx.reply(STATE_TECHNIQUES[status.value], done_keyboard())

        except Exception as e:
            logger.error(f"[state handler] error: {e}", exc_info=True)
            await ctx.reply_safely(ERROR_RESTART_MESSAGE)
