"""
app/flow/handlers/welcome.py

Handles: STEP 0 – /start

- Records the lead (last_step=start) in the background
- Sends the welcome message with the emotional state menu
"""

from app.flow.context import FlowContext
from app.flow.states import Action, get_transition
from utils.constants import WELCOME_MESSAGE, ERROR_RESTART_MESSAGE
from utils.telegram_utils import states_menu
from app.core.logging import get_logger, LogContext

logger = get_logger(__name__)


async def handle_start(ctx: FlowContext):
    """
    Entry point of the flow. Can be repeated at any time.

    Args:
        ctx: Handler context
    """
    transition = get_transition(Action.START)

    with LogContext(user_id=ctx.user_id, state=transition.to_state.value):
        logger.info("Processing /start")

        try:
            ctx.persist(last_step=transition.step.value)
            await ctx.reply(WELCOME_MESSAGE, states_menu())

        except Exception as e:
            logger.error(f"[start handler] error: {e}", exc_info=True)
            await ctx.reply_safely(ERROR_RESTART_MESSAGE)

