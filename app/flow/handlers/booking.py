"""
app/flow/handlers/booking.py

Handles: STEP 4 – Booking

- Stores last_step=booked in the background
- Delivers the confirmation through every available channel
- Notifies the operator in the background
"""

from app.flow.context import FlowContext
from app.flow.states import Action, get_transition
from utils.constants import BOOKED_MESSAGE, CALLBACK_ACK_BOOKED, ERROR_RESTART_MESSAGE
from utils.telegram_utils import contact_keyboard
from app.core.logging import get_logger, LogContext

logger = get_logger(__name__)


async def handle_book(ctx: FlowContext):
    """
    Terminal step of the flow.

    Args:
        ctx: Handler context
    """
    transition = get_transition(Action.BOOK)

    with LogContext(user_id=ctx.user_id, state=transition.to_state.value):
        logger.info("Booking requested")

        try:
            ctx.acknowledge(CALLBACK_ACK_BOOKED)
            ctx.persist(last_step=transition.step.value)

            delivered = await ctx.services.delivery.deliver_final(
                ctx,
                BOOKED_MESSAGE,
                contact_keyboard(ctx.settings.MARIA_CONTACT_URL)
            )
            if not delivered:
                logger.error("Booking confirmation was not delivered")

            # The user has their answer (or every channel failed); operator goes last
            ctx.notify_operator()

        except Exception as e:
            logger.error(f"[book handler] error: {e}", exc_info=True)
            await ctx.reply_safely(ERROR_RESTART_MESSAGE)
