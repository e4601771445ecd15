"""
app/flow/dispatcher.py

Purpose: Central update dispatcher

- Receives raw updates from the webhook or the polling runner
- Normalizes them into InboundEvent
- Routes commands and button presses to flow handlers
- Top-level guard: no update can crash the process
"""

from typing import Dict, Any, Optional

from pydantic import ValidationError as PydanticValidationError

from app.core.background import BackgroundTaskRunner
from app.core.config import Settings
from app.flow.context import BotServices, FlowContext
from app.flow.states import Action, EmotionalState, Frequency, parse_callback_data
from app.schemas.telegram import InboundEvent, parse_update
from app.services.delivery_service import DeliveryFallbackSender
from app.services.lead_service import LeadStore
from app.services.notification_service import OperatorNotifier
from app.services.session_cache import SessionCache
from app.services.telegram_service import TelegramService
from app.core.logging import get_logger, LogContext

logger = get_logger(__name__)


def build_services(
    settings: Settings,
    telegram: TelegramService,
    collection=None,
    cache: Optional[SessionCache] = None,
    tasks: Optional[BackgroundTaskRunner] = None
) -> BotServices:
    """
    Wires the bot's services together.

    Args:
        settings: Application settings
        telegram: Bot API client
        collection: Motor collection for leads, None for cache-only mode
        cache: Session cache (a fresh one if omitted)
        tasks: Background runner (a fresh one if omitted)
    """
    cache = cache if cache is not None else SessionCache()
    store = LeadStore(collection, timeout_seconds=settings.store_timeout_seconds)

    return BotServices(
        settings=settings,
        telegram=telegram,
        cache=cache,
        store=store,
        tasks=tasks if tasks is not None else BackgroundTaskRunner(),
        delivery=DeliveryFallbackSender(),
        notifier=OperatorNotifier(
            telegram=telegram,
            store=store,
            cache=cache,
            admin_chat_id=settings.ADMIN_CHAT_ID
        ),
    )


async def dispatch_update(payload: Dict[str, Any], services: BotServices) -> Dict[str, Any]:
    """
    Main dispatcher for incoming Telegram updates.

    Args:
        payload: Raw update JSON
        services: Bot services

    Returns:
        Status dict ("processed", "ignored" or "error")
    """
    try:
        event = parse_update(payload)
    except PydanticValidationError as e:
        logger.warning(f"Unparseable update skipped: {e.error_count()} error(s)")
        return {"status": "ignored", "reason": "invalid_update"}

    if event is None:
        logger.debug(f"Unsupported update type skipped: {payload.get('update_id')}")
        return {"status": "ignored", "reason": "unsupported_update"}

    if event.kind == "callback":
        logger.info(f"[callback] {event.data} from user {event.user_id}")

    try:
        handled = await route_event(FlowContext(event, services))
        return {"status": "processed" if handled else "ignored"}

    except Exception as e:
        # Handlers catch their own failures; this only guards the router itself
        logger.error(f"❌ Dispatcher error: {e}", exc_info=True)
        return {"status": "error", "error": str(e)}


async def route_event(ctx: FlowContext) -> bool:
    """
    Routes an event to its handler.

    Returns:
        False when nothing in the flow matches the event
    """
    from app.flow.handlers.welcome import handle_start
    from app.flow.handlers.technique import handle_state_choice
    from app.flow.handlers.frequency import handle_done, handle_frequency_choice
    from app.flow.handlers.booking import handle_book
    from app.flow.handlers.diagnostics import handle_id, handle_health, handle_ping_admin

    event: InboundEvent = ctx.event

    if event.kind == "command":
        commands = {
            "start": handle_start,
            "id": handle_id,
            "health": handle_health,
            "pingadmin": handle_ping_admin,
        }
        handler = commands.get(event.command)
        if handler is None:
            logger.debug(f"Unknown command ignored: /{event.command}")
            return False
        await handler(ctx)
        return True

    if event.kind == "callback":
        parsed = parse_callback_data(event.data)
        if parsed is None:
            logger.warning(f"Unknown callback data ignored: {event.data}")
            return False

        action, argument = parsed
        with LogContext(user_id=event.user_id, action=action.value):
            if action == Action.STATE:
                await handle_state_choice(ctx, EmotionalState(argument))
            elif action == Action.DONE:
                await handle_done(ctx)
            elif action == Action.FREQUENCY:
                await handle_frequency_choice(ctx, Frequency(argument))
            elif action == Action.BOOK:
                await handle_book(ctx)
        return True

    logger.debug("Plain text ignored")
    return False
