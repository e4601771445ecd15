"""
utils/telegram_utils.py

Purpose: Telegram message builders

- Constructs inline keyboard payloads
- Menus used by the flow (states, frequencies, done, book, contact)
- Profile links
"""

from typing import Any, Dict, List, Optional

from app.flow.states import EmotionalState, Frequency, Action, state_callback, frequency_callback
from utils.constants import (
    STATE_LABELS,
    FREQUENCY_LABELS,
    BUTTON_DONE,
    BUTTON_BOOK,
    BUTTON_CONTACT,
    PROFILE_URL_TEMPLATE,
)


def callback_button(text: str, data: str) -> Dict[str, str]:
    """Button that sends ``data`` back as a callback query."""
    return {"text": text, "callback_data": data}


def url_button(text: str, url: str) -> Dict[str, str]:
    """Button that opens an external link."""
    return {"text": text, "url": url}


def inline_keyboard(rows: List[List[Dict[str, str]]]) -> Dict[str, Any]:
    """
    Wraps button rows into a ``reply_markup`` payload.

    Example:
        inline_keyboard([[callback_button("Yes", "yes")], [callback_button("No", "no")]])
    """
    return {"inline_keyboard": rows}


def states_menu() -> Dict[str, Any]:
    """One button per emotional state, one per row."""
    return inline_keyboard([
        [callback_button(STATE_LABELS[state.value], state_callback(state))]
        for state in EmotionalState
    ])


def frequencies_menu() -> Dict[str, Any]:
    return inline_keyboard([
        [callback_button(FREQUENCY_LABELS[freq.value], frequency_callback(freq))]
        for freq in Frequency
    ])


def done_keyboard() -> Dict[str, Any]:
    return inline_keyboard([[callback_button(BUTTON_DONE, Action.DONE.value)]])


def book_keyboard() -> Dict[str, Any]:
    # No URL button here, so the user does not leave before tapping "book"
    return inline_keyboard([[callback_button(BUTTON_BOOK, Action.BOOK.value)]])


def contact_keyboard(url: Optional[str]) -> Optional[Dict[str, Any]]:
    """Contact button for the final message, or None when no URL is configured."""
    if not url:
        return None
    return inline_keyboard([[url_button(BUTTON_CONTACT, url)]])


def profile_link(username: Optional[str]) -> Optional[str]:
    if not username:
        return None
    return PROFILE_URL_TEMPLATE.format(username=username)
