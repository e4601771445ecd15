"""
app/flow/states.py

Purpose: Defines the conversation states and inbound actions

- Enum for each step in the flow
- Closed enums for emotional states, frequencies and step markers
- Callback action identifiers and their parsing
- Transition table (single source of truth for the scripted flow)
"""

from enum import Enum
from typing import Dict, Optional, Tuple
from dataclasses import dataclass


class ConversationState(str, Enum):
    """
    Steps of the lead-qualification flow, in order.
    """

    START = "start"
    AWAITING_STATE_CHOICE = "awaiting_state_choice"
    AWAITING_DONE_CONFIRMATION = "awaiting_done_confirmation"
    AWAITING_FREQUENCY_CHOICE = "awaiting_frequency_choice"
    AWAITING_BOOKING = "awaiting_booking"
    BOOKED = "booked"


class EmotionalState(str, Enum):
    ANXIETY = "anxiety"
    ANGER = "anger"
    APATHY = "apathy"


class Frequency(str, Enum):
    """Self-reported frequency, lowest severity first."""
    RARE = "rare"
    WEEKLY = "weekly"
    DAILY = "daily"


class LeadStep(str, Enum):
    """Value stored in ``last_step`` when a step completes."""
    START = "start"
    TECHNIQUE = "technique"
    FREQUENCY = "frequency"
    OFFER = "offer"
    BOOKED = "booked"


class Action(str, Enum):
    """Inbound event kinds understood by the flow."""
    START = "start"
    STATE = "state"
    DONE = "done"
    FREQUENCY = "freq"
    BOOK = "book"


@dataclass(frozen=True)
class Transition:
    """
    One scripted step.

    ``from_state`` is documentary: handlers do not guard on it, since any
    earlier button may be pressed again at any time. Handlers use
    ``to_state`` for log context and ``step`` for ``last_step``.
    """
    from_state: Optional[ConversationState]  # None means "any"
    to_state: ConversationState
    step: LeadStep


TRANSITIONS: Dict[Action, Transition] = {
    Action.START: Transition(None, ConversationState.AWAITING_STATE_CHOICE, LeadStep.START),
    Action.STATE: Transition(
        ConversationState.AWAITING_STATE_CHOICE,
        ConversationState.AWAITING_DONE_CONFIRMATION,
        LeadStep.TECHNIQUE,
    ),
    Action.DONE: Transition(
        ConversationState.AWAITING_DONE_CONFIRMATION,
        ConversationState.AWAITING_FREQUENCY_CHOICE,
        LeadStep.FREQUENCY,
    ),
    Action.FREQUENCY: Transition(
        ConversationState.AWAITING_FREQUENCY_CHOICE,
        ConversationState.AWAITING_BOOKING,
        LeadStep.OFFER,
    ),
    Action.BOOK: Transition(
        ConversationState.AWAITING_BOOKING,
        ConversationState.BOOKED,
        LeadStep.BOOKED,
    ),
}


def get_transition(action: Action) -> Transition:
    return TRANSITIONS[action]


def state_callback(state: EmotionalState) -> str:
    return f"{Action.STATE.value}:{state.value}"


def frequency_callback(frequency: Frequency) -> str:
    return f"{Action.FREQUENCY.value}:{frequency.value}"


def parse_callback_data(data: Optional[str]) -> Optional[Tuple[Action, Optional[str]]]:
    """
    Maps opaque callback data onto a known action.

    Args:
        data: Callback data from the button ("state:anxiety", "done", ...)

    Returns:
        (action, argument) or None when the data is not one of ours
    """
    if not data:
        return None

    if data == Action.DONE.value:
        return Action.DONE, None
    if data == Action.BOOK.value:
        return Action.BOOK, None

    prefix, sep, value = data.partition(":")
    if not sep:
        return None

    if prefix == Action.STATE.value and value in {s.value for s in EmotionalState}:
        return Action.STATE, value
    if prefix == Action.FREQUENCY.value and value in {f.value for f in Frequency}:
        return Action.FREQUENCY, value

    return None
