import pytest
from pydantic import ValidationError

from app.flow.states import (
    TRANSITIONS,
    Action,
    ConversationState,
    EmotionalState,
    Frequency,
    LeadStep,
    frequency_callback,
    parse_callback_data,
    state_callback,
)
from app.schemas.telegram import parse_command, parse_update
from conftest import callback_update, command_update


class TestCallbackData:
    @pytest.mark.parametrize("data, expected", [
        ("state:anxiety", (Action.STATE, "anxiety")),
        ("state:apathy", (Action.STATE, "apathy")),
        ("done", (Action.DONE, None)),
        ("freq:rare", (Action.FREQUENCY, "rare")),
        ("book", (Action.BOOK, None)),
    ])
    def test_known_data(self, data, expected):
        assert parse_callback_data(data) == expected

    @pytest.mark.parametrize("data", [None, "", "state:", "state:joy", "freq:hourly", "done:1", "start", "nope"])
    def test_unknown_data(self, data):
        assert parse_callback_data(data) is None

    def test_builders_match_parser(self):
        for state in EmotionalState:
            assert parse_callback_data(state_callback(state)) == (Action.STATE, state.value)
        for frequency in Frequency:
            assert parse_callback_data(frequency_callback(frequency)) == (Action.FREQUENCY, frequency.value)



class TestTransitions:
    ORDER = [Action.START, Action.STATE, Action.DONE, Action.FREQUENCY, Action.BOOK]

    def test_steps_form_a_chain(self):
        for previous, current in zip(self.ORDER, self.ORDER[1:]):
            assert TRANSITIONS[current].from_state == TRANSITIONS[previous].to_state

    def test_start_is_allowed_from_anywhere(self):
        assert TRANSITIONS[Action.START].from_state is None

    def test_booking_is_terminal(self):
        booked = TRANSITIONS[Action.BOOK]
        assert booked.to_state == ConversationState.BOOKED
        assert booked.step == LeadStep.BOOKED
        assert all(t.from_state != ConversationState.BOOKED for t in TRANSITIONS.values())

class TestParseCommand:
    @pytest.mark.parametrize("text, expected", [
        ("/start", "start"),
        ("/start payload", "start"),
        ("/start@OporaBot", "start"),
        ("/PingAdmin", "pingadmin"),
        ("hello", None),
        ("/", None),
        (None, None),
    ])
    def test_parse(self, text, expected):
        assert parse_command(text) == expected


class TestParseUpdate:
    def test_command_message(self):
        event = parse_update(command_update("/id", user_id=7))

        assert event.kind == "command"
        assert event.command == "id"
        assert event.chat_id == 7
        assert event.user_id == 7

    def test_plain_text(self):
        event = parse_update(command_update("привет"))
        assert event.kind == "text"
        assert event.command is None

    def test_callback_with_message(self):
        event = parse_update(callback_update("done", message_id=55))

        assert event.kind == "callback"
        assert event.data == "done"
        assert event.message_id == 55
        assert event.callback_query_id.startswith("cb-")

    def test_callback_without_message_falls_back_to_user_chat(self):
        event = parse_update(callback_update("book", user_id=9, with_message=False))

        assert event.chat_id is None
        assert event.message_id is None
        assert event.resolved_chat_id == 9

    def test_user_meta(self):
        event = parse_update(callback_update("book", username=None))
        assert event.user_meta() == {
            "user_id": 42,
            "username": None,
            "first_name": "Anna",
            "last_name": None,
        }

    def test_unsupported_update(self):
        assert parse_update({"update_id": 3, "channel_post": {"message_id": 1}}) is None

    def test_message_without_sender(self):
        payload = {"update_id": 4, "message": {"message_id": 1, "chat": {"id": 1}, "text": "/start"}}
        assert parse_update(payload) is None

    def test_malformed_update_raises(self):
        with pytest.raises(ValidationError):
            parse_update({"callback_query": {"id": "1"}})
