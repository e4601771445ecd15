import asyncio
from itertools import count
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.core.background import BackgroundTaskRunner
from app.core.config import Settings
from app.flow.dispatcher import build_services
from app.services.session_cache import SessionCache
from app.services.telegram_service import TelegramService

_update_ids = count(1)


def make_settings(**overrides) -> Settings:
    """Settings isolated from the environment and any .env file."""
    values = {
        "BOT_TOKEN": "test-token",
        "TECHNIQUE_PAUSE_SECONDS": 0,
        "STORE_TIMEOUT_MS": 50,
        "ADMIN_CHAT_ID": "-1001",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_user(user_id=42, username="anna", first_name="Anna", last_name=None):
    user = {"id": user_id, "is_bot": False, "first_name": first_name}
    if username:
        user["username"] = username
    if last_name:
        user["last_name"] = last_name
    return user


def command_update(text="/start", user_id=42, username="anna"):
    user = make_user(user_id, username)
    return {
        "update_id": next(_update_ids),
        "message": {
            "message_id": 10,
            "chat": {"id": user_id, "type": "private"},
            "from": user,
            "text": text,
        },
    }


def callback_update(data, user_id=42, username="anna", message_id=11, with_message=True):
    user = make_user(user_id, username)
    query = {"id": f"cb-{next(_update_ids)}", "from": user, "data": data}
    if with_message:
        query["message"] = {
            "message_id": message_id,
            "chat": {"id": user_id, "type": "private"},
            "text": "previous step",
        }
    return {"update_id": next(_update_ids), "callback_query": query}


class HangingCall:
    """
    Store call that only settles when released.

    Pass ``hanging.wait`` as the side effect: AsyncMock only awaits side
    effects that are coroutine functions, which a callable instance is not.
    """

    def __init__(self, result=None):
        self.result = result
        self.started = 0
        self._event = asyncio.Event()

    async def wait(self, *args, **kwargs):
        self.started += 1
        await self._event.wait()
        return self.result

    async def release(self):
        """Lets every pending call finish and gives them a turn to do so."""
        self._event.set()
        for _ in range(3):
            await asyncio.sleep(0)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def telegram():
    """Bot API client double; every call succeeds unless told otherwise."""
    mock = AsyncMock(spec=TelegramService)
    mock.send_message.return_value = {"message_id": 100}
    mock.edit_message_text.return_value = True
    mock.answer_callback_query.return_value = True
    return mock


@pytest.fixture
def collection():
    """Motor collection double for the leads collection."""
    mock = MagicMock()
    mock.update_one = AsyncMock(return_value=MagicMock(acknowledged=True))
    mock.find_one = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def services(settings, telegram, collection):
    return build_services(
        settings,
        telegram,
        collection=collection,
        cache=SessionCache(),
        tasks=BackgroundTaskRunner(),
    )


@pytest.fixture
def cache_only_services(telegram):
    return build_services(make_settings(), telegram, collection=None)


def sent_texts(telegram):
    """Texts passed to send_message, in order."""
    return [c.args[1] for c in telegram.send_message.call_args_list]


def sent_markups(telegram):
    return [c.args[2] if len(c.args) > 2 else c.kwargs.get("reply_markup")
            for c in telegram.send_message.call_args_list]
