"""
app/schemas/telegram.py

Purpose: Telegram update schemas and parsers

- Validates the subset of Bot API updates the bot consumes
- Normalizes commands and button presses into InboundEvent
- Ensures predictable request handling
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal, Dict, Any


class TelegramUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    is_bot: bool = False
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class TelegramChat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    type: Optional[str] = None


class TelegramMessage(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    message_id: int
    chat: TelegramChat
    from_user: Optional[TelegramUser] = Field(default=None, alias="from")
    text: Optional[str] = None


class TelegramCallbackQuery(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    from_user: TelegramUser = Field(..., alias="from")
    message: Optional[TelegramMessage] = None
    data: Optional[str] = None


class TelegramUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    update_id: int
    message: Optional[TelegramMessage] = None
    callback_query: Optional[TelegramCallbackQuery] = None


class InboundEvent(BaseModel):
    """
    Normalized event for internal processing.
    Carries only what the flow consumes: sender, chat and action.
    """
    update_id: int
    kind: Literal["command", "callback", "text"]
    user: TelegramUser
    chat_id: Optional[int] = Field(None, description="Chat the update came from")
    message_id: Optional[int] = Field(None, description="Message carrying the pressed button")
    callback_query_id: Optional[str] = None
    command: Optional[str] = Field(None, description="Command name without slash or bot suffix")
    data: Optional[str] = Field(None, description="Raw callback data")
    text: Optional[str] = None

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def resolved_chat_id(self) -> int:
        """Update chat, falling back to the sender's private chat."""
        return self.chat_id if self.chat_id is not None else self.user.id

    def user_meta(self) -> Dict[str, Any]:
        """Display metadata refreshed on every lead write."""
        return {
            "user_id": self.user.id,
            "username": self.user.username,
            "first_name": self.user.first_name,
            "last_name": self.user.last_name,
        }


def parse_command(text: Optional[str]) -> Optional[str]:
    """
    Extracts a command name from message text.

    "/start", "/start payload" and "/start@SomeBot" all give "start".
    """
    if not text or not text.startswith("/"):
        return None
    head = text.split(maxsplit=1)[0][1:]
    name = head.split("@", 1)[0]
    return name.lower() or None


def parse_update(payload: Dict[str, Any]) -> Optional[InboundEvent]:
    """
    Parses a raw Bot API update.

    Returns:
        InboundEvent, or None for update types the bot does not handle
        (edited messages, channel posts, messages without a sender, ...)
    """
    update = TelegramUpdate.model_validate(payload)

    query = update.callback_query
    if query is not None:
        return InboundEvent(
            update_id=update.update_id,
            kind="callback",
            user=query.from_user,
            chat_id=query.message.chat.id if query.message else None,
            message_id=query.message.message_id if query.message else None,
            callback_query_id=query.id,
            data=query.data,
        )

    message = update.message
    if message is not None and message.from_user is not None:
        command = parse_command(message.text)
        return InboundEvent(
            update_id=update.update_id,
            kind="command" if command else "text",
            user=message.from_user,
            chat_id=message.chat.id,
            command=command,
            text=message.text,
        )

    return None
