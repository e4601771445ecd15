from unittest.mock import AsyncMock

import pytest

from app.core.exceptions import TelegramAPIError
from app.flow.context import FlowContext
from app.schemas.telegram import parse_update
from app.services.delivery_service import DeliveryFallbackSender
from conftest import callback_update

MARKUP = {"inline_keyboard": [[{"text": "Написать Марии", "url": "https://t.me/maria"}]]}


def make_ctx(services, **kwargs):
    return FlowContext(parse_update(callback_update("book", **kwargs)), services)


class TestDeliverFinal:
    @pytest.mark.asyncio
    async def test_edit_succeeds_first(self, services, telegram):
        ctx = make_ctx(services)

        assert await services.delivery.deliver_final(ctx, "final", MARKUP) is True

        telegram.edit_message_text.assert_awaited_once_with(42, 11, "final", MARKUP)
        telegram.send_message.assert_not_called()

    @pytest.mark.asyncio
    async def test_falls_back_to_direct_send(self, services, telegram):
        telegram.edit_message_text.side_effect = TelegramAPIError("editMessageText", "message can't be edited")
        ctx = make_ctx(services)

        assert await services.delivery.deliver_final(ctx, "final", MARKUP) is True

        telegram.send_message.assert_awaited_once_with(42, "final", MARKUP)

    @pytest.mark.asyncio
    async def test_reply_is_last_resort(self, services, telegram):
        telegram.edit_message_text.side_effect = TelegramAPIError("editMessageText", "bad request")
        telegram.send_message.side_effect = [
            TelegramAPIError("sendMessage", "timed out"),
            {"message_id": 5},
        ]
        ctx = make_ctx(services)

        assert await services.delivery.deliver_final(ctx, "final") is True
        assert telegram.send_message.await_count == 2

    @pytest.mark.asyncio
    async def test_all_channels_fail(self, services, telegram, caplog):
        telegram.edit_message_text.side_effect = TelegramAPIError("editMessageText", "x")
        telegram.send_message.side_effect = TelegramAPIError("sendMessage", "x")
        ctx = make_ctx(services)

        assert await services.delivery.deliver_final(ctx, "final") is False
        assert telegram.send_message.await_count == 2
        assert "could not be delivered" in caplog.text

    @pytest.mark.asyncio
    async def test_edit_skipped_without_message(self, services, telegram):
        ctx = make_ctx(services, with_message=False)

        assert await services.delivery.deliver_final(ctx, "final") is True

        telegram.edit_message_text.assert_not_called()
        # resolved chat falls back to the sender's id
        telegram.send_message.assert_awaited_once_with(42, "final", None)

    @pytest.mark.asyncio
    async def test_strategies_short_circuit(self, services):
        first = AsyncMock(return_value=False)
        second = AsyncMock(return_value=True)
        third = AsyncMock(return_value=True)
        sender = DeliveryFallbackSender([("a", first), ("b", second), ("c", third)])

        assert await sender.deliver_final(make_ctx(services), "final") is True

        first.assert_awaited_once()
        second.assert_awaited_once()
        third.assert_not_called()
