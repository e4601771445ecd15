import json

import httpx
import pytest

from app.core.exceptions import TelegramAPIError
from app.services.telegram_service import TelegramService


def make_service(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TelegramService("123:abc", base_url="https://bot.test", timeout=1, client=client)


class TestTelegramService:
    @pytest.mark.asyncio
    async def test_send_message_posts_json(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True, "result": {"message_id": 5}})

        service = make_service(handler)
        result = await service.send_message(42, "hi", {"inline_keyboard": []})
        await service.close()

        assert result == {"message_id": 5}
        assert seen["url"] == "https://bot.test/bot123:abc/sendMessage"
        assert seen["body"] == {"chat_id": 42, "text": "hi", "reply_markup": {"inline_keyboard": []}}

    @pytest.mark.asyncio
    async def test_none_fields_are_dropped(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True, "result": True})

        service = make_service(handler)
        await service.answer_callback_query("cb-1")

        assert seen["body"] == {"callback_query_id": "cb-1"}

    @pytest.mark.asyncio
    async def test_api_error_raises(self):
        def handler(request):
            return httpx.Response(
                400,
                json={"ok": False, "error_code": 400, "description": "Bad Request: message is not modified"}
            )

        service = make_service(handler)
        with pytest.raises(TelegramAPIError) as exc_info:
            await service.edit_message_text(1, 2, "same")

        assert exc_info.value.method == "editMessageText"
        assert exc_info.value.details == {"error_code": 400}
        assert "not modified" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("boom", request=request)

        service = make_service(handler)
        with pytest.raises(TelegramAPIError):
            await service.send_message(1, "x")

    @pytest.mark.asyncio
    async def test_non_json_response_raises(self):
        def handler(request):
            return httpx.Response(502, text="<html>bad gateway</html>")

        service = make_service(handler)
        with pytest.raises(TelegramAPIError):
            await service.send_message(1, "x")
