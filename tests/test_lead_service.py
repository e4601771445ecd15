import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.services.lead_service import LeadStore
from conftest import HangingCall


def make_collection():
    collection = MagicMock()
    collection.update_one = AsyncMock()
    collection.find_one = AsyncMock(return_value=None)
    return collection


class TestUpsert:
    @pytest.mark.asyncio
    async def test_disabled_store_is_noop(self):
        store = LeadStore(None)

        assert store.enabled is False
        assert await store.upsert(1, {"last_step": "start"}) is None

    @pytest.mark.asyncio
    async def test_upserts_by_user_id(self):
        collection = make_collection()
        store = LeadStore(collection, timeout_seconds=1)

        await store.upsert(42, {"user_id": 42, "username": "anna", "status": "anxiety"})

        collection.update_one.assert_awaited_once()
        query, update = collection.update_one.call_args.args
        assert query == {"user_id": 42}
        assert update["$set"]["username"] == "anna"
        assert update["$set"]["status"] == "anxiety"
        assert "user_id" not in update["$set"]
        assert "updated_at" in update["$set"]
        assert "created_at" in update["$setOnInsert"]
        assert collection.update_one.call_args.kwargs["upsert"] is True

    @pytest.mark.asyncio
    async def test_error_is_swallowed(self, caplog):
        collection = make_collection()
        collection.update_one.side_effect = RuntimeError("connection refused")
        store = LeadStore(collection, timeout_seconds=1)

        await store.upsert(42, {"last_step": "start"})

        assert "Lead upsert failed" in caplog.text

    @pytest.mark.asyncio
    async def test_timeout_is_swallowed(self, caplog):
        hanging = HangingCall()
        collection = make_collection()
        collection.update_one.side_effect = hanging.wait
        store = LeadStore(collection, timeout_seconds=0.02)

        try:
            await asyncio.wait_for(store.upsert(42, {"last_step": "start"}), timeout=1)
        finally:
            await hanging.release()

        assert hanging.started == 1
        assert "Lead upsert timed out" in caplog.text


class TestGet:
    @pytest.mark.asyncio
    async def test_disabled_store_returns_none(self):
        assert await LeadStore(None).get(1) is None

    @pytest.mark.asyncio
    async def test_returns_lead(self):
        collection = make_collection()
        collection.find_one.return_value = {
            "user_id": 42,
            "username": "anna",
            "status": "anger",
            "frequency": "weekly",
            "last_step": "offer",
        }
        store = LeadStore(collection, timeout_seconds=1)

        lead = await store.get(42)

        assert lead.username == "anna"
        assert lead.status == "anger"
        assert lead.frequency == "weekly"
        assert collection.find_one.call_args.args[0] == {"user_id": 42}

    @pytest.mark.asyncio
    async def test_not_found_returns_none(self):
        store = LeadStore(make_collection(), timeout_seconds=1)
        assert await store.get(42) is None

    @pytest.mark.asyncio
    async def test_error_returns_none(self):
        collection = make_collection()
        collection.find_one.side_effect = RuntimeError("boom")
        store = LeadStore(collection, timeout_seconds=1)

        assert await store.get(42) is None

    @pytest.mark.asyncio
    async def test_timeout_returns_none(self, caplog):
        hanging = HangingCall(result={"user_id": 42, "status": "anger"})
        collection = make_collection()
        collection.find_one.side_effect = hanging.wait
        store = LeadStore(collection, timeout_seconds=0.02)

        try:
            lead = await asyncio.wait_for(store.get(42), timeout=1)
        finally:
            await hanging.release()

        # a readable document arrives, but only after the caller gave up
        assert lead is None
        assert hanging.started == 1
        assert "Lead select timed out" in caplog.text

    @pytest.mark.asyncio
    async def test_unreadable_document_returns_none(self):
        collection = make_collection()
        collection.find_one.return_value = {"user_id": "not-a-number"}
        store = LeadStore(collection, timeout_seconds=1)

        assert await store.get(42) is None
