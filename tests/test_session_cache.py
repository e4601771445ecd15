from app.services.session_cache import SessionCache, get_session_cache


class TestSessionCache:
    def test_get_unknown_user_returns_none(self):
        cache = SessionCache()
        assert cache.get(1) is None
        assert 1 not in cache

    def test_set_creates_entry(self):
        cache = SessionCache()
        entry = cache.set(1, status="anxiety")

        assert entry.status == "anxiety"
        assert entry.frequency is None
        assert cache.get(1).status == "anxiety"

    def test_set_merges_shallowly(self):
        cache = SessionCache()
        cache.set(1, status="anger")
        cache.set(1, frequency="weekly")

        entry = cache.get(1)
        assert entry.status == "anger"
        assert entry.frequency == "weekly"

    def test_last_write_wins(self):
        cache = SessionCache()
        cache.set(1, frequency="daily")
        cache.set(1, frequency="daily")
        cache.set(1, frequency="rare")

        assert cache.get(1).frequency == "rare"
        assert len(cache) == 1

    def test_returned_entry_is_a_copy(self):
        cache = SessionCache()
        cache.set(1, status="apathy")

        entry = cache.get(1)
        entry.status = "anger"

        assert cache.get(1).status == "apathy"

    def test_users_are_isolated(self):
        cache = SessionCache()
        cache.set(1, status="anxiety")
        cache.set(2, status="anger")

        assert cache.get(1).status == "anxiety"
        assert cache.get(2).status == "anger"

    def test_global_instance_is_shared(self):
        assert get_session_cache() is get_session_cache()
