"""Tests for RecentSearchStore (bounded, de-duplicated, most recent first)."""

import json
from unittest.mock import AsyncMock

import pytest

from roam.application.services.recent_search_store import (
    RecentSearchStore,
    decode_recent,
    encode_recent,
)
from roam.domain.exceptions import PreferencesStoreException
from roam.infrastructure.preferences.in_memory import InMemoryPreferencesStore


class FlakyPreferences:
    """Preferences store whose next `failures` reads raise."""

    def __init__(self, inner: InMemoryPreferencesStore, failures: int) -> None:
        self.inner = inner
        self.failures = failures

    async def get(self, key: str) -> str | None:
        if self.failures > 0:
            self.failures -= 1
            raise PreferencesStoreException(key, "get")
        return await self.inner.get(key)

    async def put(self, key: str, value: str) -> None:
        await self.inner.put(key, value)


@pytest.fixture
def store(preferences: InMemoryPreferencesStore) -> RecentSearchStore:
    return RecentSearchStore(preferences)


class TestRecentSearchStoreRecord:
    """record() promotes, de-duplicates, and bounds the history."""

    @pytest.mark.asyncio
    async def test_readding_promotes_without_duplicate(self, store: RecentSearchStore) -> None:
        await store.record("a")
        await store.record("b")
        await store.record("a")
        assert await store.list() == ["a", "b"]

    @pytest.mark.asyncio
    async def test_bounded_to_five_oldest_evicted(self, store: RecentSearchStore) -> None:
        for text in ("q1", "q2", "q3", "q4", "q5", "q6"):
            await store.record(text)
        assert await store.list() == ["q6", "q5", "q4", "q3", "q2"]

    @pytest.mark.asyncio
    async def test_blank_text_ignored(self, store: RecentSearchStore) -> None:
        await store.record("")
        await store.record("   ")
        await store.record(None)
        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_entries_are_trimmed(self, store: RecentSearchStore) -> None:
        await store.record("  standup  ")
        assert await store.list() == ["standup"]

    @pytest.mark.asyncio
    async def test_delimiter_in_entry_survives_reload(self, preferences: InMemoryPreferencesStore) -> None:
        await RecentSearchStore(preferences).record("a||b")
        assert await RecentSearchStore(preferences).list() == ["a||b"]


class TestRecentSearchStoreRemove:
    """remove() deletes by exact text; absent text is a no-op."""

    @pytest.mark.asyncio
    async def test_remove_existing(self, store: RecentSearchStore) -> None:
        await store.record("a")
        await store.record("b")
        await store.remove("a")
        assert await store.list() == ["b"]

    @pytest.mark.asyncio
    async def test_remove_absent_is_noop(self, store: RecentSearchStore) -> None:
        await store.record("a")
        await store.remove("zzz")
        assert await store.list() == ["a"]

    @pytest.mark.asyncio
    async def test_clear(self, store: RecentSearchStore) -> None:
        await store.record("a")
        await store.clear()
        assert await store.list() == []


class TestRecentSearchStorePersistence:
    """Stored format, legacy format, and best-effort failure handling."""

    @pytest.mark.asyncio
    async def test_stored_as_json_array(self, preferences: InMemoryPreferencesStore) -> None:
        store = RecentSearchStore(preferences, key="recent")
        await store.record("x")
        await store.record("y")
        assert json.loads(await preferences.get("recent")) == ["y", "x"]

    @pytest.mark.asyncio
    async def test_reads_legacy_delimited_value(self) -> None:
        prefs = InMemoryPreferencesStore({"recentSearches": "alpha||beta|| ||gamma"})
        assert await RecentSearchStore(prefs).list() == ["alpha", "beta", "gamma"]

    @pytest.mark.asyncio
    async def test_read_failure_yields_empty_history(self) -> None:
        prefs = AsyncMock()
        prefs.get.side_effect = PreferencesStoreException("recentSearches", "get")
        assert await RecentSearchStore(prefs).list() == []

    @pytest.mark.asyncio
    async def test_write_failure_is_dropped(self) -> None:
        prefs = AsyncMock()
        prefs.get.return_value = None
        prefs.put.side_effect = PreferencesStoreException("recentSearches", "put")
        store = RecentSearchStore(prefs)
        await store.record("a")
        prefs.put.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_read_does_not_overwrite_history(
        self, preferences: InMemoryPreferencesStore
    ) -> None:
        store = RecentSearchStore(preferences)
        for text in ("a", "b", "c", "d"):
            await store.record(text)
        store.preferences = FlakyPreferences(preferences, failures=2)

        await store.record("e")
        await store.remove("d")

        assert await store.list() == ["d", "c", "b", "a"]

    @pytest.mark.asyncio
    async def test_custom_bound(self, preferences: InMemoryPreferencesStore) -> None:
        store = RecentSearchStore(preferences, max_recent=2)
        for text in ("a", "b", "c"):
            await store.record(text)
        assert await store.list() == ["c", "b"]


class TestRecentEncoding:
    """encode_recent / decode_recent helpers."""

    def test_decode_empty(self) -> None:
        assert decode_recent(None) == []
        assert decode_recent("") == []

    def test_decode_ignores_non_string_items(self) -> None:
        assert decode_recent('["a", 1, null, "b"]') == ["a", "b"]

    def test_encode_keeps_unicode(self) -> None:
        assert encode_recent(["café"]) == '["café"]'
