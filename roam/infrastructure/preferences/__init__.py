"""Preferences stores: in-memory and Redis implementations of IPreferencesStore."""

from roam.infrastructure.preferences.in_memory import InMemoryPreferencesStore
from roam.infrastructure.preferences.redis_store import RedisPreferencesStore, preference_key

__all__ = ["InMemoryPreferencesStore", "RedisPreferencesStore", "preference_key"]
