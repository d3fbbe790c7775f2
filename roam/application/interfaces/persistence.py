"""Preferences persistence interface (port) for the application layer."""

from typing import Protocol


class IPreferencesStore(Protocol):
    """Protocol for a flat string key-value store (user preferences).

    Implementations may raise PreferencesStoreException on backend failure;
    callers in the search core treat failures as best-effort.
    """

    async def get(self, key: str) -> str | None:
        """Return the stored string for key, or None if absent."""
        ...

    async def put(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...
