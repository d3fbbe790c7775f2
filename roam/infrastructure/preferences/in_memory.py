"""Process-local preferences store (default backend, also used in tests)."""

from __future__ import annotations


class InMemoryPreferencesStore:
    """Dict-backed IPreferencesStore. Values do not survive the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def put(self, key: str, value: str) -> None:
        self._values[key] = value
