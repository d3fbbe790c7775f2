"""Bounded, de-duplicated, most-recent-first history of search queries.

The list lives in the injected preferences store as one string value
(a JSON array). No copy is kept in memory between calls; each operation
reads, rewrites, and writes back under a lock so concurrent record and
remove calls cannot lose each other's updates.

Persistence is best-effort: a failed read yields an empty history and a
failed write is logged and dropped, so search keeps working.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING

from roam.core.constants import LEGACY_RECENT_SEPARATOR, MAX_RECENT, RECENT_SEARCHES_KEY

if TYPE_CHECKING:
    from roam.application.interfaces.persistence import IPreferencesStore

logger = logging.getLogger(__name__)


def encode_recent(entries: list[str]) -> str:
    """Serialize entries as a JSON array (safe for any entry text)."""
    return json.dumps(entries, ensure_ascii=False)


def decode_recent(raw: str | None) -> list[str]:
    """Deserialize a stored value.

    Accepts the JSON array format, and the legacy ``a||b||c`` format for
    values written before entries were escaped. Blank entries are dropped.
    """
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        value = None
    if isinstance(value, list):
        entries = [entry for entry in value if isinstance(entry, str)]
    else:
        entries = raw.split(LEGACY_RECENT_SEPARATOR)
    return [entry.strip() for entry in entries if entry.strip()]


class RecentSearchStore:
    """Recent searches backed by an IPreferencesStore (injected)."""

    def __init__(
        self,
        preferences: "IPreferencesStore",
        key: str = RECENT_SEARCHES_KEY,
        max_recent: int = MAX_RECENT,
    ) -> None:
        self.preferences = preferences
        self.key = key
        self.max_recent = max_recent
        self._write_lock = asyncio.Lock()

    async def list(self) -> list[str]:
        """Return recent searches, most recent first (empty on read failure)."""
        try:
            return await self._read()
        except Exception:
            logger.exception("Recent searches read failed for key %s", self.key)
            return []

    async def record(self, text: str | None) -> None:
        """Move text to the front of the history, evicting the oldest beyond the bound.

        Blank text is ignored. Nothing is written when the history cannot be
        read, so a failed read never overwrites stored entries.
        """
        entry = (text or "").strip()
        if not entry:
            return
        async with self._write_lock:
            try:
                current = await self._read()
            except Exception:
                logger.exception("Recent search not recorded; read failed for key %s", self.key)
                return
            updated = [entry, *(existing for existing in current if existing != entry)]
            await self._save(updated[: self.max_recent])

    async def remove(self, text: str) -> None:
        """Delete text from the history by exact match; no-op if absent or unreadable."""
        async with self._write_lock:
            try:
                current = await self._read()
            except Exception:
                logger.exception("Recent search not removed; read failed for key %s", self.key)
                return
            if text not in current:
                return
            await self._save([existing for existing in current if existing != text])

    async def clear(self) -> None:
        """Remove all recent searches."""
        async with self._write_lock:
            await self._save([])

    async def _read(self) -> list[str]:
        raw = await self.preferences.get(self.key)
        return decode_recent(raw)[: self.max_recent]

    async def _save(self, entries: list[str]) -> None:
        try:
            await self.preferences.put(self.key, encode_recent(entries))
        except Exception:
            logger.exception("Recent searches write failed for key %s", self.key)
