"""Journal entry domain entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class JournalEntry:
    """Domain entity for a dated journal entry."""

    id: int
    title: str | None = None
    content: str | None = None
    date: date | None = None
    updated_at: datetime | None = None
