"""Pytest configuration and fixtures for roam-search.

Entity snapshots are built in memory; no Redis or other live service is
needed. All imports use roam.*.
"""

import time
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

import pytest

from roam.application.interfaces.providers import EntityProviders
from roam.core.config import get_settings
from roam.domain.entities import CalendarEvent, JournalEntry, Operation, Task, Wiki
from roam.domain.enums import OperationStatus, Priority, TaskStatus
from roam.domain.exceptions import ProviderException
from roam.infrastructure.preferences.in_memory import InMemoryPreferencesStore
from roam.infrastructure.providers.in_memory import InMemoryEntityProvider

# Fixed "now" for due-date tests: Wednesday 2025-01-15 12:00 UTC.
# Local time is pinned to UTC unless a test calls set_local_timezone.
NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


class FailingProvider:
    """Provider whose listing always fails (e.g. data-access error)."""

    def __init__(self, entity_type: str = "event") -> None:
        self.entity_type = entity_type
        self.calls = 0

    async def list_all(self) -> Sequence[object]:
        self.calls += 1
        raise ProviderException(self.entity_type)


def set_local_timezone(monkeypatch: pytest.MonkeyPatch, name: str) -> None:
    """Point the process local timezone (TZ) at name for one test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", name)
    time.tzset()


@pytest.fixture(autouse=True)
def _utc_local_time(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test with UTC as the local timezone, then restore TZ."""
    if hasattr(time, "tzset"):
        monkeypatch.setenv("TZ", "UTC")
        time.tzset()
    yield
    monkeypatch.undo()
    if hasattr(time, "tzset"):
        time.tzset()


@pytest.fixture(autouse=True)
def _fresh_settings() -> None:
    """Clear cached settings so env overrides in one test do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def operations() -> list[Operation]:
    return [
        Operation(
            id=1,
            name="Operation Alpha Bravo",
            purpose="Restore water points",
            status=OperationStatus.ONGOING,
            priority=Priority.HIGH,
            region="North",
        ),
        Operation(
            id=2,
            name="Rescue Alpha",
            purpose="Flood response",
            status=OperationStatus.IN_PROGRESS,
            priority=Priority.MEDIUM,
            region="North",
        ),
        Operation(
            id=3,
            name="Harvest Logistics",
            purpose="Grain transport",
            status=OperationStatus.END,
            priority=Priority.LOW,
            region="South",
        ),
    ]


@pytest.fixture
def tasks() -> list[Task]:
    return [
        Task(
            id=10,
            title="Daily standup",
            description="Sync with field team",
            priority=Priority.HIGH,
            due_date=NOW.replace(hour=16),
            region="North",
            operation_id=2,
        ),
        Task(
            id=11,
            title="Inspect water points",
            description="Check pumps",
            priority=Priority.MEDIUM,
            due_date=NOW + timedelta(days=1),
            region="North",
            operation_id=2,
        ),
        Task(
            id=12,
            title="File report",
            priority=Priority.LOW,
            due_date=NOW - timedelta(days=2),
            region="South",
            operation_id=3,
        ),
        Task(
            id=13,
            title="Archive photos",
            priority=Priority.LOW,
            status=TaskStatus.DONE,
            due_date=NOW - timedelta(days=3),
            operation_id=3,
        ),
        Task(id=14, title="Plan standup agenda", priority=Priority.HIGH),
    ]


@pytest.fixture
def wikis() -> list[Wiki]:
    return [
        Wiki(id=20, title="Water point survey", content="Pump locations", region="North", operation_id=2),
        Wiki(id=21, title="Meeting notes", content="Standup outcomes", operation_id=1),
    ]


@pytest.fixture
def events() -> list[CalendarEvent]:
    return [
        CalendarEvent(
            id=30,
            title="Standup",
            description="Morning sync",
            start=NOW,
            end=NOW + timedelta(minutes=15),
            region="North",
        ),
    ]


@pytest.fixture
def journals() -> list[JournalEntry]:
    return [JournalEntry(id=40, title="Day one", content="Arrived at the north camp")]


@pytest.fixture
def providers(
    operations: list[Operation],
    tasks: list[Task],
    wikis: list[Wiki],
    events: list[CalendarEvent],
    journals: list[JournalEntry],
) -> EntityProviders:
    """Providers over the sample snapshots (journals included)."""
    return EntityProviders(
        operations=InMemoryEntityProvider(operations),
        tasks=InMemoryEntityProvider(tasks),
        wikis=InMemoryEntityProvider(wikis),
        events=InMemoryEntityProvider(events),
        journals=InMemoryEntityProvider(journals),
    )


@pytest.fixture
def preferences() -> InMemoryPreferencesStore:
    return InMemoryPreferencesStore()
