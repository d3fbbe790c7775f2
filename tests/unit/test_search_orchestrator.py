"""Tests for SearchOrchestrator (unified search execution)."""

from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from roam.application.dtos.search import INITIAL_STATE, NoResults, SearchResults
from roam.application.interfaces.providers import EntityProviders
from roam.application.use_cases.search import SearchOrchestrator
from roam.domain.entities import Task
from roam.domain.enums import EntityType
from roam.infrastructure.providers.in_memory import InMemoryEntityProvider
from tests.conftest import NOW, FailingProvider, set_local_timezone


@pytest.fixture
def orchestrator() -> SearchOrchestrator:
    return SearchOrchestrator(clock=lambda: NOW)


def _ids(outcome: SearchResults) -> dict[EntityType, list[int]]:
    return {
        section.entity_type: [item.entity_id for item in section.items]
        for section in outcome.sections
    }


class TestSearchOrchestratorOutcomes:
    """Sentinels, section order, and per-category cap."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   ", None])
    async def test_blank_query_is_initial_state(
        self, orchestrator: SearchOrchestrator, providers: EntityProviders, query: str | None
    ) -> None:
        assert await orchestrator.execute(query, providers) is INITIAL_STATE

    @pytest.mark.asyncio
    async def test_sections_in_fixed_order(
        self, orchestrator: SearchOrchestrator, providers: EntityProviders
    ) -> None:
        outcome = await orchestrator.execute("standup", providers)
        assert isinstance(outcome, SearchResults)
        assert [s.title for s in outcome.sections] == ["Tasks", "Wikis", "Events"]
        assert _ids(outcome) == {
            EntityType.TASK: [10, 14],
            EntityType.WIKI: [21],
            EntityType.EVENT: [30],
        }

    @pytest.mark.asyncio
    async def test_no_matches_is_no_results(
        self, orchestrator: SearchOrchestrator, providers: EntityProviders
    ) -> None:
        assert await orchestrator.execute("zzzz", providers) == NoResults(query="zzzz")

    @pytest.mark.asyncio
    async def test_each_category_capped_at_five(
        self, orchestrator: SearchOrchestrator, providers: EntityProviders
    ) -> None:
        many = [Task(id=100 + i, title=f"Survey site {i}") for i in range(8)]
        bundle = replace(providers, tasks=InMemoryEntityProvider(many))
        outcome = await orchestrator.execute("task: survey", bundle)
        assert isinstance(outcome, SearchResults)
        assert _ids(outcome) == {EntityType.TASK: [100, 101, 102, 103, 104]}

    @pytest.mark.asyncio
    async def test_failing_provider_omits_only_its_category(
        self, orchestrator: SearchOrchestrator, providers: EntityProviders
    ) -> None:
        failing = FailingProvider("event")
        bundle = replace(providers, events=failing)
        outcome = await orchestrator.execute("standup", bundle)
        assert isinstance(outcome, SearchResults)
        assert failing.calls == 1
        assert EntityType.EVENT not in _ids(outcome)
        assert _ids(outcome)[EntityType.TASK] == [10, 14]

    @pytest.mark.asyncio
    async def test_type_filter_limits_sections(
        self, orchestrator: SearchOrchestrator, providers: EntityProviders
    ) -> None:
        outcome = await orchestrator.execute("event: standup", providers)
        assert isinstance(outcome, SearchResults)
        assert _ids(outcome) == {EntityType.EVENT: [30]}


class TestSearchOrchestratorFilters:
    """Structural filters and which entity types they apply to."""

    @pytest.mark.asyncio
    async def test_priority_passes_through_wikis_and_events(
        self, orchestrator: SearchOrchestrator, providers: EntityProviders
    ) -> None:
        outcome = await orchestrator.execute("priority:high standup", providers)
        assert isinstance(outcome, SearchResults)
        assert _ids(outcome) == {
            EntityType.TASK: [10, 14],
            EntityType.WIKI: [21],
            EntityType.EVENT: [30],
        }

    @pytest.mark.asyncio
    async def test_priority_matches_operations(
        self, orchestrator: SearchOrchestrator, providers: EntityProviders
    ) -> None:
        outcome = await orchestrator.execute("operation: priority:low", providers)
        assert isinstance(outcome, SearchResults)
        assert _ids(outcome) == {EntityType.OPERATION: [3]}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("today", [10]),
            ("tomorrow", [11]),
            ("week", [10, 11]),
            ("overdue", [12]),
        ],
    )
    async def test_due_filters(
        self,
        orchestrator: SearchOrchestrator,
        providers: EntityProviders,
        tag: str,
        expected: list[int],
    ) -> None:
        outcome = await orchestrator.execute(f"task: due:{tag}", providers)
        assert isinstance(outcome, SearchResults)
        assert _ids(outcome) == {EntityType.TASK: expected}

    @pytest.mark.asyncio
    async def test_region_filter_is_case_insensitive(
        self, orchestrator: SearchOrchestrator, providers: EntityProviders
    ) -> None:
        outcome = await orchestrator.execute("region:SOUTH", providers)
        assert isinstance(outcome, SearchResults)
        assert _ids(outcome) == {EntityType.OPERATION: [3], EntityType.TASK: [12]}

    @pytest.mark.asyncio
    async def test_operation_filter_matches_parent_by_name(
        self, orchestrator: SearchOrchestrator, providers: EntityProviders
    ) -> None:
        outcome = await orchestrator.execute("operation:rescue", providers)
        assert isinstance(outcome, SearchResults)
        assert _ids(outcome) == {
            EntityType.OPERATION: [2],
            EntityType.TASK: [10, 11],
            EntityType.WIKI: [20],
        }

    @pytest.mark.asyncio
    async def test_operation_and_region_with_free_text(
        self, orchestrator: SearchOrchestrator, providers: EntityProviders
    ) -> None:
        outcome = await orchestrator.execute(
            "operation:Rescue Alpha region:north water points", providers
        )
        assert isinstance(outcome, SearchResults)
        assert _ids(outcome) == {EntityType.TASK: [11], EntityType.WIKI: [20]}
        assert outcome.filters.operation_filter == "Rescue Alpha"

    @pytest.mark.asyncio
    async def test_due_filter_passes_through_other_sections(
        self, orchestrator: SearchOrchestrator, providers: EntityProviders
    ) -> None:
        outcome = await orchestrator.execute("due:today standup", providers)
        assert isinstance(outcome, SearchResults)
        assert _ids(outcome) == {
            EntityType.TASK: [10],
            EntityType.WIKI: [21],
            EntityType.EVENT: [30],
        }


class TestSearchOrchestratorLocalTime:
    """Due filters compare naive due dates and the clock in one frame."""

    @pytest.mark.asyncio
    async def test_naive_due_in_an_hour_is_not_overdue(
        self, monkeypatch: pytest.MonkeyPatch, providers: EntityProviders
    ) -> None:
        set_local_timezone(monkeypatch, "PST8")
        task = Task(id=50, title="Refuel generator", due_date=datetime.now() + timedelta(hours=1))
        bundle = replace(providers, tasks=InMemoryEntityProvider([task]))
        orchestrator = SearchOrchestrator()
        assert isinstance(await orchestrator.execute("task: due:overdue", bundle), NoResults)
        outcome = await orchestrator.execute("task: due:week", bundle)
        assert isinstance(outcome, SearchResults)
        assert _ids(outcome) == {EntityType.TASK: [50]}

    @pytest.mark.asyncio
    async def test_today_is_the_local_calendar_day(
        self, monkeypatch: pytest.MonkeyPatch, providers: EntityProviders
    ) -> None:
        # NOW is 04:00 on 2025-01-15 in UTC-8.
        set_local_timezone(monkeypatch, "PST8")
        evening = Task(
            id=51, title="Evening briefing", due_date=datetime(2025, 1, 16, 2, tzinfo=UTC)
        )
        morning = Task(id=52, title="Morning convoy", due_date=datetime(2025, 1, 15, 5, 0))
        bundle = replace(providers, tasks=InMemoryEntityProvider([evening, morning]))
        orchestrator = SearchOrchestrator(clock=lambda: NOW)

        outcome = await orchestrator.execute("task: due:today", bundle)
        assert isinstance(outcome, SearchResults)
        assert _ids(outcome) == {EntityType.TASK: [51, 52]}
        assert isinstance(await orchestrator.execute("task: due:tomorrow", bundle), NoResults)
        assert isinstance(await orchestrator.execute("task: due:overdue", bundle), NoResults)



class TestSearchOrchestratorItems:
    """Display payload and activation callbacks."""

    @pytest.mark.asyncio
    async def test_payload_factory_and_activation(self, providers: EntityProviders) -> None:
        activated: list[tuple[EntityType, int]] = []
        orchestrator = SearchOrchestrator(
            payload_factory=lambda entity_type, entity: f"{entity_type.value}:{entity.id}",
            on_activate=lambda entity_type, entity: activated.append((entity_type, entity.id)),
            clock=lambda: NOW,
        )
        outcome = await orchestrator.execute("wiki: survey", providers)
        assert isinstance(outcome, SearchResults)
        item = outcome.items()[0]
        assert item.display_payload == "wiki:20"
        assert item.selected is False
        item.activate()
        assert activated == [(EntityType.WIKI, 20)]

    @pytest.mark.asyncio
    async def test_default_payload_is_entity(
        self, orchestrator: SearchOrchestrator, providers: EntityProviders
    ) -> None:
        outcome = await orchestrator.execute("event: standup", providers)
        assert isinstance(outcome, SearchResults)
        assert outcome.items()[0].display_payload.title == "Standup"

    @pytest.mark.asyncio
    async def test_failing_payload_factory_omits_only_its_category(
        self, providers: EntityProviders
    ) -> None:
        def payload(entity_type: EntityType, entity: object) -> object:
            if entity_type == EntityType.WIKI:
                raise RuntimeError("render")
            return entity

        orchestrator = SearchOrchestrator(payload_factory=payload, clock=lambda: NOW)
        outcome = await orchestrator.execute("standup", providers)
        assert isinstance(outcome, SearchResults)
        assert _ids(outcome) == {EntityType.TASK: [10, 14], EntityType.EVENT: [30]}

    @pytest.mark.asyncio
    async def test_failing_clock_falls_back_to_system_time(
        self, providers: EntityProviders
    ) -> None:
        def clock() -> datetime:
            raise RuntimeError("clock")

        outcome = await SearchOrchestrator(clock=clock).execute("standup", providers)
        assert isinstance(outcome, SearchResults)
        assert _ids(outcome)[EntityType.TASK] == [10, 14]
