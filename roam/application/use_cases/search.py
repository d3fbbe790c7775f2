"""Unified search use case: one query across operations, tasks, wikis, and events.

Parses filter tags, lists each entity provider concurrently, keeps
entities that fuzzy-match the free text and satisfy the structural
filters, caps each category, and assembles sections in fixed order.
Filters an entity type has no attribute for (due on wikis, priority on
events) pass through. A failing provider or payload factory costs only
its own category.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from roam.application.dtos.search import (
    INITIAL_STATE,
    NoResults,
    ResultSection,
    SearchFilters,
    SearchOutcome,
    SearchResultItem,
    SearchResults,
)
from roam.application.services.filter_parser import FilterParser
from roam.application.services.fuzzy_matcher import FuzzyMatcher
from roam.core.constants import MAX_RESULTS_PER_CATEGORY
from roam.domain.entities import CalendarEvent, Operation, Task, Wiki
from roam.domain.enums import DueTag, EntityType
from roam.shared.telemetry.tracing import add_span_attributes, traced
from roam.shared.utils.datetime import ensure_utc, to_local, utc_now

if TYPE_CHECKING:
    from roam.application.interfaces.providers import EntityProviders

logger = logging.getLogger(__name__)

SECTION_ORDER: tuple[EntityType, ...] = (
    EntityType.OPERATION,
    EntityType.TASK,
    EntityType.WIKI,
    EntityType.EVENT,
)
SECTION_TITLES: dict[EntityType, str] = {
    EntityType.OPERATION: "Operations",
    EntityType.TASK: "Tasks",
    EntityType.WIKI: "Wikis",
    EntityType.EVENT: "Events",
}

PayloadFactory = Callable[[EntityType, Any], Any]
ActivationHandler = Callable[[EntityType, Any], None]


def _entity_payload(entity_type: EntityType, entity: Any) -> Any:
    return entity


def _contains(value: str | None, expected: str) -> bool:
    return value is not None and expected.casefold() in value.casefold()


def task_matches_due(task: Task, due: DueTag | None, now: datetime) -> bool:
    """Apply due-date semantics; tasks without a due date never match a set filter.

    today and tomorrow compare local calendar days.
    """
    if due is None:
        return True
    if task.due_date is None:
        return False
    today = to_local(now).date()
    if due == DueTag.TODAY:
        return task.is_due_on(today)
    if due == DueTag.TOMORROW:
        return task.is_due_on(today + timedelta(days=1))
    if due == DueTag.WEEK:
        return task.is_due_between(now, now + timedelta(days=7))
    return task.is_overdue(now)


class SearchOrchestrator:
    """Execute unified search queries against entity providers.

    Stateless between executions: every call produces a fresh result list.
    payload_factory builds the opaque display payload of each item
    (default: the entity itself); on_activate receives (entity_type,
    entity) when an item is activated.
    """

    def __init__(
        self,
        parser: FilterParser | None = None,
        max_results_per_category: int = MAX_RESULTS_PER_CATEGORY,
        payload_factory: PayloadFactory | None = None,
        on_activate: ActivationHandler | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.parser = parser or FilterParser()
        self.max_results_per_category = max_results_per_category
        self.payload_factory = payload_factory or _entity_payload
        self.on_activate = on_activate
        self.clock = clock

    @traced("search.execute")
    async def execute(self, raw_query: str | None, providers: "EntityProviders") -> SearchOutcome:
        """Run one search and return sections, or the initial/no-results sentinel.

        Args:
            raw_query: Query as typed, filter tags included.
            providers: Entity providers to list.

        Returns:
            INITIAL_STATE for blank input or a bare query with nothing to
            search, NoResults(query) when every section is empty, otherwise
            SearchResults with non-empty sections in display order.
        """
        query = (raw_query or "").strip()
        if not query:
            return INITIAL_STATE
        filters = self.parser.parse(query)
        if not filters.clean_query and not filters.has_filters():
            return INITIAL_STATE

        entity_types = [t for t in SECTION_ORDER if filters.includes(t)]
        listed = await self._list_entities(entity_types, filters, providers)
        parent_ids = self._parent_operation_ids(filters, listed.get(EntityType.OPERATION))

        now = self._now()
        sections: list[ResultSection[Any]] = []
        for entity_type in entity_types:
            try:
                section = self._build_section(
                    entity_type, listed.get(entity_type) or (), filters, parent_ids, now
                )
            except Exception:
                logger.exception(
                    "Search section for %s failed; category omitted", entity_type.value
                )
                continue
            if section is not None:
                sections.append(section)

        add_span_attributes(sections=len(sections))
        if not sections:
            logger.debug("Search returned no results (types=%s)", [t.value for t in entity_types])
            return NoResults(query=query)
        return SearchResults(query=query, filters=filters, sections=tuple(sections))

    def _now(self) -> datetime:
        try:
            return ensure_utc(self.clock())
        except Exception:
            logger.exception("Search clock failed; using system time")
            return utc_now()

    def _build_section(
        self,
        entity_type: EntityType,
        entities: Sequence[Any],
        filters: SearchFilters,
        parent_ids: frozenset[int] | None,
        now: datetime,
    ) -> ResultSection[Any] | None:
        """Match, cap, and wrap one category; None when nothing matched."""
        matched = [
            entity
            for entity in entities
            if self._matches(entity_type, entity, filters, parent_ids, now)
        ][: self.max_results_per_category]
        if not matched:
            return None
        return ResultSection(
            entity_type=entity_type,
            title=SECTION_TITLES[entity_type],
            items=tuple(self._to_item(entity_type, entity) for entity in matched),
        )

    async def _list_entities(
        self,
        entity_types: list[EntityType],
        filters: SearchFilters,
        providers: "EntityProviders",
    ) -> dict[EntityType, Sequence[Any] | None]:
        """List every needed provider concurrently; failures map to None."""
        needed = list(entity_types)
        if filters.operation_filter is not None and EntityType.OPERATION not in needed:
            needed.append(EntityType.OPERATION)
        results = await asyncio.gather(
            *(self._list_one(entity_type, providers) for entity_type in needed)
        )
        return dict(zip(needed, results))

    @staticmethod
    async def _list_one(
        entity_type: EntityType, providers: "EntityProviders"
    ) -> Sequence[Any] | None:
        provider = providers.for_type(entity_type)
        if provider is None:
            return None
        try:
            return await provider.list_all()
        except Exception:
            logger.exception(
                "Search provider for %s failed; category omitted", entity_type.value
            )
            return None

    @staticmethod
    def _parent_operation_ids(
        filters: SearchFilters, operations: Sequence[Operation] | None
    ) -> frozenset[int] | None:
        """Ids of operations whose name contains the operation filter (None if unset)."""
        if filters.operation_filter is None:
            return None
        return frozenset(
            operation.id
            for operation in operations or ()
            if _contains(operation.name, filters.operation_filter)
        )

    def _matches(
        self,
        entity_type: EntityType,
        entity: Any,
        filters: SearchFilters,
        parent_ids: frozenset[int] | None,
        now: datetime,
    ) -> bool:
        term = filters.clean_query
        region = filters.region_filter
        if region is not None and not _contains(entity.region, region):
            return False

        # Priority applies to operations and tasks, due to tasks; others pass through.
        if entity_type == EntityType.OPERATION:
            operation: Operation = entity
            if parent_ids is not None and operation.id not in parent_ids:
                return False
            if filters.priority_filter is not None and not (
                operation.priority is not None
                and operation.priority.matches(filters.priority_filter)
            ):
                return False
            return FuzzyMatcher.matches_any((operation.name, operation.purpose), term)

        if parent_ids is not None and entity.operation_id not in parent_ids:
            return False

        if entity_type == EntityType.TASK:
            task: Task = entity
            if filters.priority_filter is not None and not (
                task.priority is not None and task.priority.matches(filters.priority_filter)
            ):
                return False
            if not task_matches_due(task, filters.due_filter, now):
                return False
            return FuzzyMatcher.matches_any((task.title, task.description), term)

        if entity_type == EntityType.WIKI:
            wiki: Wiki = entity
            return FuzzyMatcher.matches_any((wiki.title, wiki.content), term)

        event: CalendarEvent = entity
        return FuzzyMatcher.matches_any((event.title, event.description), term)

    def _to_item(self, entity_type: EntityType, entity: Any) -> SearchResultItem[Any]:
        def activate() -> None:
            if self.on_activate is not None:
                self.on_activate(entity_type, entity)

        return SearchResultItem(
            entity_type=entity_type,
            entity_id=entity.id,
            display_payload=self.payload_factory(entity_type, entity),
            activate=activate,
        )
