"""DTOs for unified search: parsed filters, result items, and outcomes.

No dependency on any render framework; display payloads are opaque.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

from roam.domain.enums import DueTag, EntityType, PriorityTag

T = TypeVar("T")


@dataclass(frozen=True)
class SearchFilters:
    """Structured filters extracted from a raw query plus the leftover free text."""

    type_filter: EntityType | None = None
    operation_filter: str | None = None
    priority_filter: PriorityTag | None = None
    due_filter: DueTag | None = None
    region_filter: str | None = None
    clean_query: str = ""

    def has_filters(self) -> bool:
        """Return True if any structural or type filter is set."""
        return any(
            value is not None
            for value in (
                self.type_filter,
                self.operation_filter,
                self.priority_filter,
                self.due_filter,
                self.region_filter,
            )
        )

    def includes(self, entity_type: EntityType) -> bool:
        """Return True if entity_type is not excluded by the type filter."""
        return self.type_filter is None or self.type_filter == entity_type


@dataclass(eq=False)
class SearchResultItem(Generic[T]):
    """Single hit in a result section (created per execution, never persisted)."""

    entity_type: EntityType
    entity_id: int
    display_payload: T
    activate: Callable[[], None]
    selected: bool = False


@dataclass(frozen=True)
class ResultSection(Generic[T]):
    """Named, capped group of results for one entity type."""

    entity_type: EntityType
    title: str
    items: tuple[SearchResultItem[T], ...]


@dataclass(frozen=True)
class InitialState:
    """Empty query: caller shows recent searches and quick actions."""


@dataclass(frozen=True)
class NoResults:
    """Query ran but every section was empty."""

    query: str


@dataclass(frozen=True)
class SearchResults(Generic[T]):
    """Non-empty sections in display order."""

    query: str
    filters: SearchFilters
    sections: tuple[ResultSection[T], ...] = field(default_factory=tuple)

    def items(self) -> list[SearchResultItem[T]]:
        """Return all items across sections in display order."""
        return [item for section in self.sections for item in section.items]


SearchOutcome = Union[InitialState, NoResults, SearchResults]

INITIAL_STATE = InitialState()
