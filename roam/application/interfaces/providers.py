"""Entity provider interfaces (ports) for the application layer.

Providers are read-only collaborators owned by the rest of the
application (persistence mapping, services). The search core only lists
them; it never mutates entity state.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeVar

from roam.domain.enums import EntityType

if TYPE_CHECKING:
    from roam.domain.entities import (
        CalendarEvent,
        JournalEntry,
        Operation,
        Task,
        Wiki,
    )

E_co = TypeVar("E_co", covariant=True)


class IEntityProvider(Protocol[E_co]):
    """Protocol for listing a snapshot of one entity collection (DIP)."""

    async def list_all(self) -> Sequence[E_co]:
        """Return all entities in natural (provider-defined) order."""
        ...


@dataclass(frozen=True)
class EntityProviders:
    """Provider bundle handed to search execution and index rebuilds.

    journals is optional: journal entries are indexed but never shown as
    a unified-search section.
    """

    operations: IEntityProvider[Operation]
    tasks: IEntityProvider[Task]
    wikis: IEntityProvider[Wiki]
    events: IEntityProvider[CalendarEvent]
    journals: IEntityProvider[JournalEntry] | None = None

    def for_type(self, entity_type: EntityType) -> IEntityProvider | None:
        """Return the provider for entity_type (None if not configured)."""
        return {
            EntityType.OPERATION: self.operations,
            EntityType.TASK: self.tasks,
            EntityType.WIKI: self.wikis,
            EntityType.EVENT: self.events,
            EntityType.JOURNAL: self.journals,
        }[entity_type]
