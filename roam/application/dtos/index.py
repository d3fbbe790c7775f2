"""DTOs for the in-memory document index (denormalized entity snapshots)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

from roam.domain.enums import EntityType


@dataclass(frozen=True)
class IndexedDocument:
    """Denormalized, searchable snapshot of one entity.

    Identity is (entity_type, id). extra_fields holds string-valued
    attributes used for structural filtering (region, priority, status...).
    """

    id: int
    entity_type: EntityType
    title: str
    body: str
    updated_at: datetime | None = None
    extra_fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "extra_fields", MappingProxyType(dict(self.extra_fields))
        )

    @property
    def key(self) -> tuple[EntityType, int]:
        return (self.entity_type, self.id)


@dataclass(frozen=True)
class DocumentFilter:
    """Structural constraints for querying the document index.

    Unset fields do not constrain. Text fields compare case-insensitively.
    """

    types: frozenset[EntityType] | None = None
    region: str | None = None
    operation_id: int | None = None
    priority: str | None = None
    status: str | None = None
    max_results: int | None = None


@dataclass(frozen=True)
class DocumentHit:
    """Index query hit with a display snippet of the body."""

    document: IndexedDocument
    snippet: str
