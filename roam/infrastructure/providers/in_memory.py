"""List-backed entity provider for wiring snapshots into the search core."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Generic, TypeVar

E = TypeVar("E")


class InMemoryEntityProvider(Generic[E]):
    """IEntityProvider over an in-memory snapshot, returned in insertion order."""

    def __init__(self, entities: Iterable[E] = ()) -> None:
        self._entities: tuple[E, ...] = tuple(entities)

    async def list_all(self) -> Sequence[E]:
        return self._entities

    def replace(self, entities: Iterable[E]) -> None:
        """Swap in a new snapshot (e.g. after the owning service reloads)."""
        self._entities = tuple(entities)
