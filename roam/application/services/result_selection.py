"""Keyboard-navigable selection over the flat list of search results."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from roam.application.dtos.search import SearchOutcome, SearchResultItem, SearchResults

if TYPE_CHECKING:
    from roam.application.services.recent_search_store import RecentSearchStore

logger = logging.getLogger(__name__)

NO_SELECTION = -1

SelectionListener = Callable[[int, "SearchResultItem[Any] | None"], None]


class ResultSelectionModel:
    """Single active selection with wraparound navigation.

    Holds the items of the latest published outcome in display order.
    Invariant: at most one item is selected and selected_index is either
    NO_SELECTION or a valid index into items.
    """

    def __init__(
        self,
        recent_searches: "RecentSearchStore | None" = None,
        on_selection_changed: SelectionListener | None = None,
    ) -> None:
        self.recent_searches = recent_searches
        self.on_selection_changed = on_selection_changed
        self._items: list[SearchResultItem[Any]] = []
        self._selected_index = NO_SELECTION
        self._query = ""

    @property
    def items(self) -> tuple[SearchResultItem[Any], ...]:
        return tuple(self._items)

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @property
    def selected_item(self) -> SearchResultItem[Any] | None:
        if self._selected_index == NO_SELECTION:
            return None
        return self._items[self._selected_index]

    @property
    def query(self) -> str:
        return self._query

    def reset(self, outcome: SearchOutcome, query: str | None = None) -> None:
        """Replace the item list with outcome's items and clear the selection.

        Args:
            outcome: Latest search outcome; sentinels yield an empty list.
            query: Raw query text (defaults to the outcome's query, if any).
        """
        for item in self._items:
            item.selected = False
        self._items = outcome.items() if isinstance(outcome, SearchResults) else []
        for item in self._items:
            item.selected = False
        if query is not None:
            self._query = query
        else:
            self._query = getattr(outcome, "query", "")
        self._set_selection(NO_SELECTION)

    def set_query(self, query: str) -> None:
        """Track the raw query text (typed but maybe not yet executed)."""
        self._query = query

    def navigate(self, delta: int) -> None:
        """Move the selection by delta with wraparound; no-op on an empty list.

        From no selection, +1 selects the first item and -1 the last.
        """
        count = len(self._items)
        if count == 0:
            return
        if self._selected_index == NO_SELECTION:
            start = -1 if delta > 0 else 0
        else:
            start = self._selected_index
            self._items[start].selected = False
        self._set_selection((start + delta + count) % count)

    def select(self, index: int) -> None:
        """Select the item at index (e.g. on hover or click)."""
        if not 0 <= index < len(self._items):
            raise IndexError(f"Selection index out of range: {index}")
        if self._selected_index != NO_SELECTION:
            self._items[self._selected_index].selected = False
        self._set_selection(index)

    def clear_selection(self) -> None:
        if self._selected_index != NO_SELECTION:
            self._items[self._selected_index].selected = False
        self._set_selection(NO_SELECTION)

    async def activate_selected(self) -> None:
        """Activate the selected item, or save the query when nothing is selected.

        Plain Enter with free text and no selection records the query as a
        recent search. With neither, this is a no-op.
        """
        item = self.selected_item
        if item is not None:
            if self.recent_searches is not None and self._query.strip():
                await self.recent_searches.record(self._query)
            try:
                item.activate()
            except Exception:
                logger.exception(
                    "Activation failed for %s %s", item.entity_type.value, item.entity_id
                )
            return
        if self._query.strip() and self.recent_searches is not None:
            await self.recent_searches.record(self._query)

    def _set_selection(self, index: int) -> None:
        self._selected_index = index
        item = None
        if index != NO_SELECTION:
            item = self._items[index]
            item.selected = True
        if self.on_selection_changed is None:
            return
        try:
            self.on_selection_changed(index, item)
        except Exception:
            logger.exception("Selection listener failed for index %s", index)
