"""Composition root: wires settings, preferences, and search services.

Single place where concrete infrastructure is chosen (SRP). The UI layer
builds one SearchEngine per search surface and feeds it keystrokes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from roam.application.services.filter_parser import FilterParser
from roam.application.services.index_maintainer import IndexMaintainer
from roam.application.services.recent_search_store import RecentSearchStore
from roam.application.services.result_selection import ResultSelectionModel, SelectionListener
from roam.application.use_cases.search import (
    ActivationHandler,
    PayloadFactory,
    SearchOrchestrator,
)
from roam.application.use_cases.search_scheduler import OutcomeListener, SearchScheduler
from roam.core.config import Settings, get_settings
from roam.infrastructure.preferences.in_memory import InMemoryPreferencesStore
from roam.infrastructure.preferences.redis_store import RedisPreferencesStore

if TYPE_CHECKING:
    from roam.application.interfaces.persistence import IPreferencesStore
    from roam.application.interfaces.providers import EntityProviders

logger = logging.getLogger(__name__)


def build_preferences_store(settings: Settings | None = None) -> "IPreferencesStore":
    """Return the preferences backend named by settings.preferences_backend.

    A Redis store is returned unconnected; await its connect() at startup.
    """
    settings = settings or get_settings()
    if settings.preferences_backend == "redis":
        return RedisPreferencesStore(settings=settings)
    return InMemoryPreferencesStore()


@dataclass
class SearchEngine:
    """All search components for one search surface, already wired together."""

    providers: "EntityProviders"
    parser: FilterParser
    orchestrator: SearchOrchestrator
    recent_searches: RecentSearchStore
    selection: ResultSelectionModel
    scheduler: SearchScheduler
    index: IndexMaintainer

    async def on_key(self, key: str) -> None:
        """Handle a navigation key from the UI: Up, Down, Enter, or Escape."""
        if key == "Down":
            self.selection.navigate(1)
        elif key == "Up":
            self.selection.navigate(-1)
        elif key == "Enter":
            await self.selection.activate_selected()
        elif key == "Escape":
            await self.scheduler.aclose()
            self.selection.clear_selection()


def build_search_engine(
    providers: "EntityProviders",
    settings: Settings | None = None,
    preferences: "IPreferencesStore | None" = None,
    payload_factory: PayloadFactory | None = None,
    on_activate: ActivationHandler | None = None,
    on_outcome: OutcomeListener | None = None,
    on_selection_changed: SelectionListener | None = None,
    index: IndexMaintainer | None = None,
) -> SearchEngine:
    """Build a SearchEngine from settings and injected collaborators.

    Construction does not need a running event loop; scheduler.submit does.
    """
    settings = settings or get_settings()
    preferences = preferences or build_preferences_store(settings)
    parser = FilterParser(max_length=settings.search_max_query_length)
    orchestrator = SearchOrchestrator(
        parser=parser,
        max_results_per_category=settings.search_max_results_per_category,
        payload_factory=payload_factory,
        on_activate=on_activate,
    )
    recent_searches = RecentSearchStore(
        preferences,
        key=settings.recent_searches_key,
        max_recent=settings.recent_searches_max,
    )
    selection = ResultSelectionModel(
        recent_searches=recent_searches,
        on_selection_changed=on_selection_changed,
    )
    scheduler = SearchScheduler(
        orchestrator,
        providers,
        debounce_ms=settings.search_debounce_ms,
        selection=selection,
        on_outcome=on_outcome,
    )
    if index is None:
        index = IndexMaintainer(
            max_results=settings.index_max_results,
            snippet_length=settings.index_snippet_length,
        )
    logger.debug(
        "Search engine built (preferences=%s, debounce=%sms)",
        type(preferences).__name__,
        settings.search_debounce_ms,
    )
    return SearchEngine(
        providers=providers,
        parser=parser,
        orchestrator=orchestrator,
        recent_searches=recent_searches,
        selection=selection,
        scheduler=scheduler,
        index=index,
    )
