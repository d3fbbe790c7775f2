"""Debounced, cancellable execution of search-as-you-type queries.

Each keystroke calls submit(). The previous pending unit of work (still
waiting out its debounce, or already executing) is cancelled, and a new
task sleeps for the debounce interval before running the query. Every
submission gets a generation number and only the latest generation is
published, so results land in submission order regardless of which
execution finishes first.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from roam.application.dtos.search import SearchOutcome
from roam.core.constants import SEARCH_DEBOUNCE_MS

if TYPE_CHECKING:
    from roam.application.interfaces.providers import EntityProviders
    from roam.application.services.result_selection import ResultSelectionModel
    from roam.application.use_cases.search import SearchOrchestrator

logger = logging.getLogger(__name__)

OutcomeListener = Callable[[str, SearchOutcome], None]


class SearchScheduler:
    """Restartable single-shot timer in front of SearchOrchestrator.execute.

    Must be used from within a running event loop.
    """

    def __init__(
        self,
        orchestrator: "SearchOrchestrator",
        providers: "EntityProviders",
        debounce_ms: int = SEARCH_DEBOUNCE_MS,
        selection: "ResultSelectionModel | None" = None,
        on_outcome: OutcomeListener | None = None,
    ) -> None:
        self.orchestrator = orchestrator
        self.providers = providers
        self.debounce_seconds = debounce_ms / 1000
        self.selection = selection
        self.on_outcome = on_outcome
        self._generation = 0
        self._latest_text = ""
        self._pending: asyncio.Task[SearchOutcome | None] | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        """True while a submitted query has not been published or dropped."""
        return self._pending is not None and not self._pending.done()

    def submit(self, text: str) -> None:
        """Restart the debounce timer for text, superseding any earlier submission."""
        self._generation += 1
        self._latest_text = text
        self._cancel_pending()
        if self.selection is not None:
            self.selection.set_query(text)
        self._pending = asyncio.create_task(
            self._run(text, self._generation, self.debounce_seconds)
        )

    async def flush(self) -> SearchOutcome | None:
        """Execute the latest submitted text now, skipping the remaining debounce."""
        self._generation += 1
        self._cancel_pending()
        self._pending = asyncio.create_task(
            self._run(self._latest_text, self._generation, 0)
        )
        return await self.wait()

    async def wait(self) -> SearchOutcome | None:
        """Wait for the pending submission; None if it was superseded or cancelled."""
        task = self._pending
        if task is None:
            return None
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if task.cancelled():
                return None
            raise

    def cancel(self) -> None:
        """Drop pending and in-flight work; nothing is published for it."""
        self._generation += 1
        self._cancel_pending()

    async def aclose(self) -> None:
        """Cancel outstanding work and wait for the task to finish unwinding."""
        task = self._pending
        self.cancel()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._pending = None

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()

    async def _run(
        self, text: str, generation: int, delay: float
    ) -> SearchOutcome | None:
        if delay > 0:
            await asyncio.sleep(delay)
        try:
            outcome = await self.orchestrator.execute(text, self.providers)
        except Exception:
            logger.exception("Search execution failed")
            return None
        if generation != self._generation:
            logger.debug("Discarding superseded search result (generation %d)", generation)
            return None
        if self.selection is not None:
            self.selection.reset(outcome, query=text)
        if self.on_outcome is not None:
            self.on_outcome(text, outcome)
        return outcome
