"""Use cases: unified search execution and its debounced scheduler."""

from roam.application.use_cases.search import SearchOrchestrator
from roam.application.use_cases.search_scheduler import SearchScheduler

__all__ = ["SearchOrchestrator", "SearchScheduler"]
