"""Application services: query parsing, matching, history, selection, index."""

from roam.application.services.filter_parser import FilterParser
from roam.application.services.fuzzy_matcher import FuzzyMatcher
from roam.application.services.index_maintainer import IndexMaintainer
from roam.application.services.recent_search_store import RecentSearchStore
from roam.application.services.result_selection import ResultSelectionModel

__all__ = [
    "FilterParser",
    "FuzzyMatcher",
    "IndexMaintainer",
    "RecentSearchStore",
    "ResultSelectionModel",
]
