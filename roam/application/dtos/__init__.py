"""Application DTOs (no dependency on UI or persistence)."""

from roam.application.dtos.index import DocumentFilter, DocumentHit, IndexedDocument
from roam.application.dtos.search import (
    INITIAL_STATE,
    InitialState,
    NoResults,
    ResultSection,
    SearchFilters,
    SearchOutcome,
    SearchResultItem,
    SearchResults,
)

__all__ = [
    "DocumentFilter",
    "DocumentHit",
    "INITIAL_STATE",
    "IndexedDocument",
    "InitialState",
    "NoResults",
    "ResultSection",
    "SearchFilters",
    "SearchOutcome",
    "SearchResultItem",
    "SearchResults",
]
