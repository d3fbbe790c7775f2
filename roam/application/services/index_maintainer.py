"""In-memory document index over all entity domains.

Documents are denormalized snapshots keyed by (entity_type, id). The
document map is copy-on-write: writers build a new dict and swap the
reference under a lock, readers work on whatever map was current when
they started, so a query never observes a half-cleared or half-filled
index. Bulk rebuild is the only bulk removal; stale entries are fixed by
rebuilding again.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, Any

from roam.application.dtos.index import DocumentFilter, DocumentHit, IndexedDocument
from roam.application.services.fuzzy_matcher import FuzzyMatcher
from roam.core.constants import INDEX_MAX_RESULTS, SNIPPET_ELLIPSIS, SNIPPET_LENGTH
from roam.domain.entities import CalendarEvent, JournalEntry, Operation, Task, Wiki
from roam.domain.enums import EntityType
from roam.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from roam.application.interfaces.providers import EntityProviders

logger = logging.getLogger(__name__)

DocumentKey = tuple[EntityType, int]


def _join(*parts: str | None) -> str:
    return " ".join(part for part in parts if part)


def _extra(**values: Any) -> dict[str, str]:
    """Stringify present values; enums use their value, datetimes ISO format."""
    fields: dict[str, str] = {}
    for name, value in values.items():
        if value is None or value == "":
            continue
        if hasattr(value, "isoformat"):
            fields[name] = value.isoformat()
        else:
            fields[name] = str(getattr(value, "value", value))
    return fields


def document_from_operation(operation: Operation) -> IndexedDocument:
    return IndexedDocument(
        id=operation.id,
        entity_type=EntityType.OPERATION,
        title=operation.name,
        body=_join(operation.purpose, operation.outcome),
        updated_at=operation.updated_at,
        extra_fields=_extra(
            status=operation.status,
            priority=operation.priority,
            region=operation.region,
            due_date=operation.due_date,
        ),
    )


def document_from_task(task: Task) -> IndexedDocument:
    return IndexedDocument(
        id=task.id,
        entity_type=EntityType.TASK,
        title=task.title,
        body=task.description or "",
        updated_at=task.updated_at,
        extra_fields=_extra(
            priority=task.priority,
            status=task.status,
            region=task.region,
            operation_id=task.operation_id,
            due_date=task.due_date,
        ),
    )


def document_from_wiki(wiki: Wiki) -> IndexedDocument:
    return IndexedDocument(
        id=wiki.id,
        entity_type=EntityType.WIKI,
        title=wiki.title,
        body=wiki.content or "",
        updated_at=wiki.updated_at,
        extra_fields=_extra(region=wiki.region, operation_id=wiki.operation_id),
    )


def document_from_event(event: CalendarEvent) -> IndexedDocument:
    return IndexedDocument(
        id=event.id,
        entity_type=EntityType.EVENT,
        title=event.title,
        body=_join(event.description, event.location),
        updated_at=event.updated_at,
        extra_fields=_extra(
            location=event.location,
            start=event.start,
            end=event.end,
            region=event.region,
            operation_id=event.operation_id,
        ),
    )


def document_from_journal(entry: JournalEntry) -> IndexedDocument:
    return IndexedDocument(
        id=entry.id,
        entity_type=EntityType.JOURNAL,
        title=entry.title or "",
        body=entry.content or "",
        updated_at=entry.updated_at,
        extra_fields=_extra(date=entry.date),
    )


CONVERTERS: dict[EntityType, Callable[[Any], IndexedDocument]] = {
    EntityType.OPERATION: document_from_operation,
    EntityType.TASK: document_from_task,
    EntityType.WIKI: document_from_wiki,
    EntityType.EVENT: document_from_event,
    EntityType.JOURNAL: document_from_journal,
}


def make_snippet(body: str, length: int = SNIPPET_LENGTH) -> str:
    """Return the first length characters of body, with an ellipsis if cut."""
    if len(body) > length:
        return body[:length] + SNIPPET_ELLIPSIS
    return body


def _field_equals(document: IndexedDocument, name: str, expected: str | None) -> bool:
    if expected is None:
        return True
    actual = document.extra_fields.get(name)
    return actual is not None and actual.casefold() == expected.casefold()


def _passes(document: IndexedDocument, document_filter: DocumentFilter) -> bool:
    if document_filter.types is not None and document.entity_type not in document_filter.types:
        return False
    if document_filter.operation_id is not None and document.extra_fields.get(
        "operation_id"
    ) != str(document_filter.operation_id):
        return False
    return (
        _field_equals(document, "region", document_filter.region)
        and _field_equals(document, "priority", document_filter.priority)
        and _field_equals(document, "status", document_filter.status)
    )


class IndexMaintainer:
    """Owns the searchable document store: upsert, delete, rebuild, query.

    A rebuild swaps in its own map, so writes made while rebuild_all is
    listing providers are replaced by what the providers returned.
    """

    def __init__(
        self,
        max_results: int = INDEX_MAX_RESULTS,
        snippet_length: int = SNIPPET_LENGTH,
    ) -> None:
        self.max_results = max_results
        self.snippet_length = snippet_length
        self._documents: dict[DocumentKey, IndexedDocument] = {}
        self._swap_lock = threading.Lock()
        self._rebuild_lock = asyncio.Lock()
        self._rebuild_task: asyncio.Task[int] | None = None

    def __len__(self) -> int:
        return len(self._documents)

    def snapshot(self) -> tuple[IndexedDocument, ...]:
        """Return a consistent, read-only view of all indexed documents."""
        return tuple(self._documents.values())

    def get(self, entity_type: EntityType, entity_id: int) -> IndexedDocument | None:
        return self._documents.get((entity_type, entity_id))

    def clear(self) -> None:
        """Remove every document."""
        with self._swap_lock:
            self._documents = {}
        logger.info("Search index cleared")

    def index_document(self, document: IndexedDocument) -> None:
        """Insert document, replacing any existing one with the same (type, id)."""
        with self._swap_lock:
            updated = dict(self._documents)
            updated[document.key] = document
            self._documents = updated
        logger.debug("Indexed %s %s", document.entity_type.value, document.id)

    def index_entity(self, entity_type: EntityType, entity: Any) -> IndexedDocument:
        """Convert entity (on save) to a document and upsert it."""
        document = CONVERTERS[entity_type](entity)
        self.index_document(document)
        return document

    def delete_document(self, entity_type: EntityType, entity_id: int) -> bool:
        """Remove one document. Returns True if it was present."""
        with self._swap_lock:
            if (entity_type, entity_id) not in self._documents:
                return False
            updated = dict(self._documents)
            del updated[(entity_type, entity_id)]
            self._documents = updated
        logger.debug("Removed %s %s from index", entity_type.value, entity_id)
        return True

    @traced("index.rebuild_all")
    async def rebuild_all(self, providers: "EntityProviders") -> int:
        """Clear the index and re-populate it from every provider.

        The new map is built completely before it replaces the old one.
        A failing provider is logged and skipped.

        Args:
            providers: Entity providers; journals are indexed when present.

        Returns:
            Number of documents indexed.
        """
        async with self._rebuild_lock:
            rebuilt: dict[DocumentKey, IndexedDocument] = {}
            for entity_type, convert in CONVERTERS.items():
                provider = providers.for_type(entity_type)
                if provider is None:
                    continue
                try:
                    entities: Sequence[Any] = await provider.list_all()
                except Exception:
                    logger.exception(
                        "Index rebuild: listing %s failed; skipped", entity_type.value
                    )
                    continue
                for entity in entities:
                    document = convert(entity)
                    rebuilt[document.key] = document
            with self._swap_lock:
                self._documents = rebuilt
            add_span_attributes(count=len(rebuilt))
            logger.info("Search index rebuilt: %d documents", len(rebuilt))
            return len(rebuilt)

    def start_rebuild(self, providers: "EntityProviders") -> asyncio.Task[int]:
        """Run rebuild_all as a background task, separate from query execution.

        A rebuild already in progress is returned instead of starting another.
        """
        if self._rebuild_task is not None and not self._rebuild_task.done():
            return self._rebuild_task
        self._rebuild_task = asyncio.create_task(self.rebuild_all(providers))
        return self._rebuild_task

    def search(
        self,
        query: str,
        document_filter: DocumentFilter | None = None,
    ) -> list[DocumentHit]:
        """Return documents whose title or body fuzzy-matches query, in index order.

        Args:
            query: Free text; blank queries return no hits.
            document_filter: Optional structural constraints and result cap.

        Returns:
            Up to max_results hits with body snippets.
        """
        needle = (query or "").strip()
        if not needle:
            return []
        document_filter = document_filter or DocumentFilter()
        limit = document_filter.max_results or self.max_results
        hits: list[DocumentHit] = []
        for document in self._matching(self.snapshot(), needle, document_filter):
            hits.append(DocumentHit(document, make_snippet(document.body, self.snippet_length)))
            if len(hits) >= limit:
                break
        return hits

    @staticmethod
    def _matching(
        documents: Iterable[IndexedDocument],
        needle: str,
        document_filter: DocumentFilter,
    ) -> Iterable[IndexedDocument]:
        for document in documents:
            if _passes(document, document_filter) and FuzzyMatcher.matches_any(
                (document.title, document.body), needle
            ):
                yield document
