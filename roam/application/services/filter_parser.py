"""Query filter DSL parser.

Extracts key:value filter tags from a raw search query and returns the
structured filters plus the leftover free text. Parsing is lenient: text
that is not a recognized tag stays in the clean query, nothing raises.

Tags are matched case-insensitively in a fixed order, each removed from
the query before the next pattern runs:

    task: | wiki: | operation: | event:   type filter (query prefix only)
    operation:<value>                     parent operation name
    priority:high|medium|low
    due:today|tomorrow|week|overdue
    region:<value>

Free-form values are word characters and spaces. A value may be double
quoted; unquoted, it spans several words only when another tag follows
(``operation:Rescue Alpha region:north``), otherwise it is one word.
"""

from __future__ import annotations

import logging
import re
from typing import ClassVar

from roam.application.dtos.search import SearchFilters
from roam.core.constants import MAX_QUERY_LENGTH
from roam.domain.enums import DueTag, EntityType, PriorityTag

logger = logging.getLogger(__name__)

_FILTER_KEYS = r"(?:operation|priority|due|region)"


def _free_value_pattern(key: str) -> re.Pattern[str]:
    """Build the pattern for a key with a free-form (multi-word) value."""
    return re.compile(
        rf"(?<!\w){key}:"
        r'(?:"(?P<quoted>[^"]+)"'
        rf"|(?P<multi>[\w\s]+?)(?=\s+{_FILTER_KEYS}:)"
        r"|(?P<single>\w+))",
        re.IGNORECASE,
    )


def _strip_first(text: str, match: re.Match[str]) -> str:
    """Remove the matched span from text."""
    return f"{text[: match.start()]} {text[match.end():]}"


def _normalize_space(text: str) -> str:
    return " ".join(text.split())


class FilterParser:
    """Parse raw query strings into SearchFilters.

    Stateless; one instance can be shared. max_length bounds the input
    (longer queries are truncated before parsing).
    """

    TYPE_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^\s*(task|wiki|event|operation(?=:(?:\s|$))):",
        re.IGNORECASE,
    )
    OPERATION_PATTERN: ClassVar[re.Pattern[str]] = _free_value_pattern("operation")
    PRIORITY_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"(?<!\w)priority:(high|medium|low)\b", re.IGNORECASE
    )
    DUE_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"(?<!\w)due:(today|tomorrow|week|overdue)\b", re.IGNORECASE
    )
    REGION_PATTERN: ClassVar[re.Pattern[str]] = _free_value_pattern("region")

    def __init__(self, max_length: int = MAX_QUERY_LENGTH) -> None:
        self.max_length = max_length

    def parse(self, raw: str | None) -> SearchFilters:
        """Extract filter tags from raw and return filters plus clean query.

        Args:
            raw: Query as typed by the user (None is treated as empty).

        Returns:
            SearchFilters with enum-typed values; unset filters are None.
        """
        text = raw or ""
        if len(text) > self.max_length:
            logger.debug(
                "Search query truncated from %d to %d characters",
                len(text),
                self.max_length,
            )
            text = text[: self.max_length]

        type_filter: EntityType | None = None
        match = self.TYPE_PATTERN.search(text)
        if match:
            type_filter = EntityType(match.group(1).lower())
            text = _strip_first(text, match)

        operation_filter, text = self._take_free_value(self.OPERATION_PATTERN, text)

        priority_filter: PriorityTag | None = None
        match = self.PRIORITY_PATTERN.search(text)
        if match:
            priority_filter = PriorityTag(match.group(1).lower())
            text = _strip_first(text, match)

        due_filter: DueTag | None = None
        match = self.DUE_PATTERN.search(text)
        if match:
            due_filter = DueTag(match.group(1).lower())
            text = _strip_first(text, match)

        region_filter, text = self._take_free_value(self.REGION_PATTERN, text)

        return SearchFilters(
            type_filter=type_filter,
            operation_filter=operation_filter,
            priority_filter=priority_filter,
            due_filter=due_filter,
            region_filter=region_filter,
            clean_query=_normalize_space(text),
        )

    @staticmethod
    def _take_free_value(
        pattern: re.Pattern[str], text: str
    ) -> tuple[str | None, str]:
        """Match a free-form tag; return (trimmed value or None, remaining text)."""
        match = pattern.search(text)
        if not match:
            return None, text
        value = match.group("quoted") or match.group("multi") or match.group("single")
        value = _normalize_space(value or "")
        return (value or None), _strip_first(text, match)
