"""Domain entities.

Pure domain models; no persistence or UI concerns. The search core only
reads them.
"""

from roam.domain.entities.calendar_event import CalendarEvent
from roam.domain.entities.journal_entry import JournalEntry
from roam.domain.entities.operation import Operation
from roam.domain.entities.task import Task
from roam.domain.entities.wiki import Wiki

__all__ = [
    "CalendarEvent",
    "JournalEntry",
    "Operation",
    "Task",
    "Wiki",
]
