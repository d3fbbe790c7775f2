"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from roam.domain.entities import CalendarEvent, JournalEntry, Operation, Task, Wiki
from roam.domain.enums import (
    DueTag,
    EntityType,
    OperationStatus,
    Priority,
    PriorityTag,
    TaskStatus,
)
from roam.domain.exceptions import (
    PreferencesStoreException,
    ProviderException,
    RoamException,
    ValidationException,
)

__all__ = [
    # Entities
    "CalendarEvent",
    "JournalEntry",
    "Operation",
    "Task",
    "Wiki",
    # Enums
    "DueTag",
    "EntityType",
    "OperationStatus",
    "Priority",
    "PriorityTag",
    "TaskStatus",
    # Exceptions
    "PreferencesStoreException",
    "ProviderException",
    "RoamException",
    "ValidationException",
]
