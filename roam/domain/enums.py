"""Domain enumerations for the Roam search core.

Enums represent fixed sets of domain values: searchable entity types,
filter tags parsed from queries, and entity attributes.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class EntityType(_ValuesMixin, str, Enum):
    """Searchable entity domains.

    JOURNAL is indexed by the document index but has no section in
    unified search results.
    """

    TASK = "task"
    WIKI = "wiki"
    OPERATION = "operation"
    EVENT = "event"
    JOURNAL = "journal"


class PriorityTag(_ValuesMixin, str, Enum):
    """Value of a priority: filter tag."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DueTag(_ValuesMixin, str, Enum):
    """Value of a due: filter tag."""

    TODAY = "today"
    TOMORROW = "tomorrow"
    WEEK = "week"
    OVERDUE = "overdue"


class Priority(_ValuesMixin, str, Enum):
    """Priority of a task or operation."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    def matches(self, tag: PriorityTag) -> bool:
        """Return True if this priority corresponds to the filter tag."""
        return self.value.lower() == tag.value


class TaskStatus(_ValuesMixin, str, Enum):
    """Task workflow status."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class OperationStatus(_ValuesMixin, str, Enum):
    """Operation lifecycle status."""

    ONGOING = "ONGOING"
    IN_PROGRESS = "IN_PROGRESS"
    END = "END"
