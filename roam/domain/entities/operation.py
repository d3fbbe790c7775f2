"""Operation domain entity.

An operation groups tasks, wikis, and calendar events under one effort.
"""

from dataclasses import dataclass
from datetime import date, datetime

from roam.domain.enums import OperationStatus, Priority
from roam.domain.exceptions import ValidationException


@dataclass
class Operation:
    """Domain entity for an operation (read-only to the search core)."""

    id: int
    name: str
    purpose: str | None = None
    outcome: str | None = None
    status: OperationStatus = OperationStatus.ONGOING
    priority: Priority | None = None
    region: str | None = None
    due_date: date | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate operation rules. Raises ValidationException if invalid."""
        if not self.name or not self.name.strip():
            raise ValidationException("Operation name is required", field="name")

    def is_active(self) -> bool:
        """Return True unless the operation has ended."""
        return self.status != OperationStatus.END
