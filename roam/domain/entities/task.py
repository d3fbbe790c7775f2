"""Task domain entity."""

from dataclasses import dataclass
from datetime import date, datetime

from roam.domain.enums import Priority, TaskStatus
from roam.domain.exceptions import ValidationException
from roam.shared.utils.datetime import ensure_utc, local_date


@dataclass
class Task:
    """Domain entity for a task.

    Naive due dates are local wall time; calendar days are local days.
    """

    id: int
    title: str
    description: str | None = None
    priority: Priority | None = None
    status: TaskStatus = TaskStatus.TODO
    due_date: datetime | None = None
    region: str | None = None
    operation_id: int | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate task rules. Raises ValidationException if invalid."""
        if not self.title or not self.title.strip():
            raise ValidationException("Task title is required", field="title")

    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE

    def is_due_on(self, day: date) -> bool:
        """Return True if the task is due on the given local calendar day."""
        due_day = local_date(self.due_date)
        return due_day is not None and due_day == day

    def is_due_between(self, start: datetime, end: datetime) -> bool:
        """Return True if due strictly after start and strictly before end."""
        due = ensure_utc(self.due_date)
        return due is not None and start < due < end

    def is_overdue(self, now: datetime) -> bool:
        """Return True if the due date has passed and the task is not done.

        Args:
            now: Reference time (timezone-aware UTC).
        """
        due = ensure_utc(self.due_date)
        return due is not None and due < now and not self.is_done()
