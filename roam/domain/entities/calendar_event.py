"""Calendar event domain entity."""

from dataclasses import dataclass
from datetime import datetime

from roam.domain.exceptions import ValidationException
from roam.shared.utils.datetime import ensure_utc


@dataclass
class CalendarEvent:
    """Domain entity for a calendar event.

    Validation runs on construction: title is required and the end (when
    set) must not precede the start.
    """

    id: int
    title: str
    description: str | None = None
    location: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    region: str | None = None
    operation_id: int | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate event rules. Raises ValidationException if invalid."""
        if not self.title or not self.title.strip():
            raise ValidationException("Event title is required", field="title")
        start, end = ensure_utc(self.start), ensure_utc(self.end)
        if start is not None and end is not None and end < start:
            raise ValidationException("Event end must not precede start", field="end")
