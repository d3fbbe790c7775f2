"""Wiki note domain entity."""

from dataclasses import dataclass
from datetime import datetime

from roam.domain.exceptions import ValidationException


@dataclass
class Wiki:
    """Domain entity for a wiki note."""

    id: int
    title: str
    content: str | None = None
    region: str | None = None
    operation_id: int | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.title is None:
            raise ValidationException("Wiki title is required", field="title")
