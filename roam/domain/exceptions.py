"""Domain exceptions for the Roam search core.

Defines domain-level exceptions independent of infrastructure concerns.
Search services catch provider and persistence failures and degrade
gracefully; these types make the failure source explicit in logs.
"""

from typing import Any


class RoamException(Exception):
    """Base exception for all Roam application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, entity_type).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(RoamException):
    """Raised when an entity or value fails domain validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ProviderException(RoamException):
    """Raised by an entity provider when its data cannot be listed."""

    def __init__(self, entity_type: str, message: str | None = None) -> None:
        """Initialize with the entity type whose provider failed.

        Args:
            entity_type: Entity type value (e.g. 'task', 'event').
            message: Optional description; a default is built from entity_type.
        """
        super().__init__(
            message or f"Provider for {entity_type} is unavailable",
            "PROVIDER_UNAVAILABLE",
            {"entity_type": entity_type},
        )


class PreferencesStoreException(RoamException):
    """Raised when the preferences backend cannot be read or written."""

    def __init__(self, key: str, operation: str, message: str | None = None) -> None:
        """Initialize with the key and operation that failed.

        Args:
            key: Preferences key being accessed.
            operation: 'get' or 'put'.
            message: Optional description of the underlying failure.
        """
        super().__init__(
            message or f"Preferences {operation} failed for key {key!r}",
            "PREFERENCES_UNAVAILABLE",
            {"key": key, "operation": operation},
        )
