"""Entity providers implemented by infrastructure."""

from roam.infrastructure.providers.in_memory import InMemoryEntityProvider

__all__ = ["InMemoryEntityProvider"]
