"""Application interfaces (ports): provider and persistence protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from roam.infrastructure.
"""

from roam.application.interfaces.persistence import IPreferencesStore
from roam.application.interfaces.providers import EntityProviders, IEntityProvider

__all__ = [
    "EntityProviders",
    "IEntityProvider",
    "IPreferencesStore",
]
