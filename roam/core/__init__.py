"""Core: config, constants, and composition root.

Single place for settings and shared constants.
"""

from roam.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
