"""Shared helpers with no domain knowledge."""

from roam.shared.utils.datetime import ensure_utc, local_date, to_local, utc_now

__all__ = ["ensure_utc", "local_date", "to_local", "utc_now"]
