"""Fuzzy text predicate used by unified search and the document index."""

from __future__ import annotations

from collections.abc import Iterable


class FuzzyMatcher:
    """Boolean fuzzy matcher: exact substring first, ordered subsequence second.

    No scoring or gap penalty; result ordering is left to the caller.
    """

    @staticmethod
    def matches(haystack: str | None, needle: str | None) -> bool:
        """Return True if needle fuzzy-matches haystack (case-insensitive).

        An empty or absent needle matches everything, including an absent
        haystack. An absent haystack never matches a non-empty needle.

        Args:
            haystack: Field text to search in.
            needle: Free-text query.

        Returns:
            True on substring match or when every needle character occurs
            in haystack in the same relative order.
        """
        if not needle:
            return True
        if haystack is None:
            return False

        text = haystack.casefold()
        pattern = needle.casefold()
        if pattern in text:
            return True

        position = 0
        for char in text:
            if char == pattern[position]:
                position += 1
                if position == len(pattern):
                    return True
        return False

    @classmethod
    def matches_any(cls, fields: Iterable[str | None], needle: str | None) -> bool:
        """Return True if needle matches at least one of fields."""
        if not needle:
            return True
        return any(cls.matches(field, needle) for field in fields)
