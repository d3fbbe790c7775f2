"""Core constants: search limits, persistence keys, and shared literal values.

Single source of truth for defaults used by Settings and the search services.
"""

# Search orchestration
SEARCH_DEBOUNCE_MS = 150
MAX_RESULTS_PER_CATEGORY = 5
MAX_QUERY_LENGTH = 500

# Recent searches (preferences store)
MAX_RECENT = 5
RECENT_SEARCHES_KEY = "recentSearches"
# Separator used by the legacy flat-string format ("a||b||c"); read-only.
LEGACY_RECENT_SEPARATOR = "||"

# Document index
INDEX_MAX_RESULTS = 50
SNIPPET_LENGTH = 150
SNIPPET_ELLIPSIS = "..."

# Delimiter for composite preference keys (prefix:key)
PREFERENCES_KEY_SEP = ":"
