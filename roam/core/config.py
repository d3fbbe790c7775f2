"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Limits are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from roam.core.constants import (
    INDEX_MAX_RESULTS,
    MAX_QUERY_LENGTH,
    MAX_RECENT,
    MAX_RESULTS_PER_CATEGORY,
    RECENT_SEARCHES_KEY,
    SEARCH_DEBOUNCE_MS,
    SNIPPET_LENGTH,
)


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults; validate_limits_and_backend rejects
    non-positive limits and unknown preference backends.
    """

    # App
    app_name: str = "roam-search"
    app_version: str = "1.0.0"
    debug: bool = False

    # Search
    search_debounce_ms: int = SEARCH_DEBOUNCE_MS
    search_max_results_per_category: int = MAX_RESULTS_PER_CATEGORY
    search_max_query_length: int = MAX_QUERY_LENGTH

    # Recent searches
    recent_searches_max: int = MAX_RECENT
    recent_searches_key: str = RECENT_SEARCHES_KEY

    # Document index
    index_max_results: int = INDEX_MAX_RESULTS
    index_snippet_length: int = SNIPPET_LENGTH

    # Preferences: "memory" (process-local) or "redis"
    preferences_backend: str = "memory"
    preferences_key_prefix: str = "roam"

    # Redis (preferences_backend == "redis")
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits_and_backend(self) -> "Settings":
        """Validate numeric limits and the preferences backend.

        - Debounce may be zero (immediate execution) but not negative.
        - Result caps, query length, and recent-search bound must be positive.
        - preferences_backend must be 'memory' or 'redis'.
        """
        if self.search_debounce_ms < 0:
            raise ValueError("search_debounce_ms must not be negative")
        for name in (
            "search_max_results_per_category",
            "search_max_query_length",
            "recent_searches_max",
            "index_max_results",
            "index_snippet_length",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if not self.recent_searches_key:
            raise ValueError("recent_searches_key must not be empty")
        if self.preferences_backend not in ("memory", "redis"):
            raise ValueError(
                f"preferences_backend must be 'memory' or 'redis', got: {self.preferences_backend!r}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
