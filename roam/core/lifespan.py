"""Search lifespan: startup and shutdown around one SearchEngine.

Single place for startup/shutdown wiring (SRP): logging, telemetry,
preferences backend connection, and the initial background index build.
No search logic here.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from roam.core.config import Settings, get_settings
from roam.core.container import SearchEngine, build_preferences_store, build_search_engine
from roam.infrastructure.preferences.redis_store import RedisPreferencesStore
from roam.shared.telemetry.logging import setup_logging

if TYPE_CHECKING:
    from roam.application.interfaces.providers import EntityProviders

logger = logging.getLogger(__name__)


@asynccontextmanager
async def search_lifespan(
    providers: "EntityProviders",
    settings: Settings | None = None,
    rebuild_index: bool = True,
    **engine_options: Any,
) -> AsyncIterator[SearchEngine]:
    """Start a SearchEngine, yield it, then shut everything down.

    Startup order: logging, telemetry (if enabled), preferences backend,
    engine, background index rebuild. Shutdown order: pending search,
    index rebuild task, preferences backend, telemetry.

    Args:
        providers: Entity providers for search and indexing.
        settings: Optional settings; defaults to get_settings().
        rebuild_index: Start a full index rebuild in the background.
        **engine_options: Passed to build_search_engine (callbacks, payload factory).
    """
    settings = settings or get_settings()

    # ---- Startup ----
    setup_logging(settings)

    if settings.telemetry_enabled:
        from roam.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument_logging()
        if settings.preferences_backend == "redis":
            telemetry.instrument_redis()
        set_telemetry(telemetry)
        logger.info("Telemetry initialized")

    preferences = engine_options.pop("preferences", None) or build_preferences_store(settings)
    if isinstance(preferences, RedisPreferencesStore):
        await preferences.connect()

    engine = build_search_engine(
        providers, settings=settings, preferences=preferences, **engine_options
    )
    rebuild_task = engine.index.start_rebuild(providers) if rebuild_index else None

    try:
        yield engine
    finally:
        # ---- Shutdown ----
        await engine.scheduler.aclose()

        if rebuild_task is not None and not rebuild_task.done():
            rebuild_task.cancel()
            try:
                await rebuild_task
            except asyncio.CancelledError:
                pass
            logger.info("Index rebuild task stopped")

        if isinstance(preferences, RedisPreferencesStore):
            await preferences.disconnect()

        from roam.shared.telemetry.telemetry import get_telemetry, set_telemetry

        telemetry_instance = get_telemetry()
        if telemetry_instance is not None:
            telemetry_instance.shutdown()
            set_telemetry(None)
