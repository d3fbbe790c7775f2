"""Redis-backed preferences store.

Stores each preference as a plain Redis string under
``<prefix>:<key>`` (no TTL). Backend errors surface as
PreferencesStoreException so callers decide how to degrade.
"""

from __future__ import annotations

import logging

import redis.asyncio as redis

from roam.core.config import Settings, get_settings
from roam.core.constants import PREFERENCES_KEY_SEP
from roam.domain.exceptions import PreferencesStoreException

logger = logging.getLogger(__name__)


def preference_key(prefix: str, key: str) -> str:
    """Namespaced Redis key for a preference.

    Raises:
        ValueError: If key contains PREFERENCES_KEY_SEP.
    """
    if PREFERENCES_KEY_SEP in key:
        raise ValueError(
            f"Preference key {key!r} must not contain separator {PREFERENCES_KEY_SEP!r}"
        )
    return f"{prefix}{PREFERENCES_KEY_SEP}{key}" if prefix else key


class RedisPreferencesStore:
    """Async Redis IPreferencesStore.

    Call connect() at startup and disconnect() at shutdown. Operations
    retry once after a connection error by reconnecting.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self.prefix = self.settings.preferences_key_prefix
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish the Redis connection. Failure leaves the store unavailable."""
        if self.redis is not None:
            return
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=self.settings.redis_password.get_secret_value()
                if self.settings.redis_password
                else None,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis preferences connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Preferences unavailable.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close the Redis connection."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis preferences disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. Returns True if reconnected."""
        if self.redis is not None:
            try:
                await self.redis.aclose()
            except redis.RedisError:
                pass
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    async def get(self, key: str) -> str | None:
        """Return the stored value or None if the key is missing.

        Raises:
            PreferencesStoreException: If Redis is unavailable or errors.
        """
        redis_key = preference_key(self.prefix, key)
        if not self.is_available() or self.redis is None:
            raise PreferencesStoreException(key, "get", "Redis preferences unavailable")
        try:
            return await self.redis.get(redis_key)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            if await self._reconnect() and self.redis is not None:
                try:
                    return await self.redis.get(redis_key)
                except redis.RedisError as retry_error:
                    raise PreferencesStoreException(key, "get", str(retry_error)) from retry_error
            raise PreferencesStoreException(key, "get", str(e)) from e
        except redis.RedisError as e:
            raise PreferencesStoreException(key, "get", str(e)) from e

    async def put(self, key: str, value: str) -> None:
        """Store value under key.

        Raises:
            PreferencesStoreException: If Redis is unavailable or errors.
        """
        redis_key = preference_key(self.prefix, key)
        if not self.is_available() or self.redis is None:
            raise PreferencesStoreException(key, "put", "Redis preferences unavailable")
        try:
            await self.redis.set(redis_key, value)
            logger.debug("Preference SET: %s", redis_key)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            if await self._reconnect() and self.redis is not None:
                try:
                    await self.redis.set(redis_key, value)
                    return
                except redis.RedisError as retry_error:
                    raise PreferencesStoreException(key, "put", str(retry_error)) from retry_error
            raise PreferencesStoreException(key, "put", str(e)) from e
        except redis.RedisError as e:
            raise PreferencesStoreException(key, "put", str(e)) from e
