"""Redis implementation of VisaCacheStore.

Each entry is a hash at ``{prefix}:{PASSPORT}:{DESTINATION}``. The key
itself enforces uniqueness of the (passport, destination) pair, and
HSET on an existing key overwrites it, which gives upsert semantics.
"""

import json
from datetime import datetime, timedelta
from typing import Any

import redis.asyncio as redis

from visa_tracker.config import get_redis_client, settings
from visa_tracker.entities import CacheEntryEntity


class RedisVisaCacheRepository:
    """Redis-backed visa cache.

    This class satisfies the VisaCacheStore protocol through structural
    typing - no explicit inheritance needed.

    Stored fields:
    - response_data: the payload as JSON text
    - cached_at / expires_at: ISO 8601 timestamps

    The key also gets a Redis TTL equal to the cache TTL, so Redis drops
    entries on its own once they are stale.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
        ttl: timedelta | None = None,
    ) -> None:
        """Initialize the Redis visa cache repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
            key_prefix: Prefix for entry keys. Defaults to settings.
            ttl: Entry lifetime. Defaults to settings (30 days).
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.visa_cache_key_prefix
        self._ttl = ttl or timedelta(days=settings.visa_cache_ttl_days)

    @classmethod
    def create(
        cls,
        key_prefix: str | None = None,
        ttl: timedelta | None = None,
    ) -> "RedisVisaCacheRepository":
        """Factory method to create RedisVisaCacheRepository with defaults.

        Args:
            key_prefix: Key prefix. If None, uses settings.
            ttl: Entry lifetime. If None, uses settings.

        Returns:
            Configured RedisVisaCacheRepository
        """
        return cls(key_prefix=key_prefix, ttl=ttl)

    def _key(self, passport_code: str, destination_code: str) -> str:
        return f"{self._prefix}:{passport_code}:{destination_code}"

    async def get(self, passport_code: str, destination_code: str) -> CacheEntryEntity | None:
        """Read the entry for a key.

        Args:
            passport_code: Passport country code
            destination_code: Destination country code

        Returns:
            The stored entry, or None if absent or unreadable
        """
        raw = await self._client.hgetall(self._key(passport_code, destination_code))
        if not raw:
            return None

        try:
            response_data = json.loads(raw["response_data"])
            cached_at = datetime.fromisoformat(raw["cached_at"])
            expires_at = datetime.fromisoformat(raw["expires_at"])
        except (KeyError, ValueError):
            # A partially written or foreign hash is a miss; the next upsert replaces it
            return None

        return CacheEntryEntity(
            passport_code=passport_code,
            destination_code=destination_code,
            response_data=response_data,
            cached_at=cached_at,
            expires_at=expires_at,
        )

    async def upsert(
        self,
        passport_code: str,
        destination_code: str,
        payload: dict[str, Any],
        cached_at: datetime,
    ) -> CacheEntryEntity:
        """Insert or replace the entry for a key.

        Args:
            passport_code: Passport country code
            destination_code: Destination country code
            payload: Visa requirement payload
            cached_at: Fetch time

        Returns:
            The entry as stored
        """
        key = self._key(passport_code, destination_code)
        expires_at = cached_at + self._ttl

        pipe = self._client.pipeline()
        pipe.hset(
            key,
            mapping={
                "passport_code": passport_code,
                "destination_code": destination_code,
                "response_data": json.dumps(payload),
                "cached_at": cached_at.isoformat(),
                "expires_at": expires_at.isoformat(),
            },
        )
        pipe.expire(key, int(self._ttl.total_seconds()))
        await pipe.execute()

        return CacheEntryEntity(
            passport_code=passport_code,
            destination_code=destination_code,
            response_data=payload,
            cached_at=cached_at,
            expires_at=expires_at,
        )

    async def delete(self, passport_code: str, destination_code: str) -> bool:
        """Delete the entry for a key.

        Returns:
            True if deleted, False otherwise
        """
        result: int = await self._client.delete(self._key(passport_code, destination_code))
        return result > 0

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except Exception:
            return False

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
