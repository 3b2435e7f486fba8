"""In-process implementation of VisaCacheStore."""

import json
from datetime import datetime, timedelta
from typing import Any

from visa_tracker.config import settings
from visa_tracker.entities import CacheEntryEntity


class InMemoryVisaCacheRepository:
    """Dictionary-backed visa cache for tests and single-process use.

    Payloads are kept as JSON text, as in Redis, so every read hands out
    a fresh copy equal to what was written.
    """

    def __init__(self, ttl: timedelta | None = None) -> None:
        self._ttl = ttl or timedelta(days=settings.visa_cache_ttl_days)
        self._entries: dict[tuple[str, str], tuple[str, datetime, datetime]] = {}

    async def get(self, passport_code: str, destination_code: str) -> CacheEntryEntity | None:
        stored = self._entries.get((passport_code, destination_code))
        if stored is None:
            return None

        payload_json, cached_at, expires_at = stored
        return CacheEntryEntity(
            passport_code=passport_code,
            destination_code=destination_code,
            response_data=json.loads(payload_json),
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
        expires_at = cached_at + self._ttl
        self._entries[(passport_code, destination_code)] = (
            json.dumps(payload),
            cached_at,
            expires_at,
        )
        return CacheEntryEntity(
            passport_code=passport_code,
            destination_code=destination_code,
            response_data=payload,
            cached_at=cached_at,
            expires_at=expires_at,
        )

    async def delete(self, passport_code: str, destination_code: str) -> bool:
        return self._entries.pop((passport_code, destination_code), None) is not None

    async def health_check(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def ttl(self) -> timedelta:
        return self._ttl
