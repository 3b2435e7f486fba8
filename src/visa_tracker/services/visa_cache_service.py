"""Visa cache service: cached visa requirement lookups.

This service orchestrates a lookup by coordinating the cache store
(data access) and the visa lookup client (external API).
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from visa_tracker.countries import get_country_code
from visa_tracker.entities import VisaCheckResult
from visa_tracker.protocols import VisaCacheStore, VisaLookupClient

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class VisaCacheService:
    """Cache-or-fetch orchestration for visa requirements.

    This service depends on PROTOCOLS, not concrete implementations:
    - VisaCacheStore: can be Redis, in-memory, a SQL table, etc.
    - VisaLookupClient: RapidAPI or any other source of visa rules

    There is no locking. Two concurrent misses for the same pair may
    both call the API and both upsert; the store keeps the last write,
    and both payloads describe the same rules.

    Example:
        ```python
        from visa_tracker.services import VisaCacheService

        service = VisaCacheService.create(
            store=RedisVisaCacheRepository.create(),
            lookup_client=RapidApiVisaClient.create(),
        )
        result = await service.check("United States", "France")
        ```
    """

    def __init__(
        self,
        store: VisaCacheStore,
        lookup_client: VisaLookupClient,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the visa cache service.

        Args:
            store: Cache storage backend (required).
            lookup_client: Visa requirement source (required).
            clock: Returns the current time (timezone-aware). Defaults to UTC now.
        """
        self._store = store
        self._lookup = lookup_client
        self._clock = clock or utc_now

    @classmethod
    def create(
        cls,
        store: VisaCacheStore,
        lookup_client: VisaLookupClient,
        clock: Callable[[], datetime] | None = None,
    ) -> "VisaCacheService":
        """Factory method to create VisaCacheService.

        Args:
            store: Cache storage backend (required).
            lookup_client: Visa requirement source (required).
            clock: Optional time source.

        Returns:
            Configured VisaCacheService instance
        """
        return cls(store=store, lookup_client=lookup_client, clock=clock)

    async def check(self, passport_country: str, destination_country: str) -> VisaCheckResult:
        """Get visa requirements for a passport/destination pair of country names.

        Business logic:
        1. Resolve both names to country codes
        2. Serve a fresh cache entry if there is one
        3. Otherwise fetch from the API and upsert the result

        Args:
            passport_country: Passport country name (e.g. "United States")
            destination_country: Destination name (e.g. "France" or "Paris, France")

        Returns:
            VisaCheckResult with the payload and whether it came from cache

        Raises:
            ConfigurationError: If the lookup client is not configured
            UpstreamError: If the API call fails (nothing is cached)
        """
        return await self.check_codes(
            get_country_code(passport_country),
            get_country_code(destination_country),
        )

    async def check_codes(self, passport_code: str, destination_code: str) -> VisaCheckResult:
        """Same as ``check`` for already resolved country codes."""
        passport_code = passport_code.strip().upper()
        destination_code = destination_code.strip().upper()

        cached = await self._get_fresh(passport_code, destination_code)
        if cached is not None:
            logger.info("Cache hit: %s → %s", passport_code, destination_code)
            return VisaCheckResult(
                passport_code=passport_code,
                destination_code=destination_code,
                data=cached,
                cache_hit=True,
            )

        logger.info("Cache miss: %s → %s, fetching from API", passport_code, destination_code)
        payload = await self._lookup.lookup(passport_code, destination_code)

        await self._store.upsert(
            passport_code=passport_code,
            destination_code=destination_code,
            payload=payload,
            cached_at=self._clock(),
        )

        return VisaCheckResult(
            passport_code=passport_code,
            destination_code=destination_code,
            data=payload,
            cache_hit=False,
        )

    async def _get_fresh(self, passport_code: str, destination_code: str) -> dict | None:
        """Return the cached payload if still fresh, evicting it if stale."""
        entry = await self._store.get(passport_code, destination_code)
        if entry is None:
            return None

        if entry.is_fresh(self._clock()):
            return entry.response_data

        logger.info(
            "Cache entry expired at %s: %s → %s, evicting",
            entry.expires_at.isoformat(),
            passport_code,
            destination_code,
        )
        await self._store.delete(passport_code, destination_code)
        return None

    async def invalidate(self, passport_country: str, destination_country: str) -> bool:
        """Drop the cached entry for a pair of country names.

        Returns:
            True if an entry was deleted, False otherwise
        """
        return await self._store.delete(
            get_country_code(passport_country),
            get_country_code(destination_country),
        )

    async def is_healthy(self) -> bool:
        """Check if the service can answer lookups.

        Returns:
            True if the store is reachable and the lookup client is configured
        """
        store_healthy = await self._store.health_check()
        lookup_available = await self._lookup.is_available()
        return store_healthy and lookup_available

    @property
    def store(self) -> VisaCacheStore:
        """Get the underlying cache store (for testing)."""
        return self._store

    @property
    def lookup_client(self) -> VisaLookupClient:
        """Get the underlying lookup client (for testing)."""
        return self._lookup
