"""Visa cache storage protocol.

Defines the interface for any backend that keeps visa lookup results
keyed by (passport_code, destination_code).

Implementations can include:
- Redis (default)
- In-memory dictionary (tests, single-process deployments)
- A SQL table with a unique constraint on both code columns
"""

from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from visa_tracker.entities import CacheEntryEntity


@runtime_checkable
class VisaCacheStore(Protocol):
    """Protocol for visa cache storage backends.

    The store owns the expiry policy: ``upsert`` assigns
    ``expires_at = cached_at + ttl``. Writes for the same key are
    last-write-wins.
    """

    async def get(self, passport_code: str, destination_code: str) -> CacheEntryEntity | None:
        """Read the entry for a key.

        Args:
            passport_code: Passport country code
            destination_code: Destination country code

        Returns:
            The stored entry (fresh or not), or None if absent
        """
        ...

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
            payload: Visa requirement payload, stored verbatim
            cached_at: Fetch time; expiry is computed from it

        Returns:
            The entry as stored
        """
        ...

    async def delete(self, passport_code: str, destination_code: str) -> bool:
        """Delete the entry for a key.

        Returns:
            True if an entry was deleted, False otherwise
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
