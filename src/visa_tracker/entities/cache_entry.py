"""Visa cache entry domain entities."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class CacheEntryEntity:
    """One memoized visa requirement lookup.

    The payload is stored and returned verbatim; nothing in the cache
    layer looks inside it.

    Attributes:
        passport_code: Uppercase passport country code (first key part)
        destination_code: Uppercase destination country code (second key part)
        response_data: Full payload returned by the visa requirement API
        cached_at: When the payload was fetched
        expires_at: When the entry stops being served (set by the store)
    """

    passport_code: str
    destination_code: str
    response_data: dict[str, Any]
    cached_at: datetime
    expires_at: datetime

    @property
    def key(self) -> tuple[str, str]:
        """Compound cache key."""
        return (self.passport_code, self.destination_code)

    def is_fresh(self, now: datetime) -> bool:
        """True while ``now`` is strictly before ``expires_at``."""
        return now < self.expires_at


@dataclass(frozen=True)
class VisaCheckResult:
    """Outcome of a visa check: the payload plus where it came from."""

    passport_code: str
    destination_code: str
    data: dict[str, Any]
    cache_hit: bool
