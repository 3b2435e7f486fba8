"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from visa_tracker.services import SchengenAccountant, VisaCacheService

    accountant = SchengenAccountant.create()
    visa = VisaCacheService.create(store=store, lookup_client=client)
    ```
"""

from .schengen_service import (
    SchengenAccountant,
    is_trip_active,
    parse_duration_days,
    visa_duration,
)
from .visa_cache_service import VisaCacheService

__all__ = [
    "SchengenAccountant",
    "VisaCacheService",
    "is_trip_active",
    "parse_duration_days",
    "visa_duration",
]
