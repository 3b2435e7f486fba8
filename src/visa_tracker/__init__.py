"""Visa Tracker - cached visa requirement lookups and Schengen day accounting.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (VisaCacheStore, VisaLookupClient)
    - repositories: Data access implementations (Redis, in-memory, RapidAPI)
    - services: Business logic (VisaCacheService, SchengenAccountant)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from datetime import date

    from visa_tracker import SchengenAccountant, TripInterval

    accountant = SchengenAccountant.create()
    trips = [TripInterval(date(2024, 1, 1), date(2024, 1, 10), is_schengen=True)]
    accountant.days_remaining(trips, date(2024, 1, 15))  # 80
    ```

For HTTP API:
    ```python
    from visa_tracker.api.app import app
    ```
"""

from visa_tracker.config import get_redis_client, settings
from visa_tracker.countries import get_country_code, is_schengen_country
from visa_tracker.dto import SchengenUsageRequest, VisaCheckRequest
from visa_tracker.entities import (
    CacheEntryEntity,
    OverstayStatus,
    TripAssessment,
    TripInterval,
    VisaCheckResult,
)
from visa_tracker.exceptions import ConfigurationError, UpstreamError, VisaTrackerError
from visa_tracker.handlers import TripHandler, VisaHandler
from visa_tracker.protocols import VisaCacheStore, VisaLookupClient
from visa_tracker.repositories import (
    InMemoryVisaCacheRepository,
    RapidApiVisaClient,
    RedisVisaCacheRepository,
)
from visa_tracker.services import SchengenAccountant, VisaCacheService

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "VisaCacheStore",
    "VisaLookupClient",
    # Services (business logic)
    "SchengenAccountant",
    "VisaCacheService",
    # Handlers (HTTP)
    "TripHandler",
    "VisaHandler",
    # Repositories (data access)
    "InMemoryVisaCacheRepository",
    "RapidApiVisaClient",
    "RedisVisaCacheRepository",
    # Entities (domain models)
    "CacheEntryEntity",
    "OverstayStatus",
    "TripAssessment",
    "TripInterval",
    "VisaCheckResult",
    # DTOs (API contracts)
    "SchengenUsageRequest",
    "VisaCheckRequest",
    # Countries
    "get_country_code",
    "is_schengen_country",
    # Errors
    "ConfigurationError",
    "UpstreamError",
    "VisaTrackerError",
]
