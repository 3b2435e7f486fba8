"""HTTP handlers for visa requirement lookups.

Handlers convert between DTOs (API contracts) and service calls.
Typed service errors are left to propagate; the exception handlers
registered on the app turn them into status codes.
"""

import time

from visa_tracker.countries import get_country_code, is_schengen_country
from visa_tracker.dto import (
    CountryCodeResponse,
    HealthCheckResponse,
    VisaCacheDeleteRequest,
    VisaCacheDeleteResponse,
    VisaCheckRequest,
    VisaCheckResponse,
)
from visa_tracker.services import VisaCacheService


class VisaHandler:
    """HTTP handlers for visa lookups.

    Example:
        ```python
        handler = VisaHandler(visa_service=service)

        @app.post("/visa/check", response_model=VisaCheckResponse)
        async def check_visa(request: VisaCheckRequest):
            return await handler.check_visa(request)
        ```
    """

    def __init__(self, visa_service: VisaCacheService) -> None:
        """Initialize the visa handler.

        Args:
            visa_service: The visa cache service (required).
        """
        self._visa = visa_service

    async def check_visa(self, request: VisaCheckRequest) -> VisaCheckResponse:
        """Handle POST /visa/check requests."""
        start_time = time.time()

        result = await self._visa.check(request.passport, request.destination)

        return VisaCheckResponse(
            passport_code=result.passport_code,
            destination_code=result.destination_code,
            cache_hit=result.cache_hit,
            data=result.data,
            lookup_time_ms=(time.time() - start_time) * 1000,
        )

    async def invalidate(self, request: VisaCacheDeleteRequest) -> VisaCacheDeleteResponse:
        """Handle DELETE /visa/cache requests."""
        deleted = await self._visa.invalidate(request.passport, request.destination)

        return VisaCacheDeleteResponse(
            deleted=deleted,
            message="Cache entry removed" if deleted else "No cache entry for this pair",
        )

    async def country_code(self, name: str) -> CountryCodeResponse:
        """Handle GET /countries/code requests."""
        return CountryCodeResponse(
            name=name,
            code=get_country_code(name),
            is_schengen=is_schengen_country(name),
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        cache_healthy = await self._visa.store.health_check()
        lookup_configured = await self._visa.lookup_client.is_available()
        is_healthy = cache_healthy and lookup_configured

        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            cache_healthy=cache_healthy,
            lookup_configured=lookup_configured,
        )
