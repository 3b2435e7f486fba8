"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from visa_tracker.config import configure_logging, settings
from visa_tracker.handlers import TripHandler, VisaHandler
from visa_tracker.protocols import VisaCacheStore
from visa_tracker.repositories import (
    InMemoryVisaCacheRepository,
    RapidApiVisaClient,
    RedisVisaCacheRepository,
)
from visa_tracker.services import SchengenAccountant, VisaCacheService


def get_visa_handler(request: Request) -> VisaHandler:
    """Dependency injection for VisaHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "visa_handler", None)
    if handler is None:
        raise RuntimeError("VisaHandler not initialized. Check lifespan setup.")
    return handler


def get_trip_handler(request: Request) -> TripHandler:
    """Dependency injection for TripHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "trip_handler", None)
    if handler is None:
        raise RuntimeError("TripHandler not initialized. Check lifespan setup.")
    return handler


def build_store() -> VisaCacheStore:
    """Create the cache store selected by CACHE_BACKEND."""
    if settings.cache_backend == "memory":
        return InMemoryVisaCacheRepository()
    return RedisVisaCacheRepository.create()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Store and lookup client (data access)
    2. Services (business logic)
    3. Handlers (HTTP endpoints)

    Services already present on app.state (e.g. set by tests) are kept.

    Cleanup:
        Closes connections and removes all services from app.state on shutdown
    """
    configure_logging()

    visa_service: VisaCacheService | None = getattr(app.state, "visa_service", None)
    if visa_service is None:
        visa_service = VisaCacheService.create(
            store=build_store(),
            lookup_client=RapidApiVisaClient.create(),
        )
    accountant = getattr(app.state, "accountant", None) or SchengenAccountant.create()

    app.state.visa_service = visa_service
    app.state.accountant = accountant
    app.state.visa_handler = VisaHandler(visa_service=visa_service)
    app.state.trip_handler = TripHandler(accountant=accountant)

    print("✓ Visa tracker initialized")
    print(f"✓ Cache backend: {settings.cache_backend} (TTL {settings.visa_cache_ttl_days} days)")
    print(f"✓ Schengen rule: {accountant.max_days}/{accountant.window_days} days")
    if not settings.rapidapi_key:
        print("⚠ RAPIDAPI_KEY is not set - cache misses will fail")

    yield

    # Cleanup - close connections, remove from app.state
    for resource in (visa_service.lookup_client, visa_service.store):
        close = getattr(resource, "close", None)
        if close is not None:
            await close()

    del app.state.trip_handler
    del app.state.visa_handler
    del app.state.accountant
    del app.state.visa_service
    print("✓ Visa tracker shut down")


# Type aliases for cleaner dependency injection
VisaHandlerDep = Annotated[VisaHandler, Depends(get_visa_handler)]
TripHandlerDep = Annotated[TripHandler, Depends(get_trip_handler)]
