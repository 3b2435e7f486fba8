from typing import Any

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from visa_tracker.api.dependencies import TripHandlerDep, VisaHandlerDep, lifespan
from visa_tracker.api.exception_handlers import setup_exception_handlers
from visa_tracker.config import settings
from visa_tracker.countries import list_destinations
from visa_tracker.dto import (
    CountryCodeResponse,
    HealthCheckResponse,
    SchengenUsageRequest,
    SchengenUsageResponse,
    TripAssessmentRequest,
    TripAssessmentResponse,
    VisaCacheDeleteRequest,
    VisaCacheDeleteResponse,
    VisaCheckRequest,
    VisaCheckResponse,
    VisaRemainingRequest,
    VisaRemainingResponse,
)

app = FastAPI(
    title="Visa Tracker API",
    description="Cached visa requirement lookups and Schengen 90/180 day accounting",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Visa Tracker API",
        "version": "0.1.0",
        "description": "Cached visa requirement lookups and Schengen 90/180 day accounting",
        "endpoints": {
            "visa": "/visa",
            "schengen": "/schengen/usage",
            "trips": "/trips/assess",
            "countries": "/countries",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: VisaHandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.post("/visa/check", response_model=VisaCheckResponse)
async def check_visa(request: VisaCheckRequest, handler: VisaHandlerDep) -> VisaCheckResponse:
    """
    Get visa requirements for a passport/destination pair.

    Served from cache while the entry is fresh (30 days), otherwise
    fetched from the visa requirement API and cached.
    """
    return await handler.check_visa(request)


@app.delete("/visa/cache", response_model=VisaCacheDeleteResponse)
async def invalidate_visa(
    request: VisaCacheDeleteRequest, handler: VisaHandlerDep
) -> VisaCacheDeleteResponse:
    """Drop the cached lookup for a passport/destination pair."""
    return await handler.invalidate(request)


@app.post("/visa/remaining", response_model=VisaRemainingResponse)
async def visa_remaining(
    request: VisaRemainingRequest, handler: TripHandlerDep
) -> VisaRemainingResponse:
    """Days left of a non-Schengen visa allowance."""
    return await handler.visa_remaining(request)


@app.post("/schengen/usage", response_model=SchengenUsageResponse)
async def schengen_usage(
    request: SchengenUsageRequest, handler: TripHandlerDep
) -> SchengenUsageResponse:
    """
    Schengen days used and remaining in the 180-day window ending on the reference date.
    """
    return await handler.schengen_usage(request)


@app.post("/trips/assess", response_model=TripAssessmentResponse)
async def assess_trip(
    request: TripAssessmentRequest, handler: TripHandlerDep
) -> TripAssessmentResponse:
    """Remaining days, overstay and alert level for one trip."""
    return await handler.assess_trip(request)


@app.get("/countries", response_model=list[str])
async def countries() -> list[str]:
    """All known destination names, sorted."""
    return list_destinations()


@app.get("/countries/code", response_model=CountryCodeResponse)
async def country_code(
    handler: VisaHandlerDep,
    name: str = Query(..., min_length=1, description="Country name or 'City, Country'"),
) -> CountryCodeResponse:
    """Resolve a country name to its code."""
    return await handler.country_code(name)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "visa_tracker.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
