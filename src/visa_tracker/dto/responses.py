"""Response DTOs for API endpoints."""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field


class VisaCheckResponse(BaseModel):
    """Response DTO for a visa requirement check."""

    passport_code: str = Field(..., description="Resolved passport country code")
    destination_code: str = Field(..., description="Resolved destination country code")
    cache_hit: bool = Field(..., description="Whether the data was served from cache")
    data: dict[str, Any] = Field(..., description="Visa requirement payload, as returned by the API")
    lookup_time_ms: float = Field(..., description="Time taken for the lookup in milliseconds")


class VisaCacheDeleteResponse(BaseModel):
    """Response DTO for dropping a cached lookup."""

    deleted: bool = Field(..., description="Whether an entry existed and was removed")
    message: str = Field(..., description="Human-readable status message")


class SchengenUsageResponse(BaseModel):
    """Response DTO for Schengen 90/180 usage."""

    reference_date: date
    window_start: date = Field(..., description="First day of the rolling window")
    window_end: date = Field(..., description="Last day of the rolling window (reference date)")
    days_used: int = Field(..., ge=0, description="Distinct Schengen days inside the window")
    days_remaining: int = Field(..., ge=0, description="Days left of the allowance")
    max_days: int = Field(..., description="Allowance per window")


class OverstayItem(BaseModel):
    is_overstayed: bool
    days: int = Field(..., ge=0)


class TripAssessmentResponse(BaseModel):
    """Response DTO for the status of one trip."""

    is_completed: bool
    is_active: bool
    remaining_days: int | None = Field(None, description="Days left, or null when not applicable")
    overstay: OverstayItem
    alert_level: str = Field(..., description="none, ok, warning, critical or overstayed")


class VisaRemainingResponse(BaseModel):
    """Response DTO for days left of a visa allowance."""

    duration: str
    total_days: int | None = Field(None, description="Allowance in days, null if unreadable")
    remaining_days: int | None = Field(None, description="Days left, null if unreadable")


class CountryCodeResponse(BaseModel):
    name: str
    code: str
    is_schengen: bool


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
    lookup_configured: bool = Field(..., description="Whether the visa API key is configured")
