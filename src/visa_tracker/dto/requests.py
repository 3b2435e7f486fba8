"""Request DTOs for API endpoints."""

from datetime import date
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field

from visa_tracker.dates import parse_to_local_day_start

# Accepts "YYYY-MM-DD" or any ISO timestamp; keeps the calendar day as written
LocalDay = Annotated[date, BeforeValidator(parse_to_local_day_start)]


class VisaCheckRequest(BaseModel):
    """Request DTO for a visa requirement check.

    The handler will convert this to internal calls to the service layer.
    """

    passport: str = Field(..., description="Passport country name", min_length=1)
    destination: str = Field(
        ...,
        description="Destination country name, or 'City, Country'",
        min_length=1,
    )


class VisaCacheDeleteRequest(VisaCheckRequest):
    """Request DTO for dropping one cached visa lookup."""


class TripItem(BaseModel):
    """One trip as sent by the client."""

    start_date: LocalDay = Field(..., description="First day of the stay (YYYY-MM-DD)")
    end_date: LocalDay | None = Field(None, description="Last day of the stay; omit while still there")
    is_schengen: bool | None = Field(
        None,
        description="Schengen flag; derived from destination when omitted",
    )
    destination: str | None = Field(None, description="Destination name, e.g. 'Lisbon, Portugal'")


class SchengenUsageRequest(BaseModel):
    """Request DTO for Schengen 90/180 usage."""

    trips: list[TripItem] = Field(default_factory=list, description="The traveller's trips")
    reference_date: LocalDay | None = Field(None, description="Day to evaluate (defaults to today)")


class TripAssessmentRequest(BaseModel):
    """Request DTO for the status of one trip."""

    trip: TripItem = Field(..., description="The trip to assess")
    trips: list[TripItem] = Field(
        default_factory=list,
        description="All of the traveller's trips (for Schengen accounting)",
    )
    duration: str | None = Field(None, description="Allowed stay, e.g. '90 days' or '6 months'")
    reference_date: LocalDay | None = Field(None, description="Day to evaluate (defaults to today)")


class VisaRemainingRequest(BaseModel):
    """Request DTO for days left of a non-Schengen visa allowance."""

    duration: str = Field(..., description="Allowed stay, e.g. '30 days'", min_length=1)
    start_date: LocalDay = Field(..., description="Arrival day")
    reference_date: LocalDay | None = Field(None, description="Day to evaluate (defaults to today)")
