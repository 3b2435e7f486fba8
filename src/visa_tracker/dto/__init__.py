"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import (
    SchengenUsageRequest,
    TripAssessmentRequest,
    TripItem,
    VisaCacheDeleteRequest,
    VisaCheckRequest,
    VisaRemainingRequest,
)
from .responses import (
    CountryCodeResponse,
    HealthCheckResponse,
    OverstayItem,
    SchengenUsageResponse,
    TripAssessmentResponse,
    VisaCacheDeleteResponse,
    VisaCheckResponse,
    VisaRemainingResponse,
)

__all__ = [
    "VisaCheckRequest",
    "VisaCacheDeleteRequest",
    "TripItem",
    "SchengenUsageRequest",
    "TripAssessmentRequest",
    "VisaRemainingRequest",
    "VisaCheckResponse",
    "VisaCacheDeleteResponse",
    "SchengenUsageResponse",
    "OverstayItem",
    "TripAssessmentResponse",
    "VisaRemainingResponse",
    "CountryCodeResponse",
    "HealthCheckResponse",
]
