"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntryEntity, VisaCheckResult
from .trip import AlertLevel, OverstayStatus, TripAssessment, TripInterval

__all__ = [
    "AlertLevel",
    "CacheEntryEntity",
    "OverstayStatus",
    "TripAssessment",
    "TripInterval",
    "VisaCheckResult",
]
