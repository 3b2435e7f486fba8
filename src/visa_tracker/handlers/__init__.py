"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .trip_handler import TripHandler, to_trip_interval
from .visa_handler import VisaHandler

__all__ = [
    "TripHandler",
    "VisaHandler",
    "to_trip_interval",
]
