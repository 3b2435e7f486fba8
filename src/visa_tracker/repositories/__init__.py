"""Repository layer for data access.

This layer hides external dependencies (Redis, the visa requirement API)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Redis → in-memory, RapidAPI → another source)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from visa_tracker.protocols import VisaCacheStore, VisaLookupClient

from .memory_repository import InMemoryVisaCacheRepository
from .rapidapi_visa_client import RapidApiVisaClient
from .redis_repository import RedisVisaCacheRepository

__all__ = [
    "VisaCacheStore",
    "VisaLookupClient",
    "InMemoryVisaCacheRepository",
    "RapidApiVisaClient",
    "RedisVisaCacheRepository",
]
