"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis → in-memory, RapidAPI → another source)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from visa_tracker.protocols import VisaCacheStore, VisaLookupClient

    # Type hints work with any implementation
    store: VisaCacheStore = RedisVisaCacheRepository.create()
    store: VisaCacheStore = InMemoryVisaCacheRepository()
    ```
"""

from .cache_store import VisaCacheStore
from .visa_lookup import VisaLookupClient

__all__ = [
    "VisaCacheStore",
    "VisaLookupClient",
]
