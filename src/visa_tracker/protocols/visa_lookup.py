"""Visa requirement lookup protocol.

Defines the interface for the external source of visa rules.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class VisaLookupClient(Protocol):
    """Protocol for visa requirement sources."""

    async def lookup(self, passport_code: str, destination_code: str) -> dict[str, Any]:
        """Fetch the visa rules for a passport/destination pair.

        Args:
            passport_code: Passport country code
            destination_code: Destination country code

        Returns:
            The payload as returned by the source

        Raises:
            ConfigurationError: If the client is not configured
            UpstreamError: For any unsuccessful or malformed response
        """
        ...

    async def is_available(self) -> bool:
        """Check whether the client is configured to make requests."""
        ...
