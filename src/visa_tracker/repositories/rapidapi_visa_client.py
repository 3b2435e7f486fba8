"""RapidAPI-based visa requirement client.

Calls the "Visa Requirement" API hosted on RapidAPI:

    POST https://visa-requirement.p.rapidapi.com/v2/visa/check
    {"passport": "US", "destination": "FR"}

The response carries passport and destination details plus the visa rules
(``data.visa_rules.primary_rule`` and friends). The payload is returned
as-is; only its outer shape is checked before it is handed back.

Requirements:
    - A RapidAPI key subscribed to the API, in RAPIDAPI_KEY
"""

import logging
from typing import Any

import httpx

from visa_tracker.config import settings
from visa_tracker.exceptions import (
    ConfigurationError,
    InvalidCountryPairError,
    InvalidCredentialError,
    InvalidPayloadError,
    VisaDataNotFoundError,
    VisaLookupFailedError,
)

logger = logging.getLogger(__name__)


class RapidApiVisaClient:
    """RapidAPI implementation of the VisaLookupClient protocol.

    This class satisfies the VisaLookupClient protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        client = RapidApiVisaClient.create(api_key="...")
        payload = await client.lookup("US", "FR")
        print(payload["data"]["visa_rules"]["primary_rule"]["name"])
        ```
    """

    CHECK_PATH = "/v2/visa/check"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        host: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the RapidAPI visa client.

        Args:
            api_key: RapidAPI key. Defaults to settings.rapidapi_key.
            base_url: API base URL. Defaults to settings.visa_api_base_url.
            host: Value for the x-rapidapi-host header. Defaults to settings.
            timeout: Request timeout in seconds. Defaults to settings.
            transport: Optional httpx transport (used by tests).
        """
        self._api_key = api_key if api_key is not None else settings.rapidapi_key
        self._base_url = (base_url or settings.visa_api_base_url).rstrip("/")
        self._host = host or settings.rapidapi_host
        self._timeout = timeout or settings.visa_api_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
    ) -> "RapidApiVisaClient":
        """Factory method to create RapidApiVisaClient with defaults.

        Args:
            api_key: RapidAPI key. If None, uses settings.
            base_url: API base URL. If None, uses settings.

        Returns:
            Configured RapidApiVisaClient
        """
        return cls(api_key=api_key, base_url=base_url)

    async def lookup(self, passport_code: str, destination_code: str) -> dict[str, Any]:
        """Fetch the visa rules for a passport/destination pair.

        Args:
            passport_code: Passport country code (e.g. "US")
            destination_code: Destination country code (e.g. "FR")

        Returns:
            The API payload

        Raises:
            ConfigurationError: If no API key is configured
            InvalidCredentialError: On HTTP 401
            VisaDataNotFoundError: On HTTP 404
            InvalidCountryPairError: On HTTP 422
            VisaLookupFailedError: On any other non-2xx status or transport error
            InvalidPayloadError: If the body is empty or not a visa payload
        """
        if not self._api_key:
            raise ConfigurationError(
                "RapidAPI key is not configured. Set RAPIDAPI_KEY in your environment or .env file."
            )

        url = f"{self._base_url}{self.CHECK_PATH}"
        headers = {
            "Content-Type": "application/json",
            "x-rapidapi-host": self._host,
            "x-rapidapi-key": self._api_key,
        }
        body = {"passport": passport_code, "destination": destination_code}

        try:
            response = await self.client.post(url, json=body, headers=headers)
        except httpx.HTTPError as e:
            raise VisaLookupFailedError(
                f"Visa API request failed: {e}",
                passport_code=passport_code,
                destination_code=destination_code,
            ) from e

        if not response.is_success:
            logger.warning(
                "Visa API returned %s for %s → %s",
                response.status_code,
                passport_code,
                destination_code,
            )
            raise self._error_for_status(response, passport_code, destination_code)

        return self._parse_payload(response, passport_code, destination_code)

    @staticmethod
    def _error_for_status(
        response: httpx.Response,
        passport_code: str,
        destination_code: str,
    ) -> Exception:
        status_code = response.status_code
        context = {
            "passport_code": passport_code,
            "destination_code": destination_code,
            "status_code": status_code,
        }
        if status_code == 401:
            return InvalidCredentialError("Invalid API key. Please check your RapidAPI key.", **context)
        if status_code == 404:
            return VisaDataNotFoundError(
                "Visa information not found for this passport-destination combination.", **context
            )
        if status_code == 422:
            return InvalidCountryPairError(
                "Invalid passport or destination. Please check your selections.", **context
            )
        return VisaLookupFailedError(
            f"API error: {status_code} {response.reason_phrase}".rstrip(), **context
        )

    @staticmethod
    def _parse_payload(
        response: httpx.Response,
        passport_code: str,
        destination_code: str,
    ) -> dict[str, Any]:
        context = {
            "passport_code": passport_code,
            "destination_code": destination_code,
            "status_code": response.status_code,
        }
        if not response.content.strip():
            raise InvalidPayloadError("Visa API returned an empty response.", **context)

        try:
            payload = response.json()
        except ValueError as e:
            raise InvalidPayloadError("Visa API returned a response that is not JSON.", **context) from e

        if not isinstance(payload, dict) or not payload.get("data"):
            raise InvalidPayloadError("Visa API response has no visa data.", **context)

        return payload

    async def is_available(self) -> bool:
        """Check whether an API key is configured.

        No request is made: every call to the API is billed.
        """
        return bool(self._api_key)

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
