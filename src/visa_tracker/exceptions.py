"""Error taxonomy for visa lookups and trip accounting.

Configuration and upstream errors propagate to the caller as typed
exceptions. Accounting anomalies (reversed trip ranges, unparseable
durations) never raise; they degrade to zero/None results inside the
services.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    VISA_DATA_NOT_FOUND = "VISA_DATA_NOT_FOUND"
    INVALID_COUNTRY_PAIR = "INVALID_COUNTRY_PAIR"
    VISA_LOOKUP_FAILED = "VISA_LOOKUP_FAILED"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    INVALID_DATE = "INVALID_DATE"


class VisaTrackerError(Exception):
    """Base exception carrying a user-safe message and a stable code.

    Attributes:
        message: Human-readable error message
        code: Stable error code for programmatic handling
        details: Optional additional context (logged, not shown to users)
    """

    code: ErrorCode = ErrorCode.VISA_LOOKUP_FAILED

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ConfigurationError(VisaTrackerError):
    """Raised when required configuration (e.g. the API key) is missing."""

    code = ErrorCode.CONFIGURATION_ERROR


class InvalidDateError(VisaTrackerError, ValueError):
    """Raised when a date value cannot be read as a calendar day."""

    code = ErrorCode.INVALID_DATE

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid date: {value!r}", details={"value": repr(value)})


# =============================================================================
# Upstream (visa requirement API) errors - never cached
# =============================================================================


class UpstreamError(VisaTrackerError):
    """Base class for failures reported by the visa requirement API."""

    def __init__(
        self,
        message: str,
        passport_code: str | None = None,
        destination_code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(
            message,
            details={
                "passport_code": passport_code,
                "destination_code": destination_code,
                "status_code": status_code,
            },
        )
        self.passport_code = passport_code
        self.destination_code = destination_code
        self.status_code = status_code


class InvalidCredentialError(UpstreamError):
    """The API rejected the configured key (HTTP 401)."""

    code = ErrorCode.INVALID_CREDENTIAL


class VisaDataNotFoundError(UpstreamError):
    """The API has no data for this passport/destination pair (HTTP 404)."""

    code = ErrorCode.VISA_DATA_NOT_FOUND


class InvalidCountryPairError(UpstreamError):
    """The API rejected the passport/destination codes (HTTP 422)."""

    code = ErrorCode.INVALID_COUNTRY_PAIR


class VisaLookupFailedError(UpstreamError):
    """Any other non-2xx response, or a transport failure (status_code is None)."""

    code = ErrorCode.VISA_LOOKUP_FAILED


class InvalidPayloadError(UpstreamError):
    """The API answered 2xx with an empty or malformed body."""

    code = ErrorCode.INVALID_PAYLOAD
