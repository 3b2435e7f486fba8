"""Exception handlers for the FastAPI application.

Typed errors raised by the services are mapped to HTTP responses with a
consistent body:

    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from visa_tracker.exceptions import ErrorCode, UpstreamError, VisaTrackerError

logger = logging.getLogger(__name__)

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.CONFIGURATION_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INVALID_CREDENTIAL: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.VISA_DATA_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_COUNTRY_PAIR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.VISA_LOOKUP_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.INVALID_PAYLOAD: status.HTTP_502_BAD_GATEWAY,
}


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the exception handlers on the FastAPI application."""

    @app.exception_handler(VisaTrackerError)
    async def visa_tracker_exception_handler(
        request: Request,
        exc: VisaTrackerError,
    ) -> JSONResponse:
        status_code = ERROR_CODE_TO_STATUS.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

        if isinstance(exc, UpstreamError):
            logger.warning(
                "Visa API failure on %s %s: %s (code=%s, details=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
                exc.details,
            )
        else:
            logger.error(
                "Error on %s %s: %s (code=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
            )

        return JSONResponse(
            status_code=status_code,
            content={"detail": exc.message, "code": exc.code.value},
        )
