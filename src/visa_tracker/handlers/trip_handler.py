"""HTTP handlers for Schengen and visa allowance accounting."""

from datetime import date

from visa_tracker.countries import is_schengen_country
from visa_tracker.dto import (
    OverstayItem,
    SchengenUsageRequest,
    SchengenUsageResponse,
    TripAssessmentRequest,
    TripAssessmentResponse,
    TripItem,
    VisaRemainingRequest,
    VisaRemainingResponse,
)
from visa_tracker.entities import TripInterval
from visa_tracker.services import SchengenAccountant, parse_duration_days


def to_trip_interval(item: TripItem) -> TripInterval:
    """Build a TripInterval, deriving the Schengen flag from the destination if needed."""
    if item.is_schengen is not None:
        is_schengen = item.is_schengen
    else:
        is_schengen = bool(item.destination) and is_schengen_country(item.destination)

    return TripInterval(
        start_date=item.start_date,
        end_date=item.end_date,
        is_schengen=is_schengen,
    )


class TripHandler:
    """HTTP handlers for trip accounting. All pure computation."""

    def __init__(self, accountant: SchengenAccountant) -> None:
        self._accountant = accountant

    async def schengen_usage(self, request: SchengenUsageRequest) -> SchengenUsageResponse:
        """Handle POST /schengen/usage requests."""
        reference_date = request.reference_date or date.today()
        trips = [to_trip_interval(item) for item in request.trips]
        window_start, window_end = self._accountant.window(reference_date)
        used = self._accountant.days_used(trips, reference_date)

        return SchengenUsageResponse(
            reference_date=reference_date,
            window_start=window_start,
            window_end=window_end,
            days_used=used,
            days_remaining=self._accountant.remaining_after(used),
            max_days=self._accountant.max_days,
        )

    async def assess_trip(self, request: TripAssessmentRequest) -> TripAssessmentResponse:
        """Handle POST /trips/assess requests."""
        assessment = self._accountant.assess_trip(
            trip=to_trip_interval(request.trip),
            trips=[to_trip_interval(item) for item in request.trips or [request.trip]],
            reference_date=request.reference_date,
            duration_text=request.duration,
        )

        return TripAssessmentResponse(
            is_completed=assessment.is_completed,
            is_active=assessment.is_active,
            remaining_days=assessment.remaining_days,
            overstay=OverstayItem(
                is_overstayed=assessment.overstay.is_overstayed,
                days=assessment.overstay.days,
            ),
            alert_level=assessment.alert_level.value,
        )

    async def visa_remaining(self, request: VisaRemainingRequest) -> VisaRemainingResponse:
        """Handle POST /visa/remaining requests."""
        return VisaRemainingResponse(
            duration=request.duration,
            total_days=parse_duration_days(request.duration),
            remaining_days=self._accountant.expand_duration_to_days(
                request.duration, request.start_date, request.reference_date
            ),
        )
