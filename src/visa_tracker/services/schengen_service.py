"""Schengen 90/180 day accounting and visa allowance arithmetic.

Everything here is a pure function of its inputs: no I/O, no shared
state. Data-quality problems (a trip ending before it starts, a duration
text that cannot be read) never raise; they produce zero, the full
allowance or None as documented on each method.
"""

import re
from collections.abc import Iterable
from datetime import date, timedelta
from typing import Any

from visa_tracker.config import settings
from visa_tracker.dates import iter_days
from visa_tracker.entities import AlertLevel, OverstayStatus, TripAssessment, TripInterval
from visa_tracker.entities.trip import NO_OVERSTAY

DAYS_PER_MONTH = 30  # approximation, not calendar months

CRITICAL_REMAINING_DAYS = 7
WARNING_REMAINING_DAYS = 14

_DURATION_PATTERN = re.compile(r"(\d+)\s*(days?|months?)", re.IGNORECASE)


def parse_duration_days(duration_text: str | None) -> int | None:
    """Read "<n> day(s)" or "<n> month(s)" from a free-text duration.

    Args:
        duration_text: e.g. "90 days", "6 months", "Up to 30 days"

    Returns:
        Number of days (months count as 30 days), or None if unreadable
    """
    if not duration_text:
        return None

    match = _DURATION_PATTERN.search(duration_text)
    if match is None:
        return None

    amount = int(match.group(1))
    if match.group(2).lower().startswith("month"):
        return amount * DAYS_PER_MONTH
    return amount


def visa_duration(payload: dict[str, Any] | None) -> str | None:
    """Pick the stay duration text out of a visa requirement payload.

    Uses the primary rule's duration, then the secondary rule's.
    """
    if not payload:
        return None

    rules = (payload.get("data") or {}).get("visa_rules") or {}
    for rule_name in ("primary_rule", "secondary_rule"):
        duration = (rules.get(rule_name) or {}).get("duration")
        if duration:
            return duration
    return None


def is_trip_active(trip: TripInterval, reference_date: date) -> bool:
    """True when the reference date falls within the trip (open-ended trips run to today)."""
    return trip.start_date <= reference_date <= trip.effective_end(reference_date)


class SchengenAccountant:
    """Rolling-window Schengen day counter.

    The window is the ``window_days`` calendar days ending on, and
    including, the reference date (180 by default, so it starts 179 days
    before the reference date). Days are collected in a set keyed by
    calendar date, so overlapping trips never count a day twice.

    Example:
        ```python
        accountant = SchengenAccountant.create()
        used = accountant.days_used(trips, date(2024, 1, 15))
        left = accountant.days_remaining(trips, date(2024, 1, 15))
        ```
    """

    def __init__(self, max_days: int | None = None, window_days: int | None = None) -> None:
        """Initialize the accountant.

        Args:
            max_days: Allowed days per window. Defaults to settings (90).
            window_days: Window length in days. Defaults to settings (180).
        """
        self._max_days = max_days or settings.schengen_max_days
        self._window_days = window_days or settings.schengen_window_days

    @classmethod
    def create(
        cls, max_days: int | None = None, window_days: int | None = None
    ) -> "SchengenAccountant":
        """Factory method to create a SchengenAccountant with defaults."""
        return cls(max_days=max_days, window_days=window_days)

    @property
    def max_days(self) -> int:
        return self._max_days

    @property
    def window_days(self) -> int:
        return self._window_days

    def window(self, reference_date: date | None = None) -> tuple[date, date]:
        """Inclusive (start, end) of the window ending on ``reference_date``."""
        end = reference_date or date.today()
        return end - timedelta(days=self._window_days - 1), end

    def days_used(
        self,
        trips: Iterable[TripInterval],
        reference_date: date | None = None,
    ) -> int:
        """Count distinct Schengen days inside the window.

        Non-Schengen trips are ignored. Open-ended trips count up to the
        reference date. A trip whose end is before its start contributes
        nothing.

        Args:
            trips: Any trips; only ``is_schengen`` ones are counted
            reference_date: Last day of the window. Defaults to today.

        Returns:
            Days used, between 0 and the window length
        """
        window_start, window_end = self.window(reference_date)
        used: set[date] = set()

        for trip in trips:
            if not trip.is_schengen:
                continue

            trip_end = trip.effective_end(window_end)
            if trip_end < window_start or trip.start_date > window_end:
                continue

            used.update(iter_days(max(trip.start_date, window_start), min(trip_end, window_end)))

        return len(used)

    def days_remaining(
        self,
        trips: Iterable[TripInterval],
        reference_date: date | None = None,
    ) -> int:
        """Days left of the allowance; never negative."""
        return self.remaining_after(self.days_used(trips, reference_date))

    def remaining_after(self, days_used: int) -> int:
        """Allowance left once ``days_used`` days are spent; never negative."""
        return max(0, self._max_days - days_used)

    def expand_duration_to_days(
        self,
        duration_text: str | None,
        start_date: date,
        reference_date: date | None = None,
    ) -> int | None:
        """Days left of a non-Schengen visa allowance.

        The allowance ends ``total`` days after ``start_date``. Before the
        start the full allowance is returned; after the end, 0.

        Args:
            duration_text: Free-text duration, e.g. "90 days"
            start_date: Arrival day
            reference_date: Day to evaluate. Defaults to today.

        Returns:
            Remaining days, or None if the duration cannot be read
        """
        total_days = parse_duration_days(duration_text)
        if total_days is None:
            return None

        today = reference_date or date.today()
        visa_end = start_date + timedelta(days=total_days)

        if today > visa_end:
            return 0
        if today < start_date:
            return total_days
        return (visa_end - today).days

    def non_schengen_overstay(
        self,
        duration_text: str | None,
        trip: TripInterval,
        reference_date: date | None = None,
    ) -> OverstayStatus:
        """Overstay of a non-Schengen visa allowance.

        Only an active trip with a readable duration can be overstayed.
        """
        today = reference_date or date.today()
        total_days = parse_duration_days(duration_text)
        if total_days is None or not is_trip_active(trip, today):
            return NO_OVERSTAY

        visa_end = trip.start_date + timedelta(days=total_days)
        if today > visa_end:
            return OverstayStatus(is_overstayed=True, days=(today - visa_end).days)
        return NO_OVERSTAY

    def schengen_overstay(
        self,
        trips: Iterable[TripInterval],
        trip: TripInterval,
        reference_date: date | None = None,
    ) -> OverstayStatus:
        """Overstay of the Schengen allowance while ``trip`` is under way."""
        today = reference_date or date.today()
        if not is_trip_active(trip, today):
            return NO_OVERSTAY

        used = self.days_used(trips, today)
        if used > self._max_days:
            return OverstayStatus(is_overstayed=True, days=used - self._max_days)
        return NO_OVERSTAY

    def assess_trip(
        self,
        trip: TripInterval,
        trips: Iterable[TripInterval],
        reference_date: date | None = None,
        duration_text: str | None = None,
    ) -> TripAssessment:
        """Remaining days, overstay and alert level for one trip.

        Completed trips (with an end date) get no remaining-days figure.
        Schengen trips are measured against every Schengen trip in
        ``trips``; other trips against ``duration_text``.
        """
        today = reference_date or date.today()
        all_trips = list(trips)
        active = is_trip_active(trip, today)

        if trip.end_date is not None:
            return TripAssessment(
                is_completed=True,
                is_active=active,
                remaining_days=None,
                overstay=NO_OVERSTAY,
                alert_level=AlertLevel.NONE,
            )

        if trip.is_schengen:
            remaining: int | None = self.days_remaining(all_trips, today)
            overstay = self.schengen_overstay(all_trips, trip, today)
        else:
            remaining = self.expand_duration_to_days(duration_text, trip.start_date, today)
            overstay = self.non_schengen_overstay(duration_text, trip, today)

        return TripAssessment(
            is_completed=False,
            is_active=active,
            remaining_days=remaining,
            overstay=overstay,
            alert_level=_alert_level(remaining, overstay),
        )


def _alert_level(remaining: int | None, overstay: OverstayStatus) -> AlertLevel:
    if remaining is None:
        return AlertLevel.NONE
    if overstay.is_overstayed:
        return AlertLevel.OVERSTAYED
    if remaining <= CRITICAL_REMAINING_DAYS:
        return AlertLevel.CRITICAL
    if remaining <= WARNING_REMAINING_DAYS:
        return AlertLevel.WARNING
    return AlertLevel.OK
