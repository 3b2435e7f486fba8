"""
Tests for Schengen 90/180 accounting and visa allowance arithmetic.
"""

from datetime import date, timedelta

import pytest

from visa_tracker.entities import AlertLevel, TripInterval
from visa_tracker.services import (
    SchengenAccountant,
    is_trip_active,
    parse_duration_days,
    visa_duration,
)


@pytest.fixture
def accountant():
    return SchengenAccountant(max_days=90, window_days=180)


def schengen(start, end=None):
    return TripInterval(start_date=start, end_date=end, is_schengen=True)


def test_single_trip_inside_window(accountant):
    trips = [schengen(date(2024, 1, 1), date(2024, 1, 10))]
    assert accountant.days_used(trips, date(2024, 1, 15)) == 10
    assert accountant.days_remaining(trips, date(2024, 1, 15)) == 80


def test_overlapping_trips_count_each_day_once(accountant):
    trips = [
        schengen(date(2024, 2, 1), date(2024, 2, 10)),
        schengen(date(2024, 2, 5), date(2024, 2, 20)),
    ]
    assert accountant.days_used(trips, date(2024, 2, 20)) == 20


def test_duplicate_trip_does_not_change_result(accountant):
    trip = schengen(date(2024, 3, 1), date(2024, 3, 15))
    reference = date(2024, 4, 1)
    assert accountant.days_used([trip], reference) == accountant.days_used([trip, trip], reference)


def test_open_ended_trip_counts_through_reference_date(accountant):
    trips = [schengen(date(2024, 3, 1))]
    assert accountant.days_used(trips, date(2024, 3, 5)) == 5


def test_open_ended_trip_starting_in_future_counts_nothing(accountant):
    trips = [schengen(date(2024, 3, 10))]
    assert accountant.days_used(trips, date(2024, 3, 5)) == 0


def test_trip_beyond_reference_date_is_clipped(accountant):
    trips = [schengen(date(2024, 3, 1), date(2024, 3, 31))]
    assert accountant.days_used(trips, date(2024, 3, 10)) == 10


def test_window_is_180_days_including_reference(accountant):
    reference = date(2024, 7, 1)
    start, end = accountant.window(reference)
    assert end == reference
    assert (end - start).days == 179

    # The first window day counts, the day before it does not
    assert accountant.days_used([schengen(start, start)], reference) == 1
    before = start - timedelta(days=1)
    assert accountant.days_used([schengen(before, before)], reference) == 0


def test_trip_straddling_window_start_is_clipped(accountant):
    reference = date(2024, 7, 1)
    window_start, _ = accountant.window(reference)
    trips = [schengen(window_start - timedelta(days=10), window_start + timedelta(days=4))]
    assert accountant.days_used(trips, reference) == 5


def test_non_schengen_trips_are_ignored(accountant):
    trips = [
        TripInterval(date(2024, 1, 1), date(2024, 1, 31), is_schengen=False),
        schengen(date(2024, 1, 5), date(2024, 1, 6)),
    ]
    assert accountant.days_used(trips, date(2024, 2, 1)) == 2


def test_reversed_trip_contributes_zero(accountant):
    trips = [schengen(date(2024, 1, 10), date(2024, 1, 1))]
    assert accountant.days_used(trips, date(2024, 1, 15)) == 0
    assert accountant.days_remaining(trips, date(2024, 1, 15)) == 90


def test_no_trips(accountant):
    assert accountant.days_used([], date(2024, 1, 1)) == 0
    assert accountant.days_remaining([], date(2024, 1, 1)) == 90


def test_used_is_capped_by_window_and_remaining_never_negative(accountant):
    trips = [schengen(date(2023, 1, 1), date(2024, 12, 31))]
    reference = date(2024, 6, 1)
    assert accountant.days_used(trips, reference) == 180
    assert accountant.days_remaining(trips, reference) == 0


def test_remaining_is_allowance_minus_used(accountant):
    reference = date(2024, 6, 30)
    for length in (0, 1, 45, 89, 90, 91, 150):
        trips = [schengen(reference - timedelta(days=length - 1), reference)] if length else []
        used = accountant.days_used(trips, reference)
        assert used == length
        assert accountant.days_remaining(trips, reference) == max(0, 90 - used)


def test_remaining_after_never_negative(accountant):
    assert accountant.remaining_after(0) == 90
    assert accountant.remaining_after(89) == 1
    assert accountant.remaining_after(90) == 0
    assert accountant.remaining_after(120) == 0
    assert SchengenAccountant(max_days=10).remaining_after(4) == 6


def test_trips_accept_any_iterable(accountant):
    trips = (schengen(date(2024, 1, d), date(2024, 1, d)) for d in (1, 3, 5))
    assert accountant.days_used(trips, date(2024, 1, 31)) == 3


def test_create_uses_settings_defaults():
    accountant = SchengenAccountant.create()
    assert accountant.max_days == 90
    assert accountant.window_days == 180


# Duration parsing and non-Schengen allowance


@pytest.mark.parametrize(
    "text,expected",
    [
        ("90 days", 90),
        ("1 day", 1),
        ("30 Days", 30),
        ("6 months", 180),
        ("1 month", 30),
        ("Up to 14 days", 14),
        ("3months", 90),
        ("", None),
        (None, None),
        ("visa on arrival", None),
        ("2 weeks", None),
    ],
)
def test_parse_duration_days(text, expected):
    assert parse_duration_days(text) == expected


def test_expand_duration_on_arrival_day_gives_full_allowance(accountant):
    assert accountant.expand_duration_to_days("90 days", date(2024, 1, 1), date(2024, 1, 1)) == 90


def test_expand_duration_after_allowance_is_zero(accountant):
    assert accountant.expand_duration_to_days("90 days", date(2024, 1, 1), date(2024, 4, 15)) == 0


def test_expand_duration_before_arrival_gives_full_allowance(accountant):
    assert accountant.expand_duration_to_days("30 days", date(2024, 5, 1), date(2024, 4, 1)) == 30


def test_expand_duration_mid_stay(accountant):
    # visa ends 2024-01-31; ten days left on 2024-01-21
    assert accountant.expand_duration_to_days("30 days", date(2024, 1, 1), date(2024, 1, 21)) == 10


def test_expand_duration_on_last_day_is_zero_not_expired(accountant):
    assert accountant.expand_duration_to_days("30 days", date(2024, 1, 1), date(2024, 1, 31)) == 0


def test_expand_duration_months(accountant):
    assert accountant.expand_duration_to_days("2 months", date(2024, 1, 1), date(2024, 1, 1)) == 60


def test_expand_duration_unreadable_is_none(accountant):
    assert accountant.expand_duration_to_days("eVisa", date(2024, 1, 1), date(2024, 1, 1)) is None


# Overstay and trip assessment


def test_non_schengen_overstay_while_active(accountant):
    trip = TripInterval(date(2024, 1, 1), None, is_schengen=False)
    status = accountant.non_schengen_overstay("30 days", trip, date(2024, 2, 5))
    assert status.is_overstayed
    assert status.days == 5


def test_non_schengen_no_overstay_on_last_day(accountant):
    trip = TripInterval(date(2024, 1, 1), None, is_schengen=False)
    assert not accountant.non_schengen_overstay("30 days", trip, date(2024, 1, 31)).is_overstayed


def test_non_schengen_no_overstay_when_trip_finished(accountant):
    trip = TripInterval(date(2024, 1, 1), date(2024, 1, 20), is_schengen=False)
    assert not accountant.non_schengen_overstay("10 days", trip, date(2024, 3, 1)).is_overstayed


def test_non_schengen_no_overstay_without_duration(accountant):
    trip = TripInterval(date(2024, 1, 1), None, is_schengen=False)
    assert not accountant.non_schengen_overstay(None, trip, date(2025, 1, 1)).is_overstayed


def test_schengen_overstay(accountant):
    trip = schengen(date(2024, 1, 1))
    status = accountant.schengen_overstay([trip], trip, date(2024, 4, 4))
    assert status.is_overstayed
    assert status.days == 5  # 95 days used


def test_schengen_no_overstay_at_exactly_90(accountant):
    trip = schengen(date(2024, 1, 1))
    assert not accountant.schengen_overstay([trip], trip, date(2024, 3, 30)).is_overstayed


def test_is_trip_active():
    trip = TripInterval(date(2024, 1, 10), date(2024, 1, 20))
    assert not is_trip_active(trip, date(2024, 1, 9))
    assert is_trip_active(trip, date(2024, 1, 10))
    assert is_trip_active(trip, date(2024, 1, 20))
    assert not is_trip_active(trip, date(2024, 1, 21))
    assert is_trip_active(TripInterval(date(2024, 1, 10)), date(2030, 1, 1))


def test_assess_completed_trip(accountant):
    trip = schengen(date(2024, 1, 1), date(2024, 1, 10))
    assessment = accountant.assess_trip(trip, [trip], date(2024, 1, 15))
    assert assessment.is_completed
    assert assessment.remaining_days is None
    assert assessment.alert_level is AlertLevel.NONE


def test_assess_open_schengen_trip_levels(accountant):
    trip = schengen(date(2024, 1, 1))
    assert accountant.assess_trip(trip, [trip], date(2024, 1, 10)).alert_level is AlertLevel.OK
    # 78 used, 12 left
    assert accountant.assess_trip(trip, [trip], date(2024, 3, 18)).alert_level is AlertLevel.WARNING
    # 85 used, 5 left
    assert accountant.assess_trip(trip, [trip], date(2024, 3, 25)).alert_level is AlertLevel.CRITICAL
    overstayed = accountant.assess_trip(trip, [trip], date(2024, 4, 4))
    assert overstayed.alert_level is AlertLevel.OVERSTAYED
    assert overstayed.remaining_days == 0
    assert overstayed.overstay.days == 5


def test_assess_open_non_schengen_trip(accountant):
    trip = TripInterval(date(2024, 1, 1), None, is_schengen=False)
    assessment = accountant.assess_trip(trip, [trip], date(2024, 1, 21), duration_text="30 days")
    assert assessment.is_active
    assert assessment.remaining_days == 10
    assert assessment.alert_level is AlertLevel.WARNING


def test_assess_non_schengen_trip_without_duration(accountant):
    trip = TripInterval(date(2024, 1, 1), None, is_schengen=False)
    assessment = accountant.assess_trip(trip, [trip], date(2024, 1, 21))
    assert assessment.remaining_days is None
    assert assessment.alert_level is AlertLevel.NONE


def test_visa_duration_prefers_primary_rule():
    payload = {
        "data": {
            "visa_rules": {
                "primary_rule": {"name": "eVisa", "duration": "30 days"},
                "secondary_rule": {"name": "Visa on arrival", "duration": "15 days"},
            }
        }
    }
    assert visa_duration(payload) == "30 days"


def test_visa_duration_falls_back_to_secondary_rule():
    payload = {
        "data": {
            "visa_rules": {
                "primary_rule": {"name": "Visa required", "color": "red"},
                "secondary_rule": {"name": "eVisa", "duration": "60 days"},
            }
        }
    }
    assert visa_duration(payload) == "60 days"


def test_visa_duration_missing():
    assert visa_duration(None) is None
    assert visa_duration({"data": {}}) is None
