#!/usr/bin/env python3
"""
Demo script for visa tracker.

This script walks through Schengen 90/180 accounting for a sample travel
history, then performs a cached visa lookup (needs RAPIDAPI_KEY; uses the
in-memory cache so no Redis is required).
"""

import asyncio
from datetime import date

from visa_tracker import (
    InMemoryVisaCacheRepository,
    RapidApiVisaClient,
    SchengenAccountant,
    TripInterval,
    VisaCacheService,
    VisaTrackerError,
    is_schengen_country,
)
from visa_tracker.services import visa_duration


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demo_schengen() -> None:
    """Demonstrate rolling-window Schengen accounting."""
    print_section("Schengen 90/180 Accounting")

    accountant = SchengenAccountant.create()
    history = [
        ("Lisbon, Portugal", date(2024, 1, 5), date(2024, 1, 25)),
        ("London, United Kingdom", date(2024, 1, 26), date(2024, 2, 10)),
        ("Berlin, Germany", date(2024, 2, 11), date(2024, 3, 15)),
        # Overlaps the Berlin trip: days are only counted once
        ("Prague, Czech Republic", date(2024, 3, 10), date(2024, 3, 20)),
        ("Tokyo, Japan", date(2024, 4, 1), None),
    ]
    trips = [
        TripInterval(start, end, is_schengen=is_schengen_country(destination))
        for destination, start, end in history
    ]

    print("\n🧳 Trips:")
    for (destination, start, end), trip in zip(history, trips):
        zone = "Schengen" if trip.is_schengen else "other"
        print(f"  {destination:<26} {start} → {str(end) if end else 'ongoing':<10}  ({zone})")

    print("\n📅 Days used / remaining:")
    for reference in (date(2024, 3, 20), date(2024, 6, 1), date(2024, 9, 20)):
        used = accountant.days_used(trips, reference)
        remaining = accountant.days_remaining(trips, reference)
        print(f"  {reference}: {used:>3} used, {remaining:>3} remaining")


def demo_visa_allowance() -> None:
    """Demonstrate non-Schengen allowance arithmetic."""
    print_section("Visa Allowance")

    accountant = SchengenAccountant.create()
    arrival = date(2024, 4, 1)
    trip = TripInterval(arrival)

    for duration in ("90 days", "1 month", "eVisa"):
        for reference in (date(2024, 3, 1), date(2024, 4, 20), date(2024, 7, 15)):
            remaining = accountant.expand_duration_to_days(duration, arrival, reference)
            overstay = accountant.non_schengen_overstay(duration, trip, reference)
            note = f"  ⚠️ overstayed by {overstay.days} days" if overstay.is_overstayed else ""
            print(f"  {duration:<8} on {reference}: remaining={remaining}{note}")


async def demo_visa_lookup() -> None:
    """Demonstrate cache miss then cache hit."""
    print_section("Cached Visa Lookup")

    lookup_client = RapidApiVisaClient.create()
    service = VisaCacheService.create(
        store=InMemoryVisaCacheRepository(),
        lookup_client=lookup_client,
    )

    try:
        for _ in range(2):
            result = await service.check("United States", "Thailand")
            status = "✓ CACHE HIT" if result.cache_hit else "✗ Cache miss (fetched)"
            print(f"\n  {result.passport_code} → {result.destination_code}: {status}")
            print(f"  Duration: {visa_duration(result.data)}")
    except VisaTrackerError as e:
        print(f"\n❌ Lookup failed: {e} ({e.code.value})")
        print("\nSet RAPIDAPI_KEY to a key subscribed to the Visa Requirement API.")
    finally:
        await lookup_client.close()


def main() -> None:
    """Run all demos."""
    print("\n🚀 Visa Tracker Demo")
    print("=" * 70)

    demo_schengen()
    demo_visa_allowance()
    asyncio.run(demo_visa_lookup())

    print("\n" + "=" * 70)
    print("✅ Demo completed!")
    print("=" * 70)


if __name__ == "__main__":
    main()
