"""Shared fixtures: a controllable clock and a recording visa lookup client."""

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from visa_tracker.repositories import InMemoryVisaCacheRepository
from visa_tracker.services import VisaCacheService


def make_payload(passport: str = "US", destination: str = "FR", duration: str = "90 days") -> dict:
    """A payload shaped like the visa requirement API's response."""
    return {
        "data": {
            "passport": {"code": passport, "name": "United States"},
            "destination": {"code": destination, "name": "France", "continent": "Europe"},
            "visa_rules": {
                "primary_rule": {"name": "Visa-free", "duration": duration, "color": "green"},
            },
        },
        "meta": {"version": "2.0", "language": "en", "generated_at": "2024-01-01T00:00:00Z"},
    }


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: Any) -> None:
        self.now += timedelta(**kwargs)


class RecordingLookupClient:
    """VisaLookupClient that returns canned payloads and records each call."""

    def __init__(self, payload: dict | None = None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def lookup(self, passport_code: str, destination_code: str) -> dict:
        self.calls.append((passport_code, destination_code))
        if self.error is not None:
            raise self.error
        return self.payload or make_payload(passport_code, destination_code)

    async def is_available(self) -> bool:
        return True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def store() -> InMemoryVisaCacheRepository:
    return InMemoryVisaCacheRepository(ttl=timedelta(days=30))


@pytest.fixture
def lookup_client() -> RecordingLookupClient:
    return RecordingLookupClient()


@pytest.fixture
def visa_service(store, lookup_client, clock) -> VisaCacheService:
    return VisaCacheService.create(store=store, lookup_client=lookup_client, clock=clock)
