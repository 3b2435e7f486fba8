"""Trip domain entities used by the Schengen accountant."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


@dataclass(frozen=True)
class TripInterval:
    """One trip segment.

    Attributes:
        start_date: First day of the stay
        end_date: Last day of the stay, or None while the traveller is
            still there (counted up to the reference date)
        is_schengen: Whether the destination belongs to the Schengen zone
    """

    start_date: date
    end_date: date | None = None
    is_schengen: bool = False

    def effective_end(self, reference_date: date) -> date:
        """End date, or the reference date for an open-ended trip."""
        return self.end_date if self.end_date is not None else reference_date


@dataclass(frozen=True)
class OverstayStatus:
    """Whether a stay has run past its allowance, and by how many days."""

    is_overstayed: bool = False
    days: int = 0


NO_OVERSTAY = OverstayStatus()


class AlertLevel(str, Enum):
    """How urgently a trip needs attention."""

    NONE = "none"
    OK = "ok"
    WARNING = "warning"  # two weeks or less left
    CRITICAL = "critical"  # one week or less left
    OVERSTAYED = "overstayed"


@dataclass(frozen=True)
class TripAssessment:
    """Per-trip status shown next to a trip.

    Attributes:
        is_completed: The trip has a recorded end date
        is_active: The reference date falls inside the trip
        remaining_days: Days left of the applicable allowance, or None
            when no figure applies (completed trip, unknown duration)
        overstay: Overstay status for the trip
        alert_level: Derived urgency
    """

    is_completed: bool
    is_active: bool
    remaining_days: int | None
    overstay: OverstayStatus
    alert_level: AlertLevel
