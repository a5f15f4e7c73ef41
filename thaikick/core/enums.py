# thaikick/core/enums.py
"""
Core enums for the ThaiKick platform.

Values match what is stored in the database, so they can be compared
directly against column values.
"""

from datetime import date
from enum import Enum
from typing import Dict, FrozenSet


class UserRole(str, Enum):
    ADMIN = "admin"
    OWNER = "owner"
    CUSTOMER = "customer"


class AffiliateStatus(str, Enum):
    NONE = "none"
    PENDING = "pending"
    ACTIVE = "active"
    REJECTED = "rejected"


class ApplicationStatus(str, Enum):
    """Lifecycle of a request to join the affiliate program."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class BookingType(str, Enum):
    """What the customer is paying for."""

    STANDARD = "standard"  # Daily rate, one row per day
    PRIVATE = "private"  # Weekly trainer session, one row per week
    COURSE = "course"  # Flat-priced enrollment, one row total


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    CONFIRMED = "confirmed"  # Default - created at checkout
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ALLOWED_STATUS_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


class Weekday(str, Enum):
    """Gregorian weekday names as stored on trainer schedules."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        # date.weekday() is 0 for Monday regardless of locale
        return _WEEKDAY_ORDER[value.weekday()]


_WEEKDAY_ORDER = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
    Weekday.SUNDAY,
)
