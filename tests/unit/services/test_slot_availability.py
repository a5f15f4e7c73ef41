"""Unit tests for the pure slot filter."""

from datetime import date, time, timedelta

from thaikick.core.enums import BookingStatus
from thaikick.models import Booking, TrainerSchedule
from thaikick.services.slot_availability import SlotAvailabilityResolver

MONDAY = date(2030, 1, 7)


def slot(day: str, start: time, end: time) -> TrainerSchedule:
    return TrainerSchedule(trainer_id="t1", day_of_week=day, start_time=start, end_time=end)


def booking(on: date, start: time, status: str = BookingStatus.CONFIRMED.value) -> Booking:
    return Booking(trainer_id="t1", date=on, start_time=start, status=status)


def test_taken_start_time_is_removed():
    nine = slot("Monday", time(9, 0), time(10, 0))
    ten = slot("Monday", time(10, 0), time(11, 0))

    free = SlotAvailabilityResolver.filter_free_slots(
        MONDAY, [nine, ten], [booking(MONDAY, time(9, 0))]
    )

    assert free == [ten]


def test_no_slots_for_weekday_returns_empty_list():
    tuesday_only = [slot("Tuesday", time(9, 0), time(10, 0))]
    assert SlotAvailabilityResolver.filter_free_slots(MONDAY, tuesday_only, []) == []


def test_cancelled_bookings_do_not_block():
    nine = slot("Monday", time(9, 0), time(10, 0))
    cancelled = booking(MONDAY, time(9, 0), BookingStatus.CANCELLED.value)
    assert SlotAvailabilityResolver.filter_free_slots(MONDAY, [nine], [cancelled]) == [nine]


def test_completed_bookings_still_block():
    nine = slot("Monday", time(9, 0), time(10, 0))
    completed = booking(MONDAY, time(9, 0), BookingStatus.COMPLETED.value)
    assert SlotAvailabilityResolver.filter_free_slots(MONDAY, [nine], [completed]) == []


def test_bookings_on_other_dates_are_ignored():
    nine = slot("Monday", time(9, 0), time(10, 0))
    next_week = booking(MONDAY + timedelta(days=7), time(9, 0))
    assert SlotAvailabilityResolver.filter_free_slots(MONDAY, [nine], [next_week]) == [nine]


def test_overlap_without_same_start_is_not_a_conflict():
    # Only equal start times conflict; overlapping intervals do not
    long_slot = slot("Monday", time(9, 0), time(11, 0))
    half_past = slot("Monday", time(9, 30), time(10, 30))
    free = SlotAvailabilityResolver.filter_free_slots(
        MONDAY, [long_slot, half_past], [booking(MONDAY, time(9, 0))]
    )
    assert free == [half_past]
