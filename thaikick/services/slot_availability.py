# thaikick/services/slot_availability.py
"""
Slot availability for private trainer sessions.

Trainers publish recurring weekly slots (TrainerSchedule). For a given
calendar date the candidate slots are those on that date's weekday; a
candidate is free unless a non-cancelled booking for the same trainer and
date already starts at the same time.

Conflicts are keyed on start time only, not on interval overlap. Two
slots that overlap without sharing a start time are both offered.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from ..core.enums import BookingStatus, Weekday
from ..core.exceptions import NotFoundException
from ..models.booking import Booking
from ..models.schedule import TrainerSchedule
from ..repositories.booking_repository import BookingRepository
from ..repositories.factory import RepositoryFactory
from ..repositories.gym_repository import GymRepository
from ..repositories.schedule_repository import TrainerScheduleRepository
from .base import BaseService


class SlotAvailabilityResolver(BaseService):
    """
    Resolve which weekly slots of a trainer are free on a date.

    Every call reads schedules and bookings fresh; results are never
    cached across dates.
    """

    def __init__(
        self,
        db: Session,
        schedule_repository: Optional[TrainerScheduleRepository] = None,
        booking_repository: Optional[BookingRepository] = None,
    ):
        super().__init__(db)
        self.schedule_repository = (
            schedule_repository or RepositoryFactory.create_schedule_repository(db)
        )
        self.booking_repository = booking_repository or RepositoryFactory.create_booking_repository(db)
        self.gym_repository: GymRepository = RepositoryFactory.create_gym_repository(db)

    @staticmethod
    def filter_free_slots(
        target_date: date,
        schedules: Iterable[TrainerSchedule],
        bookings: Iterable[Booking],
    ) -> List[TrainerSchedule]:
        """
        Pure filter: candidate slots for ``target_date`` minus taken start times.

        Keeps the schedules' order. Bookings on other dates or cancelled
        bookings are ignored.
        """
        weekday = Weekday.from_date(target_date)
        taken_starts = {
            booking.start_time
            for booking in bookings
            if booking.date == target_date
            and booking.status != BookingStatus.CANCELLED.value
            and booking.start_time is not None
        }
        return [
            slot
            for slot in schedules
            if slot.day_of_week == weekday.value and slot.start_time not in taken_starts
        ]

    @BaseService.measure_operation("availability.get_available_slots")
    def get_available_slots(self, trainer_id: str, target_date: date) -> List[TrainerSchedule]:
        """
        Free slots for one trainer on one date.

        An empty list means "no slots available", never an error.
        """
        if self.gym_repository.get_trainer_by_id(trainer_id) is None:
            raise NotFoundException(
                "Trainer not found", code="TRAINER_NOT_FOUND", details={"trainer_id": trainer_id}
            )

        weekday = Weekday.from_date(target_date)
        candidates = self.schedule_repository.get_for_trainer_day(trainer_id, weekday)
        if not candidates:
            return []

        bookings = self.booking_repository.get_active_trainer_bookings(trainer_id, target_date)
        free = self.filter_free_slots(target_date, candidates, bookings)
        self.logger.debug(
            f"Trainer {trainer_id} on {target_date}: {len(free)}/{len(candidates)} slots free"
        )
        return free

    def find_taken_dates(
        self, trainer_id: str, slot: TrainerSchedule, dates: Sequence[date]
    ) -> List[date]:
        """Dates among ``dates`` where the slot's start time is already booked."""
        bookings_by_date: Dict[date, List[Booking]] = (
            self.booking_repository.get_active_trainer_bookings_by_date(trainer_id, list(dates))
        )
        taken = []
        for session_date in dates:
            free = self.filter_free_slots(session_date, [slot], bookings_by_date.get(session_date, []))
            if not free:
                taken.append(session_date)
        return taken
