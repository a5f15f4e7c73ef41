"""Checkout materialization, conflicts and status transitions."""

from datetime import time, timedelta

import pytest

from thaikick.core.enums import BookingStatus, BookingType
from thaikick.core.exceptions import (
    BookingConflictException,
    InvalidStatusTransitionException,
    NotFoundException,
    RepositoryException,
    ServiceException,
    ValidationException,
)
from thaikick.models import Booking
from thaikick.schemas.booking import BookingCreate
from thaikick.services.booking_service import BookingService
from thaikick.services.slot_availability import SlotAvailabilityResolver

from ..factories import (
    MONDAY,
    create_booking,
    create_course,
    create_gym,
    create_slot,
    create_trainer,
    weeks_after,
)


class _NeverTakenResolver(SlotAvailabilityResolver):
    """Skips the pre-insert check so the database guard is exercised."""

    def find_taken_dates(self, trainer_id, slot, dates):
        return []


class _RecordingResolver(SlotAvailabilityResolver):
    def __init__(self, db):
        super().__init__(db)
        self.calls = []

    def find_taken_dates(self, trainer_id, slot, dates):
        self.calls.append((trainer_id, slot.id, list(dates)))
        return super().find_taken_dates(trainer_id, slot, dates)


def private_payload(user, gym, trainer, slot, weeks: int = 1, **extra) -> BookingCreate:
    return BookingCreate(
        user_id=user.id,
        gym_id=gym.id,
        booking_type=BookingType.PRIVATE,
        start_date=MONDAY,
        end_date=weeks_after(MONDAY, weeks),
        trainer_id=trainer.id,
        schedule_id=slot.id,
        **extra,
    )


@pytest.fixture
def booking_service(db) -> BookingService:
    return BookingService(db)


def test_two_week_private_flash_sale_with_referral(db, booking_service, customer, affiliate, flash_sale_gym):
    trainer = create_trainer(db, flash_sale_gym, price_per_session=300)
    slot = create_slot(db, trainer, "Monday", time(9, 0), time(10, 0))

    bookings = booking_service.create_bookings(
        private_payload(customer, flash_sale_gym, trainer, slot, referral_code="NOK10")
    )

    assert len(bookings) == 2
    assert [b.date for b in bookings] == [MONDAY, weeks_after(MONDAY, 1)]
    assert {b.trainer_id for b in bookings} == {trainer.id}
    assert {b.start_time for b in bookings} == {time(9, 0)}
    # (500 * 0.8 + 300) per session, 10% commission per row
    assert all(b.total_price == 700 for b in bookings)
    assert all(b.commission_amount == 70 for b in bookings)
    assert all(b.commission_paid_to == "NOK10" for b in bookings)
    assert all(b.status == BookingStatus.CONFIRMED.value for b in bookings)


def test_unknown_referral_code_books_without_commission(db, booking_service, customer, gym):
    bookings = booking_service.create_bookings(
        BookingCreate(
            user_id=customer.id,
            gym_id=gym.id,
            booking_type=BookingType.STANDARD,
            start_date=MONDAY,
            end_date=MONDAY + timedelta(days=2),
            referral_code="NOBODY",
        )
    )
    assert len(bookings) == 3
    assert all(b.commission_amount == 0 and b.commission_paid_to is None for b in bookings)
    assert all(b.trainer_id is None for b in bookings)


def test_course_creates_single_row_with_course_reference(db, booking_service, customer, gym):
    course = create_course(db, gym, price=4500)
    bookings = booking_service.create_bookings(
        BookingCreate(
            user_id=customer.id,
            gym_id=gym.id,
            booking_type=BookingType.COURSE,
            start_date=MONDAY,
            end_date=weeks_after(MONDAY, 4),
            course_id=course.id,
        )
    )
    assert len(bookings) == 1
    assert bookings[0].course_id == course.id
    assert bookings[0].total_price == 4500


def test_taken_slot_on_any_week_rejects_whole_checkout(db, booking_service, customer, gym, trainer):
    slot = create_slot(db, trainer)
    create_booking(
        db,
        gym,
        customer,
        date=weeks_after(MONDAY, 1),
        type=BookingType.PRIVATE.value,
        trainer_id=trainer.id,
        start_time=time(9, 0),
        end_time=time(10, 0),
    )

    with pytest.raises(BookingConflictException) as exc_info:
        booking_service.create_bookings(private_payload(customer, gym, trainer, slot, weeks=2))

    assert exc_info.value.code == "AVAILABILITY_CONFLICT"
    assert exc_info.value.details["dates"] == [weeks_after(MONDAY, 1).isoformat()]
    assert db.query(Booking).count() == 1


def test_cancelled_booking_frees_the_slot(db, booking_service, customer, gym, trainer):
    slot = create_slot(db, trainer)
    create_booking(
        db,
        gym,
        customer,
        type=BookingType.PRIVATE.value,
        trainer_id=trainer.id,
        start_time=time(9, 0),
        status=BookingStatus.CANCELLED.value,
    )

    bookings = booking_service.create_bookings(private_payload(customer, gym, trainer, slot, weeks=0))
    assert len(bookings) == 1


def test_database_guard_rolls_back_every_row(db, customer, gym, trainer):
    slot = create_slot(db, trainer)
    create_booking(
        db,
        gym,
        customer,
        date=weeks_after(MONDAY, 2),
        type=BookingType.PRIVATE.value,
        trainer_id=trainer.id,
        start_time=time(9, 0),
        end_time=time(10, 0),
    )
    service = BookingService(db, availability=_NeverTakenResolver(db))

    with pytest.raises(BookingConflictException):
        service.create_bookings(private_payload(customer, gym, trainer, slot, weeks=2))

    # Weeks 0 and 1 were not left behind
    assert db.query(Booking).count() == 1


def test_persistence_failure_surfaces_as_service_exception(db, booking_service, customer, gym, monkeypatch):
    def broken_create_many(rows):
        raise RepositoryException("connection reset")

    monkeypatch.setattr(booking_service.repository, "create_many", broken_create_many)

    with pytest.raises(ServiceException) as exc_info:
        booking_service.create_bookings(
            BookingCreate(
                user_id=customer.id,
                gym_id=gym.id,
                booking_type=BookingType.STANDARD,
                start_date=MONDAY,
            )
        )
    assert exc_info.value.code == "PERSISTENCE_FAILURE"
    assert db.query(Booking).count() == 0


def test_unknown_user_is_rejected(booking_service, gym):
    with pytest.raises(NotFoundException) as exc_info:
        booking_service.create_bookings(
            BookingCreate(
                user_id="missing",
                gym_id=gym.id,
                booking_type=BookingType.STANDARD,
                start_date=MONDAY,
            )
        )
    assert exc_info.value.code == "USER_NOT_FOUND"


def test_slot_on_wrong_weekday_is_rejected(db, booking_service, customer, gym, trainer):
    tuesday = create_slot(db, trainer, "Tuesday")
    with pytest.raises(ValidationException) as exc_info:
        booking_service.create_bookings(private_payload(customer, gym, trainer, tuesday))
    assert exc_info.value.code == "TIME_SLOT_WEEKDAY_MISMATCH"


def test_trainer_from_another_gym_is_not_found(db, booking_service, customer, gym):
    other_trainer = create_trainer(db, create_gym(db, name="Other Gym"))
    slot = create_slot(db, other_trainer)
    with pytest.raises(NotFoundException) as exc_info:
        booking_service.create_bookings(private_payload(customer, gym, other_trainer, slot))
    assert exc_info.value.code == "TRAINER_NOT_FOUND"


class TestStatusTransitions:
    def test_confirmed_to_completed_stamps_time(self, db, booking_service, customer, gym):
        booking = create_booking(db, gym, customer)
        updated = booking_service.update_status(booking.id, BookingStatus.COMPLETED)
        assert updated.status == BookingStatus.COMPLETED.value
        assert updated.completed_at is not None

    def test_confirmed_to_cancelled_stamps_time(self, db, booking_service, customer, gym):
        booking = create_booking(db, gym, customer)
        updated = booking_service.update_status(booking.id, BookingStatus.CANCELLED)
        assert updated.status == BookingStatus.CANCELLED.value
        assert updated.cancelled_at is not None

    @pytest.mark.parametrize(
        "current,requested",
        [
            (BookingStatus.CANCELLED, BookingStatus.CONFIRMED),
            (BookingStatus.COMPLETED, BookingStatus.CANCELLED),
            (BookingStatus.CANCELLED, BookingStatus.COMPLETED),
        ],
    )
    def test_terminal_statuses_cannot_move(self, db, booking_service, customer, gym, current, requested):
        booking = create_booking(db, gym, customer, status=current.value)
        with pytest.raises(InvalidStatusTransitionException):
            booking_service.update_status(booking.id, requested)
        db.refresh(booking)
        assert booking.status == current.value

    def test_same_status_is_a_no_op(self, db, booking_service, customer, gym):
        booking = create_booking(db, gym, customer)
        assert booking_service.update_status(booking.id, BookingStatus.CONFIRMED).status == "confirmed"

    def test_missing_booking(self, booking_service):
        with pytest.raises(NotFoundException):
            booking_service.update_status("missing", BookingStatus.CANCELLED)


def test_private_checkout_rechecks_selected_trainer_slot_on_every_date(db, customer, gym, trainer):
    slot = create_slot(db, trainer)
    resolver = _RecordingResolver(db)
    service = BookingService(db, availability=resolver)

    service.create_bookings(private_payload(customer, gym, trainer, slot, weeks=1))

    assert resolver.calls == [(trainer.id, slot.id, [MONDAY, weeks_after(MONDAY, 1)])]


def test_standard_checkout_skips_slot_recheck(db, customer, gym):
    resolver = _RecordingResolver(db)
    service = BookingService(db, availability=resolver)

    service.create_bookings(
        BookingCreate(
            user_id=customer.id, gym_id=gym.id, booking_type=BookingType.STANDARD, start_date=MONDAY
        )
    )

    assert resolver.calls == []
