"""BookingRepository queries."""

from datetime import time, timedelta

from thaikick.core.enums import BookingStatus, BookingType
from thaikick.repositories.factory import RepositoryFactory

from ..factories import MONDAY, create_booking, create_gym


def test_active_trainer_bookings_excludes_cancelled(db, gym, trainer, customer):
    kept = create_booking(
        db, gym, customer, type=BookingType.PRIVATE.value, trainer_id=trainer.id, start_time=time(9, 0)
    )
    create_booking(
        db,
        gym,
        customer,
        type=BookingType.PRIVATE.value,
        trainer_id=trainer.id,
        start_time=time(10, 0),
        status=BookingStatus.CANCELLED.value,
    )

    repo = RepositoryFactory.create_booking_repository(db)
    assert [b.id for b in repo.get_active_trainer_bookings(trainer.id, MONDAY)] == [kept.id]


def test_bookings_by_date_groups_every_requested_date(db, gym, trainer, customer):
    next_week = MONDAY + timedelta(days=7)
    create_booking(
        db,
        gym,
        customer,
        date=next_week,
        type=BookingType.PRIVATE.value,
        trainer_id=trainer.id,
        start_time=time(9, 0),
    )

    repo = RepositoryFactory.create_booking_repository(db)
    grouped = repo.get_active_trainer_bookings_by_date(trainer.id, [MONDAY, next_week])

    assert grouped[MONDAY] == []
    assert len(grouped[next_week]) == 1


def test_list_for_gym_is_scoped(db, gym, customer):
    other = create_gym(db, name="Other")
    mine = create_booking(db, gym, customer)
    create_booking(db, other, customer)

    repo = RepositoryFactory.create_booking_repository(db)
    assert [b.id for b in repo.list_for_gym(gym.id)] == [mine.id]


def test_list_for_user_newest_date_first(db, gym, customer):
    older = create_booking(db, gym, customer, date=MONDAY)
    newer = create_booking(db, gym, customer, date=MONDAY + timedelta(days=1))

    repo = RepositoryFactory.create_booking_repository(db)
    assert [b.id for b in repo.list_for_user(customer.id)] == [newer.id, older.id]
