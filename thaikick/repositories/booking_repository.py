# thaikick/repositories/booking_repository.py
"""
Booking Repository

Queries used by checkout, dashboards and the affiliate program.
"Active" means any status except cancelled: completed sessions still
occupy their slot and still earn commission.
"""

from datetime import date
import logging
from typing import Dict, List, Tuple, cast

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from ..core.enums import BookingStatus
from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):
    def __init__(self, db: Session):
        super().__init__(db, Booking)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            joinedload(Booking.gym),
            joinedload(Booking.trainer),
            joinedload(Booking.course),
        )

    def get_active_trainer_bookings(self, trainer_id: str, target_date: date) -> List[Booking]:
        """Non-cancelled bookings holding a trainer on one date."""
        try:
            return cast(
                List[Booking],
                self.db.query(Booking)
                .filter(
                    Booking.trainer_id == trainer_id,
                    Booking.date == target_date,
                    Booking.status != BookingStatus.CANCELLED.value,
                )
                .order_by(Booking.start_time)
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting bookings for trainer {trainer_id} on {target_date}: {str(e)}")
            raise RepositoryException(f"Failed to get trainer bookings: {str(e)}")

    def get_active_trainer_bookings_by_date(
        self, trainer_id: str, dates: List[date]
    ) -> Dict[date, List[Booking]]:
        """Same as get_active_trainer_bookings for several dates in one query."""
        grouped: Dict[date, List[Booking]] = {d: [] for d in dates}
        if not dates:
            return grouped
        try:
            rows = (
                self.db.query(Booking)
                .filter(
                    Booking.trainer_id == trainer_id,
                    Booking.date.in_(dates),
                    Booking.status != BookingStatus.CANCELLED.value,
                )
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting bookings for trainer {trainer_id}: {str(e)}")
            raise RepositoryException(f"Failed to get trainer bookings: {str(e)}")

        for booking in rows:
            grouped.setdefault(booking.date, []).append(booking)
        return grouped

    def list_for_user(self, user_id: str) -> List[Booking]:
        try:
            return cast(
                List[Booking],
                self._apply_eager_loading(self.db.query(Booking))
                .filter(Booking.user_id == user_id)
                .order_by(Booking.date.desc(), Booking.created_at.desc())
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing bookings for user {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to list bookings: {str(e)}")

    def list_for_gym(self, gym_id: str) -> List[Booking]:
        try:
            return cast(
                List[Booking],
                self._apply_eager_loading(self.db.query(Booking))
                .filter(Booking.gym_id == gym_id)
                .order_by(Booking.created_at.desc(), Booking.date.desc())
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing bookings for gym {gym_id}: {str(e)}")
            raise RepositoryException(f"Failed to list bookings: {str(e)}")

    def get_commission_totals(self, referral_code: str) -> Tuple[int, int]:
        """(booking count, commission sum) credited to a referral code."""
        try:
            count, total = (
                self.db.query(
                    func.count(Booking.id),
                    func.coalesce(func.sum(Booking.commission_amount), 0),
                )
                .filter(
                    Booking.commission_paid_to == referral_code,
                    Booking.status != BookingStatus.CANCELLED.value,
                )
                .one()
            )
            return int(count), int(total)
        except SQLAlchemyError as e:
            self.logger.error(f"Error summing commission for {referral_code}: {str(e)}")
            raise RepositoryException(f"Failed to sum commission: {str(e)}")
