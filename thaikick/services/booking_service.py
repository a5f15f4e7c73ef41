# thaikick/services/booking_service.py
"""
Booking Service for the ThaiKick platform.

Turns a priced selection into persisted booking rows and manages their
status afterwards. One checkout may create many rows (one per covered
date); they are written in a single transaction so a failure never
leaves a partial multi-week booking behind.
"""

from datetime import datetime, timezone
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.constants import TIME_FORMAT
from ..core.enums import ALLOWED_STATUS_TRANSITIONS, BookingStatus, BookingType
from ..core.exceptions import (
    BookingConflictException,
    InvalidStatusTransitionException,
    NotFoundException,
    RepositoryException,
)
from ..models.booking import Booking
from ..models.gym import Trainer
from ..models.schedule import TrainerSchedule
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from .base import BaseService
from .pricing_service import BookingQuote, PricingInputs, PricingService
from .slot_availability import SlotAvailabilityResolver

if TYPE_CHECKING:
    from ..repositories.booking_repository import BookingRepository
    from ..repositories.user_repository import UserRepository
    from ..schemas.booking import BookingCreate

logger = logging.getLogger(__name__)

SLOT_TAKEN_MESSAGE = "This time slot is no longer available on one or more of the selected dates"


class BookingService(BaseService):
    """
    Checkout materialization, status transitions and booking listings.
    """

    def __init__(
        self,
        db: Session,
        pricing_service: Optional[PricingService] = None,
        availability: Optional[SlotAvailabilityResolver] = None,
    ):
        super().__init__(db)
        self.repository: "BookingRepository" = RepositoryFactory.create_booking_repository(db)
        self.user_repository: "UserRepository" = RepositoryFactory.create_user_repository(db)
        self.pricing_service = pricing_service or PricingService(db)
        self.availability = availability or SlotAvailabilityResolver(
            db, booking_repository=self.repository
        )

    @BaseService.measure_operation("bookings.create")
    def create_bookings(self, payload: "BookingCreate") -> List[Booking]:
        """
        Price the selection and persist one row per covered date.

        Raises:
            NotFoundException: unknown user, gym, trainer, slot or course
            ValidationException: incomplete or contradictory selection
            BookingConflictException: the private slot is taken on any date
            ServiceException: the rows could not be written
        """
        self.log_operation(
            "create_bookings",
            user_id=payload.user_id,
            gym_id=payload.gym_id,
            booking_type=payload.booking_type.value,
        )

        if self.user_repository.get_by_id(payload.user_id, load_relationships=False) is None:
            raise NotFoundException(
                "User not found", code="USER_NOT_FOUND", details={"user_id": payload.user_id}
            )

        inputs = self.pricing_service.load_inputs(payload)
        quote = self.pricing_service.engine.quote(inputs)
        rows = self._build_rows(payload.user_id, inputs, quote)

        with self.transaction():
            if (
                inputs.booking_type is BookingType.PRIVATE
                and inputs.trainer is not None
                and inputs.time_slot is not None
            ):
                self._ensure_slot_free(inputs.trainer, inputs.time_slot, inputs, quote)
            try:
                bookings = self.repository.create_many(rows)
            except RepositoryException as exc:
                if isinstance(exc.__cause__, IntegrityError):
                    prometheus_metrics.inc_slot_conflict("constraint")
                    logger.warning(
                        f"Slot uniqueness violated while materializing for trainer "
                        f"{inputs.trainer.id if inputs.trainer else None}"
                    )
                    raise BookingConflictException(
                        SLOT_TAKEN_MESSAGE, details=self._conflict_details(inputs, [])
                    ) from exc
                raise

        prometheus_metrics.inc_bookings_materialized(quote.booking_type.value, len(bookings))
        logger.info(
            f"Materialized {len(bookings)} {quote.booking_type.value} booking(s) at gym "
            f"{inputs.gym.id} for user {payload.user_id}: total={quote.total_price} "
            f"row={quote.row_price} commission={quote.commission_per_row}"
        )
        return bookings

    def _ensure_slot_free(
        self,
        trainer: Trainer,
        slot: TrainerSchedule,
        inputs: PricingInputs,
        quote: BookingQuote,
    ) -> None:
        taken = self.availability.find_taken_dates(trainer.id, slot, list(quote.session_dates))
        if taken:
            prometheus_metrics.inc_slot_conflict("precheck")
            logger.warning(
                f"Trainer {trainer.id} slot {slot.id} already taken on "
                f"{', '.join(d.isoformat() for d in taken)}"
            )
            raise BookingConflictException(
                SLOT_TAKEN_MESSAGE, details=self._conflict_details(inputs, taken)
            )

    @staticmethod
    def _conflict_details(inputs: PricingInputs, taken: List[Any]) -> Dict[str, Any]:
        slot = inputs.time_slot
        return {
            "trainer_id": inputs.trainer.id if inputs.trainer else None,
            "start_time": slot.start_time.strftime(TIME_FORMAT) if slot else None,
            "dates": [d.isoformat() for d in taken],
        }

    @staticmethod
    def _build_rows(user_id: str, inputs: PricingInputs, quote: BookingQuote) -> List[Dict[str, Any]]:
        rows = []
        for draft in quote.rows:
            row: Dict[str, Any] = {
                "gym_id": inputs.gym.id,
                "user_id": user_id,
                "date": draft.date,
                "type": quote.booking_type.value,
                "total_price": draft.total_price,
                "commission_amount": draft.commission_amount,
                "commission_paid_to": quote.commission_paid_to,
                "status": BookingStatus.CONFIRMED.value,
            }
            if quote.booking_type is BookingType.PRIVATE and inputs.time_slot is not None:
                row["trainer_id"] = inputs.trainer.id if inputs.trainer else None
                row["start_time"] = inputs.time_slot.start_time
                row["end_time"] = inputs.time_slot.end_time
            if quote.booking_type is BookingType.COURSE and inputs.course is not None:
                row["course_id"] = inputs.course.id
            rows.append(row)
        return rows

    @BaseService.measure_operation("bookings.update_status")
    def update_status(self, booking_id: str, status: BookingStatus) -> Booking:
        """
        Move a booking along its lifecycle.

        confirmed -> completed and confirmed -> cancelled are the only moves.
        Re-applying the current status is a no-op.
        """
        with self.transaction():
            booking = self.get_booking(booking_id)
            current = BookingStatus(booking.status)
            if current is status:
                return booking
            if status not in ALLOWED_STATUS_TRANSITIONS[current]:
                raise InvalidStatusTransitionException(current.value, status.value)

            now = datetime.now(timezone.utc)
            changes: Dict[str, Any] = {"status": status.value}
            if status is BookingStatus.COMPLETED:
                changes["completed_at"] = now
            elif status is BookingStatus.CANCELLED:
                changes["cancelled_at"] = now
            self.repository.update(booking.id, **changes)

        logger.info(f"Booking {booking_id} status {current.value} -> {status.value}")
        return booking

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.repository.get_by_id(booking_id)
        if booking is None:
            raise NotFoundException(
                "Booking not found", code="BOOKING_NOT_FOUND", details={"booking_id": booking_id}
            )
        return booking

    @BaseService.measure_operation("bookings.list_for_user")
    def list_user_bookings(self, user_id: str) -> List[Booking]:
        return self.repository.list_for_user(user_id)

    @BaseService.measure_operation("bookings.list_for_gym")
    def list_gym_bookings(self, gym_id: str) -> List[Booking]:
        return self.repository.list_for_gym(gym_id)
