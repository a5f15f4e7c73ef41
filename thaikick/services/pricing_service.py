"""Centralized pricing calculations for bookings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.constants import (
    DEFAULT_MAX_BOOKING_DAYS,
    DEFAULT_MAX_PRIVATE_WEEKS,
    PRIVATE_SESSION_INTERVAL_DAYS,
)
from ..core.enums import BookingType, Weekday
from ..core.exceptions import NotFoundException, ValidationException
from ..models.gym import Course, Gym, Trainer
from ..models.schedule import TrainerSchedule
from ..repositories.factory import RepositoryFactory
from .base import BaseService
from .referral_service import ReferralService

if TYPE_CHECKING:
    from ..repositories.gym_repository import GymRepository
    from ..repositories.schedule_repository import TrainerScheduleRepository
    from ..schemas.booking import BookingQuoteIn


@dataclass(frozen=True)
class PricingInputs:
    """Snapshot of booking context required for pricing calculations."""

    booking_type: BookingType
    start_date: Optional[date]
    gym: Gym
    end_date: Optional[date] = None
    trainer: Optional[Trainer] = None
    course: Optional[Course] = None
    time_slot: Optional[TrainerSchedule] = None
    referral_code: Optional[str] = None
    referral_code_is_valid: bool = False


@dataclass(frozen=True)
class BookingRowDraft:
    """One booking row as it will be persisted."""

    date: date
    total_price: int
    commission_amount: int


@dataclass(frozen=True)
class BookingQuote:
    booking_type: BookingType
    session_dates: Tuple[date, ...]
    price_per_session: Decimal
    total_price: int
    row_price: int
    commission_per_row: int
    commission_paid_to: Optional[str]

    @property
    def session_count(self) -> int:
        return len(self.session_dates)

    @property
    def rounding_difference(self) -> int:
        """Displayed total minus the sum of the persisted row prices."""
        return self.total_price - self.row_price * self.session_count

    @property
    def rows(self) -> List[BookingRowDraft]:
        return [
            BookingRowDraft(
                date=session_date,
                total_price=self.row_price,
                commission_amount=self.commission_per_row,
            )
            for session_date in self.session_dates
        ]


class BookingPricingEngine:
    """
    Pure pricing rules for a booking selection.

    Validation runs before any date or price computation. Rounding is
    half-up to whole currency units and happens once on the aggregate
    total; row prices are the total divided evenly and rounded again,
    so rows may not sum back to the displayed total (see
    BookingQuote.rounding_difference).
    """

    def __init__(
        self,
        max_booking_days: int = DEFAULT_MAX_BOOKING_DAYS,
        max_private_weeks: int = DEFAULT_MAX_PRIVATE_WEEKS,
    ):
        self.max_booking_days = max_booking_days
        self.max_private_weeks = max_private_weeks

    def quote(self, inputs: PricingInputs) -> BookingQuote:
        start_date = self.validate(inputs)
        self.check_span(inputs.booking_type, start_date, inputs.end_date)

        session_dates = self.expand_dates(inputs.booking_type, start_date, inputs.end_date)
        count = len(session_dates)

        if inputs.booking_type is BookingType.COURSE and inputs.course is not None:
            total_price = self._as_amount(inputs.course.price, "course.price")
            price_per_session = Decimal(total_price)
            row_price = total_price
        else:
            trainer = inputs.trainer if inputs.booking_type is BookingType.PRIVATE else None
            price_per_session = self.price_per_session(inputs.gym, trainer)
            total_price = self._round_to_int(price_per_session * count)
            row_price = self._round_to_int(Decimal(total_price) / Decimal(count))

        commission = self.commission_for(
            row_price,
            inputs.gym.affiliate_percentage,
            referral_code=inputs.referral_code,
            referral_code_is_valid=inputs.referral_code_is_valid,
        )
        code = (inputs.referral_code or "").strip()

        return BookingQuote(
            booking_type=inputs.booking_type,
            session_dates=tuple(session_dates),
            price_per_session=price_per_session,
            total_price=total_price,
            row_price=row_price,
            commission_per_row=commission,
            commission_paid_to=code if commission > 0 else None,
        )

    @staticmethod
    def validate(inputs: PricingInputs) -> date:
        """Reject incomplete or contradictory selections; returns the start date."""
        if inputs.start_date is None:
            raise ValidationException("Please select a start date.", code="START_DATE_REQUIRED")

        booking_type = inputs.booking_type
        if booking_type in (BookingType.STANDARD, BookingType.PRIVATE):
            if inputs.end_date is not None and inputs.end_date < inputs.start_date:
                raise ValidationException(
                    "End date cannot be before start date.",
                    code="END_BEFORE_START",
                    details={
                        "start_date": inputs.start_date.isoformat(),
                        "end_date": inputs.end_date.isoformat(),
                    },
                )

        if booking_type is BookingType.PRIVATE:
            if inputs.trainer is None:
                raise ValidationException("Please select a trainer.", code="TRAINER_REQUIRED")
            if inputs.time_slot is None:
                raise ValidationException("Please select a time slot.", code="TIME_SLOT_REQUIRED")

        if booking_type is BookingType.COURSE:
            if inputs.course is None:
                raise ValidationException("Please select a course.", code="COURSE_REQUIRED")
            if not inputs.course.is_active:
                raise ValidationException(
                    "This course is not open for booking.",
                    code="COURSE_INACTIVE",
                    details={"course_id": inputs.course.id},
                )

        return inputs.start_date

    def check_span(
        self, booking_type: BookingType, start_date: date, end_date: Optional[date]
    ) -> None:
        """Refuse ranges that would materialize more rows than allowed."""
        if booking_type is BookingType.COURSE or end_date is None:
            return
        span_days = (end_date - start_date).days
        if booking_type is BookingType.PRIVATE:
            count, limit, unit = (
                span_days // PRIVATE_SESSION_INTERVAL_DAYS + 1,
                self.max_private_weeks,
                "weekly sessions",
            )
        else:
            count, limit, unit = span_days + 1, self.max_booking_days, "days"
        if count > limit:
            raise ValidationException(
                f"Bookings can cover at most {limit} {unit}.",
                code="RANGE_TOO_LONG",
                details={
                    "start_date": start_date.isoformat(),
                    "end_date": end_date.isoformat(),
                    "requested": count,
                    "limit": limit,
                },
            )

    @staticmethod
    def expand_dates(
        booking_type: BookingType, start_date: date, end_date: Optional[date] = None
    ) -> List[date]:
        """Calendar dates a booking materializes into, in order."""
        if booking_type is BookingType.COURSE:
            return [start_date]

        last = end_date or start_date
        if last < start_date:
            raise ValidationException("End date cannot be before start date.", code="END_BEFORE_START")

        step = PRIVATE_SESSION_INTERVAL_DAYS if booking_type is BookingType.PRIVATE else 1
        span_days = (last - start_date).days
        return [start_date + timedelta(days=offset) for offset in range(0, span_days + 1, step)]

    @classmethod
    def price_per_session(cls, gym: Gym, trainer: Optional[Trainer] = None) -> Decimal:
        """Gym base price after any flash sale, plus the trainer surcharge."""
        price = Decimal(cls._as_amount(gym.base_price, "gym.base_price"))
        if gym.is_flash_sale:
            discount = cls._as_percentage(gym.flash_sale_discount, "gym.flash_sale_discount")
            price = price * (Decimal(1) - discount / Decimal(100))
        if trainer is not None:
            price += Decimal(cls._as_amount(trainer.price_per_session, "trainer.price_per_session"))
        return price

    @classmethod
    def commission_for(
        cls,
        row_price: int,
        affiliate_percentage: Any,
        *,
        referral_code: Optional[str],
        referral_code_is_valid: bool,
    ) -> int:
        if not (referral_code or "").strip() or not referral_code_is_valid:
            return 0
        pct = cls._as_percentage(affiliate_percentage or 0, "gym.affiliate_percentage")
        return cls._round_to_int(Decimal(row_price) * pct / Decimal(100))

    @staticmethod
    def _round_to_int(value: Decimal) -> int:
        return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @staticmethod
    def _as_amount(value: Any, field: str) -> int:
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise ValidationException(
                f"{field} is invalid", code="INVALID_PRICE", details={field: value}
            ) from exc
        if amount < 0 or amount != amount.to_integral_value():
            raise ValidationException(
                f"{field} must be a non-negative whole amount",
                code="INVALID_PRICE",
                details={field: str(value)},
            )
        return int(amount)

    @staticmethod
    def _as_percentage(value: Any, field: str) -> Decimal:
        try:
            pct = Decimal(str(value))
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise ValidationException(
                f"{field} is invalid", code="INVALID_PERCENTAGE", details={field: value}
            ) from exc
        if pct < 0 or pct > 100:
            raise ValidationException(
                f"{field} must be between 0 and 100",
                code="INVALID_PERCENTAGE",
                details={field: str(value)},
            )
        return pct


class PricingService(BaseService):
    """Load a booking selection from the database and price it."""

    def __init__(
        self,
        db: Session,
        referral_service: Optional[ReferralService] = None,
        engine: Optional[BookingPricingEngine] = None,
    ) -> None:
        super().__init__(db)
        self.gym_repository: GymRepository = RepositoryFactory.create_gym_repository(db)
        self.schedule_repository: TrainerScheduleRepository = (
            RepositoryFactory.create_schedule_repository(db)
        )
        self.referral_service = referral_service or ReferralService(db)
        self.engine = engine or BookingPricingEngine(
            max_booking_days=settings.max_booking_days,
            max_private_weeks=settings.max_private_weeks,
        )

    @BaseService.measure_operation("pricing.compute_quote")
    def compute_quote(self, payload: "BookingQuoteIn") -> BookingQuote:
        return self.engine.quote(self.load_inputs(payload))

    def load_inputs(self, payload: "BookingQuoteIn") -> PricingInputs:
        booking_type = BookingType(payload.booking_type)

        gym = self.gym_repository.get_by_id(payload.gym_id)
        if gym is None:
            raise NotFoundException(
                "Gym not found", code="GYM_NOT_FOUND", details={"gym_id": payload.gym_id}
            )

        trainer: Optional[Trainer] = None
        time_slot: Optional[TrainerSchedule] = None
        course: Optional[Course] = None

        if booking_type is BookingType.PRIVATE:
            if payload.trainer_id:
                trainer = self._load_trainer(gym.id, payload.trainer_id)
            if trainer is not None and payload.schedule_id:
                time_slot = self._load_time_slot(trainer, payload.schedule_id, payload.start_date)

        if booking_type is BookingType.COURSE and payload.course_id:
            course = self.gym_repository.get_course(gym.id, payload.course_id)
            if course is None:
                raise NotFoundException(
                    "Course not found",
                    code="COURSE_NOT_FOUND",
                    details={"gym_id": gym.id, "course_id": payload.course_id},
                )

        referral_code = (payload.referral_code or "").strip() or None
        resolved_code = self.referral_service.resolve_referral(
            referral_code, captured_at=payload.referral_captured_at
        )

        return PricingInputs(
            booking_type=booking_type,
            start_date=payload.start_date,
            end_date=payload.end_date,
            gym=gym,
            trainer=trainer,
            course=course,
            time_slot=time_slot,
            referral_code=referral_code,
            referral_code_is_valid=resolved_code is not None,
        )

    def _load_trainer(self, gym_id: str, trainer_id: str) -> Trainer:
        trainer = self.gym_repository.get_trainer(gym_id, trainer_id)
        if trainer is None:
            raise NotFoundException(
                "Trainer not found at this gym",
                code="TRAINER_NOT_FOUND",
                details={"gym_id": gym_id, "trainer_id": trainer_id},
            )
        return trainer

    def _load_time_slot(
        self, trainer: Trainer, schedule_id: str, start_date: Optional[date]
    ) -> TrainerSchedule:
        slot = self.schedule_repository.get_by_id(schedule_id)
        if slot is None or slot.trainer_id != trainer.id:
            raise NotFoundException(
                "Time slot not found for this trainer",
                code="TIME_SLOT_NOT_FOUND",
                details={"trainer_id": trainer.id, "schedule_id": schedule_id},
            )
        if start_date is not None and slot.weekday is not Weekday.from_date(start_date):
            raise ValidationException(
                f"This time slot is only offered on {slot.day_of_week}s.",
                code="TIME_SLOT_WEEKDAY_MISMATCH",
                details={
                    "schedule_id": schedule_id,
                    "day_of_week": slot.day_of_week,
                    "start_date": start_date.isoformat(),
                },
            )
        return slot


__all__ = [
    "BookingPricingEngine",
    "BookingQuote",
    "BookingRowDraft",
    "PricingInputs",
    "PricingService",
]
