# thaikick/schemas/booking.py
"""
Booking schemas for the ThaiKick platform.

Dates travel as YYYY-MM-DD, times as HH:MM, money as whole currency
units. The quote request is also the checkout request minus the user.
"""

from datetime import date, datetime, time
from typing import TYPE_CHECKING, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..core.enums import BookingStatus, BookingType
from ._strict_base import StrictModel, StrictRequestModel
from .base import Money, ensure_date_only, format_time

if TYPE_CHECKING:
    from ..services.pricing_service import BookingQuote


class BookingQuoteIn(StrictRequestModel):
    """
    A booking selection to price.

    Missing fields are allowed here so the service can answer with the
    specific validation error (no start date, no trainer, ...).
    """

    gym_id: str = Field(..., min_length=1)
    booking_type: BookingType
    start_date: Optional[date] = Field(None, description="First covered date")
    end_date: Optional[date] = Field(
        None, description="Last covered date (standard/private); defaults to start_date"
    )
    trainer_id: Optional[str] = None
    schedule_id: Optional[str] = Field(None, description="Selected weekly trainer slot")
    course_id: Optional[str] = None
    referral_code: Optional[str] = Field(None, max_length=32)
    referral_captured_at: Optional[datetime] = Field(
        None, description="When the referral link was followed; old captures earn nothing"
    )

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _enforce_date_only(cls, v: object) -> object:
        return ensure_date_only(v, "date")

    @field_validator("referral_code")
    @classmethod
    def _strip_code(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() or None if v else None


class BookingCreate(BookingQuoteIn):
    """Checkout request: the priced selection plus who is booking."""

    user_id: str = Field(..., min_length=1)


class BookingQuoteOut(StrictModel):
    booking_type: BookingType
    session_dates: List[date]
    session_count: int
    price_per_session: Money
    total_price: int
    row_price: int
    commission_per_row: int
    commission_paid_to: Optional[str] = None
    rounding_difference: int = Field(
        0, description="total_price minus the sum of the per-row prices"
    )
    currency: str

    @classmethod
    def from_quote(cls, quote: "BookingQuote", currency: str) -> "BookingQuoteOut":
        return cls(
            booking_type=quote.booking_type,
            session_dates=list(quote.session_dates),
            session_count=quote.session_count,
            price_per_session=quote.price_per_session,
            total_price=quote.total_price,
            row_price=quote.row_price,
            commission_per_row=quote.commission_per_row,
            commission_paid_to=quote.commission_paid_to,
            rounding_difference=quote.rounding_difference,
            currency=currency,
        )


class BookingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    gym_id: str
    user_id: str
    date: date
    type: BookingType
    status: BookingStatus
    trainer_id: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    course_id: Optional[str] = None
    total_price: int
    commission_paid_to: Optional[str] = None
    commission_amount: int = 0
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    @field_serializer("start_time", "end_time")
    def _serialize_time(self, value: Optional[time]) -> Optional[str]:
        return format_time(value)


class BookingStatusUpdate(StrictRequestModel):
    status: BookingStatus


__all__ = [
    "BookingCreate",
    "BookingOut",
    "BookingQuoteIn",
    "BookingQuoteOut",
    "BookingStatusUpdate",
]
