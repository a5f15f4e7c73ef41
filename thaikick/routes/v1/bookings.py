# thaikick/routes/v1/bookings.py
"""
V1 Booking routes.

Checkout creates one row per covered date; every other endpoint works
on single rows.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies.services import get_booking_service
from ...core.exceptions import DomainException
from ...schemas.booking import BookingCreate, BookingOut, BookingStatusUpdate
from ...services.booking_service import BookingService

logger = logging.getLogger(__name__)

# V1 router - mounted at /api/v1/bookings
router = APIRouter(tags=["bookings"])


@router.post("", response_model=List[BookingOut], status_code=status.HTTP_201_CREATED)
def create_bookings(
    payload: BookingCreate,
    booking_service: BookingService = Depends(get_booking_service),
) -> List[BookingOut]:
    """Confirm a checkout. All rows are created or none are."""
    try:
        bookings = booking_service.create_bookings(payload)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return [BookingOut.model_validate(booking) for booking in bookings]


@router.get("", response_model=List[BookingOut])
def list_user_bookings(
    user_id: str = Query(..., min_length=1),
    booking_service: BookingService = Depends(get_booking_service),
) -> List[BookingOut]:
    try:
        bookings = booking_service.list_user_bookings(user_id)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return [BookingOut.model_validate(booking) for booking in bookings]


@router.get("/{booking_id}", response_model=BookingOut)
def get_booking(
    booking_id: str,
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingOut:
    try:
        booking = booking_service.get_booking(booking_id)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return BookingOut.model_validate(booking)


@router.patch("/{booking_id}/status", response_model=BookingOut)
def update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingOut:
    """Complete or cancel a confirmed booking (e.g. after a payment event)."""
    try:
        booking = booking_service.update_status(booking_id, payload.status)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return BookingOut.model_validate(booking)
