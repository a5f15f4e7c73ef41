"""FastAPI dependency providers."""

from ...database import get_db
from .services import (
    get_booking_service,
    get_gym_service,
    get_pricing_service,
    get_referral_service,
    get_schedule_service,
    get_slot_availability_resolver,
)

__all__ = [
    "get_booking_service",
    "get_db",
    "get_gym_service",
    "get_pricing_service",
    "get_referral_service",
    "get_schedule_service",
    "get_slot_availability_resolver",
]
