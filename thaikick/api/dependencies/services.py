# thaikick/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Every request gets fresh service instances bound to its own session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.booking_service import BookingService
from ...services.gym_service import GymService
from ...services.pricing_service import PricingService
from ...services.referral_service import ReferralService
from ...services.schedule_service import ScheduleService
from ...services.slot_availability import SlotAvailabilityResolver
from ...database import get_db


def get_referral_service(db: Session = Depends(get_db)) -> ReferralService:
    return ReferralService(db)


def get_pricing_service(
    db: Session = Depends(get_db),
    referral_service: ReferralService = Depends(get_referral_service),
) -> PricingService:
    """Provide pricing service instance for dependency injection."""
    return PricingService(db, referral_service=referral_service)


def get_slot_availability_resolver(db: Session = Depends(get_db)) -> SlotAvailabilityResolver:
    return SlotAvailabilityResolver(db)


def get_booking_service(
    db: Session = Depends(get_db),
    pricing_service: PricingService = Depends(get_pricing_service),
) -> BookingService:
    """
    Get booking service instance with all dependencies.

    Args:
        db: Database session
        pricing_service: Pricing service sharing the same session

    Returns:
        BookingService instance
    """
    return BookingService(db, pricing_service=pricing_service)


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    return ScheduleService(db)


def get_gym_service(db: Session = Depends(get_db)) -> GymService:
    return GymService(db)
