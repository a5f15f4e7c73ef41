"""
Service layer for the ThaiKick platform.

Services own business rules and transaction boundaries; repositories
own queries.
"""

from .base import BaseService
from .booking_service import BookingService
from .gym_service import GymService
from .pricing_service import BookingPricingEngine, BookingQuote, PricingInputs, PricingService
from .referral_service import AffiliateSummary, ReferralService
from .schedule_service import ScheduleService
from .slot_availability import SlotAvailabilityResolver

__all__ = [
    "AffiliateSummary",
    "BaseService",
    "BookingPricingEngine",
    "BookingQuote",
    "BookingService",
    "GymService",
    "PricingInputs",
    "PricingService",
    "ReferralService",
    "ScheduleService",
    "SlotAvailabilityResolver",
]
