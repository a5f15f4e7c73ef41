# thaikick/repositories/factory.py
"""
One place to construct repositories for a session.

Imports are deferred so services can depend on the factory without
pulling every model module in at import time.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

if TYPE_CHECKING:
    from .affiliate_repository import AffiliateApplicationRepository
    from .booking_repository import BookingRepository
    from .gym_repository import GymRepository
    from .schedule_repository import TrainerScheduleRepository
    from .user_repository import UserRepository


class RepositoryFactory:
    @staticmethod
    def create_affiliate_application_repository(db: Session) -> "AffiliateApplicationRepository":
        from .affiliate_repository import AffiliateApplicationRepository

        return AffiliateApplicationRepository(db)

    @staticmethod
    def create_booking_repository(db: Session) -> "BookingRepository":
        from .booking_repository import BookingRepository

        return BookingRepository(db)

    @staticmethod
    def create_gym_repository(db: Session) -> "GymRepository":
        from .gym_repository import GymRepository

        return GymRepository(db)

    @staticmethod
    def create_schedule_repository(db: Session) -> "TrainerScheduleRepository":
        from .schedule_repository import TrainerScheduleRepository

        return TrainerScheduleRepository(db)

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        from .user_repository import UserRepository

        return UserRepository(db)
