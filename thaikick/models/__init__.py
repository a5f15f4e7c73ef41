"""SQLAlchemy models. Importing this package registers every table."""

from .affiliate import AffiliateApplication
from .booking import Booking
from .gym import Course, Gym, Trainer
from .schedule import TrainerSchedule
from .user import User

__all__ = [
    "AffiliateApplication",
    "Booking",
    "Course",
    "Gym",
    "Trainer",
    "TrainerSchedule",
    "User",
]
