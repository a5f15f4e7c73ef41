# thaikick/models/booking.py
"""
Booking model for the ThaiKick platform.

Each covered calendar date is its own row: a week of daily training is
seven rows, a four-week private block is four rows, a course is one row.
Rows snapshot the price and commission at checkout and afterwards only
change status.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Time,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.enums import BookingStatus
from ..core.ulid_helper import generate_ulid
from ..database import Base


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)

    gym_id = Column(String(26), ForeignKey("gyms.id"), nullable=False, index=True)
    user_id = Column(String(26), ForeignKey("users.id"), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)
    type = Column(String(20), nullable=False)

    # Private sessions
    trainer_id = Column(String(26), ForeignKey("trainers.id"), nullable=True)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)

    # Course enrollments
    course_id = Column(String(26), ForeignKey("courses.id"), nullable=True)

    # Price of this one row, in whole currency units
    total_price = Column(Integer, nullable=False)

    # Affiliate attribution
    commission_paid_to = Column(String(32), nullable=True, index=True)
    commission_amount = Column(Integer, nullable=False, default=0)

    status = Column(String(20), nullable=False, default=BookingStatus.CONFIRMED.value, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    gym = relationship("Gym")
    user = relationship("User", foreign_keys=[user_id])
    trainer = relationship("Trainer")
    course = relationship("Course")

    __table_args__ = (
        Index("idx_bookings_trainer_date", "trainer_id", "date"),
        # One live booking per trainer slot; cancelled rows free it again
        Index(
            "uq_bookings_trainer_slot",
            "trainer_id",
            "date",
            "start_time",
            unique=True,
            postgresql_where=text("status != 'cancelled'"),
            sqlite_where=text("status != 'cancelled'"),
        ),
        CheckConstraint("total_price >= 0", name="check_booking_price_non_negative"),
        CheckConstraint("commission_amount >= 0", name="check_booking_commission_non_negative"),
        CheckConstraint(
            "type IN ('standard', 'private', 'course')", name="check_booking_type"
        ),
        CheckConstraint(
            "status IN ('confirmed', 'completed', 'cancelled')", name="check_booking_status"
        ),
    )

    def __repr__(self) -> str:
        return f"<Booking {self.id} {self.type} {self.date} {self.status}>"
