# thaikick/models/schedule.py
"""
Recurring weekly availability for trainers.

A TrainerSchedule row is a template ("every Monday 09:00-10:00"), not a
calendar occurrence. Occurrences are resolved per date when a customer
books a private session.
"""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, String, Time
from sqlalchemy.orm import relationship

from ..core.enums import Weekday
from ..core.ulid_helper import generate_ulid
from ..database import Base


class TrainerSchedule(Base):
    __tablename__ = "trainer_schedules"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    trainer_id = Column(
        String(26), ForeignKey("trainers.id", ondelete="CASCADE"), nullable=False
    )
    day_of_week = Column(String(9), nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    trainer = relationship("Trainer", back_populates="schedules")

    __table_args__ = (
        Index("idx_trainer_schedules_trainer_day", "trainer_id", "day_of_week"),
        CheckConstraint("end_time > start_time", name="check_schedule_time_order"),
    )

    @property
    def weekday(self) -> Weekday:
        return Weekday(self.day_of_week)

    def __repr__(self) -> str:
        return f"<TrainerSchedule {self.trainer_id} {self.day_of_week} {self.start_time}-{self.end_time}>"
