# thaikick/models/gym.py
"""
Gym, Trainer and Course models.

A gym exclusively owns its trainers and courses. Prices are whole currency
units; percentages are 0-100.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base


class Gym(Base):
    __tablename__ = "gyms"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    name = Column(String(200), nullable=False)
    location = Column(String(200), nullable=True)
    owner_id = Column(String(26), ForeignKey("users.id"), nullable=True)

    # Pricing
    base_price = Column(Integer, nullable=False)
    is_flash_sale = Column(Boolean, nullable=False, default=False)
    flash_sale_discount = Column(Numeric(5, 2), nullable=False, default=0)
    affiliate_percentage = Column(Numeric(5, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    trainers = relationship(
        "Trainer", back_populates="gym", cascade="all, delete-orphan", order_by="Trainer.name"
    )
    courses = relationship("Course", back_populates="gym", cascade="all, delete-orphan")
    owner = relationship("User", foreign_keys=[owner_id])

    __table_args__ = (
        CheckConstraint("base_price >= 0", name="check_gym_base_price_non_negative"),
        CheckConstraint(
            "flash_sale_discount >= 0 AND flash_sale_discount <= 100",
            name="check_gym_flash_sale_discount_range",
        ),
        CheckConstraint(
            "affiliate_percentage >= 0 AND affiliate_percentage <= 100",
            name="check_gym_affiliate_percentage_range",
        ),
    )

    def __repr__(self) -> str:
        return f"<Gym {self.name} base={self.base_price}>"


class Trainer(Base):
    __tablename__ = "trainers"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    gym_id = Column(String(26), ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    specialty = Column(String(120), nullable=True)
    # Surcharge on top of the gym base price for private sessions
    price_per_session = Column(Integer, nullable=False, default=0)

    gym = relationship("Gym", back_populates="trainers")
    schedules = relationship(
        "TrainerSchedule", back_populates="trainer", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("price_per_session >= 0", name="check_trainer_price_non_negative"),
    )


class Course(Base):
    __tablename__ = "courses"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    gym_id = Column(String(26), ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    # Flat price for the whole course, independent of dates
    price = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    gym = relationship("Gym", back_populates="courses")

    __table_args__ = (CheckConstraint("price >= 0", name="check_course_price_non_negative"),)
