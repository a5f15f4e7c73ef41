"""Gym, trainer and course read models."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from .base import Money


class TrainerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    specialty: Optional[str] = None
    price_per_session: int


class GymOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    location: Optional[str] = None
    base_price: int
    is_flash_sale: bool
    flash_sale_discount: Money
    affiliate_percentage: Money
    trainers: List[TrainerOut] = []


class CourseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    gym_id: str
    title: str
    description: Optional[str] = None
    price: int
    is_active: bool
