"""Schemas for trainer weekly slots and per-date availability."""

from datetime import date, time
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

from ..core.enums import Weekday
from ._strict_base import StrictModel, StrictRequestModel
from .base import format_time, parse_time_string


class TrainerScheduleCreate(StrictRequestModel):
    day_of_week: Weekday
    start_time: time
    end_time: time

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _parse_time(cls, v: object) -> object:
        return parse_time_string(v)


class TrainerScheduleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    trainer_id: str
    day_of_week: Weekday
    start_time: time
    end_time: time

    @field_serializer("start_time", "end_time")
    def _serialize_time(self, value: time) -> Optional[str]:
        return format_time(value)


class AvailableSlotsOut(StrictModel):
    """Free slots of one trainer on one date. An empty list is a normal answer."""

    trainer_id: str
    date: date
    day_of_week: Weekday
    slots: List[TrainerScheduleOut]
