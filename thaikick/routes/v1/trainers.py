# thaikick/routes/v1/trainers.py
"""
V1 trainer routes.

Customers read free slots for a date; gym owners manage the weekly
slot templates.
"""

from datetime import date
import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies.services import get_schedule_service, get_slot_availability_resolver
from ...core.enums import Weekday
from ...core.exceptions import DomainException
from ...schemas.availability import AvailableSlotsOut, TrainerScheduleCreate, TrainerScheduleOut
from ...services.schedule_service import ScheduleService
from ...services.slot_availability import SlotAvailabilityResolver

logger = logging.getLogger(__name__)

# V1 router - mounted at /api/v1/trainers
router = APIRouter(tags=["trainers"])


@router.get("/{trainer_id}/available-slots", response_model=AvailableSlotsOut)
def get_available_slots(
    trainer_id: str,
    target_date: date = Query(..., alias="date", description="YYYY-MM-DD"),
    resolver: SlotAvailabilityResolver = Depends(get_slot_availability_resolver),
) -> AvailableSlotsOut:
    try:
        slots = resolver.get_available_slots(trainer_id, target_date)
    except DomainException as exc:
        raise exc.to_http_exception() from exc

    return AvailableSlotsOut(
        trainer_id=trainer_id,
        date=target_date,
        day_of_week=Weekday.from_date(target_date),
        slots=[TrainerScheduleOut.model_validate(slot) for slot in slots],
    )


@router.get("/{trainer_id}/schedules", response_model=List[TrainerScheduleOut])
def list_schedules(
    trainer_id: str,
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> List[TrainerScheduleOut]:
    try:
        slots = schedule_service.list_schedules(trainer_id)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return [TrainerScheduleOut.model_validate(slot) for slot in slots]


@router.post(
    "/{trainer_id}/schedules",
    response_model=TrainerScheduleOut,
    status_code=status.HTTP_201_CREATED,
)
def create_schedule(
    trainer_id: str,
    payload: TrainerScheduleCreate,
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> TrainerScheduleOut:
    try:
        slot = schedule_service.create_schedule(trainer_id, payload)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return TrainerScheduleOut.model_validate(slot)


@router.delete("/{trainer_id}/schedules/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_schedule(
    trainer_id: str,
    schedule_id: str,
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> Response:
    try:
        schedule_service.delete_schedule(trainer_id, schedule_id)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
