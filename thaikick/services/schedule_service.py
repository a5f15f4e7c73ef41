# thaikick/services/schedule_service.py
"""
Owner-side management of recurring trainer slots.

Slots are weekly templates. Deleting one does not touch bookings that
were already made against it; those rows carry their own start and end
times.
"""

import logging
from typing import TYPE_CHECKING, List

from sqlalchemy.orm import Session

from ..core.constants import TIME_FORMAT
from ..core.exceptions import ConflictException, NotFoundException, ValidationException
from ..models.schedule import TrainerSchedule
from ..repositories.factory import RepositoryFactory
from .base import BaseService

if TYPE_CHECKING:
    from ..repositories.gym_repository import GymRepository
    from ..repositories.schedule_repository import TrainerScheduleRepository
    from ..schemas.availability import TrainerScheduleCreate

logger = logging.getLogger(__name__)


class ScheduleService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository: "TrainerScheduleRepository" = RepositoryFactory.create_schedule_repository(db)
        self.gym_repository: "GymRepository" = RepositoryFactory.create_gym_repository(db)

    def _require_trainer(self, trainer_id: str) -> None:
        if self.gym_repository.get_trainer_by_id(trainer_id) is None:
            raise NotFoundException(
                "Trainer not found", code="TRAINER_NOT_FOUND", details={"trainer_id": trainer_id}
            )

    @BaseService.measure_operation("schedules.list")
    def list_schedules(self, trainer_id: str) -> List[TrainerSchedule]:
        self._require_trainer(trainer_id)
        return self.repository.get_for_trainer(trainer_id)

    @BaseService.measure_operation("schedules.create")
    def create_schedule(self, trainer_id: str, payload: "TrainerScheduleCreate") -> TrainerSchedule:
        """
        Publish a weekly slot for a trainer.

        Two slots of one trainer may not share weekday and start time, since
        bookings are matched to slots by start time.
        """
        self._require_trainer(trainer_id)

        if payload.end_time <= payload.start_time:
            raise ValidationException(
                "End time must be after start time.",
                code="END_BEFORE_START",
                details={
                    "start_time": payload.start_time.strftime(TIME_FORMAT),
                    "end_time": payload.end_time.strftime(TIME_FORMAT),
                },
            )

        if self.repository.find_slot(trainer_id, payload.day_of_week, payload.start_time):
            raise ConflictException(
                f"{payload.day_of_week.value} at {payload.start_time.strftime(TIME_FORMAT)} already exists",
                code="DUPLICATE_SLOT",
                details={"trainer_id": trainer_id, "day_of_week": payload.day_of_week.value},
            )

        with self.transaction():
            slot = self.repository.create(
                trainer_id=trainer_id,
                day_of_week=payload.day_of_week.value,
                start_time=payload.start_time,
                end_time=payload.end_time,
            )

        logger.info(f"Trainer {trainer_id} published {payload.day_of_week.value} slot {slot.id}")
        return slot

    @BaseService.measure_operation("schedules.delete")
    def delete_schedule(self, trainer_id: str, schedule_id: str) -> None:
        slot = self.repository.get_by_id(schedule_id, load_relationships=False)
        if slot is None or slot.trainer_id != trainer_id:
            raise NotFoundException(
                "Time slot not found for this trainer",
                code="TIME_SLOT_NOT_FOUND",
                details={"trainer_id": trainer_id, "schedule_id": schedule_id},
            )
        with self.transaction():
            self.repository.delete(schedule_id)
        logger.info(f"Trainer {trainer_id} removed slot {schedule_id}")
