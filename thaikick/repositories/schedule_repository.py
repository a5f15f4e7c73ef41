# thaikick/repositories/schedule_repository.py
"""Data access for recurring trainer schedule slots."""

from datetime import time
import logging
from typing import List, Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.enums import Weekday
from ..core.exceptions import RepositoryException
from ..models.schedule import TrainerSchedule
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class TrainerScheduleRepository(BaseRepository[TrainerSchedule]):
    def __init__(self, db: Session):
        super().__init__(db, TrainerSchedule)

    def get_for_trainer(self, trainer_id: str) -> List[TrainerSchedule]:
        """All weekly slots for a trainer in insertion order."""
        try:
            return cast(
                List[TrainerSchedule],
                self.db.query(TrainerSchedule)
                .filter(TrainerSchedule.trainer_id == trainer_id)
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting schedules for trainer {trainer_id}: {str(e)}")
            raise RepositoryException(f"Failed to get trainer schedules: {str(e)}")

    def get_for_trainer_day(self, trainer_id: str, weekday: Weekday) -> List[TrainerSchedule]:
        """Candidate slots for one weekday."""
        try:
            return cast(
                List[TrainerSchedule],
                self.db.query(TrainerSchedule)
                .filter(
                    TrainerSchedule.trainer_id == trainer_id,
                    TrainerSchedule.day_of_week == weekday.value,
                )
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(
                f"Error getting {weekday.value} schedules for trainer {trainer_id}: {str(e)}"
            )
            raise RepositoryException(f"Failed to get trainer schedules: {str(e)}")

    def find_slot(
        self, trainer_id: str, weekday: Weekday, start_time: time
    ) -> Optional[TrainerSchedule]:
        return self.find_one_by(
            trainer_id=trainer_id, day_of_week=weekday.value, start_time=start_time
        )
