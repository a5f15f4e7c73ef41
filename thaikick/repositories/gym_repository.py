# thaikick/repositories/gym_repository.py
"""
Gym Repository

Reads gyms together with the trainers and courses they own. Trainer and
course lookups are scoped to a gym so a booking can never borrow another
gym's trainer or course.
"""

import logging
from typing import List, Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, selectinload

from ..core.exceptions import RepositoryException
from ..models.gym import Course, Gym, Trainer
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class GymRepository(BaseRepository[Gym]):
    def __init__(self, db: Session):
        super().__init__(db, Gym)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(selectinload(Gym.trainers))

    def get_trainer(self, gym_id: str, trainer_id: str) -> Optional[Trainer]:
        try:
            return cast(
                Optional[Trainer],
                self.db.query(Trainer)
                .filter(Trainer.id == trainer_id, Trainer.gym_id == gym_id)
                .first(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting trainer {trainer_id} for gym {gym_id}: {str(e)}")
            raise RepositoryException(f"Failed to get trainer: {str(e)}")

    def get_trainer_by_id(self, trainer_id: str) -> Optional[Trainer]:
        try:
            return cast(Optional[Trainer], self.db.query(Trainer).filter(Trainer.id == trainer_id).first())
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting trainer {trainer_id}: {str(e)}")
            raise RepositoryException(f"Failed to get trainer: {str(e)}")

    def get_course(self, gym_id: str, course_id: str) -> Optional[Course]:
        try:
            return cast(
                Optional[Course],
                self.db.query(Course)
                .filter(Course.id == course_id, Course.gym_id == gym_id)
                .first(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting course {course_id} for gym {gym_id}: {str(e)}")
            raise RepositoryException(f"Failed to get course: {str(e)}")

    def list_active_courses(self, gym_id: str) -> List[Course]:
        try:
            return cast(
                List[Course],
                self.db.query(Course)
                .filter(Course.gym_id == gym_id, Course.is_active.is_(True))
                .order_by(Course.title)
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing courses for gym {gym_id}: {str(e)}")
            raise RepositoryException(f"Failed to list courses: {str(e)}")
