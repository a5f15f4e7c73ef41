"""Read-only gym lookups for the booking pages."""

from typing import TYPE_CHECKING, List

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundException
from ..models.gym import Course, Gym
from ..repositories.factory import RepositoryFactory
from .base import BaseService

if TYPE_CHECKING:
    from ..repositories.gym_repository import GymRepository


class GymService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository: "GymRepository" = RepositoryFactory.create_gym_repository(db)

    def get_gym(self, gym_id: str) -> Gym:
        gym = self.repository.get_by_id(gym_id)
        if gym is None:
            raise NotFoundException("Gym not found", code="GYM_NOT_FOUND", details={"gym_id": gym_id})
        return gym

    @BaseService.measure_operation("gyms.list_active_courses")
    def list_active_courses(self, gym_id: str) -> List[Course]:
        """Courses open for enrollment; inactive ones are hidden."""
        self.get_gym(gym_id)
        return self.repository.list_active_courses(gym_id)
