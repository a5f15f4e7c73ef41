"""V1 gym routes: gym details, active courses and the owner's booking list."""

from typing import List

from fastapi import APIRouter, Depends

from ...api.dependencies.services import get_booking_service, get_gym_service
from ...core.exceptions import DomainException
from ...schemas.booking import BookingOut
from ...schemas.gym import CourseOut, GymOut
from ...services.booking_service import BookingService
from ...services.gym_service import GymService

# V1 router - mounted at /api/v1/gyms
router = APIRouter(tags=["gyms"])


@router.get("/{gym_id}", response_model=GymOut)
def get_gym(gym_id: str, gym_service: GymService = Depends(get_gym_service)) -> GymOut:
    try:
        gym = gym_service.get_gym(gym_id)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return GymOut.model_validate(gym)


@router.get("/{gym_id}/courses", response_model=List[CourseOut])
def list_active_courses(
    gym_id: str, gym_service: GymService = Depends(get_gym_service)
) -> List[CourseOut]:
    try:
        courses = gym_service.list_active_courses(gym_id)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return [CourseOut.model_validate(course) for course in courses]


@router.get("/{gym_id}/bookings", response_model=List[BookingOut])
def list_gym_bookings(
    gym_id: str,
    gym_service: GymService = Depends(get_gym_service),
    booking_service: BookingService = Depends(get_booking_service),
) -> List[BookingOut]:
    try:
        gym_service.get_gym(gym_id)
        bookings = booking_service.list_gym_bookings(gym_id)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return [BookingOut.model_validate(booking) for booking in bookings]
