# thaikick/core/exceptions.py
"""
Errors raised by ThaiKick services.

Each DomainException subclass carries the HTTP status it maps to, a
stable machine-readable code (GYM_NOT_FOUND, AVAILABILITY_CONFLICT, ...)
and a details dict that is echoed back to the client.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)

GENERIC_FAILURE_MESSAGE = "Something went wrong while saving your booking. Please try again."


class DomainException(Exception):
    """A refusal the client can act on."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when booking input is missing or contradictory."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Unknown gym, trainer, slot, course, user or booking."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """The request clashes with rows that already exist."""

    status_code = status.HTTP_409_CONFLICT


class BusinessRuleException(DomainException):
    """Well-formed request that the booking rules forbid."""

    status_code = HTTP_422_UNPROCESSABLE


class ServiceException(DomainException):
    """Storage failure. The client sees a generic message only."""

    def to_http_exception(self) -> HTTPException:
        # Internal failure detail stays in the logs.
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": GENERIC_FAILURE_MESSAGE,
                "code": self.code,
                "details": {},
            },
        )


# Booking-specific


class BookingConflictException(ConflictException):
    """Raised when a trainer slot was taken between resolution and checkout."""

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message or "This time slot is no longer available",
            code="AVAILABILITY_CONFLICT",
            details=details or {},
        )


class InvalidStatusTransitionException(BusinessRuleException):
    """Raised when a booking status change is not allowed."""

    def __init__(self, current: str, requested: str):
        super().__init__(
            message=f"Cannot change booking status from {current} to {requested}",
            code="INVALID_STATUS_TRANSITION",
            details={"current_status": current, "requested_status": requested},
        )


class RepositoryException(Exception):
    """
    Data access failed. The SQLAlchemy error is chained as __cause__;
    services turn this into ServiceException or, for the booking slot
    index, BookingConflictException.
    """
