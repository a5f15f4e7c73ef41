"""Schemas for referral code and affiliate program endpoints."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import Field

from ..core.enums import ApplicationStatus
from ._strict_base import StrictModel, StrictRequestModel

if TYPE_CHECKING:
    from ..models.affiliate import AffiliateApplication


class ReferralValidationOut(StrictModel):
    code: str
    valid: bool = Field(description="True when an active affiliate owns the code")


class AffiliateSummaryOut(StrictModel):
    """Earnings credited to a referral code (cancelled bookings excluded)."""

    code: str
    is_active: bool
    bookings_count: int
    commission_total: int


class AffiliateApplicationCreate(StrictRequestModel):
    user_id: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1, max_length=2000)


class AffiliateApplicationDecision(StrictRequestModel):
    approved: bool


class AffiliateApplicationOut(StrictModel):
    id: str
    user_id: str
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    reason: str
    status: ApplicationStatus
    affiliate_code: Optional[str] = Field(
        None, description="Code assigned to the applicant once approved"
    )
    created_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None

    @classmethod
    def from_application(cls, application: "AffiliateApplication") -> "AffiliateApplicationOut":
        user = application.user
        return cls(
            id=application.id,
            user_id=application.user_id,
            user_name=user.name if user else None,
            user_email=user.email if user else None,
            reason=application.reason,
            status=ApplicationStatus(application.status),
            affiliate_code=user.affiliate_code if user else None,
            created_at=application.created_at,
            decided_at=application.decided_at,
        )
