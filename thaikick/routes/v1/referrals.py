"""V1 referral code routes."""

from typing import List

from fastapi import APIRouter, Depends, status

from ...api.dependencies.services import get_referral_service
from ...core.exceptions import DomainException
from ...schemas.referrals import (
    AffiliateApplicationCreate,
    AffiliateApplicationDecision,
    AffiliateApplicationOut,
    AffiliateSummaryOut,
    ReferralValidationOut,
)
from ...services.referral_service import ReferralService

# V1 router - mounted at /api/v1/referrals
router = APIRouter(tags=["referrals"])


@router.get("/{code}/validate", response_model=ReferralValidationOut)
def validate_referral_code(
    code: str, referral_service: ReferralService = Depends(get_referral_service)
) -> ReferralValidationOut:
    try:
        valid = referral_service.validate_code(code)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return ReferralValidationOut(code=code.strip(), valid=valid)


@router.get("/{code}/summary", response_model=AffiliateSummaryOut)
def get_affiliate_summary(
    code: str, referral_service: ReferralService = Depends(get_referral_service)
) -> AffiliateSummaryOut:
    """Commission earned by a code across non-cancelled bookings."""
    try:
        summary = referral_service.get_affiliate_summary(code)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return AffiliateSummaryOut(
        code=summary.code,
        is_active=summary.is_active,
        bookings_count=summary.bookings_count,
        commission_total=summary.commission_total,
    )


@router.post(
    "/applications",
    response_model=AffiliateApplicationOut,
    status_code=status.HTTP_201_CREATED,
)
def apply_for_affiliate(
    payload: AffiliateApplicationCreate,
    referral_service: ReferralService = Depends(get_referral_service),
) -> AffiliateApplicationOut:
    try:
        application = referral_service.apply_for_affiliate(payload.user_id, payload.reason)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return AffiliateApplicationOut.from_application(application)


@router.get("/applications", response_model=List[AffiliateApplicationOut])
def list_pending_applications(
    referral_service: ReferralService = Depends(get_referral_service),
) -> List[AffiliateApplicationOut]:
    """Applications awaiting an admin decision, newest first."""
    try:
        applications = referral_service.list_pending_applications()
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return [AffiliateApplicationOut.from_application(app) for app in applications]


@router.post("/applications/{application_id}/decision", response_model=AffiliateApplicationOut)
def decide_application(
    application_id: str,
    payload: AffiliateApplicationDecision,
    referral_service: ReferralService = Depends(get_referral_service),
) -> AffiliateApplicationOut:
    """Approve (assigns a referral code) or reject a pending application."""
    try:
        application = referral_service.decide_application(
            application_id, approve=payload.approved
        )
    except DomainException as exc:
        raise exc.to_http_exception() from exc
    return AffiliateApplicationOut.from_application(application)
