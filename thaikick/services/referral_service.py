"""Referral code validation, affiliate applications and earnings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import secrets
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.enums import AffiliateStatus, ApplicationStatus
from ..core.exceptions import (
    BusinessRuleException,
    ConflictException,
    NotFoundException,
    ServiceException,
    ValidationException,
)
from ..models.affiliate import AffiliateApplication
from ..repositories.affiliate_repository import AffiliateApplicationRepository
from ..repositories.booking_repository import BookingRepository
from ..repositories.factory import RepositoryFactory
from ..repositories.user_repository import UserRepository
from .base import BaseService


@dataclass(frozen=True)
class AffiliateSummary:
    code: str
    is_active: bool
    bookings_count: int
    commission_total: int


def normalize_referral_code(code: Optional[str]) -> Optional[str]:
    cleaned = (code or "").strip()
    return cleaned or None


AFFILIATE_CODE_PREFIX = "FIGHTER"
AFFILIATE_CODE_ATTEMPTS = 20


class ReferralService(BaseService):
    """
    Decide whether a referral code earns commission, and admit affiliates
    who hand those codes out.

    The code and the moment it was captured are always passed in by the
    caller; nothing here remembers a "current" referral.
    """

    def __init__(self, db: Session):
        super().__init__(db)
        self.user_repository: UserRepository = RepositoryFactory.create_user_repository(db)
        self.booking_repository: BookingRepository = RepositoryFactory.create_booking_repository(db)
        self.application_repository: AffiliateApplicationRepository = (
            RepositoryFactory.create_affiliate_application_repository(db)
        )

    @BaseService.measure_operation("referrals.validate_code")
    def validate_code(self, code: Optional[str]) -> bool:
        normalized = normalize_referral_code(code)
        if normalized is None:
            return False
        return self.user_repository.get_active_affiliate_by_code(normalized) is not None

    def resolve_referral(
        self,
        code: Optional[str],
        *,
        captured_at: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> Optional[str]:
        """
        Return the code when it may earn commission, else None.

        A code captured more than ``referral_capture_days`` ago has lapsed,
        and a capture time later than ``now`` is never trusted.
        Naive timestamps are treated as UTC.
        """
        normalized = normalize_referral_code(code)
        if normalized is None:
            return None

        if captured_at is not None:
            current = now or datetime.now(timezone.utc)
            if captured_at.tzinfo is None:
                captured_at = captured_at.replace(tzinfo=timezone.utc)
            if current.tzinfo is None:
                current = current.replace(tzinfo=timezone.utc)
            if captured_at > current:
                self.logger.warning(
                    "Referral code %s ignored: capture time %s is in the future",
                    normalized,
                    captured_at.isoformat(),
                )
                return None
            if current - captured_at > timedelta(days=settings.referral_capture_days):
                self.logger.info(
                    "Referral code %s lapsed (captured %s)", normalized, captured_at.isoformat()
                )
                return None

        if not self.validate_code(normalized):
            self.logger.info("Referral code %s is not an active affiliate code", normalized)
            return None
        return normalized

    @BaseService.measure_operation("referrals.summary")
    def get_affiliate_summary(self, code: str) -> AffiliateSummary:
        normalized = normalize_referral_code(code) or ""
        count, total = self.booking_repository.get_commission_totals(normalized)
        return AffiliateSummary(
            code=normalized,
            is_active=self.validate_code(normalized),
            bookings_count=count,
            commission_total=total,
        )

    @BaseService.measure_operation("referrals.apply")
    def apply_for_affiliate(self, user_id: str, reason: str) -> AffiliateApplication:
        """
        File an application to join the affiliate program.

        The user moves to ``pending``. Active affiliates and users with an
        open application cannot apply again; rejected users can.
        """
        user = self.user_repository.get_by_id(user_id, load_relationships=False)
        if user is None:
            raise NotFoundException(
                "User not found", code="USER_NOT_FOUND", details={"user_id": user_id}
            )
        if not (reason or "").strip():
            raise ValidationException(
                "Please tell us why you want to join.", code="REASON_REQUIRED"
            )
        if user.affiliate_status == AffiliateStatus.ACTIVE.value:
            raise ConflictException(
                "You are already an affiliate.",
                code="ALREADY_AFFILIATE",
                details={"user_id": user_id},
            )
        if (
            user.affiliate_status == AffiliateStatus.PENDING.value
            or self.application_repository.get_pending_for_user(user_id) is not None
        ):
            raise ConflictException(
                "Your application is still being reviewed.",
                code="APPLICATION_PENDING",
                details={"user_id": user_id},
            )

        with self.transaction():
            application = self.application_repository.create(
                user_id=user_id,
                reason=reason.strip(),
                status=ApplicationStatus.PENDING.value,
            )
            self.user_repository.update(user_id, affiliate_status=AffiliateStatus.PENDING.value)

        self.logger.info(f"User {user_id} applied for the affiliate program ({application.id})")
        return application

    def list_pending_applications(self) -> List[AffiliateApplication]:
        return self.application_repository.list_pending()

    @BaseService.measure_operation("referrals.decide")
    def decide_application(self, application_id: str, *, approve: bool) -> AffiliateApplication:
        """
        Approve or reject a pending application.

        Approval activates the applicant and assigns a unique referral
        code (an existing code is kept). Rejection clears the affiliate
        flag. A decided application cannot be decided again.
        """
        application = self.application_repository.get_by_id(application_id)
        if application is None:
            raise NotFoundException(
                "Affiliate application not found",
                code="APPLICATION_NOT_FOUND",
                details={"application_id": application_id},
            )
        if application.status != ApplicationStatus.PENDING.value:
            raise BusinessRuleException(
                f"Application was already {application.status}",
                code="APPLICATION_ALREADY_DECIDED",
                details={"application_id": application_id, "status": application.status},
            )

        decided_at = datetime.now(timezone.utc)
        with self.transaction():
            if approve:
                code = application.user.affiliate_code or self._allocate_code()
                self.user_repository.update(
                    application.user_id,
                    is_affiliate=True,
                    affiliate_status=AffiliateStatus.ACTIVE.value,
                    affiliate_code=code,
                )
                status = ApplicationStatus.APPROVED
            else:
                self.user_repository.update(
                    application.user_id,
                    is_affiliate=False,
                    affiliate_status=AffiliateStatus.REJECTED.value,
                )
                status = ApplicationStatus.REJECTED
            self.application_repository.update(
                application.id, status=status.value, decided_at=decided_at
            )

        self.logger.info(
            f"Affiliate application {application_id} {status.value} for user {application.user_id}"
        )
        return application

    def _generate_code(self) -> str:
        return f"{AFFILIATE_CODE_PREFIX}{secrets.randbelow(10000):04d}"

    def _allocate_code(self) -> str:
        for _ in range(AFFILIATE_CODE_ATTEMPTS):
            code = self._generate_code()
            if not self.user_repository.affiliate_code_taken(code):
                return code
        raise ServiceException(
            "Could not allocate a unique affiliate code", code="AFFILIATE_CODE_EXHAUSTED"
        )
