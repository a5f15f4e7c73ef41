# thaikick/models/affiliate.py
"""
Affiliate program applications.

A customer applies once; an admin approves or rejects. Approval is what
hands out a referral code, so the application row is the audit trail
for every code in circulation.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.enums import ApplicationStatus
from ..core.ulid_helper import generate_ulid
from ..database import Base


class AffiliateApplication(Base):
    __tablename__ = "affiliate_applications"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    reason = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=ApplicationStatus.PENDING.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    decided_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User")

    __table_args__ = (Index("idx_affiliate_applications_status", "status", "created_at"),)

    def __repr__(self) -> str:
        return f"<AffiliateApplication {self.user_id} {self.status}>"
