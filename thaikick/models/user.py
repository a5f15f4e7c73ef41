# thaikick/models/user.py
"""
User model.

Identity comes from the hosted auth provider; this table only keeps what
bookings and the affiliate program read.
"""

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.sql import func

from ..core.enums import AffiliateStatus, UserRole
from ..core.ulid_helper import generate_ulid
from ..database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    role = Column(String(20), nullable=False, default=UserRole.CUSTOMER.value)

    # Affiliate program
    is_affiliate = Column(Boolean, nullable=False, default=False)
    affiliate_code = Column(String(32), nullable=True, unique=True, index=True)
    affiliate_status = Column(String(20), nullable=False, default=AffiliateStatus.NONE.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<User {self.email} role={self.role}>"
