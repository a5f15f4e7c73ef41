# thaikick/repositories/user_repository.py
import logging
from typing import Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.enums import AffiliateStatus
from ..core.exceptions import RepositoryException
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(db, User)

    def affiliate_code_taken(self, code: str) -> bool:
        return self.find_one_by(affiliate_code=code) is not None

    def get_active_affiliate_by_code(self, code: str) -> Optional[User]:
        """The affiliate currently allowed to earn on this code, if any."""
        try:
            return cast(
                Optional[User],
                self.db.query(User)
                .filter(
                    User.affiliate_code == code,
                    User.is_affiliate.is_(True),
                    User.affiliate_status == AffiliateStatus.ACTIVE.value,
                )
                .first(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error looking up affiliate code {code!r}: {e}")
            raise RepositoryException(f"Failed to look up affiliate code {code!r}: {e}") from e
