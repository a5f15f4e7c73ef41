# thaikick/repositories/affiliate_repository.py
"""Data access for affiliate program applications."""

import logging
from typing import List, Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from ..core.enums import ApplicationStatus
from ..core.exceptions import RepositoryException
from ..models.affiliate import AffiliateApplication
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class AffiliateApplicationRepository(BaseRepository[AffiliateApplication]):
    def __init__(self, db: Session):
        super().__init__(db, AffiliateApplication)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(AffiliateApplication.user))

    def list_pending(self) -> List[AffiliateApplication]:
        """Open applications, newest first, with the applicant loaded."""
        try:
            return cast(
                List[AffiliateApplication],
                self._apply_eager_loading(self.db.query(AffiliateApplication))
                .filter(AffiliateApplication.status == ApplicationStatus.PENDING.value)
                .order_by(AffiliateApplication.created_at.desc(), AffiliateApplication.id.desc())
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing pending affiliate applications: {e}")
            raise RepositoryException(f"Failed to list affiliate applications: {e}") from e

    def get_pending_for_user(self, user_id: str) -> Optional[AffiliateApplication]:
        return self.find_one_by(user_id=user_id, status=ApplicationStatus.PENDING.value)
