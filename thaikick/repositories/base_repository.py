# thaikick/repositories/base_repository.py
"""
Generic data access shared by every ThaiKick repository.

Repositories build queries and flush. They never commit; the service
that opened the transaction decides that. A failed flush rolls the
session back and is re-raised as ``RepositoryException`` with the
SQLAlchemy error chained, so callers can still tell a unique-index
violation apart from a lost connection.
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    @property
    def _name(self) -> str:
        return self.model.__name__

    def _flush(self, action: str) -> None:
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            self.logger.warning(f"Constraint violated while trying to {action} {self._name}: {e.orig}")
            raise RepositoryException(f"Integrity constraint violated: {e.orig}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Could not {action} {self._name}: {e}")
            raise RepositoryException(f"Failed to {action} {self._name}: {e}") from e

    def get_by_id(self, id: str, load_relationships: bool = True) -> Optional[T]:
        try:
            query = self.db.query(self.model).filter(self.model.id == id)
            if load_relationships:
                query = self._apply_eager_loading(query)
            return query.first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading {self._name} {id}: {e}")
            raise RepositoryException(f"Failed to retrieve {self._name}: {e}") from e

    def create(self, **fields: Any) -> T:
        """Add one row and flush so its ULID and defaults are populated."""
        entity = self.model(**fields)
        self.db.add(entity)
        self._flush("create")
        return entity

    def create_many(self, rows: List[Dict[str, Any]]) -> List[T]:
        """Add several rows in one flush: all of them land or none do."""
        entities = [self.model(**fields) for fields in rows]
        self.db.add_all(entities)
        self._flush(f"create {len(entities)} rows of")
        return entities

    def update(self, id: str, **fields: Any) -> Optional[T]:
        """Set the given columns; unknown names are ignored. None if missing."""
        entity = self.get_by_id(id, load_relationships=False)
        if entity is None:
            return None
        for key, value in fields.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        self._flush("update")
        return entity

    def delete(self, id: str) -> bool:
        entity = self.get_by_id(id, load_relationships=False)
        if entity is None:
            return False
        self.db.delete(entity)
        self._flush("delete")
        return True

    def find_one_by(self, **criteria: Any) -> Optional[T]:
        try:
            return self.db.query(self.model).filter_by(**criteria).first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error finding {self._name} by {sorted(criteria)}: {e}")
            raise RepositoryException(f"Failed to find {self._name}: {e}") from e

    def _apply_eager_loading(self, query: Query) -> Query:
        """Subclasses add joinedload/selectinload options here."""
        return query
