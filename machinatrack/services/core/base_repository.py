"""
Base Repository
Thin translation layer between SQLAlchemy and the business layer.

Repositories never commit: they add, flush and query on the session they
were constructed with. The owning UnitOfWork decides when to commit.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from machinatrack.buisness.core.errors import DatabaseError, DuplicateError
from machinatrack.logger import get_logger

logger = get_logger("machinatrack.services.repositories")

ModelT = TypeVar('ModelT')


class BaseRepository(Generic[ModelT]):
    """
    Generic CRUD over one model class.

    Subclasses set `model`, `resource_name` and, where a unique column can
    collide, `unique_field` (used for DuplicateError messages).
    """

    model: Type[ModelT] = None
    resource_name = 'Record'
    unique_field = None
    default_order = None

    def __init__(self, session: Session):
        self.session = session

    def _ordering(self):
        if self.default_order is not None:
            return self.default_order()
        return (self.model.updated_at.desc(),)

    def _all(self, stmt) -> List[ModelT]:
        try:
            return list(self.session.scalars(stmt))
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to query {self.resource_name}: {e}") from e

    def _flush(self, action: str):
        try:
            self.session.flush()
        except IntegrityError as e:
            if self.unique_field and 'unique' in str(e.orig).lower():
                raise DuplicateError(self.resource_name, self.unique_field) from e
            raise DatabaseError(f"Failed to {action} {self.resource_name}: {e.orig}") from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to {action} {self.resource_name}: {e}") from e

    def find_by_id(self, record_id: str) -> Optional[ModelT]:
        try:
            return self.session.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to find {self.resource_name} by id: {e}") from e

    def find_all(self, limit: int = 100, offset: int = 0) -> List[ModelT]:
        stmt = select(self.model).order_by(*self._ordering()).offset(offset).limit(limit)
        return self._all(stmt)

    def create(self, data: Dict[str, Any]) -> ModelT:
        instance = self.model.from_dict(data)
        self.session.add(instance)
        self._flush('create')
        logger.debug(f"Created {self.resource_name} {instance.id}")
        return instance

    def update(self, record_id: str, data: Dict[str, Any]) -> Optional[ModelT]:
        instance = self.find_by_id(record_id)
        if instance is None:
            return None
        instance.apply_dict(data)
        self._flush('update')
        return instance

    def delete(self, record_id: str) -> bool:
        instance = self.find_by_id(record_id)
        if instance is None:
            return False
        self.session.delete(instance)
        self._flush('delete')
        logger.debug(f"Deleted {self.resource_name} {record_id}")
        return True

    def count(self) -> int:
        try:
            return self.session.scalar(select(func.count()).select_from(self.model))
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to count {self.resource_name}: {e}") from e
