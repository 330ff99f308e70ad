"""Shared create/find/update/delete/count operations for the entity DAOs."""

from typing import Generic, List, Optional, Type, TypeVar
from sqlalchemy.orm import Session

from utilities.errors import EntityNotFoundError
from utilities.logger import Logger
from utilities.models import Base

logger = Logger.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class BaseDao(Generic[ModelT]):
    """
    Data access object over a single mapped table.

    Writes are flushed, never committed: the caller's transaction decides
    whether they persist.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def create(self, entity: ModelT) -> ModelT:
        """Insert the entity and return it with its assigned id."""
        self.session.add(entity)
        self.session.flush()
        logger.debug(f"Created {entity}")
        return entity

    def find_by_id(self, entity_id: int) -> Optional[ModelT]:
        return self.session.query(self.model).filter_by(id=entity_id).first()

    def find_all(self) -> List[ModelT]:
        return self.session.query(self.model).order_by(self.model.id).all()

    def update(self, entity: ModelT) -> ModelT:
        """Persist changes of an existing entity."""
        if entity.id is None or self.find_by_id(entity.id) is None:
            raise EntityNotFoundError(self.entity_name, entity.id)

        merged = self.session.merge(entity)
        self.session.flush()
        logger.debug(f"Updated {merged}")
        return merged

    def delete(self, entity_id: int) -> bool:
        """Delete a row by id. Returns False when the id does not exist."""
        deleted = self.session.query(self.model).filter_by(id=entity_id).delete()
        if not deleted:
            logger.debug(f"{self.entity_name} {entity_id} already absent")
        return deleted > 0

    def count(self) -> int:
        return self.session.query(self.model).count()

    def _get_or_raise(self, entity_id: int) -> ModelT:
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundError(self.entity_name, entity_id)
        return entity
