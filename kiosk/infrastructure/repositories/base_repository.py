"""
SQLAlchemy implementation of the Base Repository.
"""

from contextlib import contextmanager
from typing import Generic, Iterator, List, Type, TypeVar

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from kiosk.core.exceptions import StorageError
from kiosk.domain.repositories.base import BaseRepository
from kiosk.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)

logger = structlog.get_logger(__name__)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic whole-table repository for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    @contextmanager
    def _guard(self, operation: str, message: str) -> Iterator[None]:
        """Roll back and translate database failures into StorageError."""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(
                "Database operation failed",
                operation=operation,
                table=self.model.__tablename__,
                error=str(e),
            )
            raise StorageError(message) from e

    def list_all(self) -> List[ModelType]:
        with self._guard("list_all", "Failed to fetch records"):
            return list(self.db.scalars(select(self.model)).all())

    def count(self) -> int:
        with self._guard("count", "Failed to count records"):
            return self.db.scalar(select(func.count()).select_from(self.model)) or 0

    def clear_all(self) -> int:
        with self._guard("clear_all", "Failed to clear list"):
            result = self.db.execute(delete(self.model))
            self.db.commit()
            return result.rowcount or 0
