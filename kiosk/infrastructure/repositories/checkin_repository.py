"""
SQLAlchemy Implementation of CheckIn Repository.
"""

from typing import List

from sqlalchemy import select

from kiosk.domain.models.checkin import CheckIn
from kiosk.domain.repositories.checkin_repository import CheckInRepository
from kiosk.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyCheckInRepository(SQLAlchemyRepository[CheckIn], CheckInRepository):
    """CheckIn repository implementation using SQLAlchemy."""

    def insert(self, name: str, whatsapp: str, profile: str, timestamp: str) -> int:
        with self._guard("insert", "Failed to save check-in"):
            checkin = CheckIn(name=name, whatsapp=whatsapp, profile=profile, created_at=timestamp)
            self.db.add(checkin)
            self.db.commit()
            return checkin.id

    def list_all(self) -> List[CheckIn]:
        """All check-ins, most recent first."""
        with self._guard("list_all", "Failed to fetch check-ins"):
            query = select(CheckIn).order_by(CheckIn.created_at.desc(), CheckIn.id.desc())
            return list(self.db.scalars(query).all())
