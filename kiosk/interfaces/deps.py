"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from kiosk.domain.models.checkin import CheckIn
from kiosk.domain.repositories.checkin_repository import CheckInRepository
from kiosk.infrastructure.database import get_db
from kiosk.infrastructure.repositories.checkin_repository import SQLAlchemyCheckInRepository


def get_checkin_repository(db: Session = Depends(get_db)) -> CheckInRepository:
    """Get check-in repository instance."""
    return SQLAlchemyCheckInRepository(db, CheckIn)
