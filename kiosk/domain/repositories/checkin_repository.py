"""
CheckIn Repository Interface.
Defines data access operations for check-in records.
"""

from kiosk.domain.repositories.base import BaseRepository
from kiosk.domain.models.checkin import CheckIn


class CheckInRepository(BaseRepository[CheckIn]):
    """Interface for CheckIn-specific operations.

    ``list_all`` returns rows most recent first. Every method raises
    ``StorageError`` when the underlying database fails.
    """

    def insert(self, name: str, whatsapp: str, profile: str, timestamp: str) -> int:
        """Append a row stamped with the caller-supplied timestamp and return its id."""
        ...
