"""
Base Repository Interface.
Defines the standard contract for whole-table data access.
"""

from typing import List, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for tables that are read and truncated in full."""

    def list_all(self) -> List[T]:
        """List every entity."""
        ...

    def count(self) -> int:
        """Count stored entities."""
        ...

    def clear_all(self) -> int:
        """Delete every entity, returning how many were removed."""
        ...
