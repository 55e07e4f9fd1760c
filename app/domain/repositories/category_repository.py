"""
Category repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any, Tuple


class CategoryRepository(ABC):
    """Repository interface for time entry categories."""

    @abstractmethod
    async def list(
        self,
        include_inactive: bool,
        offset: int,
        limit: int
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Page through categories ordered by name.
        """
        pass

    @abstractmethod
    async def find_by_id(self, category_id: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a category and return the stored row.
        Raises UniqueViolationError when the name is taken.
        """
        pass

    @abstractmethod
    async def update(self, category_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        pass
