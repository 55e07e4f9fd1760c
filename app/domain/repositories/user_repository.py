"""
User repository interface.
Defines the contract for profile persistence. Identity records live in the identity provider.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any, Tuple


class UserRepository(ABC):
    """
    Repository interface for user profiles.
    """

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Find a profile by user ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def list(
        self,
        role: Optional[str],
        offset: int,
        limit: int
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Page through profiles, optionally filtered by role.
        """
        pass

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a profile and return the stored row."""
        pass

    @abstractmethod
    async def update(self, user_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update a profile and return the stored row.
        Returns None when no profile matched.
        """
        pass
