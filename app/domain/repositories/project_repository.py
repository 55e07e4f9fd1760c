"""
Project repository interface.
Defines the contract for project data persistence operations.
Rows are plain dicts keyed by column name.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any, Tuple


class ProjectRepository(ABC):
    """
    Repository interface for projects.
    Every method raises RepositoryError when the store fails.
    """

    @abstractmethod
    async def list_codes(self) -> List[Optional[str]]:
        """
        Return the code of every project, archived ones included.
        """
        pass

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a project and return the stored row.
        Raises UniqueViolationError when the code is already taken.
        """
        pass

    @abstractmethod
    async def find_by_id(self, project_id: str) -> Optional[Dict[str, Any]]:
        """
        Find a project by its ID, with its tracked_minutes.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def list(
        self,
        include_archived: bool,
        offset: int,
        limit: int
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Page through projects, newest first.
        Rows carry tracked_minutes, the sum of their time entries.
        Returns the page rows and the total count.
        """
        pass

    @abstractmethod
    async def list_active_by_ids(
        self,
        project_ids: List[str],
        offset: int,
        limit: int
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Page through the active projects among the given IDs, newest first.
        Rows carry tracked_minutes.
        """
        pass

    @abstractmethod
    async def update(self, project_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update a project and return the stored row.
        Returns None when no project matched.
        """
        pass

    @abstractmethod
    async def list_teams(self, project_id: str) -> List[Dict[str, Any]]:
        """
        Teams the project is assigned to, as {id, name} rows.
        """
        pass
