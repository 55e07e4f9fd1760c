"""
Team repository interface.
Covers teams and their member / project link rows.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any, Tuple


class TeamRepository(ABC):
    """
    Repository interface for teams.
    Link inserts raise UniqueViolationError for pairs that already exist.
    """

    @abstractmethod
    async def list(self, offset: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        """
        Page through teams, newest first.
        Each row carries member_count and project_count.
        """
        pass

    @abstractmethod
    async def find_by_id(self, team_id: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def find_detail(self, team_id: str) -> Optional[Dict[str, Any]]:
        """
        Team row with `members` (profiles) and `projects` (id, code, name) lists.
        """
        pass

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a team and return the stored row.
        Raises UniqueViolationError when the name is taken.
        """
        pass

    @abstractmethod
    async def update(self, team_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def delete(self, team_id: str) -> bool:
        """Delete a team and its links. Returns False when nothing was deleted."""
        pass

    # Members

    @abstractmethod
    async def list_members(self, team_id: str, offset: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        """
        Page through membership rows, newest first.
        Each row embeds the member profile under `profiles`.
        """
        pass

    @abstractmethod
    async def add_member(self, team_id: str, user_id: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def remove_member(self, team_id: str, user_id: str) -> bool:
        pass

    @abstractmethod
    async def is_member(self, team_id: str, user_id: str) -> bool:
        pass

    @abstractmethod
    async def team_ids_for_user(self, user_id: str) -> List[str]:
        """IDs of every team the user belongs to."""
        pass

    # Projects

    @abstractmethod
    async def list_projects(self, team_id: str, offset: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        """
        Page through assignment rows, newest first.
        Each row embeds the project under `projects`.
        """
        pass

    @abstractmethod
    async def assign_project(self, team_id: str, project_id: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def unassign_project(self, team_id: str, project_id: str) -> bool:
        pass

    @abstractmethod
    async def is_project_assigned(self, team_id: str, project_id: str) -> bool:
        pass

    @abstractmethod
    async def project_ids_for_teams(self, team_ids: List[str]) -> List[str]:
        """Distinct IDs of the projects assigned to any of the teams."""
        pass
