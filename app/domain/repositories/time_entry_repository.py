"""
Time entry repository interface.
Entries are logged by their owner and read back by the dashboards.
Rows embedding their relations carry `project` (id, code, name) and
`category` (id, name, color), except list_for_user which keeps the
`projects` / `categories` keys the reporting layer reads.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Dict, Any, Tuple


class TimeEntryRepository(ABC):
    """
    Repository interface for time entries.
    Every method raises RepositoryError when the store fails.
    """

    @abstractmethod
    async def list_for_user(
        self,
        user_id: str,
        start: datetime,
        end: datetime
    ) -> List[Dict[str, Any]]:
        """
        Entries of a user with start <= start_time < end.
        Rows embed their project (id, name, code) under `projects`
        and their category (id, name) under `categories`.
        """
        pass

    @abstractmethod
    async def page_for_user(
        self,
        user_id: str,
        start: Optional[datetime],
        end: Optional[datetime],
        offset: int,
        limit: int
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Page through a user's entries, most recent start first.
        Either bound may be None; end is exclusive.
        Returns the page rows and the total count.
        """
        pass

    @abstractmethod
    async def find_by_id(self, entry_id: str) -> Optional[Dict[str, Any]]:
        """
        Find an entry by its ID, with its relations.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def find_running(self, user_id: str, entry_mode: str) -> Optional[Dict[str, Any]]:
        """
        The user's open top-level entry in the given mode: a running timer
        or an active day. Returns None when there is none.
        """
        pass

    @abstractmethod
    async def list_blocks(self, day_id: str, user_id: str) -> List[Dict[str, Any]]:
        """
        Blocks of a day, with their relations, ordered by start time.
        """
        pass

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert an entry and return the stored row.
        Raises ForeignKeyViolationError when the project or category does not exist.
        """
        pass

    @abstractmethod
    async def update(self, entry_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update an entry and return the stored row.
        Returns None when no entry matched.
        """
        pass

    @abstractmethod
    async def close_running(self, entry_id: str, user_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update an entry only while it is still open.
        Returns None when it was closed in the meantime.
        """
        pass

    @abstractmethod
    async def delete(self, entry_id: str) -> None:
        pass
