"""
Timesheet repository interface.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Dict, Any, Optional


class TimesheetRepository(ABC):
    """Read-only access to weekly timesheets."""

    @abstractmethod
    async def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Every timesheet of the user as {status, week_start} rows.
        """
        pass

    @abstractmethod
    async def find_for_week(self, user_id: str, week_start: date) -> Optional[Dict[str, Any]]:
        """
        The user's timesheet for the week starting on the given Monday, as {id, status}.
        Returns None when the week has none.
        """
        pass
