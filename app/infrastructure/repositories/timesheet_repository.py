"""
Timesheet repository implementation using Supabase.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from app.domain.repositories.timesheet_repository import TimesheetRepository
from app.infrastructure.repositories.base import SupabaseRepository


class SupabaseTimesheetRepository(SupabaseRepository, TimesheetRepository):
    """Supabase implementation of timesheet repository."""

    table = "timesheets"

    async def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        response = await self._execute(
            self.query().select("status, week_start").eq("user_id", user_id),
            "list for user"
        )
        return response.data or []

    async def find_for_week(self, user_id: str, week_start: date) -> Optional[Dict[str, Any]]:
        response = await self._execute(
            self.query()
            .select("id, status")
            .eq("user_id", user_id)
            .eq("week_start", week_start.isoformat())
            .limit(1),
            "find for week"
        )
        return self._first(response.data)
