"""
Time entry repository implementation using Supabase.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from app.domain.repositories.time_entry_repository import TimeEntryRepository
from app.infrastructure.repositories.base import SupabaseRepository


ENTRY_COLUMNS = (
    "id, user_id, project_id, category_id, parent_id, entry_mode, start_time, end_time, "
    "duration_minutes, description, created_at, updated_at, "
    "project:project_id(id, code, name), category:category_id(id, name, color)"
)


class SupabaseTimeEntryRepository(SupabaseRepository, TimeEntryRepository):
    """Supabase implementation of time entry repository."""

    table = "time_entries"

    async def list_for_user(
        self,
        user_id: str,
        start: datetime,
        end: datetime
    ) -> List[Dict[str, Any]]:
        response = await self._execute(
            self.query()
            .select("id, start_time, duration_minutes, projects(id, name, code), categories(id, name)")
            .eq("user_id", user_id)
            .gte("start_time", start.isoformat())
            .lt("start_time", end.isoformat())
            .order("start_time"),
            "list for user"
        )
        return response.data or []

    async def page_for_user(
        self,
        user_id: str,
        start: Optional[datetime],
        end: Optional[datetime],
        offset: int,
        limit: int
    ) -> Tuple[List[Dict[str, Any]], int]:
        query = self.query().select(ENTRY_COLUMNS, count="exact").eq("user_id", user_id)
        if start is not None:
            query = query.gte("start_time", start.isoformat())
        if end is not None:
            query = query.lt("start_time", end.isoformat())

        response = await self._execute(
            query.order("start_time", desc=True).range(offset, offset + limit - 1),
            "page for user"
        )
        return response.data or [], response.count or 0

    async def find_by_id(self, entry_id: str) -> Optional[Dict[str, Any]]:
        response = await self._execute(
            self.query().select(ENTRY_COLUMNS).eq("id", entry_id).limit(1),
            "find"
        )
        return self._first(response.data)

    async def find_running(self, user_id: str, entry_mode: str) -> Optional[Dict[str, Any]]:
        response = await self._execute(
            self.query()
            .select(ENTRY_COLUMNS)
            .eq("user_id", user_id)
            .eq("entry_mode", entry_mode)
            .is_("end_time", "null")
            .is_("parent_id", "null")
            .order("start_time", desc=True)
            .limit(1),
            "find running"
        )
        return self._first(response.data)

    async def list_blocks(self, day_id: str, user_id: str) -> List[Dict[str, Any]]:
        response = await self._execute(
            self.query()
            .select(ENTRY_COLUMNS)
            .eq("parent_id", day_id)
            .eq("user_id", user_id)
            .order("start_time"),
            "list blocks"
        )
        return response.data or []

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._execute(self.query().insert(data), "insert")
        return await self.find_by_id(response.data[0]["id"]) or response.data[0]

    async def update(self, entry_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        response = await self._execute(self.query().update(data).eq("id", entry_id), "update")
        if not response.data:
            return None
        return await self.find_by_id(entry_id)

    async def close_running(self, entry_id: str, user_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        response = await self._execute(
            self.query()
            .update(data)
            .eq("id", entry_id)
            .eq("user_id", user_id)
            .is_("end_time", "null"),
            "close running"
        )
        if not response.data:
            return None
        return await self.find_by_id(entry_id)

    async def delete(self, entry_id: str) -> None:
        await self._execute(self.query().delete().eq("id", entry_id), "delete")
