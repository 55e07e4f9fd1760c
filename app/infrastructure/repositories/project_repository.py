"""
Project repository implementation using Supabase.
"""

from typing import Any, Dict, List, Optional, Tuple

from app.domain.models.project import ProjectStatus
from app.domain.repositories.project_repository import ProjectRepository
from app.infrastructure.repositories.base import SupabaseRepository


PROJECT_COLUMNS = "id, code, name, description, budget_hours, status, created_at, updated_at"


def _with_tracked_minutes(row: Dict[str, Any]) -> Dict[str, Any]:
    entries = row.pop("time_entries", None) or []
    row["tracked_minutes"] = sum(entry.get("duration_minutes") or 0 for entry in entries)
    return row


class SupabaseProjectRepository(SupabaseRepository, ProjectRepository):
    """Supabase implementation of project repository."""

    table = "projects"

    async def list_codes(self) -> List[Optional[str]]:
        response = await self._execute(self.query().select("code"), "list codes")
        return [row.get("code") for row in response.data or []]

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._execute(self.query().insert(data), "insert")
        return response.data[0]

    async def find_by_id(self, project_id: str) -> Optional[Dict[str, Any]]:
        response = await self._execute(
            self.query()
            .select(f"{PROJECT_COLUMNS}, time_entries(duration_minutes)")
            .eq("id", project_id)
            .limit(1),
            "find"
        )
        row = self._first(response.data)
        return _with_tracked_minutes(row) if row else None

    async def list(
        self,
        include_archived: bool,
        offset: int,
        limit: int
    ) -> Tuple[List[Dict[str, Any]], int]:
        query = self.query().select(f"{PROJECT_COLUMNS}, time_entries(duration_minutes)", count="exact")
        if not include_archived:
            query = query.eq("status", ProjectStatus.ACTIVE.value)

        response = await self._execute(
            query.order("created_at", desc=True).range(offset, offset + limit - 1),
            "list"
        )
        rows = [_with_tracked_minutes(row) for row in response.data or []]
        return rows, response.count or 0

    async def list_active_by_ids(
        self,
        project_ids: List[str],
        offset: int,
        limit: int
    ) -> Tuple[List[Dict[str, Any]], int]:
        response = await self._execute(
            self.query()
            .select(f"{PROJECT_COLUMNS}, time_entries(duration_minutes)", count="exact")
            .in_("id", project_ids)
            .eq("status", ProjectStatus.ACTIVE.value)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1),
            "list by ids"
        )
        rows = [_with_tracked_minutes(row) for row in response.data or []]
        return rows, response.count or 0

    async def update(self, project_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        response = await self._execute(self.query().update(data).eq("id", project_id), "update")
        return self._first(response.data)

    async def list_teams(self, project_id: str) -> List[Dict[str, Any]]:
        response = await self._execute(
            self.query("team_projects").select("teams(id, name)").eq("project_id", project_id),
            "list teams"
        )
        return [row["teams"] for row in response.data or [] if row.get("teams")]
