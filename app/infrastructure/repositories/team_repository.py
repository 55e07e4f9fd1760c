"""
Team repository implementation using Supabase.
Link tables: team_members (team_id, user_id) and team_projects (team_id, project_id).
"""

from typing import Any, Dict, List, Optional, Tuple

from app.domain.repositories.team_repository import TeamRepository
from app.infrastructure.repositories.base import SupabaseRepository


TEAM_COLUMNS = "id, name, description, created_at, updated_at"
MEMBER_PROFILE_COLUMNS = "id, email, first_name, last_name, role"
TEAM_PROJECT_COLUMNS = "id, code, name, description, budget_hours, status"


class SupabaseTeamRepository(SupabaseRepository, TeamRepository):
    """Supabase implementation of team repository."""

    table = "teams"

    async def list(self, offset: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        response = await self._execute(
            self.query()
            .select(f"{TEAM_COLUMNS}, team_members(count), team_projects(count)", count="exact")
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1),
            "list"
        )

        rows = []
        for row in response.data or []:
            row["member_count"] = self._embedded_count(row, "team_members")
            row["project_count"] = self._embedded_count(row, "team_projects")
            rows.append(row)
        return rows, response.count or 0

    async def find_by_id(self, team_id: str) -> Optional[Dict[str, Any]]:
        response = await self._execute(
            self.query().select(TEAM_COLUMNS).eq("id", team_id).limit(1),
            "find"
        )
        return self._first(response.data)

    async def find_detail(self, team_id: str) -> Optional[Dict[str, Any]]:
        response = await self._execute(
            self.query()
            .select(
                f"{TEAM_COLUMNS}, "
                f"team_members(profiles({MEMBER_PROFILE_COLUMNS})), "
                f"team_projects(projects(id, code, name))"
            )
            .eq("id", team_id)
            .limit(1),
            "find detail"
        )
        row = self._first(response.data)
        if not row:
            return None

        memberships = row.pop("team_members", None) or []
        assignments = row.pop("team_projects", None) or []
        row["members"] = [m["profiles"] for m in memberships if m.get("profiles")]
        row["projects"] = [a["projects"] for a in assignments if a.get("projects")]
        return row

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._execute(self.query().insert(data), "insert")
        return response.data[0]

    async def update(self, team_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        response = await self._execute(self.query().update(data).eq("id", team_id), "update")
        return self._first(response.data)

    async def delete(self, team_id: str) -> bool:
        # team_members / team_projects rows go with the team (ON DELETE CASCADE)
        response = await self._execute(self.query().delete().eq("id", team_id), "delete")
        return bool(response.data)

    # Members

    async def list_members(self, team_id: str, offset: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        response = await self._execute(
            self.query("team_members")
            .select(f"id, team_id, user_id, created_at, profiles({MEMBER_PROFILE_COLUMNS})", count="exact")
            .eq("team_id", team_id)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1),
            "list members"
        )
        return response.data or [], response.count or 0

    async def add_member(self, team_id: str, user_id: str) -> Dict[str, Any]:
        response = await self._execute(
            self.query("team_members").insert({"team_id": team_id, "user_id": user_id}),
            "add member"
        )
        return response.data[0]

    async def remove_member(self, team_id: str, user_id: str) -> bool:
        response = await self._execute(
            self.query("team_members").delete().eq("team_id", team_id).eq("user_id", user_id),
            "remove member"
        )
        return bool(response.data)

    async def is_member(self, team_id: str, user_id: str) -> bool:
        response = await self._execute(
            self.query("team_members").select("id").eq("team_id", team_id).eq("user_id", user_id).limit(1),
            "check member"
        )
        return bool(response.data)

    async def team_ids_for_user(self, user_id: str) -> List[str]:
        response = await self._execute(
            self.query("team_members").select("team_id").eq("user_id", user_id),
            "list user teams"
        )
        return [row["team_id"] for row in response.data or []]

    # Projects

    async def list_projects(self, team_id: str, offset: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        response = await self._execute(
            self.query("team_projects")
            .select(f"id, team_id, project_id, created_at, projects({TEAM_PROJECT_COLUMNS})", count="exact")
            .eq("team_id", team_id)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1),
            "list projects"
        )
        return response.data or [], response.count or 0

    async def assign_project(self, team_id: str, project_id: str) -> Dict[str, Any]:
        response = await self._execute(
            self.query("team_projects").insert({"team_id": team_id, "project_id": project_id}),
            "assign project"
        )
        return response.data[0]

    async def unassign_project(self, team_id: str, project_id: str) -> bool:
        response = await self._execute(
            self.query("team_projects").delete().eq("team_id", team_id).eq("project_id", project_id),
            "unassign project"
        )
        return bool(response.data)

    async def is_project_assigned(self, team_id: str, project_id: str) -> bool:
        response = await self._execute(
            self.query("team_projects").select("id").eq("team_id", team_id).eq("project_id", project_id).limit(1),
            "check project"
        )
        return bool(response.data)

    async def project_ids_for_teams(self, team_ids: List[str]) -> List[str]:
        if not team_ids:
            return []
        response = await self._execute(
            self.query("team_projects").select("project_id").in_("team_id", team_ids),
            "list team projects"
        )
        return list(dict.fromkeys(row["project_id"] for row in response.data or []))
