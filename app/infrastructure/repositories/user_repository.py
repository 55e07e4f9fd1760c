"""
Profile repository implementation using Supabase.
"""

from typing import Any, Dict, List, Optional, Tuple

from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.repositories.base import SupabaseRepository


PROFILE_COLUMNS = "id, email, first_name, last_name, role, weekly_hours_target, created_at, updated_at"


class SupabaseUserRepository(SupabaseRepository, UserRepository):
    """Supabase implementation of the profile repository."""

    table = "profiles"

    async def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        response = await self._execute(
            self.query().select(PROFILE_COLUMNS).eq("id", user_id).limit(1),
            "find"
        )
        return self._first(response.data)

    async def list(
        self,
        role: Optional[str],
        offset: int,
        limit: int
    ) -> Tuple[List[Dict[str, Any]], int]:
        query = self.query().select(PROFILE_COLUMNS, count="exact")
        if role:
            query = query.eq("role", role)

        response = await self._execute(
            query.order("created_at", desc=True).range(offset, offset + limit - 1),
            "list"
        )
        return response.data or [], response.count or 0

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._execute(self.query().insert(data), "insert")
        return response.data[0]

    async def update(self, user_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        response = await self._execute(self.query().update(data).eq("id", user_id), "update")
        return self._first(response.data)
