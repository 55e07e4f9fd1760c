"""
Category repository implementation using Supabase.
"""

from typing import Any, Dict, List, Optional, Tuple

from app.domain.repositories.category_repository import CategoryRepository
from app.infrastructure.repositories.base import SupabaseRepository


CATEGORY_COLUMNS = "id, name, description, color, is_active, created_at, updated_at"


class SupabaseCategoryRepository(SupabaseRepository, CategoryRepository):
    """Supabase implementation of category repository."""

    table = "categories"

    async def list(
        self,
        include_inactive: bool,
        offset: int,
        limit: int
    ) -> Tuple[List[Dict[str, Any]], int]:
        query = self.query().select(CATEGORY_COLUMNS, count="exact")
        if not include_inactive:
            query = query.eq("is_active", True)

        response = await self._execute(
            query.order("name").range(offset, offset + limit - 1),
            "list"
        )
        return response.data or [], response.count or 0

    async def find_by_id(self, category_id: str) -> Optional[Dict[str, Any]]:
        response = await self._execute(
            self.query().select(CATEGORY_COLUMNS).eq("id", category_id).limit(1),
            "find"
        )
        return self._first(response.data)

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._execute(self.query().insert(data), "insert")
        return response.data[0]

    async def update(self, category_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        response = await self._execute(self.query().update(data).eq("id", category_id), "update")
        return self._first(response.data)
