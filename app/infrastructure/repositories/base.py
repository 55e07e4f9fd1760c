"""
Shared plumbing for the Supabase repositories.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient

from app.domain.repositories.errors import ForeignKeyViolationError, RepositoryError, UniqueViolationError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


class SupabaseRepository:
    """Base class holding the client and the error translation."""

    table: str = ""

    def __init__(self, client: AsyncClient):
        self.client = client

    def query(self, table: Optional[str] = None):
        return self.client.table(table or self.table)

    async def _execute(self, query, operation: str):
        """
        Run a PostgREST query.
        Unique and foreign key violations get their own error types, everything else RepositoryError.
        """
        try:
            return await query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise UniqueViolationError(e.message or "Duplicate value", e.code) from e
            if e.code == FOREIGN_KEY_VIOLATION:
                detail = " ".join(part for part in (e.message, e.details) if isinstance(part, str))
                raise ForeignKeyViolationError(detail or "Missing referenced row", e.code) from e
            logger.error(
                f"Supabase {operation} failed on {self.table}: {e.message}",
                extra={"table": self.table, "operation": operation, "code": e.code}
            )
            raise RepositoryError(e.message or f"{operation} failed", e.code) from e
        except httpx.HTTPError as e:
            logger.error(
                f"Supabase {operation} request failed on {self.table}: {str(e)}",
                extra={"table": self.table, "operation": operation}
            )
            raise RepositoryError(str(e)) from e

    @staticmethod
    def _first(rows: Optional[List[Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
        return rows[0] if rows else None

    @staticmethod
    def _embedded_count(row: Dict[str, Any], relation: str) -> int:
        """Read a `relation(count)` embed, which PostgREST returns as [{"count": n}]."""
        embedded = row.pop(relation, None) or []
        if isinstance(embedded, list) and embedded:
            return int(embedded[0].get("count") or 0)
        return 0
