"""
Base use case classes for the application layer.
Provides the whitelisting, casing and error translation shared by every use case.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from app.domain.models.base import DatabaseError, EntityNotFoundError
from app.domain.repositories.errors import RepositoryError
from app.infrastructure.pagination import PaginationParams, build_pagination_meta
from app.infrastructure.transformers import camel_to_snake, snake_to_camel

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class BaseUseCase:
    """
    Base class for the use case groups.
    Inputs are camelCase dicts as sent by clients; outputs are camelCase dicts.
    """

    entity_name: str = "Resource"

    @staticmethod
    def whitelist(data: Dict[str, Any], allowed_fields: Iterable[str]) -> Dict[str, Any]:
        """Keep only the fields a partial update may touch."""
        allowed = set(allowed_fields)
        return {key: value for key, value in (data or {}).items() if key in allowed}

    @staticmethod
    def to_columns(changes: Dict[str, Any]) -> Dict[str, Any]:
        """Convert camelCase changes to columns and stamp updated_at."""
        return {**camel_to_snake(changes), "updated_at": utc_now_iso()}

    @staticmethod
    def to_output(row: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        return snake_to_camel(row)

    def to_page(self, rows: List[Dict[str, Any]], total: int, params: PaginationParams) -> Dict[str, Any]:
        """Shape a page of rows as {data, pagination}."""
        return {
            "data": [self.to_output(row) for row in rows],
            "pagination": build_pagination_meta(params.page, params.limit, total),
        }

    def not_found(self, entity_id: Any = None, code: Optional[str] = None) -> EntityNotFoundError:
        if code:
            return EntityNotFoundError(self.entity_name, entity_id, code=code)
        return EntityNotFoundError(self.entity_name, entity_id)

    @contextmanager
    def storage_errors(self, message: str, code: str = "DATABASE_ERROR", **context):
        """
        Translate repository failures raised inside the block into a DatabaseError.
        """
        try:
            yield
        except RepositoryError as e:
            logger.error(
                f"{self.entity_name} operation failed: {message}: {e.message}",
                extra={"code": code, "db_code": e.code, **context}
            )
            raise DatabaseError(message, code=code) from e
