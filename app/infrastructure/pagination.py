"""
Offset pagination utilities.
Query parameters arrive as raw strings; invalid values fall back to defaults
and out-of-range values are clamped instead of rejected.
"""

from dataclasses import dataclass
from math import ceil
from typing import Any, Dict, Optional


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


@dataclass(frozen=True)
class PaginationParams:
    """Resolved page request."""
    page: int
    limit: int
    offset: int


def _to_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def parse_pagination_params(page: Optional[Any] = None, limit: Optional[Any] = None) -> PaginationParams:
    """
    Parse page and limit from raw query values.

    Args:
        page: Requested page, 1-based
        limit: Requested page size

    Returns:
        PaginationParams with page >= 1, 1 <= limit <= MAX_LIMIT
    """
    page_number = max(1, _to_int(page, DEFAULT_PAGE))
    page_size = min(MAX_LIMIT, max(1, _to_int(limit, DEFAULT_LIMIT)))

    return PaginationParams(
        page=page_number,
        limit=page_size,
        offset=(page_number - 1) * page_size
    )


def build_pagination_meta(page: int, limit: int, total: int) -> Dict[str, Any]:
    """Build the pagination block returned with every list response."""
    limit = max(1, limit)
    total = max(0, total or 0)
    total_pages = ceil(total / limit)

    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": total_pages,
        "hasNext": page < total_pages,
        "hasPrev": page > 1,
    }
