"""
Category router.
Categories label time entries; deleting one only deactivates it.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from app.application.dto.category_dto import CreateCategoryRequestDTO, UpdateCategoryRequestDTO
from app.application.use_cases.category_use_cases import CategoryUseCases
from app.infrastructure.auth.dependencies import CurrentUser, get_current_user, require_manager
from app.infrastructure.web.dependencies import get_category_use_cases
from app.infrastructure.web.responses import success_response, paginated_response


router = APIRouter()

CategoryCases = Annotated[CategoryUseCases, Depends(get_category_use_cases)]


@router.get("")
async def list_categories(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_cases: CategoryCases,
    include_inactive: bool = Query(False, alias="includeInactive"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    """List categories ordered by name."""
    result = await use_cases.list(include_inactive, page, limit)
    return paginated_response(result["data"], result["pagination"])


@router.get("/{category_id}")
async def get_category(
    category_id: str,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_cases: CategoryCases
):
    category = await use_cases.get_by_id(category_id)
    return success_response(category)


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_manager)])
async def create_category(request: CreateCategoryRequestDTO, use_cases: CategoryCases):
    """
    Create a category.

    - **name**: Category name (unique)
    - **description**: Optional description
    - **color**: Hex color, #RRGGBB
    """
    category = await use_cases.create(request.to_payload())
    return success_response(category)


@router.patch("/{category_id}", dependencies=[Depends(require_manager)])
async def update_category(category_id: str, request: UpdateCategoryRequestDTO, use_cases: CategoryCases):
    category = await use_cases.update(category_id, request.to_payload())
    return success_response(category)


@router.delete("/{category_id}", dependencies=[Depends(require_manager)])
async def deactivate_category(category_id: str, use_cases: CategoryCases):
    result = await use_cases.deactivate(category_id)
    return success_response(result)


@router.patch("/{category_id}/activate", dependencies=[Depends(require_manager)])
async def activate_category(category_id: str, use_cases: CategoryCases):
    category = await use_cases.activate(category_id)
    return success_response(category)
