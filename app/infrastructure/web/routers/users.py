"""
User management router.
Self-service profile endpoints and manager account administration.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from app.application.dto.user_dto import CreateUserRequestDTO, UpdateProfileRequestDTO, UpdateUserRequestDTO
from app.application.use_cases.user_use_cases import UserUseCases
from app.infrastructure.auth.dependencies import CurrentUser, get_current_user, require_manager
from app.infrastructure.web.dependencies import get_user_use_cases
from app.infrastructure.web.responses import success_response, paginated_response


router = APIRouter()


@router.get("", dependencies=[Depends(require_manager)])
async def list_users(
    use_cases: Annotated[UserUseCases, Depends(get_user_use_cases)],
    role: Optional[str] = Query(None, description="Filter by role (employee, manager)"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    """List user profiles, newest first."""
    result = await use_cases.list_users(role, page, limit)
    return paginated_response(result["data"], result["pagination"])


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_manager)])
async def create_user(
    request: CreateUserRequestDTO,
    use_cases: Annotated[UserUseCases, Depends(get_user_use_cases)]
):
    """
    Create an account. The user receives a link to choose a password.

    - **email**: Account email
    - **firstName** / **lastName**: Display name
    - **role**: employee (default) or manager
    - **weeklyHoursTarget**: Weekly hours goal, default 35
    """
    user = await use_cases.create_user(request.to_payload())
    return success_response(user)


@router.get("/me")
async def get_my_profile(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_cases: Annotated[UserUseCases, Depends(get_user_use_cases)]
):
    profile = await use_cases.get_profile(user.id)
    return success_response(profile)


@router.patch("/me")
async def update_my_profile(
    request: UpdateProfileRequestDTO,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_cases: Annotated[UserUseCases, Depends(get_user_use_cases)]
):
    """Update first name, last name or weekly target. Other fields are ignored."""
    profile = await use_cases.update_profile(user.id, request.to_payload())
    return success_response(profile)


@router.patch("/{user_id}", dependencies=[Depends(require_manager)])
async def update_user(
    user_id: str,
    request: UpdateUserRequestDTO,
    use_cases: Annotated[UserUseCases, Depends(get_user_use_cases)]
):
    profile = await use_cases.update_user(user_id, request.to_payload())
    return success_response(profile)
