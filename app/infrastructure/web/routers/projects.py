"""
Project management router.
Everyone reads projects; managers create, edit and archive them.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from app.application.dto.project_dto import CreateProjectRequestDTO, UpdateProjectRequestDTO
from app.application.use_cases.project_use_cases import ProjectUseCases
from app.infrastructure.auth.dependencies import CurrentUser, get_current_user, require_manager
from app.infrastructure.web.dependencies import get_project_use_cases
from app.infrastructure.web.responses import success_response, paginated_response


router = APIRouter()


@router.get("")
async def list_projects(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_cases: Annotated[ProjectUseCases, Depends(get_project_use_cases)],
    include_archived: bool = Query(False, alias="includeArchived"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    """
    List projects, newest first.

    - **includeArchived**: Also return archived projects
    - **page** / **limit**: Pagination (limit capped at 100)
    """
    result = await use_cases.list(include_archived, page, limit)
    return paginated_response(result["data"], result["pagination"])


@router.get("/me")
async def list_my_projects(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_cases: Annotated[ProjectUseCases, Depends(get_project_use_cases)],
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    """Active projects assigned to the caller's teams."""
    result = await use_cases.list_for_user_teams(user.id, page, limit)
    return paginated_response(result["data"], result["pagination"])


@router.get("/{project_id}")
async def get_project(
    project_id: str,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_cases: Annotated[ProjectUseCases, Depends(get_project_use_cases)]
):
    project = await use_cases.get_by_id(project_id)
    return success_response(project)


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_manager)])
async def create_project(
    request: CreateProjectRequestDTO,
    use_cases: Annotated[ProjectUseCases, Depends(get_project_use_cases)]
):
    """
    Create a project. The code (PRJ-001, PRJ-002, ...) is assigned by the server.

    - **name**: Project name (required)
    - **description**: Project description
    - **budgetHours**: Budgeted hours
    """
    project = await use_cases.create(request.to_payload())
    return success_response(project)


@router.patch("/{project_id}", dependencies=[Depends(require_manager)])
async def update_project(
    project_id: str,
    request: UpdateProjectRequestDTO,
    use_cases: Annotated[ProjectUseCases, Depends(get_project_use_cases)]
):
    project = await use_cases.update(project_id, request.to_payload())
    return success_response(project)


@router.patch("/{project_id}/archive", dependencies=[Depends(require_manager)])
async def archive_project(
    project_id: str,
    use_cases: Annotated[ProjectUseCases, Depends(get_project_use_cases)]
):
    project = await use_cases.archive(project_id)
    return success_response(project)


@router.patch("/{project_id}/restore", dependencies=[Depends(require_manager)])
async def restore_project(
    project_id: str,
    use_cases: Annotated[ProjectUseCases, Depends(get_project_use_cases)]
):
    project = await use_cases.restore(project_id)
    return success_response(project)
