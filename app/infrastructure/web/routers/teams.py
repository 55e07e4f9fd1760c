"""
Team management router.
Every endpoint is restricted to managers.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from app.application.dto.team_dto import (
    CreateTeamRequestDTO,
    UpdateTeamRequestDTO,
    AddMemberRequestDTO,
    AssignProjectRequestDTO
)
from app.application.use_cases.team_use_cases import TeamUseCases
from app.infrastructure.auth.dependencies import require_manager
from app.infrastructure.web.dependencies import get_team_use_cases
from app.infrastructure.web.responses import success_response, paginated_response


router = APIRouter(dependencies=[Depends(require_manager)])

TeamCases = Annotated[TeamUseCases, Depends(get_team_use_cases)]


@router.get("")
async def list_teams(
    use_cases: TeamCases,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    """List teams with their member and project counts."""
    result = await use_cases.list(page, limit)
    return paginated_response(result["data"], result["pagination"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_team(request: CreateTeamRequestDTO, use_cases: TeamCases):
    team = await use_cases.create(request.to_payload())
    return success_response(team)


@router.get("/{team_id}")
async def get_team(team_id: str, use_cases: TeamCases):
    """Team with its members and projects."""
    team = await use_cases.get_by_id(team_id)
    return success_response(team)


@router.patch("/{team_id}")
async def update_team(team_id: str, request: UpdateTeamRequestDTO, use_cases: TeamCases):
    team = await use_cases.update(team_id, request.to_payload())
    return success_response(team)


@router.delete("/{team_id}")
async def delete_team(team_id: str, use_cases: TeamCases):
    result = await use_cases.remove(team_id)
    return success_response(result)


# Members

@router.get("/{team_id}/members")
async def list_team_members(
    team_id: str,
    use_cases: TeamCases,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    result = await use_cases.list_members(team_id, page, limit)
    return paginated_response(result["data"], result["pagination"])


@router.post("/{team_id}/members", status_code=status.HTTP_201_CREATED)
async def add_team_member(team_id: str, request: AddMemberRequestDTO, use_cases: TeamCases):
    membership = await use_cases.add_member(team_id, str(request.user_id))
    return success_response(membership)


@router.delete("/{team_id}/members/{user_id}")
async def remove_team_member(team_id: str, user_id: str, use_cases: TeamCases):
    result = await use_cases.remove_member(team_id, user_id)
    return success_response(result)


# Projects

@router.get("/{team_id}/projects")
async def list_team_projects(
    team_id: str,
    use_cases: TeamCases,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    result = await use_cases.list_projects(team_id, page, limit)
    return paginated_response(result["data"], result["pagination"])


@router.post("/{team_id}/projects", status_code=status.HTTP_201_CREATED)
async def assign_team_project(team_id: str, request: AssignProjectRequestDTO, use_cases: TeamCases):
    assignment = await use_cases.assign_project(team_id, str(request.project_id))
    return success_response(assignment)


@router.delete("/{team_id}/projects/{project_id}")
async def unassign_team_project(team_id: str, project_id: str, use_cases: TeamCases):
    result = await use_cases.unassign_project(team_id, project_id)
    return success_response(result)
