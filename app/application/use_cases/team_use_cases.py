"""
Team use cases for the application layer.
Teams group users and the projects they work on.
"""

import logging
from typing import Any, Dict

from app.domain.models.base import ConflictError, DatabaseError, EntityNotFoundError, ValidationError
from app.domain.repositories.errors import RepositoryError, UniqueViolationError
from app.domain.repositories.project_repository import ProjectRepository
from app.domain.repositories.team_repository import TeamRepository
from app.domain.repositories.user_repository import UserRepository
from app.application.use_cases.base_use_case import BaseUseCase
from app.infrastructure.pagination import parse_pagination_params, build_pagination_meta

logger = logging.getLogger(__name__)


class TeamUseCases(BaseUseCase):
    """Use cases for teams, memberships and project assignments."""

    entity_name = "Team"
    UPDATABLE_FIELDS = ("name", "description")

    def __init__(self, teams: TeamRepository, users: UserRepository, projects: ProjectRepository):
        self.teams = teams
        self.users = users
        self.projects = projects

    async def _require_team(self, team_id: str, code: str = "NOT_FOUND") -> None:
        with self.storage_errors("Failed to retrieve team", team_id=team_id):
            team = await self.teams.find_by_id(team_id)
        if team is None:
            raise self.not_found(team_id, code=code)

    # Teams

    async def list(self, page: Any = None, limit: Any = None) -> Dict[str, Any]:
        """Teams with their memberCount and projectCount."""
        params = parse_pagination_params(page, limit)

        with self.storage_errors("Failed to retrieve teams"):
            rows, total = await self.teams.list(params.offset, params.limit)

        return self.to_page(rows, total, params)

    async def get_by_id(self, team_id: str) -> Dict[str, Any]:
        """Team with its members and projects."""
        with self.storage_errors("Failed to retrieve team", team_id=team_id):
            team = await self.teams.find_detail(team_id)

        if team is None:
            raise self.not_found(team_id)
        return self.to_output(team)

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            team = await self.teams.create({
                "name": data["name"],
                "description": data.get("description"),
            })
        except UniqueViolationError:
            raise ConflictError("A team with this name already exists", code="DUPLICATE_NAME")
        except RepositoryError as e:
            logger.error(f"Create team failed: {e.message}")
            raise DatabaseError("Failed to create team", code="CREATE_FAILED") from e

        return self.to_output(team)

    async def update(self, team_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update name or description.
        Unlike other updates, nothing left after filtering is a validation error.
        """
        changes = self.whitelist(data, self.UPDATABLE_FIELDS)
        if not changes:
            raise ValidationError("No valid fields provided for update")

        try:
            team = await self.teams.update(team_id, self.to_columns(changes))
        except UniqueViolationError:
            raise ConflictError("A team with this name already exists", code="DUPLICATE_NAME")
        except RepositoryError as e:
            logger.error(f"Update team failed: {e.message}", extra={"team_id": team_id})
            raise DatabaseError("Update failed", code="UPDATE_FAILED") from e

        if team is None:
            raise self.not_found(team_id)
        return self.to_output(team)

    async def remove(self, team_id: str) -> Dict[str, str]:
        """Delete a team; its memberships and assignments go with it."""
        await self._require_team(team_id)

        with self.storage_errors("Failed to delete team", code="DELETE_FAILED", team_id=team_id):
            deleted = await self.teams.delete(team_id)

        if not deleted:
            raise self.not_found(team_id)
        return {"message": "Team deleted successfully"}

    # Members

    async def list_members(self, team_id: str, page: Any = None, limit: Any = None) -> Dict[str, Any]:
        await self._require_team(team_id)
        params = parse_pagination_params(page, limit)

        with self.storage_errors("Failed to retrieve team members", team_id=team_id):
            rows, total = await self.teams.list_members(team_id, params.offset, params.limit)

        members = [
            {
                "id": row.get("id"),
                "teamId": row.get("team_id"),
                "userId": row.get("user_id"),
                "createdAt": row.get("created_at"),
                "user": self.to_output(row.get("profiles")),
            }
            for row in rows
        ]
        return {"data": members, "pagination": build_pagination_meta(params.page, params.limit, total)}

    async def add_member(self, team_id: str, user_id: str) -> Dict[str, Any]:
        """
        Add a user to a team.

        Raises:
            EntityNotFoundError: TEAM_NOT_FOUND or USER_NOT_FOUND
            ValidationError: ALREADY_MEMBER
        """
        await self._require_team(team_id, code="TEAM_NOT_FOUND")

        with self.storage_errors("Failed to retrieve user", user_id=user_id):
            user = await self.users.find_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id, code="USER_NOT_FOUND")

        try:
            membership = await self.teams.add_member(team_id, user_id)
        except UniqueViolationError:
            raise ValidationError("User already in team", code="ALREADY_MEMBER")
        except RepositoryError as e:
            logger.error(f"Add member failed: {e.message}", extra={"team_id": team_id, "user_id": user_id})
            raise DatabaseError("Failed to add member to team", code="ADD_MEMBER_FAILED") from e

        return self.to_output(membership)

    async def remove_member(self, team_id: str, user_id: str) -> Dict[str, str]:
        if not await self.is_member(team_id, user_id):
            raise EntityNotFoundError("Member", user_id, code="NOT_MEMBER")

        with self.storage_errors("Failed to remove member from team", code="REMOVE_MEMBER_FAILED"):
            await self.teams.remove_member(team_id, user_id)

        return {"message": "Member removed successfully"}

    async def is_member(self, team_id: str, user_id: str) -> bool:
        with self.storage_errors("Failed to check team membership"):
            return await self.teams.is_member(team_id, user_id)

    # Projects

    async def list_projects(self, team_id: str, page: Any = None, limit: Any = None) -> Dict[str, Any]:
        await self._require_team(team_id)
        params = parse_pagination_params(page, limit)

        with self.storage_errors("Failed to retrieve team projects", team_id=team_id):
            rows, total = await self.teams.list_projects(team_id, params.offset, params.limit)

        assignments = [
            {
                "id": row.get("id"),
                "teamId": row.get("team_id"),
                "projectId": row.get("project_id"),
                "createdAt": row.get("created_at"),
                "project": self.to_output(row.get("projects")),
            }
            for row in rows
        ]
        return {"data": assignments, "pagination": build_pagination_meta(params.page, params.limit, total)}

    async def assign_project(self, team_id: str, project_id: str) -> Dict[str, Any]:
        """
        Assign a project to a team.

        Raises:
            EntityNotFoundError: TEAM_NOT_FOUND or PROJECT_NOT_FOUND
            ValidationError: ALREADY_ASSIGNED
        """
        await self._require_team(team_id, code="TEAM_NOT_FOUND")

        with self.storage_errors("Failed to retrieve project", project_id=project_id):
            project = await self.projects.find_by_id(project_id)
        if project is None:
            raise EntityNotFoundError("Project", project_id, code="PROJECT_NOT_FOUND")

        try:
            assignment = await self.teams.assign_project(team_id, project_id)
        except UniqueViolationError:
            raise ValidationError("Project already assigned to team", code="ALREADY_ASSIGNED")
        except RepositoryError as e:
            logger.error(f"Assign project failed: {e.message}", extra={"team_id": team_id, "project_id": project_id})
            raise DatabaseError("Failed to assign project to team", code="ASSIGN_PROJECT_FAILED") from e

        return self.to_output(assignment)

    async def unassign_project(self, team_id: str, project_id: str) -> Dict[str, str]:
        if not await self.is_project_assigned(team_id, project_id):
            raise EntityNotFoundError("Project assignment", project_id, code="NOT_ASSIGNED")

        with self.storage_errors("Failed to unassign project from team", code="UNASSIGN_PROJECT_FAILED"):
            await self.teams.unassign_project(team_id, project_id)

        return {"message": "Project unassigned successfully"}

    async def is_project_assigned(self, team_id: str, project_id: str) -> bool:
        with self.storage_errors("Failed to check project assignment"):
            return await self.teams.is_project_assigned(team_id, project_id)
