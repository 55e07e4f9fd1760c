"""
Project use cases for the application layer.
Implements project listing, sequential code allocation and status changes.
"""

import asyncio
import logging
import random
from typing import Any, Awaitable, Callable, Dict, Optional

from app.domain.models.base import DatabaseError, DuplicateCodeError
from app.domain.models.project import ProjectStatus
from app.domain.repositories.errors import RepositoryError, UniqueViolationError
from app.domain.repositories.project_repository import ProjectRepository
from app.domain.repositories.team_repository import TeamRepository
from app.domain.services.numbering_service import NumberingService
from app.domain.services.reporting_service import round_half_up
from app.application.use_cases.base_use_case import BaseUseCase
from app.infrastructure.pagination import parse_pagination_params, build_pagination_meta

logger = logging.getLogger(__name__)


def total_hours_tracked(minutes: int) -> float:
    """Tracked minutes as hours, rounded to two decimals."""
    return round_half_up((minutes or 0) / 60, 2)


class ProjectUseCases(BaseUseCase):
    """Use cases for projects."""

    entity_name = "Project"
    UPDATABLE_FIELDS = ("name", "description", "budgetHours")

    def __init__(
        self,
        projects: ProjectRepository,
        teams: TeamRepository,
        numbering: Optional[NumberingService] = None,
        max_retries: int = 3,
        retry_max_delay: float = 0.1,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        self.projects = projects
        self.teams = teams
        self.numbering = numbering or NumberingService()
        self.max_retries = max_retries
        self.retry_max_delay = retry_max_delay
        self.sleep = sleep

    def _with_hours(self, row: Dict[str, Any]) -> Dict[str, Any]:
        row = dict(row)
        minutes = row.pop("tracked_minutes", 0)
        project = self.to_output(row)
        project["totalHoursTracked"] = total_hours_tracked(minutes)
        return project

    async def list(self, include_archived: bool = False, page: Any = None, limit: Any = None) -> Dict[str, Any]:
        """
        List projects, active only unless include_archived.
        Each item carries totalHoursTracked.
        """
        params = parse_pagination_params(page, limit)

        with self.storage_errors("Failed to retrieve projects"):
            rows, total = await self.projects.list(include_archived, params.offset, params.limit)

        return {
            "data": [self._with_hours(row) for row in rows],
            "pagination": build_pagination_meta(params.page, params.limit, total),
        }

    async def get_by_id(self, project_id: str) -> Dict[str, Any]:
        """Project with totalHoursTracked and the teams it is assigned to."""
        with self.storage_errors("Failed to retrieve project", project_id=project_id):
            row = await self.projects.find_by_id(project_id)
            if row is None:
                raise self.not_found(project_id)
            teams = await self.projects.list_teams(project_id)

        project = self._with_hours(row)
        project["teams"] = [self.to_output(team) for team in teams]
        return project

    async def generate_next_code(self) -> str:
        """
        Compute the next project code from every existing code.
        Rescanned on each call; a concurrent creator may still take the same code.
        """
        with self.storage_errors("Failed to generate project code", code="CODE_GENERATION_FAILED"):
            codes = await self.projects.list_codes()
        return self.numbering.next_project_code(codes)

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a project with the next sequential code.

        A unique violation on the code means another request took it first:
        wait a random delay, rescan and retry, up to max_retries times.

        Raises:
            DuplicateCodeError: When every attempt collided
            DatabaseError: CODE_GENERATION_FAILED or CREATE_FAILED
        """
        for attempt in range(self.max_retries + 1):
            code = await self.generate_next_code()
            row = {
                "code": code,
                "name": data["name"],
                "description": data.get("description"),
                "budget_hours": data.get("budgetHours"),
                "status": ProjectStatus.ACTIVE.value,
            }

            try:
                created = await self.projects.create(row)
            except UniqueViolationError:
                if attempt >= self.max_retries:
                    break
                logger.warning(
                    f"Project code {code} already taken, retrying ({attempt + 1}/{self.max_retries})"
                )
                await self.sleep(random.uniform(0, self.retry_max_delay))
                continue
            except RepositoryError as e:
                logger.error(f"Failed to create project: {e.message}", extra={"project_code": code})
                raise DatabaseError("Failed to create project", code="CREATE_FAILED") from e

            logger.info(f"Project created with code {code}")
            return self.to_output(created)

        logger.error(f"Project code allocation failed after {self.max_retries} retries")
        raise DuplicateCodeError()

    async def update(self, project_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update name, description or budgetHours.
        Any other field, code included, is silently dropped.
        """
        changes = self.whitelist(data, self.UPDATABLE_FIELDS)
        if not changes:
            return await self.get_by_id(project_id)

        with self.storage_errors("Update failed", code="UPDATE_FAILED", project_id=project_id):
            row = await self.projects.update(project_id, self.to_columns(changes))

        if row is None:
            raise self.not_found(project_id)
        return self.to_output(row)

    async def _set_status(self, project_id: str, status: ProjectStatus, message: str, code: str) -> Dict[str, Any]:
        with self.storage_errors(message, code=code, project_id=project_id):
            row = await self.projects.update(project_id, self.to_columns({"status": status.value}))

        if row is None:
            raise self.not_found(project_id)
        return self.to_output(row)

    async def archive(self, project_id: str) -> Dict[str, Any]:
        return await self._set_status(project_id, ProjectStatus.ARCHIVED, "Failed to archive project", "ARCHIVE_FAILED")

    async def restore(self, project_id: str) -> Dict[str, Any]:
        return await self._set_status(project_id, ProjectStatus.ACTIVE, "Failed to restore project", "RESTORE_FAILED")

    async def list_for_user_teams(self, user_id: str, page: Any = None, limit: Any = None) -> Dict[str, Any]:
        """
        Active projects assigned to any team the user belongs to.
        """
        params = parse_pagination_params(page, limit)
        empty = {"data": [], "pagination": build_pagination_meta(params.page, params.limit, 0)}

        with self.storage_errors("Failed to retrieve projects", user_id=user_id):
            team_ids = await self.teams.team_ids_for_user(user_id)
            if not team_ids:
                return empty

            project_ids = await self.teams.project_ids_for_teams(team_ids)
            if not project_ids:
                return empty

            rows, total = await self.projects.list_active_by_ids(project_ids, params.offset, params.limit)

        return {
            "data": [self._with_hours(row) for row in rows],
            "pagination": build_pagination_meta(params.page, params.limit, total),
        }
