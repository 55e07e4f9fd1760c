"""
FastAPI dependency providers.
Wires Supabase repositories and services into the application use cases.
"""

from typing import Annotated
from zoneinfo import ZoneInfo

from fastapi import Depends, Request
from supabase import AsyncClient

from app.config import Settings
from app.domain.services.numbering_service import NumberingService
from app.domain.services.reporting_service import ReportingService
from app.domain.services.timer_service import TimerService
from app.infrastructure.auth.role_cache import RoleCache
from app.infrastructure.auth.supabase_auth import SupabaseAuthService
from app.infrastructure.db.database import SupabaseClientFactory, get_client_factory, get_service_client
from app.infrastructure.repositories import (
    SupabaseProjectRepository,
    SupabaseUserRepository,
    SupabaseTeamRepository,
    SupabaseCategoryRepository,
    SupabaseTimeEntryRepository,
    SupabaseTimesheetRepository,
)
from app.application.use_cases import (
    AuthUseCases,
    UserUseCases,
    ProjectUseCases,
    TeamUseCases,
    CategoryUseCases,
    DashboardUseCases,
    TimeEntryUseCases,
)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


ServiceClient = Annotated[AsyncClient, Depends(get_service_client)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]


def get_role_cache(request: Request) -> RoleCache:
    """Dependency to get the role cache stored on the application."""
    return request.app.state.role_cache


# Repositories

def get_user_repository(client: ServiceClient) -> SupabaseUserRepository:
    return SupabaseUserRepository(client)


def get_project_repository(client: ServiceClient) -> SupabaseProjectRepository:
    return SupabaseProjectRepository(client)


def get_team_repository(client: ServiceClient) -> SupabaseTeamRepository:
    return SupabaseTeamRepository(client)


def get_category_repository(client: ServiceClient) -> SupabaseCategoryRepository:
    return SupabaseCategoryRepository(client)


def get_time_entry_repository(client: ServiceClient) -> SupabaseTimeEntryRepository:
    return SupabaseTimeEntryRepository(client)


def get_timesheet_repository(client: ServiceClient) -> SupabaseTimesheetRepository:
    return SupabaseTimesheetRepository(client)


def get_auth_service(
    clients: Annotated[SupabaseClientFactory, Depends(get_client_factory)],
    settings: AppSettings
) -> SupabaseAuthService:
    """Dependency to get the identity provider service."""
    return SupabaseAuthService(clients, settings.password_reset_redirect_url)


# Use cases

def get_auth_use_cases(
    auth_service: Annotated[SupabaseAuthService, Depends(get_auth_service)],
    users: Annotated[SupabaseUserRepository, Depends(get_user_repository)],
    role_cache: Annotated[RoleCache, Depends(get_role_cache)],
    settings: AppSettings
) -> AuthUseCases:
    return AuthUseCases(auth_service, users, role_cache, settings.default_weekly_hours_target)


def get_user_use_cases(
    users: Annotated[SupabaseUserRepository, Depends(get_user_repository)],
    auth_service: Annotated[SupabaseAuthService, Depends(get_auth_service)]
) -> UserUseCases:
    return UserUseCases(users, auth_service)


def get_project_use_cases(
    projects: Annotated[SupabaseProjectRepository, Depends(get_project_repository)],
    teams: Annotated[SupabaseTeamRepository, Depends(get_team_repository)],
    settings: AppSettings
) -> ProjectUseCases:
    return ProjectUseCases(
        projects,
        teams,
        NumberingService(),
        max_retries=settings.project_code_max_retries,
        retry_max_delay=settings.project_code_retry_max_delay
    )


def get_team_use_cases(
    teams: Annotated[SupabaseTeamRepository, Depends(get_team_repository)],
    users: Annotated[SupabaseUserRepository, Depends(get_user_repository)],
    projects: Annotated[SupabaseProjectRepository, Depends(get_project_repository)]
) -> TeamUseCases:
    return TeamUseCases(teams, users, projects)


def get_category_use_cases(
    categories: Annotated[SupabaseCategoryRepository, Depends(get_category_repository)]
) -> CategoryUseCases:
    return CategoryUseCases(categories)


def get_dashboard_use_cases(
    time_entries: Annotated[SupabaseTimeEntryRepository, Depends(get_time_entry_repository)],
    timesheets: Annotated[SupabaseTimesheetRepository, Depends(get_timesheet_repository)],
    users: Annotated[SupabaseUserRepository, Depends(get_user_repository)],
    settings: AppSettings
) -> DashboardUseCases:
    return DashboardUseCases(
        time_entries,
        timesheets,
        users,
        ReportingService(settings.default_weekly_hours_target),
        ZoneInfo(settings.timezone)
    )


def get_time_entry_use_cases(
    time_entries: Annotated[SupabaseTimeEntryRepository, Depends(get_time_entry_repository)],
    timesheets: Annotated[SupabaseTimesheetRepository, Depends(get_timesheet_repository)]
) -> TimeEntryUseCases:
    return TimeEntryUseCases(time_entries, timesheets, TimerService())
