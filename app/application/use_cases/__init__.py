"""
Application layer use cases.
Business logic for the time manager API.
"""

from .base_use_case import BaseUseCase
from .auth_use_cases import AuthUseCases
from .user_use_cases import UserUseCases
from .project_use_cases import ProjectUseCases
from .team_use_cases import TeamUseCases
from .category_use_cases import CategoryUseCases
from .dashboard_use_cases import DashboardUseCases
from .time_entry_use_cases import TimeEntryUseCases

__all__ = [
    "BaseUseCase",
    "AuthUseCases",
    "UserUseCases",
    "ProjectUseCases",
    "TeamUseCases",
    "CategoryUseCases",
    "DashboardUseCases",
    "TimeEntryUseCases",
]
