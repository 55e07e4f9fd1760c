"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .errors import RepositoryError, UniqueViolationError, ForeignKeyViolationError
from .project_repository import ProjectRepository
from .user_repository import UserRepository
from .team_repository import TeamRepository
from .category_repository import CategoryRepository
from .time_entry_repository import TimeEntryRepository
from .timesheet_repository import TimesheetRepository

__all__ = [
    "RepositoryError",
    "UniqueViolationError",
    "ForeignKeyViolationError",
    "ProjectRepository",
    "UserRepository",
    "TeamRepository",
    "CategoryRepository",
    "TimeEntryRepository",
    "TimesheetRepository",
]
