"""
Infrastructure repositories module.
Contains Supabase implementations of domain repositories.
"""

from .project_repository import SupabaseProjectRepository
from .user_repository import SupabaseUserRepository
from .team_repository import SupabaseTeamRepository
from .category_repository import SupabaseCategoryRepository
from .time_entry_repository import SupabaseTimeEntryRepository
from .timesheet_repository import SupabaseTimesheetRepository

__all__ = [
    "SupabaseProjectRepository",
    "SupabaseUserRepository",
    "SupabaseTeamRepository",
    "SupabaseCategoryRepository",
    "SupabaseTimeEntryRepository",
    "SupabaseTimesheetRepository",
]
