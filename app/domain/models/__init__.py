"""
Domain models for the time tracking system.
This module exports the error taxonomy and the domain enums.
"""

# Errors
from .base import (
    DomainException,
    ValidationError,
    UnauthorizedError,
    ForbiddenError,
    EntityNotFoundError,
    ConflictError,
    DuplicateCodeError,
    DatabaseError
)

# Domain entities
from .project import ProjectStatus, PROJECT_CODE_PREFIX, NO_PROJECT_ID, NO_PROJECT_LABEL
from .category import HEX_COLOR_PATTERN, NO_CATEGORY_ID, NO_CATEGORY_LABEL
from .user import UserRole, ROLE_HIERARCHY, DEFAULT_WEEKLY_HOURS_TARGET, role_satisfies
from .timesheet import TimesheetStatus, NO_TIMESHEET_STATUS
from .time_entry import TimeEntry, EntryMode, parse_timestamp

__all__ = [
    # Errors
    "DomainException",
    "ValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "EntityNotFoundError",
    "ConflictError",
    "DuplicateCodeError",
    "DatabaseError",

    # Projects
    "ProjectStatus",
    "PROJECT_CODE_PREFIX",
    "NO_PROJECT_ID",
    "NO_PROJECT_LABEL",

    # Categories
    "HEX_COLOR_PATTERN",
    "NO_CATEGORY_ID",
    "NO_CATEGORY_LABEL",

    # Users
    "UserRole",
    "ROLE_HIERARCHY",
    "DEFAULT_WEEKLY_HOURS_TARGET",
    "role_satisfies",

    # Timesheets
    "TimesheetStatus",
    "NO_TIMESHEET_STATUS",

    # Time entries
    "TimeEntry",
    "EntryMode",
    "parse_timestamp",
]
