"""
Application layer DTOs.
Data Transfer Objects for API requests.
"""

from .base_dto import BaseDTO, RequestDTO, CreateRequestDTO, UpdateRequestDTO, NonEmptyUpdateRequestDTO
from .auth_dto import LoginRequestDTO, ForgotPasswordRequestDTO
from .user_dto import CreateUserRequestDTO, UpdateProfileRequestDTO, UpdateUserRequestDTO
from .project_dto import CreateProjectRequestDTO, UpdateProjectRequestDTO
from .team_dto import CreateTeamRequestDTO, UpdateTeamRequestDTO, AddMemberRequestDTO, AssignProjectRequestDTO
from .category_dto import CreateCategoryRequestDTO, UpdateCategoryRequestDTO
from .time_entry_dto import (
    CreateTimeEntryRequestDTO,
    UpdateTimeEntryRequestDTO,
    TimerRequestDTO,
    StartDayRequestDTO,
    CreateBlockRequestDTO,
    UpdateBlockRequestDTO,
)

__all__ = [
    # Base DTOs
    "BaseDTO",
    "RequestDTO",
    "CreateRequestDTO",
    "UpdateRequestDTO",
    "NonEmptyUpdateRequestDTO",

    # Auth
    "LoginRequestDTO",
    "ForgotPasswordRequestDTO",

    # Users
    "CreateUserRequestDTO",
    "UpdateProfileRequestDTO",
    "UpdateUserRequestDTO",

    # Projects
    "CreateProjectRequestDTO",
    "UpdateProjectRequestDTO",

    # Teams
    "CreateTeamRequestDTO",
    "UpdateTeamRequestDTO",
    "AddMemberRequestDTO",
    "AssignProjectRequestDTO",

    # Categories
    "CreateCategoryRequestDTO",
    "UpdateCategoryRequestDTO",

    # Time entries
    "CreateTimeEntryRequestDTO",
    "UpdateTimeEntryRequestDTO",
    "TimerRequestDTO",
    "StartDayRequestDTO",
    "CreateBlockRequestDTO",
    "UpdateBlockRequestDTO",
]
