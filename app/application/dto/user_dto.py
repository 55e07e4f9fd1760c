"""
User DTOs for the application layer.
"""

from typing import Optional
from pydantic import EmailStr, Field

from app.application.dto.base_dto import CreateRequestDTO, UpdateRequestDTO, NonEmptyUpdateRequestDTO
from app.domain.models.user import UserRole, DEFAULT_WEEKLY_HOURS_TARGET


class CreateUserRequestDTO(CreateRequestDTO):
    """DTO for a manager creating a user account."""

    email: EmailStr = Field(description="User email address")
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    role: UserRole = Field(default=UserRole.EMPLOYEE)
    weekly_hours_target: float = Field(default=DEFAULT_WEEKLY_HOURS_TARGET, ge=0, le=168)


class UpdateProfileRequestDTO(UpdateRequestDTO):
    """DTO for self-service profile updates. Email and role are never accepted."""

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    weekly_hours_target: Optional[float] = Field(default=None, ge=0, le=168)


class UpdateUserRequestDTO(NonEmptyUpdateRequestDTO):
    """DTO for a manager updating a user."""

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    weekly_hours_target: Optional[float] = Field(default=None, ge=0, le=168)
