"""
Team DTOs for the application layer.
"""

from typing import Optional
from uuid import UUID
from pydantic import Field

from app.application.dto.base_dto import CreateRequestDTO, NonEmptyUpdateRequestDTO


class CreateTeamRequestDTO(CreateRequestDTO):
    """DTO for creating a team."""

    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class UpdateTeamRequestDTO(NonEmptyUpdateRequestDTO):
    """DTO for updating a team."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class AddMemberRequestDTO(CreateRequestDTO):
    user_id: UUID


class AssignProjectRequestDTO(CreateRequestDTO):
    project_id: UUID
