"""
Project DTOs for the application layer.
"""

from typing import Optional
from pydantic import Field

from app.application.dto.base_dto import CreateRequestDTO, NonEmptyUpdateRequestDTO


class CreateProjectRequestDTO(CreateRequestDTO):
    """DTO for creating a new project. The code is always generated."""

    name: str = Field(min_length=1, max_length=100, description="Project name")
    description: Optional[str] = Field(default=None, max_length=500, description="Project description")
    budget_hours: Optional[float] = Field(default=None, ge=0, description="Budgeted hours")


class UpdateProjectRequestDTO(NonEmptyUpdateRequestDTO):
    """DTO for updating a project."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    budget_hours: Optional[float] = Field(default=None, ge=0)
