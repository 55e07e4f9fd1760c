"""
Category DTOs for the application layer.
"""

from typing import Optional
from pydantic import Field, validator

from app.application.dto.base_dto import CreateRequestDTO, NonEmptyUpdateRequestDTO
from app.domain.models.category import HEX_COLOR_PATTERN


def _check_color(value: Optional[str]) -> Optional[str]:
    if value is not None and not HEX_COLOR_PATTERN.match(value):
        raise ValueError("Color must be in hex format (#RRGGBB)")
    return value


class CreateCategoryRequestDTO(CreateRequestDTO):
    """DTO for creating a category."""

    name: str = Field(min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)
    color: str

    @validator("color")
    def validate_color(cls, v):
        return _check_color(v)


class UpdateCategoryRequestDTO(NonEmptyUpdateRequestDTO):
    """DTO for updating a category."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)
    color: Optional[str] = None

    @validator("color")
    def validate_color(cls, v):
        return _check_color(v)
