"""
Base DTOs for the application layer.
Provides common patterns for request data transfer objects.
"""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Wire names are camelCase, attributes snake_case
        alias_generator=to_camel,
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
        str_strip_whitespace=True,
        extra="forbid"
    )

    def to_payload(self) -> Dict[str, Any]:
        """Fields the client actually sent, keyed by their camelCase names, as JSON values."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class RequestDTO(BaseDTO):
    """Base class for request DTOs."""
    pass


class CreateRequestDTO(RequestDTO):
    """Base class for creation request DTOs."""
    pass


class UpdateRequestDTO(RequestDTO):
    """
    Base class for partial update DTOs.
    Unknown fields are dropped instead of rejected.
    """

    model_config = ConfigDict(extra="ignore")


class NonEmptyUpdateRequestDTO(UpdateRequestDTO):
    """Partial update that must carry at least one known field."""

    @model_validator(mode="after")
    def check_not_empty(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self
