"""
Time entry DTOs for the application layer.
Timestamps are ISO 8601; ids are UUIDs.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import Field, model_validator, validator

from app.application.dto.base_dto import CreateRequestDTO, NonEmptyUpdateRequestDTO
from app.domain.models.time_entry import EntryMode


DESCRIPTION_MAX_LENGTH = 500


def _check_order(start_time: Optional[datetime], end_time: Optional[datetime]) -> None:
    if start_time is not None and end_time is not None and end_time <= start_time:
        raise ValueError("End time must be after start time")


class EntryDetailsDTO(CreateRequestDTO):
    """What an entry is about. Every field is optional and nullable."""

    project_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class CreateTimeEntryRequestDTO(EntryDetailsDTO):
    """
    DTO for logging an entry after the fact.

    - **startTime**: required
    - **endTime**: optional, must be after startTime
    - **entryMode**: simple, day or template
    """

    start_time: datetime
    end_time: Optional[datetime] = None
    entry_mode: EntryMode

    @model_validator(mode="after")
    def check_time_order(self):
        _check_order(self.start_time, self.end_time)
        return self


class UpdateTimeEntryRequestDTO(NonEmptyUpdateRequestDTO):
    """DTO for updating an entry. endTime, projectId, categoryId and description may be cleared with null."""

    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    project_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)

    @validator("start_time")
    def start_time_not_null(cls, v):
        if v is None:
            raise ValueError("Start time cannot be cleared")
        return v

    @model_validator(mode="after")
    def check_time_order(self):
        _check_order(self.start_time, self.end_time)
        return self


class TimerRequestDTO(EntryDetailsDTO):
    """DTO for starting or stopping the timer."""
    pass


class StartDayRequestDTO(CreateRequestDTO):
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class CreateBlockRequestDTO(EntryDetailsDTO):
    """DTO for allocating part of the active day."""

    start_time: datetime
    end_time: datetime

    @model_validator(mode="after")
    def check_time_order(self):
        _check_order(self.start_time, self.end_time)
        return self


class UpdateBlockRequestDTO(NonEmptyUpdateRequestDTO):
    """DTO for moving or relabelling a block. The times cannot be cleared."""

    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    project_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)

    @validator("start_time", "end_time")
    def times_not_null(cls, v):
        if v is None:
            raise ValueError("Block times cannot be cleared")
        return v

    @model_validator(mode="after")
    def check_time_order(self):
        _check_order(self.start_time, self.end_time)
        return self
