"""
Time entry domain model.
Entries are logged in one of three modes and are the raw input of every dashboard figure.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import TypeAdapter


_TIMESTAMP = TypeAdapter(datetime)


class EntryMode(str, Enum):
    """How an entry was logged."""
    SIMPLE = "simple"
    DAY = "day"
    TEMPLATE = "template"


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """
    Parse an ISO 8601 timestamp as sent by clients or PostgREST.

    Accepts any fractional-second precision and a `Z` suffix.
    Naive values are read as UTC.
    """
    moment = _TIMESTAMP.validate_python(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass(frozen=True)
class TimeEntry:
    """A logged block of work as seen by the reporting layer."""

    duration_minutes: int = 0
    start_time: Optional[datetime] = None
    project: Optional[Dict[str, Any]] = None
    category: Optional[Dict[str, Any]] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "TimeEntry":
        """
        Build an entry from a data-store row.
        Embedded relations are read from the `projects` / `categories` keys.
        """
        start_time = row.get("start_time")
        if start_time is not None:
            start_time = parse_timestamp(start_time)

        return cls(
            duration_minutes=max(0, int(row.get("duration_minutes") or 0)),
            start_time=start_time,
            project=row.get("projects"),
            category=row.get("categories"),
        )
