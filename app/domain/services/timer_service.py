"""Timer service for time entry rules.
Durations, week boundaries, timesheet locks and the day-mode block checks.
Pure computations; the use cases fetch and persist.
"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from app.domain.models.base import ValidationError
from app.domain.models.time_entry import parse_timestamp
from app.domain.models.timesheet import TimesheetStatus


Timestamp = Union[str, datetime]


class TimerService:
    """
    Domain service for time tracking rules.
    """

    def __init__(self, min_session_minutes: int = 1):
        self.min_session_minutes = min_session_minutes

    @staticmethod
    def duration_minutes(start_time: Timestamp, end_time: Optional[Timestamp]) -> Optional[int]:
        """
        Whole minutes between two instants, halves rounded up.
        None while the entry is still open.
        """
        if end_time is None:
            return None
        elapsed = parse_timestamp(end_time) - parse_timestamp(start_time)
        return math.floor(elapsed.total_seconds() / 60 + 0.5)

    def stopped_duration(self, start_time: Timestamp, end_time: Timestamp) -> int:
        """Duration of a stopped timer, never below the minimum session."""
        return max(self.min_session_minutes, self.duration_minutes(start_time, end_time))

    @staticmethod
    def week_start(moment: Timestamp) -> date:
        """Monday of the UTC week containing the instant."""
        day = parse_timestamp(moment).astimezone(timezone.utc).date()
        return day - timedelta(days=day.weekday())

    @staticmethod
    def timesheet_allows_changes(timesheet: Optional[Dict[str, Any]]) -> bool:
        """Entries stay editable until their week's timesheet leaves draft."""
        return timesheet is None or timesheet.get("status") == TimesheetStatus.DRAFT.value

    @staticmethod
    def check_time_order(start_time: Timestamp, end_time: Optional[Timestamp]) -> None:
        if end_time is not None and parse_timestamp(end_time) <= parse_timestamp(start_time):
            raise ValidationError("End time must be after start time", "endTime")

    @staticmethod
    def check_block_boundaries(
        start_time: Timestamp,
        end_time: Timestamp,
        day: Dict[str, Any],
        now: datetime
    ) -> None:
        """
        A block must sit inside its day.
        While the day is open, the block cannot end in the future.

        Raises:
            ValidationError: BLOCK_OUTSIDE_DAY_BOUNDARIES
        """
        block_start = parse_timestamp(start_time)
        block_end = parse_timestamp(end_time)

        message = None
        if block_start < parse_timestamp(day["start_time"]):
            message = "Block start time cannot be before day start"
        elif block_end <= block_start:
            message = "Block end time must be after start time"
        elif day.get("end_time") is not None:
            if block_end > parse_timestamp(day["end_time"]):
                message = "Block end time cannot be after day end"
        elif block_end > now:
            message = "Block end time cannot be in the future"

        if message:
            raise ValidationError(message, code="BLOCK_OUTSIDE_DAY_BOUNDARIES")

    @staticmethod
    def find_overlaps(
        start_time: Timestamp,
        end_time: Timestamp,
        blocks: Iterable[Dict[str, Any]],
        exclude_id: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Blocks sharing any instant with [start_time, end_time).
        Touching ends do not overlap.
        """
        start = parse_timestamp(start_time)
        end = parse_timestamp(end_time)

        conflicts = []
        for block in blocks:
            if exclude_id is not None and block.get("id") == exclude_id:
                continue
            if block.get("end_time") is None:
                continue
            if start < parse_timestamp(block["end_time"]) and end > parse_timestamp(block["start_time"]):
                conflicts.append({
                    "id": block.get("id"),
                    "startTime": block["start_time"],
                    "endTime": block["end_time"],
                })
        return conflicts

    def unallocated_minutes(self, day: Dict[str, Any], blocks: Iterable[Dict[str, Any]], now: datetime) -> int:
        """Minutes of the day, so far if it is still open, not covered by any block."""
        day_end = day.get("end_time") or now
        day_minutes = self.duration_minutes(day["start_time"], day_end) or 0
        allocated = sum(int(block.get("duration_minutes") or 0) for block in blocks)
        return max(0, day_minutes - allocated)
