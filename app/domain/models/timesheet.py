"""
Timesheet domain model.
Timesheets are read-only here; the dashboard only counts them by status.
"""

from enum import Enum


NO_TIMESHEET_STATUS = "none"


class TimesheetStatus(str, Enum):
    """Weekly timesheet lifecycle status."""
    DRAFT = "draft"
    SUBMITTED = "submitted"
    VALIDATED = "validated"
    REJECTED = "rejected"
