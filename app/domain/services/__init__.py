"""
Domain services for the time tracking system.
This module exports the pure computations shared by the use cases.
"""

from .numbering_service import NumberingService
from .timer_service import TimerService
from .reporting_service import ReportingService, DateWindow, minutes_to_hours, round_half_up
from .auth_service import AuthService, AuthProviderError, AuthSession

__all__ = [
    "NumberingService",
    "TimerService",
    "ReportingService",
    "DateWindow",
    "minutes_to_hours",
    "round_half_up",
    "AuthService",
    "AuthProviderError",
    "AuthSession",
]
