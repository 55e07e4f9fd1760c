"""
Dashboard use cases for the application layer.
Reads time entries for calendar windows and hands them to the reporting service.
"""

import asyncio
import logging
from datetime import datetime, tzinfo
from typing import Any, Callable, Dict, List, Optional
from zoneinfo import ZoneInfo

from app.domain.models.time_entry import TimeEntry
from app.domain.models.user import weekly_target_from_profile
from app.domain.repositories.errors import RepositoryError
from app.domain.repositories.time_entry_repository import TimeEntryRepository
from app.domain.repositories.timesheet_repository import TimesheetRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.services.reporting_service import DateWindow, ReportingService, minutes_to_hours
from app.application.use_cases.base_use_case import BaseUseCase

logger = logging.getLogger(__name__)

DEFAULT_TREND_DAYS = 30
MAX_TREND_DAYS = 365


class DashboardUseCases(BaseUseCase):
    """
    Employee dashboard figures.
    Windows follow the local calendar of the configured timezone.
    """

    entity_name = "Dashboard"

    def __init__(
        self,
        time_entries: TimeEntryRepository,
        timesheets: TimesheetRepository,
        users: UserRepository,
        reporting: Optional[ReportingService] = None,
        timezone: Optional[tzinfo] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.time_entries = time_entries
        self.timesheets = timesheets
        self.users = users
        self.reporting = reporting or ReportingService()
        self.timezone = timezone or ZoneInfo("UTC")
        self.clock = clock or (lambda: datetime.now(self.timezone))

    def today(self):
        return self.clock().astimezone(self.timezone).date()

    async def _entries(self, user_id: str, window: DateWindow, message: str) -> List[TimeEntry]:
        start, end = window.bounds(self.timezone)
        with self.storage_errors(message, user_id=user_id):
            rows = await self.time_entries.list_for_user(user_id, start, end)
        return [TimeEntry.from_row(row) for row in rows]

    async def _minutes(self, user_id: str, window: DateWindow) -> int:
        entries = await self._entries(user_id, window, "Failed to calculate hours")
        return self.reporting.total_minutes(entries)

    async def _weekly_target(self, user_id: str) -> float:
        with self.storage_errors("Failed to get user profile", user_id=user_id):
            profile = await self.users.find_by_id(user_id)
        return weekly_target_from_profile(profile, self.reporting.default_weekly_target)

    async def get_employee_dashboard(self, user_id: str) -> Dict[str, Any]:
        """
        Summary of the current week and month, comparisons with the previous
        periods and timesheet status counts.
        """
        today = self.today()
        week = self.reporting.week_window(today)
        month = self.reporting.elapsed_month_window(today)
        previous_week = self.reporting.previous_week_window(today)
        previous_month = self.reporting.previous_month_window(today)

        weekly_target = await self._weekly_target(user_id)
        monthly_target = self.reporting.monthly_target(weekly_target)

        week_minutes, month_minutes, previous_week_minutes, previous_month_minutes = await asyncio.gather(
            self._minutes(user_id, week),
            self._minutes(user_id, month),
            self._minutes(user_id, previous_week),
            self._minutes(user_id, previous_month),
        )

        # Timesheet counts are informative only; a failed read shows zeros
        try:
            timesheets = await self.timesheets.list_for_user(user_id)
        except RepositoryError as e:
            logger.warning(f"Timesheet read failed for {user_id}: {e.message}")
            timesheets = []

        summary = {
            "hoursThisWeek": minutes_to_hours(week_minutes),
            "hoursThisMonth": minutes_to_hours(month_minutes),
            "weeklyTarget": weekly_target,
            "monthlyTarget": monthly_target,
            "weeklyProgress": self.reporting.progress(week_minutes / 60, weekly_target),
            "monthlyProgress": self.reporting.progress(month_minutes / 60, monthly_target),
        }
        comparison = {
            "weekOverWeek": self.reporting.percentage_change(week_minutes, previous_week_minutes),
            "monthOverMonth": self.reporting.percentage_change(month_minutes, previous_month_minutes),
        }

        return {
            "summary": summary,
            "comparison": comparison,
            "timesheetStatus": self.to_output(self.reporting.timesheet_status(timesheets, week.start)),
        }

    async def get_by_project(self, user_id: str, period: str = "week") -> Dict[str, Any]:
        """Hours per project over the current week or month."""
        window = self.reporting.period_window(period, self.today())
        entries = await self._entries(user_id, window, "Failed to get hours by project")
        breakdown, total_minutes = self.reporting.breakdown_by_project(entries)

        return {
            "period": period,
            "periodStart": window.start.isoformat(),
            "periodEnd": window.end.isoformat(),
            "breakdown": self.to_output(breakdown),
            "totalHours": minutes_to_hours(total_minutes),
        }

    async def get_by_category(self, user_id: str, period: str = "week") -> Dict[str, Any]:
        """Hours per category over the current week or month."""
        window = self.reporting.period_window(period, self.today())
        entries = await self._entries(user_id, window, "Failed to get hours by category")
        breakdown, total_minutes = self.reporting.breakdown_by_category(entries)

        return {
            "period": period,
            "periodStart": window.start.isoformat(),
            "periodEnd": window.end.isoformat(),
            "breakdown": self.to_output(breakdown),
            "totalHours": minutes_to_hours(total_minutes),
        }

    async def get_trend(self, user_id: str, days: int = DEFAULT_TREND_DAYS) -> Dict[str, Any]:
        """
        Daily hours over the last `days` days, today included.
        A failed profile read falls back to the default target.
        """
        window = self.reporting.trailing_window(days, self.today())

        try:
            profile = await self.users.find_by_id(user_id)
        except RepositoryError as e:
            logger.warning(f"Profile read failed for {user_id}, using default target: {e.message}")
            profile = None
        weekly_target = weekly_target_from_profile(profile, self.reporting.default_weekly_target)

        entries = await self._entries(user_id, window, "Failed to get trend data")
        trend = self.reporting.daily_trend(entries, window, self.timezone)
        total, average = self.reporting.trend_totals(trend)

        return {
            "period": {
                "days": days,
                "start": window.start.isoformat(),
                "end": window.end.isoformat(),
            },
            "dailyTarget": self.reporting.daily_target(weekly_target),
            "trend": self.to_output(trend),
            "average": average,
            "total": total,
        }
