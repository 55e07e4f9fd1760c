"""Reporting service for dashboard aggregations.
Computes date windows, hour totals, breakdowns and period comparisons
from time entries that were already fetched. Nothing here touches storage.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from app.domain.models.base import ValidationError
from app.domain.models.category import NO_CATEGORY_ID, NO_CATEGORY_LABEL
from app.domain.models.project import NO_PROJECT_ID, NO_PROJECT_LABEL
from app.domain.models.time_entry import TimeEntry
from app.domain.models.timesheet import TimesheetStatus, NO_TIMESHEET_STATUS
from app.domain.models.user import DEFAULT_WEEKLY_HOURS_TARGET


DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
WEEKEND_DAYS = frozenset({"Saturday", "Sunday"})

PERIOD_WEEK = "week"
PERIOD_MONTH = "month"
PERIODS = (PERIOD_WEEK, PERIOD_MONTH)

# Fixed approximation, not calendar-accurate
WEEKS_PER_MONTH = 4
WORK_DAYS_PER_WEEK = 5


def round_half_up(value: float, places: int = 1) -> float:
    """
    Round half towards positive infinity, on the decimal representation of the value.
    round_half_up(0.05) == 0.1 and round_half_up(-2.25) == -2.2.
    """
    scale = Decimal(10) ** places
    scaled = Decimal(str(value)) * scale + Decimal("0.5")
    return float(scaled.to_integral_value(rounding=ROUND_FLOOR) / scale)


def minutes_to_hours(minutes: int) -> float:
    """Convert minutes to hours rounded to one decimal (round(minutes / 6) / 10)."""
    return ((int(minutes) + 3) // 6) / 10


@dataclass(frozen=True)
class DateWindow:
    """Inclusive range of local calendar days."""

    start: date
    end: date

    def days(self) -> List[date]:
        """Every calendar day of the window, in order."""
        return [self.start + timedelta(days=offset) for offset in range((self.end - self.start).days + 1)]

    def bounds(self, tz: tzinfo) -> Tuple[datetime, datetime]:
        """Instants covering the window: start of the first day, start of the day after the last one."""
        lower = datetime.combine(self.start, time.min, tzinfo=tz)
        upper = datetime.combine(self.end + timedelta(days=1), time.min, tzinfo=tz)
        return lower, upper


@dataclass
class Bucket:
    """Running total for one breakdown key."""

    key: str
    label: str
    code: str = ""
    minutes: int = 0


class ReportingService:
    """
    Domain service for the employee dashboard figures.
    All rounding is one decimal, half-up, applied where each figure is produced.
    """

    def __init__(self, default_weekly_target: float = DEFAULT_WEEKLY_HOURS_TARGET):
        self.default_weekly_target = default_weekly_target

    # Windows

    def week_window(self, today: date) -> DateWindow:
        """Current week, Monday to Sunday."""
        monday = today - timedelta(days=today.weekday())
        return DateWindow(monday, monday + timedelta(days=6))

    def previous_week_window(self, today: date) -> DateWindow:
        current = self.week_window(today)
        return DateWindow(current.start - timedelta(days=7), current.end - timedelta(days=7))

    def month_window(self, today: date) -> DateWindow:
        """Full current calendar month."""
        first = today.replace(day=1)
        next_first = (first + timedelta(days=32)).replace(day=1)
        return DateWindow(first, next_first - timedelta(days=1))

    def elapsed_month_window(self, today: date) -> DateWindow:
        """Current month from the 1st up to today."""
        return DateWindow(today.replace(day=1), today)

    def previous_month_window(self, today: date) -> DateWindow:
        last_of_previous = today.replace(day=1) - timedelta(days=1)
        return DateWindow(last_of_previous.replace(day=1), last_of_previous)

    def period_window(self, period: str, today: date) -> DateWindow:
        """Resolve a named period to the current week or current month."""
        if period == PERIOD_WEEK:
            return self.week_window(today)
        if period == PERIOD_MONTH:
            return self.month_window(today)
        raise ValidationError('Invalid period. Must be "week" or "month"', "period")

    def trailing_window(self, days: int, today: date) -> DateWindow:
        """The `days` most recent calendar days, ending today."""
        if days < 1:
            raise ValidationError("Days must be a positive integer", "days")
        return DateWindow(today - timedelta(days=days - 1), today)

    # Totals and ratios

    def total_minutes(self, entries: Iterable[TimeEntry]) -> int:
        return sum(entry.duration_minutes for entry in entries)

    def monthly_target(self, weekly_target: float) -> float:
        return weekly_target * WEEKS_PER_MONTH

    def daily_target(self, weekly_target: float) -> float:
        return round_half_up(weekly_target / WORK_DAYS_PER_WEEK)

    def progress(self, hours: float, target: float) -> float:
        """Share of the target reached, as a percentage."""
        if not target:
            return 0.0
        return round_half_up(hours / target * 100)

    def percentage_change(self, current: float, previous: float) -> float:
        """
        Period-over-period change in percent.
        A previous value of zero yields 0, which also covers "no prior data".
        """
        if previous <= 0:
            return 0.0
        return round_half_up((current - previous) / previous * 100)

    def share(self, part_minutes: int, total_minutes: int) -> float:
        """Percentage of the total carried by one bucket; 0 when the total is 0."""
        if total_minutes <= 0:
            return 0.0
        return round_half_up(part_minutes / total_minutes * 100)

    # Breakdowns

    def _group(
        self,
        entries: Iterable[TimeEntry],
        relation: Callable[[TimeEntry], Optional[Dict[str, Any]]],
        sentinel_id: str,
        sentinel_label: str
    ) -> Tuple[List[Bucket], int]:
        buckets: Dict[str, Bucket] = {}
        total = 0

        for entry in entries:
            related = relation(entry) or {}
            key = related.get("id") or sentinel_id
            bucket = buckets.get(key)
            if bucket is None:
                bucket = Bucket(
                    key=key,
                    label=related.get("name") or sentinel_label,
                    code=related.get("code") or ""
                )
                buckets[key] = bucket
            bucket.minutes += entry.duration_minutes
            total += entry.duration_minutes

        ordered = sorted(
            buckets.values(),
            key=lambda b: (-minutes_to_hours(b.minutes), b.label, str(b.key))
        )
        return ordered, total

    def breakdown_by_project(self, entries: Iterable[TimeEntry]) -> Tuple[List[Dict[str, Any]], int]:
        """
        Hours per project, largest first.
        Returns the breakdown items and the total minutes.
        """
        buckets, total = self._group(entries, lambda e: e.project, NO_PROJECT_ID, NO_PROJECT_LABEL)
        items = [
            {
                "project_id": bucket.key,
                "project_name": bucket.label,
                "project_code": bucket.code,
                "hours": minutes_to_hours(bucket.minutes),
                "percentage": self.share(bucket.minutes, total),
            }
            for bucket in buckets
        ]
        return items, total

    def breakdown_by_category(self, entries: Iterable[TimeEntry]) -> Tuple[List[Dict[str, Any]], int]:
        """
        Hours per category, largest first.
        Returns the breakdown items and the total minutes.
        """
        buckets, total = self._group(entries, lambda e: e.category, NO_CATEGORY_ID, NO_CATEGORY_LABEL)
        items = [
            {
                "category_id": bucket.key,
                "category_name": bucket.label,
                "hours": minutes_to_hours(bucket.minutes),
                "percentage": self.share(bucket.minutes, total),
            }
            for bucket in buckets
        ]
        return items, total

    # Trend

    def daily_trend(self, entries: Iterable[TimeEntry], window: DateWindow, tz: tzinfo) -> List[Dict[str, Any]]:
        """
        One bucket per day of the window, zero-filled.
        Entries are assigned to the local calendar day they started on.
        """
        minutes_by_day: Dict[date, int] = {day: 0 for day in window.days()}

        for entry in entries:
            if entry.start_time is None:
                continue
            start = entry.start_time
            if start.tzinfo is None:
                start = start.replace(tzinfo=timezone.utc)
            day = start.astimezone(tz).date()
            if day in minutes_by_day:
                minutes_by_day[day] += entry.duration_minutes

        return [
            {
                "date": day.isoformat(),
                "hours": minutes_to_hours(minutes),
                "day_of_week": DAY_NAMES[day.weekday()],
            }
            for day, minutes in minutes_by_day.items()
        ]

    def trend_totals(self, trend: List[Dict[str, Any]]) -> Tuple[float, float]:
        """
        Total and per-workday average of a trend.
        Daily hours are summed after their own rounding.
        """
        total_tenths = sum(round(day["hours"] * 10) for day in trend)
        total = total_tenths / 10
        work_days = sum(1 for day in trend if day["day_of_week"] not in WEEKEND_DAYS)
        average = round_half_up(total / work_days) if work_days else 0.0
        return total, average

    # Timesheets

    def timesheet_status(self, timesheets: Iterable[Dict[str, Any]], current_week_start: date) -> Dict[str, Any]:
        """Count timesheets per status and find the one of the current week."""
        counts = {status.value: 0 for status in TimesheetStatus}
        current = NO_TIMESHEET_STATUS
        week_key = current_week_start.isoformat()

        for timesheet in timesheets:
            status = timesheet.get("status")
            if status in counts:
                counts[status] += 1
            if str(timesheet.get("week_start")) == week_key:
                current = status or NO_TIMESHEET_STATUS

        return {
            "current": current,
            "current_week_start": week_key,
            "draft": counts[TimesheetStatus.DRAFT.value],
            "pending": counts[TimesheetStatus.SUBMITTED.value],
            "validated": counts[TimesheetStatus.VALIDATED.value],
            "rejected": counts[TimesheetStatus.REJECTED.value],
        }
