"""
Unit tests for DashboardUseCases.
"""

import pytest
from datetime import datetime
from zoneinfo import ZoneInfo

from app.domain.models.base import DatabaseError
from app.domain.services.reporting_service import ReportingService
from app.application.use_cases.dashboard_use_cases import DashboardUseCases


PARIS = ZoneInfo("Europe/Paris")
USER_ID = "user-1"
ALPHA = {"id": "p1", "name": "Alpha", "code": "PRJ-001"}
BETA = {"id": "p2", "name": "Beta", "code": "PRJ-002"}


def at(day, hour=9, month=3):
    return datetime(2024, month, day, hour, tzinfo=PARIS)


@pytest.fixture
def dashboard(time_entry_repo, timesheet_repo, user_repo):
    # Wednesday 13 March 2024
    return DashboardUseCases(
        time_entry_repo,
        timesheet_repo,
        user_repo,
        ReportingService(),
        PARIS,
        clock=lambda: at(13, 10)
    )


@pytest.fixture
def logged_time(time_entry_repo):
    time_entry_repo.add(USER_ID, at(11), 120, project=ALPHA)
    time_entry_repo.add(USER_ID, at(12), 60, project=BETA)
    time_entry_repo.add(USER_ID, at(5), 90, project=ALPHA)
    time_entry_repo.add(USER_ID, at(1), 30)
    time_entry_repo.add(USER_ID, at(10, month=2), 600)
    time_entry_repo.add("someone-else", at(11), 480)
    return time_entry_repo


class TestEmployeeDashboard:
    """Test cases for the summary dashboard."""

    @pytest.mark.asyncio
    async def test_summary_and_comparison(self, dashboard, logged_time):
        result = await dashboard.get_employee_dashboard(USER_ID)

        assert result["summary"] == {
            "hoursThisWeek": 3.0,
            "hoursThisMonth": 5.0,
            "weeklyTarget": 35,
            "monthlyTarget": 140,
            "weeklyProgress": 8.6,
            "monthlyProgress": 3.6,
        }
        assert result["comparison"] == {"weekOverWeek": 100.0, "monthOverMonth": -50.0}

    @pytest.mark.asyncio
    async def test_profile_target_is_used(self, dashboard, logged_time, user_repo):
        user_repo.add(id=USER_ID, weekly_hours_target=20)

        result = await dashboard.get_employee_dashboard(USER_ID)

        assert result["summary"]["weeklyTarget"] == 20
        assert result["summary"]["monthlyTarget"] == 80
        assert result["summary"]["weeklyProgress"] == 15.0

    @pytest.mark.asyncio
    async def test_no_previous_data_means_zero_change(self, dashboard, time_entry_repo):
        time_entry_repo.add(USER_ID, at(11), 60)

        result = await dashboard.get_employee_dashboard(USER_ID)

        assert result["comparison"] == {"weekOverWeek": 0, "monthOverMonth": 0}

    @pytest.mark.asyncio
    async def test_timesheet_status(self, dashboard, timesheet_repo):
        timesheet_repo.rows = [
            {"user_id": USER_ID, "status": "submitted", "week_start": "2024-03-11"},
            {"user_id": USER_ID, "status": "validated", "week_start": "2024-03-04"},
        ]

        result = await dashboard.get_employee_dashboard(USER_ID)

        assert result["timesheetStatus"] == {
            "current": "submitted",
            "currentWeekStart": "2024-03-11",
            "draft": 0,
            "pending": 1,
            "validated": 1,
            "rejected": 0,
        }

    @pytest.mark.asyncio
    async def test_timesheet_failure_reads_as_empty(self, dashboard, timesheet_repo):
        timesheet_repo.fail("list_for_user")

        result = await dashboard.get_employee_dashboard(USER_ID)

        assert result["timesheetStatus"]["current"] == "none"
        assert result["timesheetStatus"]["validated"] == 0

    @pytest.mark.asyncio
    async def test_entry_failure_raises(self, dashboard, time_entry_repo):
        time_entry_repo.fail("list_for_user")

        with pytest.raises(DatabaseError) as exc_info:
            await dashboard.get_employee_dashboard(USER_ID)
        assert exc_info.value.code == "DATABASE_ERROR"

    @pytest.mark.asyncio
    async def test_profile_failure_raises(self, dashboard, user_repo):
        user_repo.fail("find_by_id")

        with pytest.raises(DatabaseError):
            await dashboard.get_employee_dashboard(USER_ID)


class TestBreakdowns:
    @pytest.mark.asyncio
    async def test_by_project_for_current_week(self, dashboard, logged_time):
        result = await dashboard.get_by_project(USER_ID, "week")

        assert result["period"] == "week"
        assert result["periodStart"] == "2024-03-11"
        assert result["periodEnd"] == "2024-03-17"
        assert result["totalHours"] == 3.0
        assert result["breakdown"][0] == {
            "projectId": "p1",
            "projectName": "Alpha",
            "projectCode": "PRJ-001",
            "hours": 2.0,
            "percentage": 66.7,
        }

    @pytest.mark.asyncio
    async def test_by_category_for_month(self, dashboard, logged_time):
        result = await dashboard.get_by_category(USER_ID, "month")

        assert result["periodStart"] == "2024-03-01"
        assert result["periodEnd"] == "2024-03-31"
        assert result["totalHours"] == 5.0
        assert result["breakdown"] == [
            {"categoryId": "no-category", "categoryName": "Sans categorie", "hours": 5.0, "percentage": 100.0}
        ]


class TestTrend:
    @pytest.mark.asyncio
    async def test_seven_day_trend(self, dashboard, logged_time):
        result = await dashboard.get_trend(USER_ID, 7)

        assert result["period"] == {"days": 7, "start": "2024-03-07", "end": "2024-03-13"}
        assert len(result["trend"]) == 7
        assert result["trend"][4] == {"date": "2024-03-11", "hours": 2.0, "dayOfWeek": "Monday"}
        assert result["total"] == 3.0
        assert result["average"] == 0.6
        assert result["dailyTarget"] == 7.0

    @pytest.mark.asyncio
    async def test_empty_trend(self, dashboard):
        result = await dashboard.get_trend(USER_ID, 7)

        assert [day["hours"] for day in result["trend"]] == [0.0] * 7
        assert result["total"] == 0
        assert result["average"] == 0

    @pytest.mark.asyncio
    async def test_profile_failure_uses_default_target(self, dashboard, user_repo):
        user_repo.fail("find_by_id")

        result = await dashboard.get_trend(USER_ID, 30)

        assert result["dailyTarget"] == 7.0
        assert len(result["trend"]) == 30
