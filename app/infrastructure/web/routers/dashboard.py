"""
Employee dashboard router.
All figures are computed for the authenticated caller.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.application.use_cases.dashboard_use_cases import DashboardUseCases, DEFAULT_TREND_DAYS, MAX_TREND_DAYS
from app.domain.services.reporting_service import PERIOD_WEEK
from app.infrastructure.auth.dependencies import CurrentUser, require_employee
from app.infrastructure.web.dependencies import get_dashboard_use_cases
from app.infrastructure.web.responses import success_response


router = APIRouter()

Caller = Annotated[CurrentUser, Depends(require_employee)]
DashboardCases = Annotated[DashboardUseCases, Depends(get_dashboard_use_cases)]

PERIOD_PATTERN = "^(week|month)$"


@router.get("/me")
async def get_my_dashboard(user: Caller, use_cases: DashboardCases):
    """Hours this week and month, progress against targets and timesheet status."""
    dashboard = await use_cases.get_employee_dashboard(user.id)
    return success_response(dashboard)


@router.get("/me/by-project")
async def get_my_hours_by_project(
    user: Caller,
    use_cases: DashboardCases,
    period: str = Query(PERIOD_WEEK, pattern=PERIOD_PATTERN, description="week or month")
):
    result = await use_cases.get_by_project(user.id, period)
    return success_response(result)


@router.get("/me/by-category")
async def get_my_hours_by_category(
    user: Caller,
    use_cases: DashboardCases,
    period: str = Query(PERIOD_WEEK, pattern=PERIOD_PATTERN, description="week or month")
):
    result = await use_cases.get_by_category(user.id, period)
    return success_response(result)


@router.get("/me/trend")
async def get_my_trend(
    user: Caller,
    use_cases: DashboardCases,
    days: int = Query(DEFAULT_TREND_DAYS, ge=1, le=MAX_TREND_DAYS)
):
    """Daily hours over the last `days` days, today included."""
    result = await use_cases.get_trend(user.id, days)
    return success_response(result)
