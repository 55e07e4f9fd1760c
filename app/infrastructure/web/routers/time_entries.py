"""
Time entries router.
Manual entries, the simple-mode timer and day mode with its blocks.
Fixed paths are declared before /{entry_id} so they are not captured by it.
"""

from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from app.application.dto.time_entry_dto import (
    CreateTimeEntryRequestDTO,
    UpdateTimeEntryRequestDTO,
    TimerRequestDTO,
    StartDayRequestDTO,
    CreateBlockRequestDTO,
    UpdateBlockRequestDTO,
)
from app.application.use_cases.time_entry_use_cases import TimeEntryUseCases
from app.infrastructure.auth.dependencies import CurrentUser, get_current_user
from app.infrastructure.web.dependencies import get_time_entry_use_cases
from app.infrastructure.web.responses import success_response, paginated_response


router = APIRouter()

Caller = Annotated[CurrentUser, Depends(get_current_user)]
TimeEntryCases = Annotated[TimeEntryUseCases, Depends(get_time_entry_use_cases)]


@router.get("")
async def list_time_entries(
    user: Caller,
    use_cases: TimeEntryCases,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    target_user_id: Optional[str] = Query(None, alias="userId", description="Managers only"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    """List the caller's entries, most recent first. Managers may pass userId."""
    result = await use_cases.list(
        user.id,
        is_manager=user.is_manager,
        start_date=start_date,
        end_date=end_date,
        target_user_id=target_user_id,
        page=page,
        limit=limit
    )
    return paginated_response(result["data"], result["pagination"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_time_entry(request: CreateTimeEntryRequestDTO, user: Caller, use_cases: TimeEntryCases):
    """
    Log an entry.

    - **startTime**: ISO 8601
    - **endTime**: Optional, after startTime
    - **entryMode**: simple, day or template
    """
    entry = await use_cases.create(user.id, request.to_payload())
    return success_response(entry)


# Simple mode timer

@router.post("/start", status_code=status.HTTP_201_CREATED)
async def start_timer(user: Caller, use_cases: TimeEntryCases, request: Optional[TimerRequestDTO] = None):
    entry = await use_cases.start_timer(user.id, request.to_payload() if request else {})
    return success_response(entry)


@router.post("/stop")
async def stop_timer(user: Caller, use_cases: TimeEntryCases, request: Optional[TimerRequestDTO] = None):
    """Stop the running timer. Sessions under a minute count as one minute."""
    entry = await use_cases.stop_timer(user.id, request.to_payload() if request else {})
    return success_response(entry)


@router.get("/active")
async def get_active_timer(user: Caller, use_cases: TimeEntryCases):
    """The running timer, or null."""
    entry = await use_cases.get_active_timer(user.id)
    return success_response(entry)


# Day mode

@router.post("/day/start", status_code=status.HTTP_201_CREATED)
async def start_day(user: Caller, use_cases: TimeEntryCases, request: Optional[StartDayRequestDTO] = None):
    day = await use_cases.start_day(user.id, request.to_payload() if request else {})
    return success_response(day)


@router.post("/day/end")
async def end_day(user: Caller, use_cases: TimeEntryCases):
    day = await use_cases.end_day(user.id)
    return success_response(day)


@router.get("/day/active")
async def get_active_day(user: Caller, use_cases: TimeEntryCases):
    """The open day with its blocks, or null."""
    day = await use_cases.get_active_day(user.id)
    return success_response(day)


@router.get("/day/blocks")
async def list_blocks(user: Caller, use_cases: TimeEntryCases):
    result = await use_cases.list_blocks(user.id)
    return success_response(result["data"], meta=result["meta"])


@router.post("/day/blocks", status_code=status.HTTP_201_CREATED)
async def create_block(request: CreateBlockRequestDTO, user: Caller, use_cases: TimeEntryCases):
    """
    Allocate part of the open day.

    - **startTime** / **endTime**: Inside the day, not overlapping another block
    """
    block = await use_cases.create_block(user.id, request.to_payload())
    return success_response(block)


@router.patch("/day/blocks/{block_id}")
async def update_block(block_id: str, request: UpdateBlockRequestDTO, user: Caller, use_cases: TimeEntryCases):
    block = await use_cases.update_block(block_id, user.id, request.to_payload())
    return success_response(block)


@router.delete("/day/blocks/{block_id}")
async def delete_block(block_id: str, user: Caller, use_cases: TimeEntryCases):
    result = await use_cases.delete_block(block_id, user.id)
    return success_response(result)


# Single entries

@router.get("/{entry_id}")
async def get_time_entry(entry_id: str, user: Caller, use_cases: TimeEntryCases):
    entry = await use_cases.get_by_id(entry_id, user.id, is_manager=user.is_manager)
    return success_response(entry)


@router.patch("/{entry_id}")
async def update_time_entry(
    entry_id: str,
    request: UpdateTimeEntryRequestDTO,
    user: Caller,
    use_cases: TimeEntryCases
):
    """Edit one of the caller's entries while its week's timesheet is a draft."""
    entry = await use_cases.update(entry_id, user.id, request.to_payload())
    return success_response(entry)


@router.delete("/{entry_id}")
async def delete_time_entry(entry_id: str, user: Caller, use_cases: TimeEntryCases):
    result = await use_cases.remove(entry_id, user.id)
    return success_response(result)
