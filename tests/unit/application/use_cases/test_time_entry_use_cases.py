"""
Unit tests for TimeEntryUseCases.
"""

from datetime import date, datetime, timezone

import pytest

from app.domain.models.base import DatabaseError, EntityNotFoundError, ForbiddenError, ValidationError
from app.domain.repositories.errors import UniqueViolationError
from app.application.use_cases.time_entry_use_cases import TimeEntryUseCases


USER_ID = "user-1"
OTHER_ID = "user-2"
PROJECT_ID = "8f14e45f-ceea-467f-a0e6-7f1a2b3c4d5e"
NOW = datetime(2024, 3, 13, 17, 0, tzinfo=timezone.utc)


@pytest.fixture
def use_cases(time_entry_repo, timesheet_repo):
    return TimeEntryUseCases(time_entry_repo, timesheet_repo, clock=lambda: NOW)


class TestTimeEntryCrud:
    """Manual entries."""

    @pytest.mark.asyncio
    async def test_create_computes_duration(self, use_cases):
        entry = await use_cases.create(USER_ID, {
            "startTime": "2024-03-13T09:00:00Z",
            "endTime": "2024-03-13T10:30:00Z",
            "entryMode": "simple",
            "description": "Review",
        })

        assert entry["durationMinutes"] == 90
        assert entry["userId"] == USER_ID
        assert entry["entryMode"] == "simple"

    @pytest.mark.asyncio
    async def test_create_open_entry(self, use_cases):
        entry = await use_cases.create(USER_ID, {"startTime": "2024-03-13T09:00:00Z", "entryMode": "day"})
        assert entry["durationMinutes"] is None
        assert entry["endTime"] is None

    @pytest.mark.asyncio
    async def test_create_rejects_reversed_times(self, use_cases):
        with pytest.raises(ValidationError, match="End time must be after start time"):
            await use_cases.create(USER_ID, {
                "startTime": "2024-03-13T10:00:00Z",
                "endTime": "2024-03-13T09:00:00Z",
                "entryMode": "simple",
            })

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field, code", [
        ("projectId", "INVALID_PROJECT_ID"),
        ("categoryId", "INVALID_CATEGORY_ID"),
    ])
    async def test_create_with_unknown_reference(self, use_cases, time_entry_repo, field, code):
        time_entry_repo.missing_references.add("missing")

        with pytest.raises(ValidationError) as exc_info:
            await use_cases.create(USER_ID, {"startTime": "2024-03-13T09:00:00Z", "entryMode": "simple", field: "missing"})
        assert exc_info.value.code == code
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_create_failure(self, use_cases, time_entry_repo):
        time_entry_repo.fail("create")

        with pytest.raises(DatabaseError) as exc_info:
            await use_cases.create(USER_ID, {"startTime": "2024-03-13T09:00:00Z", "entryMode": "simple"})
        assert exc_info.value.code == "CREATE_FAILED"

    @pytest.mark.asyncio
    async def test_list_most_recent_first(self, use_cases, time_entry_repo):
        time_entry_repo.entry(USER_ID, "2024-03-11T09:00:00Z")
        time_entry_repo.entry(USER_ID, "2024-03-12T09:00:00Z")
        time_entry_repo.entry(OTHER_ID, "2024-03-12T09:00:00Z")

        result = await use_cases.list(USER_ID)

        assert [e["startTime"] for e in result["data"]] == ["2024-03-12T09:00:00Z", "2024-03-11T09:00:00Z"]
        assert result["pagination"]["total"] == 2

    @pytest.mark.asyncio
    async def test_list_date_range_is_inclusive(self, use_cases, time_entry_repo):
        time_entry_repo.entry(USER_ID, "2024-03-10T23:59:00Z")
        time_entry_repo.entry(USER_ID, "2024-03-11T00:00:00Z")
        time_entry_repo.entry(USER_ID, "2024-03-12T23:59:59Z")
        time_entry_repo.entry(USER_ID, "2024-03-13T00:00:00Z")

        result = await use_cases.list(USER_ID, start_date=date(2024, 3, 11), end_date=date(2024, 3, 12))

        assert result["pagination"]["total"] == 2

    @pytest.mark.asyncio
    async def test_only_managers_read_other_users(self, use_cases, time_entry_repo):
        time_entry_repo.entry(OTHER_ID, "2024-03-12T09:00:00Z")

        as_employee = await use_cases.list(USER_ID, is_manager=False, target_user_id=OTHER_ID)
        as_manager = await use_cases.list(USER_ID, is_manager=True, target_user_id=OTHER_ID)

        assert as_employee["pagination"]["total"] == 0
        assert as_manager["pagination"]["total"] == 1

    @pytest.mark.asyncio
    async def test_get_by_id_access(self, use_cases, time_entry_repo):
        entry = time_entry_repo.entry(OTHER_ID, "2024-03-12T09:00:00Z")

        with pytest.raises(ForbiddenError):
            await use_cases.get_by_id(entry["id"], USER_ID)

        result = await use_cases.get_by_id(entry["id"], USER_ID, is_manager=True)
        assert result["id"] == entry["id"]

        with pytest.raises(EntityNotFoundError):
            await use_cases.get_by_id("missing", USER_ID)

    @pytest.mark.asyncio
    async def test_update_recomputes_duration(self, use_cases, time_entry_repo):
        entry = time_entry_repo.entry(
            USER_ID, "2024-03-12T09:00:00Z", "2024-03-12T10:00:00Z", duration_minutes=60
        )

        result = await use_cases.update(entry["id"], USER_ID, {
            "endTime": "2024-03-12T11:15:00Z",
            "userId": OTHER_ID,
        })

        assert result["durationMinutes"] == 135
        assert result["userId"] == USER_ID
        assert result["updatedAt"] is not None

    @pytest.mark.asyncio
    async def test_update_clearing_end_time(self, use_cases, time_entry_repo):
        entry = time_entry_repo.entry(USER_ID, "2024-03-12T09:00:00Z", "2024-03-12T10:00:00Z", duration_minutes=60)

        result = await use_cases.update(entry["id"], USER_ID, {"endTime": None})

        assert result["endTime"] is None
        assert result["durationMinutes"] is None

    @pytest.mark.asyncio
    async def test_update_without_known_fields_returns_entry(self, use_cases, time_entry_repo):
        entry = time_entry_repo.entry(USER_ID, "2024-03-12T09:00:00Z")
        result = await use_cases.update(entry["id"], USER_ID, {"entryMode": "day"})
        assert result["entryMode"] == "simple"

    @pytest.mark.asyncio
    async def test_only_owner_updates(self, use_cases, time_entry_repo):
        entry = time_entry_repo.entry(OTHER_ID, "2024-03-12T09:00:00Z")

        with pytest.raises(ForbiddenError):
            await use_cases.update(entry["id"], USER_ID, {"description": "mine"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["submitted", "validated"])
    async def test_locked_week(self, use_cases, time_entry_repo, timesheet_repo, status):
        entry = time_entry_repo.entry(USER_ID, "2024-03-12T09:00:00Z")
        timesheet_repo.rows = [{"id": "ts", "user_id": USER_ID, "week_start": "2024-03-11", "status": status}]

        with pytest.raises(ForbiddenError) as exc_info:
            await use_cases.update(entry["id"], USER_ID, {"description": "late"})
        assert exc_info.value.code == "TIMESHEET_LOCKED"

        with pytest.raises(ForbiddenError) as exc_info:
            await use_cases.remove(entry["id"], USER_ID)
        assert exc_info.value.code == "TIMESHEET_LOCKED"

    @pytest.mark.asyncio
    async def test_draft_week_is_editable(self, use_cases, time_entry_repo, timesheet_repo):
        entry = time_entry_repo.entry(USER_ID, "2024-03-12T09:00:00Z")
        timesheet_repo.rows = [{"id": "ts", "user_id": USER_ID, "week_start": "2024-03-11", "status": "draft"}]

        result = await use_cases.update(entry["id"], USER_ID, {"description": "fine"})
        assert result["description"] == "fine"

    @pytest.mark.asyncio
    async def test_lock_check_fails_closed(self, use_cases, time_entry_repo, timesheet_repo):
        entry = time_entry_repo.entry(USER_ID, "2024-03-12T09:00:00Z")
        timesheet_repo.fail("find_for_week")

        with pytest.raises(DatabaseError) as exc_info:
            await use_cases.update(entry["id"], USER_ID, {"description": "x"})
        assert exc_info.value.code == "TIMESHEET_CHECK_FAILED"

    @pytest.mark.asyncio
    async def test_remove(self, use_cases, time_entry_repo):
        entry = time_entry_repo.entry(USER_ID, "2024-03-12T09:00:00Z")

        result = await use_cases.remove(entry["id"], USER_ID)

        assert result == {"message": "Time entry deleted successfully"}
        assert time_entry_repo.rows == []

    @pytest.mark.asyncio
    async def test_remove_failure(self, use_cases, time_entry_repo):
        entry = time_entry_repo.entry(USER_ID, "2024-03-12T09:00:00Z")
        time_entry_repo.fail("delete")

        with pytest.raises(DatabaseError) as exc_info:
            await use_cases.remove(entry["id"], USER_ID)
        assert exc_info.value.code == "DELETE_FAILED"


class TestTimer:
    """Simple mode start/stop."""

    @pytest.mark.asyncio
    async def test_start_then_stop(self, use_cases, time_entry_repo):
        started = await use_cases.start_timer(USER_ID, {"description": "Focus"})
        assert started["startTime"] == NOW.isoformat()
        assert started["endTime"] is None

        active = await use_cases.get_active_timer(USER_ID)
        assert active["id"] == started["id"]

        stopped = await use_cases.stop_timer(USER_ID, {"projectId": PROJECT_ID})

        assert stopped["endTime"] == NOW.isoformat()
        assert stopped["durationMinutes"] == 1
        assert stopped["projectId"] == PROJECT_ID
        assert stopped["description"] == "Focus"
        assert await use_cases.get_active_timer(USER_ID) is None

    @pytest.mark.asyncio
    async def test_stop_duration(self, use_cases, time_entry_repo):
        time_entry_repo.entry(USER_ID, "2024-03-13T15:29:40Z")

        stopped = await use_cases.stop_timer(USER_ID)

        assert stopped["durationMinutes"] == 90

    @pytest.mark.asyncio
    async def test_second_start_rejected(self, use_cases):
        running = await use_cases.start_timer(USER_ID)

        with pytest.raises(ValidationError) as exc_info:
            await use_cases.start_timer(USER_ID)
        assert exc_info.value.code == "TIMER_ALREADY_RUNNING"
        assert exc_info.value.details["id"] == running["id"]

    @pytest.mark.asyncio
    async def test_concurrent_start_maps_unique_violation(self, use_cases, time_entry_repo):
        time_entry_repo.fail("create", UniqueViolationError("one running timer per user", "23505"))

        with pytest.raises(ValidationError) as exc_info:
            await use_cases.start_timer(USER_ID)
        assert exc_info.value.code == "TIMER_ALREADY_RUNNING"

    @pytest.mark.asyncio
    async def test_stop_without_timer(self, use_cases):
        with pytest.raises(EntityNotFoundError) as exc_info:
            await use_cases.stop_timer(USER_ID)
        assert exc_info.value.code == "NO_ACTIVE_TIMER"

    @pytest.mark.asyncio
    async def test_open_day_is_not_a_timer(self, use_cases):
        await use_cases.start_day(USER_ID)
        assert await use_cases.get_active_timer(USER_ID) is None


class TestDayMode:
    """A day with time blocks."""

    @pytest.fixture
    def open_day(self, time_entry_repo):
        return time_entry_repo.entry(USER_ID, "2024-03-13T08:00:00Z", entry_mode="day")

    @pytest.mark.asyncio
    async def test_start_day(self, use_cases):
        day = await use_cases.start_day(USER_ID, {"description": "Office"})

        assert day["entryMode"] == "day"
        assert day["parentId"] is None

        with pytest.raises(ValidationError) as exc_info:
            await use_cases.start_day(USER_ID)
        assert exc_info.value.code == "DAY_ALREADY_ACTIVE"
        assert exc_info.value.details["id"] == day["id"]

    @pytest.mark.asyncio
    async def test_end_day_returns_blocks(self, use_cases, open_day):
        await use_cases.create_block(USER_ID, {"startTime": "2024-03-13T09:00:00Z", "endTime": "2024-03-13T10:00:00Z"})

        day = await use_cases.end_day(USER_ID)

        assert day["endTime"] == NOW.isoformat()
        assert day["durationMinutes"] == 540
        assert len(day["blocks"]) == 1
        assert await use_cases.get_active_day(USER_ID) is None

    @pytest.mark.asyncio
    async def test_end_day_without_day(self, use_cases):
        with pytest.raises(EntityNotFoundError) as exc_info:
            await use_cases.end_day(USER_ID)
        assert exc_info.value.code == "NO_ACTIVE_DAY"

    @pytest.mark.asyncio
    async def test_block_requires_open_day(self, use_cases):
        with pytest.raises(EntityNotFoundError) as exc_info:
            await use_cases.create_block(USER_ID, {"startTime": "2024-03-13T09:00:00Z", "endTime": "2024-03-13T10:00:00Z"})
        assert exc_info.value.code == "NO_ACTIVE_DAY"

    @pytest.mark.asyncio
    async def test_create_block(self, use_cases, open_day):
        block = await use_cases.create_block(USER_ID, {
            "startTime": "2024-03-13T09:00:00Z",
            "endTime": "2024-03-13T10:15:00Z",
            "projectId": PROJECT_ID,
        })

        assert block["parentId"] == open_day["id"]
        assert block["durationMinutes"] == 75
        assert block["entryMode"] == "day"

    @pytest.mark.asyncio
    async def test_block_outside_day(self, use_cases, open_day):
        with pytest.raises(ValidationError) as exc_info:
            await use_cases.create_block(USER_ID, {"startTime": "2024-03-13T07:00:00Z", "endTime": "2024-03-13T09:00:00Z"})
        assert exc_info.value.code == "BLOCK_OUTSIDE_DAY_BOUNDARIES"

    @pytest.mark.asyncio
    async def test_overlapping_block(self, use_cases, open_day):
        first = await use_cases.create_block(USER_ID, {"startTime": "2024-03-13T09:00:00Z", "endTime": "2024-03-13T10:00:00Z"})

        with pytest.raises(ValidationError) as exc_info:
            await use_cases.create_block(USER_ID, {"startTime": "2024-03-13T09:30:00Z", "endTime": "2024-03-13T10:30:00Z"})
        assert exc_info.value.code == "BLOCKS_OVERLAP"
        assert exc_info.value.details["conflictingBlocks"][0]["id"] == first["id"]

    @pytest.mark.asyncio
    async def test_list_blocks_meta(self, use_cases, open_day):
        await use_cases.create_block(USER_ID, {"startTime": "2024-03-13T10:00:00Z", "endTime": "2024-03-13T11:00:00Z"})
        await use_cases.create_block(USER_ID, {"startTime": "2024-03-13T08:00:00Z", "endTime": "2024-03-13T09:00:00Z"})

        result = await use_cases.list_blocks(USER_ID)

        assert [b["startTime"] for b in result["data"]] == ["2024-03-13T08:00:00Z", "2024-03-13T10:00:00Z"]
        assert result["meta"]["dayId"] == open_day["id"]
        assert result["meta"]["totalBlocksMinutes"] == 120
        assert result["meta"]["unallocatedMinutes"] == 420

    @pytest.mark.asyncio
    async def test_list_blocks_without_day(self, use_cases):
        result = await use_cases.list_blocks(USER_ID)
        assert result["data"] == []
        assert result["meta"]["dayId"] is None
        assert result["meta"]["unallocatedMinutes"] == 0

    @pytest.mark.asyncio
    async def test_update_block_may_keep_its_own_slot(self, use_cases, open_day):
        block = await use_cases.create_block(USER_ID, {"startTime": "2024-03-13T09:00:00Z", "endTime": "2024-03-13T10:00:00Z"})

        updated = await use_cases.update_block(block["id"], USER_ID, {"endTime": "2024-03-13T10:30:00Z"})

        assert updated["durationMinutes"] == 90

    @pytest.mark.asyncio
    async def test_update_block_into_another(self, use_cases, open_day):
        await use_cases.create_block(USER_ID, {"startTime": "2024-03-13T09:00:00Z", "endTime": "2024-03-13T10:00:00Z"})
        second = await use_cases.create_block(USER_ID, {"startTime": "2024-03-13T11:00:00Z", "endTime": "2024-03-13T12:00:00Z"})

        with pytest.raises(ValidationError) as exc_info:
            await use_cases.update_block(second["id"], USER_ID, {"startTime": "2024-03-13T09:30:00Z"})
        assert exc_info.value.code == "BLOCKS_OVERLAP"

    @pytest.mark.asyncio
    async def test_block_ownership(self, use_cases, time_entry_repo, open_day):
        block = await use_cases.create_block(USER_ID, {"startTime": "2024-03-13T09:00:00Z", "endTime": "2024-03-13T10:00:00Z"})

        with pytest.raises(ForbiddenError):
            await use_cases.delete_block(block["id"], OTHER_ID)

        # A top-level entry is not a block
        with pytest.raises(EntityNotFoundError):
            await use_cases.delete_block(open_day["id"], USER_ID)

        result = await use_cases.delete_block(block["id"], USER_ID)
        assert result == {"message": "Time block deleted successfully"}
        assert await time_entry_repo.find_by_id(block["id"]) is None
