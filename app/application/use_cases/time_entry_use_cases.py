"""
Time entry use cases for the application layer.
Covers manual entries, the simple-mode timer and day mode (a day with time blocks).
Entries in a week whose timesheet left draft are read-only.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from app.domain.models.base import DatabaseError, EntityNotFoundError, ForbiddenError, ValidationError
from app.domain.models.time_entry import EntryMode
from app.domain.repositories.errors import ForeignKeyViolationError, RepositoryError, UniqueViolationError
from app.domain.repositories.time_entry_repository import TimeEntryRepository
from app.domain.repositories.timesheet_repository import TimesheetRepository
from app.domain.services.timer_service import TimerService
from app.application.use_cases.base_use_case import BaseUseCase
from app.infrastructure.pagination import parse_pagination_params

logger = logging.getLogger(__name__)


class TimeEntryUseCases(BaseUseCase):
    """Use cases for time entries, the timer and day mode."""

    entity_name = "Time entry"
    UPDATABLE_FIELDS = ("startTime", "endTime", "projectId", "categoryId", "description")

    def __init__(
        self,
        time_entries: TimeEntryRepository,
        timesheets: TimesheetRepository,
        timer: Optional[TimerService] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.time_entries = time_entries
        self.timesheets = timesheets
        self.timer = timer or TimerService()
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def now(self) -> datetime:
        return self.clock().astimezone(timezone.utc)

    def now_iso(self) -> str:
        return self.now().isoformat()

    @staticmethod
    def _reference_error(error: ForeignKeyViolationError) -> ValidationError:
        if error.references("category_id"):
            return ValidationError("Category not found", "categoryId", code="INVALID_CATEGORY_ID")
        return ValidationError("Project not found", "projectId", code="INVALID_PROJECT_ID")

    async def _write(
        self,
        operation,
        message: str,
        code: str,
        conflict: Optional[ValidationError] = None,
        **context
    ):
        """
        Run a repository write.
        Missing projects or categories become 400s, a unique violation becomes
        `conflict` when given, other failures a DatabaseError.
        """
        try:
            return await operation
        except ForeignKeyViolationError as e:
            raise self._reference_error(e) from e
        except RepositoryError as e:
            if conflict is not None and isinstance(e, UniqueViolationError):
                raise conflict from e
            logger.error(f"{message}: {e.message}", extra={"code": code, "db_code": e.code, **context})
            raise DatabaseError(message, code=code) from e

    async def _find(self, entry_id: str, message: str = "Failed to retrieve time entry") -> Dict[str, Any]:
        with self.storage_errors(message, entry_id=entry_id):
            entry = await self.time_entries.find_by_id(entry_id)
        if entry is None:
            raise self.not_found(entry_id)
        return entry

    async def _find_owned(self, entry_id: str, user_id: str) -> Dict[str, Any]:
        entry = await self._find(entry_id)
        if entry.get("user_id") != user_id:
            raise ForbiddenError("Access denied")
        return entry

    async def _check_unlocked(self, user_id: str, start_time: Any, action: str) -> None:
        """
        Refuse changes to entries of a submitted or validated week.
        Fails closed when the timesheet cannot be read.
        """
        week_start = self.timer.week_start(start_time)
        try:
            timesheet = await self.timesheets.find_for_week(user_id, week_start)
        except RepositoryError as e:
            logger.error(
                f"Timesheet status check failed: {e.message}",
                extra={"user_id": user_id, "week_start": week_start.isoformat()}
            )
            raise DatabaseError("Unable to verify timesheet status", code="TIMESHEET_CHECK_FAILED") from e

        if not self.timer.timesheet_allows_changes(timesheet):
            raise ForbiddenError(
                f"Cannot {action} time entry in submitted/validated timesheet",
                code="TIMESHEET_LOCKED"
            )

    @staticmethod
    def _details(data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "project_id": data.get("projectId") or None,
            "category_id": data.get("categoryId") or None,
            "description": data.get("description") or None,
        }

    # Entries

    async def list(
        self,
        user_id: str,
        is_manager: bool = False,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        target_user_id: Optional[str] = None,
        page: Any = None,
        limit: Any = None
    ) -> Dict[str, Any]:
        """
        A user's entries, most recent first.
        Managers may read another user's entries through target_user_id.
        Dates are whole UTC days, both inclusive.
        """
        params = parse_pagination_params(page, limit)
        owner_id = target_user_id if is_manager and target_user_id else user_id

        start = datetime.combine(start_date, time.min, timezone.utc) if start_date else None
        end = datetime.combine(end_date + timedelta(days=1), time.min, timezone.utc) if end_date else None

        with self.storage_errors("Failed to retrieve time entries", user_id=owner_id):
            rows, total = await self.time_entries.page_for_user(owner_id, start, end, params.offset, params.limit)

        return self.to_page(rows, total, params)

    async def get_by_id(self, entry_id: str, user_id: str, is_manager: bool = False) -> Dict[str, Any]:
        """Owners read their entries; managers read anyone's."""
        entry = await self._find(entry_id)
        if entry.get("user_id") != user_id and not is_manager:
            raise ForbiddenError("Access denied")
        return self.to_output(entry)

    async def create(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        start_time = data["startTime"]
        end_time = data.get("endTime")
        self.timer.check_time_order(start_time, end_time)

        entry = await self._write(
            self.time_entries.create({
                "user_id": user_id,
                "start_time": start_time,
                "end_time": end_time,
                "duration_minutes": self.timer.duration_minutes(start_time, end_time),
                "entry_mode": data.get("entryMode") or EntryMode.SIMPLE.value,
                **self._details(data),
            }),
            "Failed to create time entry",
            "CREATE_FAILED",
            user_id=user_id
        )
        return self.to_output(entry)

    async def update(self, entry_id: str, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Edit an entry. Only its owner may, and only while its week is open.
        The duration follows the new bounds.
        """
        existing = await self._find_owned(entry_id, user_id)
        await self._check_unlocked(user_id, existing["start_time"], "modify")

        changes = self.whitelist(data, self.UPDATABLE_FIELDS)
        if not changes:
            return self.to_output(existing)

        start_time = changes.get("startTime") or existing["start_time"]
        end_time = changes["endTime"] if "endTime" in changes else existing.get("end_time")
        self.timer.check_time_order(start_time, end_time)

        columns = self.to_columns(changes)
        columns["duration_minutes"] = self.timer.duration_minutes(start_time, end_time)

        entry = await self._write(
            self.time_entries.update(entry_id, columns),
            "Update failed",
            "UPDATE_FAILED",
            entry_id=entry_id
        )
        if entry is None:
            raise self.not_found(entry_id)
        return self.to_output(entry)

    async def remove(self, entry_id: str, user_id: str) -> Dict[str, str]:
        existing = await self._find_owned(entry_id, user_id)
        await self._check_unlocked(user_id, existing["start_time"], "delete")

        with self.storage_errors("Failed to delete time entry", code="DELETE_FAILED", entry_id=entry_id):
            await self.time_entries.delete(entry_id)

        logger.info(f"Time entry deleted: {entry_id}", extra={"user_id": user_id})
        return {"message": "Time entry deleted successfully"}

    # Simple mode timer

    async def get_active_timer(self, user_id: str) -> Optional[Dict[str, Any]]:
        with self.storage_errors("Failed to check active timer", user_id=user_id):
            entry = await self.time_entries.find_running(user_id, EntryMode.SIMPLE.value)
        return self.to_output(entry)

    async def start_timer(self, user_id: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Open a simple-mode entry starting now.

        Raises:
            ValidationError: TIMER_ALREADY_RUNNING, with the running entry as details
        """
        active = await self.get_active_timer(user_id)
        if active:
            raise ValidationError("Timer already running", code="TIMER_ALREADY_RUNNING", details=active)

        # A unique violation means another request opened one in between
        entry = await self._write(
            self.time_entries.create({
                "user_id": user_id,
                "start_time": self.now_iso(),
                "end_time": None,
                "duration_minutes": None,
                "entry_mode": EntryMode.SIMPLE.value,
                **self._details(data or {}),
            }),
            "Failed to start timer",
            "CREATE_FAILED",
            conflict=ValidationError("Timer already running", code="TIMER_ALREADY_RUNNING"),
            user_id=user_id
        )

        logger.info(f"Timer started: {entry['id']}", extra={"user_id": user_id})
        return self.to_output(entry)

    async def stop_timer(self, user_id: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Close the running timer now.
        Project, category and description may be set at the same time.
        """
        data = data or {}
        active = await self.get_active_timer(user_id)
        if not active:
            raise EntityNotFoundError("Active timer", code="NO_ACTIVE_TIMER")

        end_time = self.now_iso()
        changes = {
            "end_time": end_time,
            "duration_minutes": self.timer.stopped_duration(active["startTime"], end_time),
            "updated_at": end_time,
        }
        for field, column in (("projectId", "project_id"), ("categoryId", "category_id"), ("description", "description")):
            if field in data:
                changes[column] = data[field] or None

        entry = await self._write(
            self.time_entries.close_running(active["id"], user_id, changes),
            "Failed to stop timer",
            "UPDATE_FAILED",
            user_id=user_id
        )
        if entry is None:
            raise EntityNotFoundError("Active timer", code="NO_ACTIVE_TIMER")

        logger.info(f"Timer stopped: {entry['id']}", extra={"user_id": user_id})
        return self.to_output(entry)

    # Day mode

    async def _active_day_row(self, user_id: str) -> Optional[Dict[str, Any]]:
        with self.storage_errors("Failed to check active day", user_id=user_id):
            return await self.time_entries.find_running(user_id, EntryMode.DAY.value)

    async def _blocks(self, day_id: str, user_id: str):
        with self.storage_errors("Failed to retrieve blocks", day_id=day_id):
            return await self.time_entries.list_blocks(day_id, user_id)

    async def _day_with_blocks(self, day: Dict[str, Any], user_id: str) -> Dict[str, Any]:
        blocks = await self._blocks(day["id"], user_id)
        output = self.to_output(day)
        output["blocks"] = [self.to_output(block) for block in blocks]
        return output

    async def get_active_day(self, user_id: str) -> Optional[Dict[str, Any]]:
        """The open day with its blocks, or None."""
        day = await self._active_day_row(user_id)
        if day is None:
            return None
        return await self._day_with_blocks(day, user_id)

    async def start_day(self, user_id: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        active = await self.get_active_day(user_id)
        if active:
            raise ValidationError("A day is already in progress", code="DAY_ALREADY_ACTIVE", details=active)

        day = await self._write(
            self.time_entries.create({
                "user_id": user_id,
                "start_time": self.now_iso(),
                "end_time": None,
                "duration_minutes": None,
                "project_id": None,
                "category_id": None,
                "description": (data or {}).get("description") or None,
                "entry_mode": EntryMode.DAY.value,
                "parent_id": None,
            }),
            "Failed to start day",
            "CREATE_FAILED",
            conflict=ValidationError("A day is already in progress", code="DAY_ALREADY_ACTIVE"),
            user_id=user_id
        )

        logger.info(f"Day started: {day['id']}", extra={"user_id": user_id})
        return self.to_output(day)

    async def end_day(self, user_id: str) -> Dict[str, Any]:
        """Close the open day now and return it with its blocks."""
        day = await self._active_day_row(user_id)
        if day is None:
            raise EntityNotFoundError("Active day", code="NO_ACTIVE_DAY")

        end_time = self.now_iso()
        closed = await self._write(
            self.time_entries.close_running(day["id"], user_id, {
                "end_time": end_time,
                "duration_minutes": self.timer.duration_minutes(day["start_time"], end_time),
                "updated_at": end_time,
            }),
            "Failed to end day",
            "UPDATE_FAILED",
            user_id=user_id
        )
        if closed is None:
            raise EntityNotFoundError("Active day", code="NO_ACTIVE_DAY")

        logger.info(f"Day ended: {day['id']}", extra={"user_id": user_id})
        return await self._day_with_blocks(closed, user_id)

    async def list_blocks(self, user_id: str) -> Dict[str, Any]:
        """Blocks of the open day with allocation figures."""
        day = await self._active_day_row(user_id)
        if day is None:
            return {
                "data": [],
                "meta": {
                    "dayId": None,
                    "dayStart": None,
                    "dayEnd": None,
                    "totalBlocksMinutes": 0,
                    "unallocatedMinutes": 0,
                },
            }

        blocks = await self._blocks(day["id"], user_id)
        return {
            "data": [self.to_output(block) for block in blocks],
            "meta": {
                "dayId": day["id"],
                "dayStart": day["start_time"],
                "dayEnd": day.get("end_time"),
                "totalBlocksMinutes": sum(int(block.get("duration_minutes") or 0) for block in blocks),
                "unallocatedMinutes": self.timer.unallocated_minutes(day, blocks, self.now()),
            },
        }

    async def _check_block_fits(
        self,
        start_time: Any,
        end_time: Any,
        day: Dict[str, Any],
        user_id: str,
        block_id: Optional[str] = None
    ) -> None:
        self.timer.check_block_boundaries(start_time, end_time, day, self.now())

        blocks = await self._blocks(day["id"], user_id)
        conflicts = self.timer.find_overlaps(start_time, end_time, blocks, exclude_id=block_id)
        if conflicts:
            raise ValidationError(
                "Time block overlaps with existing block(s)",
                code="BLOCKS_OVERLAP",
                details={"conflictingBlocks": conflicts}
            )

    async def create_block(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Allocate part of the open day.
        The block must sit inside the day and must not overlap another block.
        """
        day = await self._active_day_row(user_id)
        if day is None:
            raise EntityNotFoundError("Active day", code="NO_ACTIVE_DAY")

        start_time, end_time = data["startTime"], data["endTime"]
        await self._check_block_fits(start_time, end_time, day, user_id)

        block = await self._write(
            self.time_entries.create({
                "user_id": user_id,
                "parent_id": day["id"],
                "start_time": start_time,
                "end_time": end_time,
                "duration_minutes": self.timer.duration_minutes(start_time, end_time),
                "entry_mode": EntryMode.DAY.value,
                **self._details(data),
            }),
            "Failed to create block",
            "CREATE_FAILED",
            user_id=user_id
        )
        return self.to_output(block)

    async def _find_block(self, block_id: str, user_id: str) -> Dict[str, Any]:
        with self.storage_errors("Failed to retrieve time block", block_id=block_id):
            block = await self.time_entries.find_by_id(block_id)
        if block is None or not block.get("parent_id"):
            raise EntityNotFoundError("Time block", block_id)
        if block.get("user_id") != user_id:
            raise ForbiddenError("Access denied")
        return block

    async def update_block(self, block_id: str, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        block = await self._find_block(block_id, user_id)
        day = await self._find(block["parent_id"], "Failed to retrieve parent day")

        changes = self.whitelist(data, self.UPDATABLE_FIELDS)
        if not changes:
            return self.to_output(block)

        start_time = changes.get("startTime") or block["start_time"]
        end_time = changes.get("endTime") or block["end_time"]
        await self._check_block_fits(start_time, end_time, day, user_id, block_id=block_id)

        columns = self.to_columns(changes)
        columns["duration_minutes"] = self.timer.duration_minutes(start_time, end_time)

        updated = await self._write(
            self.time_entries.update(block_id, columns),
            "Failed to update block",
            "UPDATE_FAILED",
            block_id=block_id
        )
        if updated is None:
            raise EntityNotFoundError("Time block", block_id)
        return self.to_output(updated)

    async def delete_block(self, block_id: str, user_id: str) -> Dict[str, str]:
        await self._find_block(block_id, user_id)

        with self.storage_errors("Failed to delete block", code="DELETE_FAILED", block_id=block_id):
            await self.time_entries.delete(block_id)
        return {"message": "Time block deleted successfully"}
