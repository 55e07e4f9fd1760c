"""
Shared fixtures: in-memory repositories and identity provider.
Each fake can be told to fail a given method with a RepositoryError.
"""

import asyncio
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

import pytest

from app.domain.models.time_entry import parse_timestamp
from app.domain.repositories.category_repository import CategoryRepository
from app.domain.repositories.errors import ForeignKeyViolationError, RepositoryError, UniqueViolationError
from app.domain.repositories.project_repository import ProjectRepository
from app.domain.repositories.team_repository import TeamRepository
from app.domain.repositories.time_entry_repository import TimeEntryRepository
from app.domain.repositories.timesheet_repository import TimesheetRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.services.auth_service import AuthService, AuthProviderError, AuthSession


def new_id() -> str:
    return str(uuid.uuid4())


class FailingMixin:
    """Lets a test make any method raise a RepositoryError."""

    def __init__(self):
        self.failures: Dict[str, RepositoryError] = {}

    def fail(self, method: str, error: Optional[RepositoryError] = None) -> None:
        self.failures[method] = error or RepositoryError(f"{method} failed", "XX000")

    def _check(self, method: str) -> None:
        if method in self.failures:
            raise self.failures[method]


def page(rows: List[Dict[str, Any]], offset: int, limit: int):
    return [dict(row) for row in rows[offset:offset + limit]], len(rows)


class FakeProjectRepository(FailingMixin, ProjectRepository):
    def __init__(self):
        super().__init__()
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.tracked_minutes: Dict[str, int] = {}
        self.team_names: Dict[str, List[Dict[str, Any]]] = {}
        self.create_attempts = 0
        self.always_conflict = False

    def add(self, **fields) -> Dict[str, Any]:
        row = {
            "id": new_id(),
            "code": None,
            "name": "Project",
            "description": None,
            "budget_hours": None,
            "status": "active",
            "created_at": datetime.now().isoformat(),
            "updated_at": None,
        }
        row.update(fields)
        self.rows[row["id"]] = row
        return row

    async def list_codes(self):
        self._check("list_codes")
        codes = [row["code"] for row in self.rows.values()]
        # Let concurrent creators read the same snapshot
        await asyncio.sleep(0)
        return codes

    async def create(self, data):
        self._check("create")
        self.create_attempts += 1
        if self.always_conflict or any(row["code"] == data["code"] for row in self.rows.values()):
            raise UniqueViolationError("duplicate key value violates unique constraint", "23505")
        return dict(self.add(**data))

    async def find_by_id(self, project_id):
        self._check("find_by_id")
        row = self.rows.get(project_id)
        if row is None:
            return None
        return {**row, "tracked_minutes": self.tracked_minutes.get(project_id, 0)}

    async def list(self, include_archived, offset, limit):
        self._check("list")
        rows = [
            {**row, "tracked_minutes": self.tracked_minutes.get(row["id"], 0)}
            for row in self.rows.values()
            if include_archived or row["status"] == "active"
        ]
        return page(rows, offset, limit)

    async def list_active_by_ids(self, project_ids, offset, limit):
        self._check("list_active_by_ids")
        rows = [
            {**row, "tracked_minutes": self.tracked_minutes.get(row["id"], 0)}
            for row in self.rows.values()
            if row["id"] in project_ids and row["status"] == "active"
        ]
        return page(rows, offset, limit)

    async def update(self, project_id, data):
        self._check("update")
        row = self.rows.get(project_id)
        if row is None:
            return None
        row.update(data)
        return dict(row)

    async def list_teams(self, project_id):
        self._check("list_teams")
        return self.team_names.get(project_id, [])


class FakeUserRepository(FailingMixin, UserRepository):
    def __init__(self):
        super().__init__()
        self.rows: Dict[str, Dict[str, Any]] = {}

    def add(self, **fields) -> Dict[str, Any]:
        row = {
            "id": new_id(),
            "email": "user@example.com",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "role": "employee",
            "weekly_hours_target": 35,
            "created_at": datetime.now().isoformat(),
            "updated_at": None,
        }
        row.update(fields)
        self.rows[row["id"]] = row
        return row

    async def find_by_id(self, user_id):
        self._check("find_by_id")
        row = self.rows.get(user_id)
        return dict(row) if row else None

    async def list(self, role, offset, limit):
        self._check("list")
        rows = [row for row in self.rows.values() if role is None or row["role"] == role]
        return page(rows, offset, limit)

    async def create(self, data):
        self._check("create")
        return dict(self.add(**data))

    async def update(self, user_id, data):
        self._check("update")
        row = self.rows.get(user_id)
        if row is None:
            return None
        row.update(data)
        return dict(row)


class FakeTeamRepository(FailingMixin, TeamRepository):
    def __init__(self):
        super().__init__()
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.members: List[Dict[str, Any]] = []
        self.assignments: List[Dict[str, Any]] = []

    def add(self, **fields) -> Dict[str, Any]:
        row = {"id": new_id(), "name": "Team", "description": None, "created_at": datetime.now().isoformat()}
        row.update(fields)
        self.rows[row["id"]] = row
        return row

    async def list(self, offset, limit):
        self._check("list")
        rows = [
            {
                **row,
                "member_count": sum(1 for m in self.members if m["team_id"] == row["id"]),
                "project_count": sum(1 for a in self.assignments if a["team_id"] == row["id"]),
            }
            for row in self.rows.values()
        ]
        return page(rows, offset, limit)

    async def find_by_id(self, team_id):
        self._check("find_by_id")
        row = self.rows.get(team_id)
        return dict(row) if row else None

    async def find_detail(self, team_id):
        self._check("find_detail")
        row = self.rows.get(team_id)
        if row is None:
            return None
        return {
            **row,
            "members": [m for m in self.members if m["team_id"] == team_id],
            "projects": [a for a in self.assignments if a["team_id"] == team_id],
        }

    async def create(self, data):
        self._check("create")
        if any(row["name"] == data["name"] for row in self.rows.values()):
            raise UniqueViolationError("duplicate team name", "23505")
        return dict(self.add(**data))

    async def update(self, team_id, data):
        self._check("update")
        row = self.rows.get(team_id)
        if row is None:
            return None
        row.update(data)
        return dict(row)

    async def delete(self, team_id):
        self._check("delete")
        return self.rows.pop(team_id, None) is not None

    async def list_members(self, team_id, offset, limit):
        self._check("list_members")
        return page([m for m in self.members if m["team_id"] == team_id], offset, limit)

    async def add_member(self, team_id, user_id):
        self._check("add_member")
        if await self.is_member(team_id, user_id):
            raise UniqueViolationError("duplicate membership", "23505")
        membership = {"id": new_id(), "team_id": team_id, "user_id": user_id, "created_at": datetime.now().isoformat()}
        self.members.append(membership)
        return dict(membership)

    async def remove_member(self, team_id, user_id):
        self._check("remove_member")
        before = len(self.members)
        self.members = [m for m in self.members if not (m["team_id"] == team_id and m["user_id"] == user_id)]
        return len(self.members) < before

    async def is_member(self, team_id, user_id):
        self._check("is_member")
        return any(m["team_id"] == team_id and m["user_id"] == user_id for m in self.members)

    async def team_ids_for_user(self, user_id):
        self._check("team_ids_for_user")
        return [m["team_id"] for m in self.members if m["user_id"] == user_id]

    async def list_projects(self, team_id, offset, limit):
        self._check("list_projects")
        return page([a for a in self.assignments if a["team_id"] == team_id], offset, limit)

    async def assign_project(self, team_id, project_id):
        self._check("assign_project")
        if await self.is_project_assigned(team_id, project_id):
            raise UniqueViolationError("duplicate assignment", "23505")
        assignment = {"id": new_id(), "team_id": team_id, "project_id": project_id, "created_at": datetime.now().isoformat()}
        self.assignments.append(assignment)
        return dict(assignment)

    async def unassign_project(self, team_id, project_id):
        self._check("unassign_project")
        before = len(self.assignments)
        self.assignments = [
            a for a in self.assignments if not (a["team_id"] == team_id and a["project_id"] == project_id)
        ]
        return len(self.assignments) < before

    async def is_project_assigned(self, team_id, project_id):
        self._check("is_project_assigned")
        return any(a["team_id"] == team_id and a["project_id"] == project_id for a in self.assignments)

    async def project_ids_for_teams(self, team_ids):
        self._check("project_ids_for_teams")
        return list(dict.fromkeys(a["project_id"] for a in self.assignments if a["team_id"] in team_ids))


class FakeCategoryRepository(FailingMixin, CategoryRepository):
    def __init__(self):
        super().__init__()
        self.rows: Dict[str, Dict[str, Any]] = {}

    def add(self, **fields) -> Dict[str, Any]:
        row = {"id": new_id(), "name": "Development", "description": None, "color": "#3B82F6", "is_active": True}
        row.update(fields)
        self.rows[row["id"]] = row
        return row

    async def list(self, include_inactive, offset, limit):
        self._check("list")
        rows = sorted(
            (row for row in self.rows.values() if include_inactive or row["is_active"]),
            key=lambda row: row["name"]
        )
        return page(rows, offset, limit)

    async def find_by_id(self, category_id):
        self._check("find_by_id")
        row = self.rows.get(category_id)
        return dict(row) if row else None

    async def create(self, data):
        self._check("create")
        if any(row["name"] == data["name"] for row in self.rows.values()):
            raise UniqueViolationError("duplicate category name", "23505")
        return dict(self.add(**data))

    async def update(self, category_id, data):
        self._check("update")
        row = self.rows.get(category_id)
        if row is None:
            return None
        row.update(data)
        return dict(row)


class FakeTimeEntryRepository(FailingMixin, TimeEntryRepository):
    def __init__(self):
        super().__init__()
        self.rows: List[Dict[str, Any]] = []
        self.missing_references: set = set()
        self.projects: Dict[str, Dict[str, Any]] = {}
        self.categories: Dict[str, Dict[str, Any]] = {}

    def add(self, user_id: str, start_time: datetime, duration_minutes: int, project=None, category=None):
        row = {
            "id": new_id(),
            "user_id": user_id,
            "start_time": start_time.isoformat(),
            "duration_minutes": duration_minutes,
            "projects": project,
            "categories": category,
        }
        self.rows.append(row)
        return row

    def entry(self, user_id: str, start_time: str, end_time: Optional[str] = None, **fields) -> Dict[str, Any]:
        """Store a full entry row as the CRUD queries return it."""
        row = {
            "id": new_id(),
            "user_id": user_id,
            "project_id": None,
            "category_id": None,
            "parent_id": None,
            "entry_mode": "simple",
            "start_time": start_time,
            "end_time": end_time,
            "duration_minutes": None,
            "description": None,
            "created_at": datetime.now().isoformat(),
            "updated_at": None,
        }
        row.update(fields)
        self.rows.append(row)
        return row

    def _get(self, entry_id):
        return next((row for row in self.rows if row["id"] == entry_id), None)

    def _with_relations(self, row):
        return {
            **row,
            "project": self.projects.get(row.get("project_id")),
            "category": self.categories.get(row.get("category_id")),
        }

    def _check_references(self, data):
        for column in ("project_id", "category_id"):
            if data.get(column) in self.missing_references:
                raise ForeignKeyViolationError(
                    f'insert or update on table "time_entries" violates foreign key constraint '
                    f'"time_entries_{column}_fkey" Key ({column})=({data[column]}) is not present',
                    "23503"
                )

    async def list_for_user(self, user_id, start, end):
        self._check("list_for_user")
        return [
            dict(row) for row in self.rows
            if row["user_id"] == user_id and start <= parse_timestamp(row["start_time"]) < end
        ]

    async def page_for_user(self, user_id, start, end, offset, limit):
        self._check("page_for_user")
        rows = [
            self._with_relations(row) for row in self.rows
            if row["user_id"] == user_id
            and (start is None or parse_timestamp(row["start_time"]) >= start)
            and (end is None or parse_timestamp(row["start_time"]) < end)
        ]
        rows.sort(key=lambda row: parse_timestamp(row["start_time"]), reverse=True)
        return page(rows, offset, limit)

    async def find_by_id(self, entry_id):
        self._check("find_by_id")
        row = self._get(entry_id)
        return self._with_relations(row) if row else None

    async def find_running(self, user_id, entry_mode):
        self._check("find_running")
        for row in self.rows:
            if (row["user_id"] == user_id and row.get("entry_mode") == entry_mode
                    and row.get("end_time") is None and row.get("parent_id") is None):
                return self._with_relations(row)
        return None

    async def list_blocks(self, day_id, user_id):
        self._check("list_blocks")
        blocks = [row for row in self.rows if row.get("parent_id") == day_id and row["user_id"] == user_id]
        blocks.sort(key=lambda row: parse_timestamp(row["start_time"]))
        return [self._with_relations(row) for row in blocks]

    async def create(self, data):
        self._check("create")
        self._check_references(data)
        row = self.entry(**data)
        return self._with_relations(row)

    async def update(self, entry_id, data):
        self._check("update")
        self._check_references(data)
        row = self._get(entry_id)
        if row is None:
            return None
        row.update(data)
        return self._with_relations(row)

    async def close_running(self, entry_id, user_id, data):
        self._check("close_running")
        self._check_references(data)
        row = self._get(entry_id)
        if row is None or row["user_id"] != user_id or row.get("end_time") is not None:
            return None
        row.update(data)
        return self._with_relations(row)

    async def delete(self, entry_id):
        self._check("delete")
        self.rows = [row for row in self.rows if row["id"] != entry_id]


class FakeTimesheetRepository(FailingMixin, TimesheetRepository):
    def __init__(self):
        super().__init__()
        self.rows: List[Dict[str, Any]] = []

    async def list_for_user(self, user_id):
        self._check("list_for_user")
        return [dict(row) for row in self.rows if row.get("user_id") == user_id]

    async def find_for_week(self, user_id, week_start):
        self._check("find_for_week")
        for row in self.rows:
            if row.get("user_id") == user_id and str(row.get("week_start")) == week_start.isoformat():
                return dict(row)
        return None


class FakeAuthService(AuthService):
    """Identity provider keeping accounts in a dict keyed by email."""

    def __init__(self):
        self.accounts: Dict[str, Dict[str, Any]] = {}
        self.deleted: List[str] = []
        self.signed_out: List[str] = []
        self.reset_requests: List[str] = []
        self.recovery_links: List[str] = []
        self.failures: Dict[str, AuthProviderError] = {}

    def fail(self, method: str, error: Optional[AuthProviderError] = None) -> None:
        self.failures[method] = error or AuthProviderError(f"{method} failed", status=500)

    def _check(self, method: str) -> None:
        if method in self.failures:
            raise self.failures[method]

    def register(self, email: str, password: str, user_id: Optional[str] = None) -> str:
        user_id = user_id or new_id()
        self.accounts[email] = {"id": user_id, "password": password}
        return user_id

    async def sign_in(self, email, password):
        self._check("sign_in")
        account = self.accounts.get(email)
        if account is None or account["password"] != password:
            raise AuthProviderError("Invalid login credentials", "invalid_credentials", 400)
        return AuthSession(
            user_id=account["id"],
            email=email,
            access_token=f"access-{account['id']}",
            refresh_token=f"refresh-{account['id']}",
            expires_at=1900000000,
        )

    async def sign_out(self, access_token):
        self._check("sign_out")
        self.signed_out.append(access_token)

    async def send_password_reset(self, email):
        self._check("send_password_reset")
        self.reset_requests.append(email)

    async def create_user(self, email, password, metadata):
        self._check("create_user")
        if email in self.accounts:
            raise AuthProviderError("A user with this email address has already been registered", "email_exists", 422)
        return self.register(email, password)

    async def delete_user(self, user_id):
        self._check("delete_user")
        self.deleted.append(user_id)
        self.accounts = {email: a for email, a in self.accounts.items() if a["id"] != user_id}

    async def send_recovery_link(self, email):
        self._check("send_recovery_link")
        self.recovery_links.append(email)


async def no_sleep(_delay: float) -> None:
    await asyncio.sleep(0)


@pytest.fixture
def project_repo():
    return FakeProjectRepository()


@pytest.fixture
def user_repo():
    return FakeUserRepository()


@pytest.fixture
def team_repo():
    return FakeTeamRepository()


@pytest.fixture
def category_repo():
    return FakeCategoryRepository()


@pytest.fixture
def time_entry_repo():
    return FakeTimeEntryRepository()


@pytest.fixture
def timesheet_repo():
    return FakeTimesheetRepository()


@pytest.fixture
def auth_service():
    return FakeAuthService()


@pytest.fixture
def instant_sleep():
    return no_sleep
