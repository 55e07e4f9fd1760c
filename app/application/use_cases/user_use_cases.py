"""
User use cases for the application layer.
Profiles are self-service for names and targets; managers create and edit accounts.
"""

import logging
import secrets
from typing import Any, Dict, Optional

from app.domain.models.base import ConflictError, DatabaseError
from app.domain.models.user import UserRole, DEFAULT_WEEKLY_HOURS_TARGET
from app.domain.repositories.errors import RepositoryError
from app.domain.repositories.user_repository import UserRepository
from app.domain.services.auth_service import AuthService, AuthProviderError
from app.application.use_cases.base_use_case import BaseUseCase
from app.infrastructure.pagination import parse_pagination_params

logger = logging.getLogger(__name__)


class UserUseCases(BaseUseCase):
    """Use cases for user profiles and accounts."""

    entity_name = "User"
    # Email and role are never writable through updates
    UPDATABLE_FIELDS = ("firstName", "lastName", "weeklyHoursTarget")

    def __init__(self, users: UserRepository, auth_service: AuthService):
        self.users = users
        self.auth_service = auth_service

    async def get_profile(self, user_id: str) -> Dict[str, Any]:
        with self.storage_errors("Failed to retrieve profile", user_id=user_id):
            profile = await self.users.find_by_id(user_id)

        if profile is None:
            raise self.not_found(user_id)
        return self.to_output(profile)

    async def update_profile(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update the caller's own profile.
        Fields outside the whitelist are dropped; nothing left means nothing changes.
        """
        changes = self.whitelist(data, self.UPDATABLE_FIELDS)
        if not changes:
            return await self.get_profile(user_id)

        with self.storage_errors("Update failed", code="UPDATE_FAILED", user_id=user_id):
            profile = await self.users.update(user_id, self.to_columns(changes))

        if profile is None:
            raise self.not_found(user_id)
        return self.to_output(profile)

    async def list_users(self, role: Optional[str] = None, page: Any = None, limit: Any = None) -> Dict[str, Any]:
        """List profiles, newest first. An unknown role filter is ignored."""
        params = parse_pagination_params(page, limit)
        role_filter = role if role in UserRole.values() else None

        with self.storage_errors("Failed to retrieve users"):
            rows, total = await self.users.list(role_filter, params.offset, params.limit)

        return self.to_page(rows, total, params)

    async def create_user(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create an account on behalf of a manager.

        1. Create the identity with a random temporary password
        2. Insert the profile, deleting the identity again if that fails
        3. Send a recovery link so the user picks a password

        Raises:
            ConflictError: EMAIL_EXISTS when the email is registered
            DatabaseError: CREATE_FAILED for any other failure
        """
        email = data["email"]
        first_name = data["firstName"]
        last_name = data["lastName"]
        role = data.get("role") or UserRole.EMPLOYEE.value
        weekly_hours_target = data.get("weeklyHoursTarget", DEFAULT_WEEKLY_HOURS_TARGET)

        temporary_password = secrets.token_urlsafe(32)
        try:
            user_id = await self.auth_service.create_user(
                email,
                temporary_password,
                {"firstName": first_name, "lastName": last_name, "role": role}
            )
        except AuthProviderError as e:
            if e.is_duplicate_email:
                raise ConflictError("A user with this email already exists", code="EMAIL_EXISTS")
            logger.error(f"Identity creation failed for {email}: {e.message}")
            raise DatabaseError("Failed to create user", code="CREATE_FAILED") from e

        try:
            profile = await self.users.create({
                "id": user_id,
                "email": email,
                "first_name": first_name,
                "last_name": last_name,
                "role": role,
                "weekly_hours_target": weekly_hours_target,
            })
        except RepositoryError as e:
            logger.error(f"Profile creation failed, rolling back identity {user_id}: {e.message}")
            try:
                await self.auth_service.delete_user(user_id)
            except AuthProviderError as rollback_error:
                logger.error(f"Rollback of identity {user_id} failed: {rollback_error.message}")
            raise DatabaseError("Failed to create user profile", code="CREATE_FAILED") from e

        try:
            await self.auth_service.send_recovery_link(email)
        except AuthProviderError as e:
            logger.warning(f"Recovery link could not be sent to {email}: {e.message}")

        logger.info(f"User {user_id} created with role {role}")
        return self.to_output(profile)

    async def update_user(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Manager update of another user, same whitelist as the self-service update."""
        changes = self.whitelist(data, self.UPDATABLE_FIELDS)
        if not changes:
            return await self.get_profile(user_id)

        with self.storage_errors("Update failed", code="UPDATE_FAILED", user_id=user_id):
            profile = await self.users.update(user_id, self.to_columns(changes))

        if profile is None:
            raise self.not_found(user_id)
        return self.to_output(profile)
