"""
Authentication use cases for the application layer.
Credentials never touch the database; the identity provider owns them.
"""

import logging
from typing import Any, Dict, Optional

from app.domain.models.base import DatabaseError, UnauthorizedError
from app.domain.models.user import UserRole, DEFAULT_WEEKLY_HOURS_TARGET, weekly_target_from_profile
from app.domain.repositories.errors import RepositoryError
from app.domain.repositories.user_repository import UserRepository
from app.domain.services.auth_service import AuthService, AuthProviderError
from app.application.use_cases.base_use_case import BaseUseCase
from app.infrastructure.auth.role_cache import RoleCache

logger = logging.getLogger(__name__)

PASSWORD_RESET_MESSAGE = "If an account exists for this email, a reset link has been sent"


class AuthUseCases(BaseUseCase):
    """Login, logout and password reset."""

    entity_name = "Session"

    def __init__(
        self,
        auth_service: AuthService,
        users: UserRepository,
        role_cache: Optional[RoleCache] = None,
        default_weekly_target: float = DEFAULT_WEEKLY_HOURS_TARGET
    ):
        self.auth_service = auth_service
        self.users = users
        self.role_cache = role_cache
        self.default_weekly_target = default_weekly_target

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Sign in with email and password.

        Returns:
            The user's profile summary and the provider session tokens

        Raises:
            UnauthorizedError: INVALID_CREDENTIALS for any provider refusal
        """
        try:
            session = await self.auth_service.sign_in(email, password)
        except AuthProviderError as e:
            logger.info(f"Login refused for {email}: {e.message}")
            raise UnauthorizedError("Invalid email or password", code="INVALID_CREDENTIALS")

        try:
            profile = await self.users.find_by_id(session.user_id)
        except RepositoryError as e:
            logger.error(f"Profile read failed at login for {session.user_id}: {e.message}")
            profile = None

        profile = profile or {}
        role = profile.get("role") or UserRole.EMPLOYEE.value
        if self.role_cache is not None and profile:
            self.role_cache.set(session.user_id, role)

        return {
            "user": {
                "id": session.user_id,
                "email": session.email,
                "firstName": profile.get("first_name"),
                "lastName": profile.get("last_name"),
                "role": role,
                "weeklyHoursTarget": weekly_target_from_profile(profile, self.default_weekly_target),
            },
            "session": {
                "accessToken": session.access_token,
                "refreshToken": session.refresh_token,
                "expiresAt": session.expires_at,
            },
        }

    async def logout(self, access_token: str, user_id: Optional[str] = None) -> Dict[str, str]:
        """Revoke the caller's session and forget their cached role."""
        try:
            await self.auth_service.sign_out(access_token)
        except AuthProviderError as e:
            logger.error(f"Logout failed: {e.message}", extra={"user_id": user_id})
            raise DatabaseError("Logout failed", code="LOGOUT_FAILED") from e

        if self.role_cache is not None and user_id:
            self.role_cache.invalidate(user_id)

        return {"message": "Logged out successfully"}

    async def forgot_password(self, email: str) -> Dict[str, str]:
        """
        Request a password reset email.
        The answer is the same whether or not the account exists.
        """
        try:
            await self.auth_service.send_password_reset(email)
        except AuthProviderError as e:
            logger.warning(f"Password reset request failed for {email}: {e.message}")

        return {"message": PASSWORD_RESET_MESSAGE}
