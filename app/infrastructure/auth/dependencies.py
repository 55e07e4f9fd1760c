"""
Authentication dependencies for FastAPI.
Resolves the caller from the bearer token and enforces roles.
"""

import logging
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Request

from app.domain.models.base import ForbiddenError, UnauthorizedError
from app.domain.models.user import UserRole, role_satisfies
from app.domain.repositories.errors import RepositoryError
from app.infrastructure.auth.jwt_handler import JWTHandler
from app.infrastructure.auth.role_cache import RoleCache
from app.infrastructure.repositories.user_repository import SupabaseUserRepository
from app.infrastructure.web.dependencies import get_role_cache, get_user_repository

logger = logging.getLogger(__name__)


@dataclass
class CurrentUser:
    """Authenticated caller attached to request.state.user."""

    id: str
    email: Optional[str]
    role: str
    access_token: str

    @property
    def is_manager(self) -> bool:
        return self.role == UserRole.MANAGER.value


def get_jwt_handler(request: Request) -> JWTHandler:
    """Dependency to get the JWT handler stored on the application."""
    return request.app.state.jwt_handler


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Token from an Authorization header.
    The scheme is matched case-insensitively.

    Raises:
        UnauthorizedError: When the header is missing or malformed
    """
    if not authorization:
        raise UnauthorizedError("Missing authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthorizedError("Invalid authorization format")
    return parts[1]


async def resolve_role(user_id: str, role_cache: RoleCache, users: SupabaseUserRepository) -> str:
    """
    Role of a user, from the cache or the profile row.
    A missing profile means employee; a failed read is not cached.
    """
    role = role_cache.get(user_id)
    if role is not None:
        return role

    try:
        profile = await users.find_by_id(user_id)
    except RepositoryError as e:
        logger.warning(f"Role lookup failed for {user_id}, defaulting to employee: {e.message}")
        return UserRole.EMPLOYEE.value

    role = (profile or {}).get("role") or UserRole.EMPLOYEE.value
    role_cache.set(user_id, role)
    return role


async def get_current_user(
    request: Request,
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)],
    role_cache: Annotated[RoleCache, Depends(get_role_cache)],
    users: Annotated[SupabaseUserRepository, Depends(get_user_repository)]
) -> CurrentUser:
    """
    FastAPI dependency to get the authenticated caller.

    Raises:
        UnauthorizedError: If the header is missing, malformed or the token invalid
    """
    token = extract_bearer_token(request.headers.get("authorization"))
    payload = jwt_handler.verify_token(token)

    user_id = payload["sub"]
    role = await resolve_role(user_id, role_cache, users)

    user = CurrentUser(id=user_id, email=payload.get("email"), role=role, access_token=token)
    request.state.user = user
    return user


def require_role(*roles: str):
    """
    Dependency factory restricting a route to the given roles.
    Managers satisfy employee routes.

    Usage:
        @router.get("", dependencies=[Depends(require_role("manager"))])
    """
    async def checker(user: Annotated[CurrentUser, Depends(get_current_user)]) -> CurrentUser:
        if user is None:
            raise UnauthorizedError()
        if not role_satisfies(user.role, roles):
            raise ForbiddenError("Insufficient permissions")
        return user

    return checker


require_manager = require_role(UserRole.MANAGER.value)
require_employee = require_role(UserRole.EMPLOYEE.value)
