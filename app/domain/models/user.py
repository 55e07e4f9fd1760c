"""
User domain model.
Profiles mirror identity-provider users and carry the role used for authorization.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional


DEFAULT_WEEKLY_HOURS_TARGET = 35


class UserRole(str, Enum):
    """System-wide user roles."""
    EMPLOYEE = "employee"
    MANAGER = "manager"

    @classmethod
    def values(cls) -> list[str]:
        return [role.value for role in cls]


# Roles each role is allowed to act as (manager inherits employee)
ROLE_HIERARCHY: Dict[str, FrozenSet[str]] = {
    UserRole.EMPLOYEE.value: frozenset({UserRole.EMPLOYEE.value}),
    UserRole.MANAGER.value: frozenset({UserRole.MANAGER.value, UserRole.EMPLOYEE.value}),
}


def role_satisfies(role: Optional[str], allowed_roles) -> bool:
    """
    Check whether a role grants access to any of the allowed roles.
    Unknown roles only grant themselves.
    """
    if not role:
        return False
    granted = ROLE_HIERARCHY.get(role, frozenset({role}))
    return any(allowed in granted for allowed in allowed_roles)


def weekly_target_from_profile(profile: Optional[dict], default: int = DEFAULT_WEEKLY_HOURS_TARGET) -> float:
    """Weekly hours target of a profile row; missing or zero falls back to the default."""
    if not profile:
        return default
    return profile.get("weekly_hours_target") or default
