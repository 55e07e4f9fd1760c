"""
Authentication infrastructure module.
Handles token validation, role resolution and the identity provider.
"""

from .jwt_handler import JWTHandler
from .role_cache import RoleCache
from .supabase_auth import SupabaseAuthService

__all__ = [
    "JWTHandler",
    "RoleCache",
    "SupabaseAuthService",
]
