"""
Supabase authentication service.
Implements the identity provider port on top of Supabase Auth.
"""

from typing import Any, Dict, Optional

import httpx
from supabase import AuthError

from app.domain.services.auth_service import AuthService, AuthProviderError, AuthSession
from app.infrastructure.db.database import SupabaseClientFactory


def _provider_error(exc: Exception) -> AuthProviderError:
    return AuthProviderError(
        getattr(exc, "message", None) or str(exc),
        code=getattr(exc, "code", None),
        status=getattr(exc, "status", None)
    )


class SupabaseAuthService(AuthService):
    """Service for Supabase authentication operations."""

    def __init__(self, clients: SupabaseClientFactory, password_reset_redirect_url: Optional[str] = None):
        self.clients = clients
        self.password_reset_redirect_url = password_reset_redirect_url

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """
        Sign in with email and password.
        A fresh anonymous client is used so the session stays local to this call.
        """
        try:
            client = await self.clients.anon_client()
            response = await client.auth.sign_in_with_password({
                "email": email,
                "password": password
            })
        except (AuthError, httpx.HTTPError) as e:
            raise _provider_error(e) from e

        if response.user is None or response.session is None:
            raise AuthProviderError("Invalid email or password")

        return AuthSession(
            user_id=response.user.id,
            email=response.user.email,
            access_token=response.session.access_token,
            refresh_token=response.session.refresh_token,
            expires_at=response.session.expires_at
        )

    async def sign_out(self, access_token: str) -> None:
        """Revoke every session of the token's user."""
        try:
            client = await self.clients.service_client()
            await client.auth.admin.sign_out(access_token)
        except (AuthError, httpx.HTTPError) as e:
            raise _provider_error(e) from e

    async def send_password_reset(self, email: str) -> None:
        options: Dict[str, Any] = {}
        if self.password_reset_redirect_url:
            options["redirect_to"] = self.password_reset_redirect_url

        try:
            client = await self.clients.anon_client()
            await client.auth.reset_password_for_email(email, options)
        except (AuthError, httpx.HTTPError) as e:
            raise _provider_error(e) from e

    async def create_user(self, email: str, password: str, metadata: Dict[str, Any]) -> str:
        """
        Create a user with a confirmed email.
        Returns the new user ID.
        """
        try:
            client = await self.clients.service_client()
            response = await client.auth.admin.create_user({
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": metadata
            })
        except (AuthError, httpx.HTTPError) as e:
            raise _provider_error(e) from e

        if response.user is None:
            raise AuthProviderError("Failed to create user account")
        return response.user.id

    async def delete_user(self, user_id: str) -> None:
        try:
            client = await self.clients.service_client()
            await client.auth.admin.delete_user(user_id)
        except (AuthError, httpx.HTTPError) as e:
            raise _provider_error(e) from e

    async def send_recovery_link(self, email: str) -> None:
        params: Dict[str, Any] = {"type": "recovery", "email": email}
        if self.password_reset_redirect_url:
            params["options"] = {"redirect_to": self.password_reset_redirect_url}

        try:
            client = await self.clients.service_client()
            await client.auth.admin.generate_link(params)
        except (AuthError, httpx.HTTPError) as e:
            raise _provider_error(e) from e
