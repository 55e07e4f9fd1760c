"""
Supabase client configuration and lifecycle.
Clients are created lazily on first use and shared through app.state.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from fastapi import Request
from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from app.config import Settings

logger = logging.getLogger(__name__)


def _server_options() -> AsyncClientOptions:
    # Server side: never persist or refresh sessions between requests
    return AsyncClientOptions(auto_refresh_token=False, persist_session=False)


class SupabaseClientFactory:
    """
    Creates the Supabase clients used by the application.

    The service-role client bypasses row level security and backs every
    repository; anonymous clients are created per call for sign-in so that
    user sessions never leak between requests.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._service_client: Optional[AsyncClient] = None
        self._lock = asyncio.Lock()

    async def service_client(self) -> AsyncClient:
        """Shared client authenticated with the service role key."""
        if self._service_client is None:
            async with self._lock:
                if self._service_client is None:
                    self._service_client = await acreate_client(
                        self.settings.supabase_url,
                        self.settings.supabase_service_key,
                        options=_server_options()
                    )
                    logger.info("Supabase service client created")
        return self._service_client

    async def anon_client(self) -> AsyncClient:
        """Fresh client authenticated with the anonymous key."""
        return await acreate_client(
            self.settings.supabase_url,
            self.settings.supabase_anon_key,
            options=_server_options()
        )


def get_client_factory(request: Request) -> SupabaseClientFactory:
    """Dependency to get the client factory stored on the application."""
    return request.app.state.supabase


async def get_service_client(request: Request) -> AsyncClient:
    """Dependency to get the shared service-role client."""
    return await get_client_factory(request).service_client()


async def check_database(client: AsyncClient) -> Dict[str, Any]:
    """
    Check connectivity by reading the profiles table.
    Returns a check entry; failures are reported, not raised.
    """
    try:
        await client.table("profiles").select("id").limit(1).execute()
        return {"status": "ok"}
    except Exception as e:
        logger.error(f"Database readiness check failed: {str(e)}")
        return {"status": "error", "message": "Database unreachable"}
