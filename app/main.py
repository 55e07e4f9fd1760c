"""
Main FastAPI application entry point.
Configures the app, middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import Optional
import logging

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.fastapi import FastApiIntegration

from app.config import Settings, get_settings
from app.infrastructure.auth.jwt_handler import JWTHandler
from app.infrastructure.auth.role_cache import RoleCache
from app.infrastructure.db.database import SupabaseClientFactory
from app.infrastructure.web.middleware.error_handler import ErrorHandlerMiddleware, register_exception_handlers
from app.infrastructure.web.routers import (
    auth,
    users,
    projects,
    teams,
    categories,
    dashboard,
    time_entries,
    health
)

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.
    Setup and teardown operations.
    """
    app_settings: Settings = app.state.settings
    logger.info(f"Starting {app_settings.api_title} v{app_settings.api_version}")
    logger.info(f"Environment: {app_settings.environment}")

    if app_settings.sentry_dsn and not app_settings.is_development:
        sentry_sdk.init(
            dsn=app_settings.sentry_dsn,
            traces_sample_rate=app_settings.sentry_traces_sample_rate,
            environment=app_settings.environment,
            integrations=[FastApiIntegration(transaction_style="endpoint")],
        )
        logger.info("Sentry initialized")

    yield

    logger.info("Shutting down application")
    app.state.role_cache.clear()


def create_application(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.api_title,
        version=app_settings.api_version,
        debug=app_settings.debug,
        docs_url=f"{app_settings.api_prefix}/docs" if app_settings.debug else None,
        redoc_url=f"{app_settings.api_prefix}/redoc" if app_settings.debug else None,
        openapi_url=f"{app_settings.api_prefix}/openapi.json" if app_settings.debug else None,
        lifespan=lifespan
    )

    # Shared state: one instance per application, never per module
    app.state.settings = app_settings
    app.state.supabase = SupabaseClientFactory(app_settings)
    app.state.role_cache = RoleCache(
        ttl_seconds=app_settings.role_cache_ttl_seconds,
        max_size=app_settings.role_cache_max_size
    )
    app.state.jwt_handler = JWTHandler(app_settings.supabase_jwt_secret, app_settings.jwt_algorithm)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=app_settings.cors_allow_credentials,
        allow_methods=app_settings.cors_allow_methods,
        allow_headers=app_settings.cors_allow_headers,
    )
    app.add_middleware(ErrorHandlerMiddleware)
    register_exception_handlers(app)

    prefix = app_settings.api_prefix
    app.include_router(health.router, tags=["Health"])
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["Authentication"])
    app.include_router(users.router, prefix=f"{prefix}/users", tags=["Users"])
    app.include_router(projects.router, prefix=f"{prefix}/projects", tags=["Projects"])
    app.include_router(teams.router, prefix=f"{prefix}/teams", tags=["Teams"])
    app.include_router(categories.router, prefix=f"{prefix}/categories", tags=["Categories"])
    app.include_router(dashboard.router, prefix=f"{prefix}/dashboard", tags=["Dashboard"])
    app.include_router(time_entries.router, prefix=f"{prefix}/time-entries", tags=["Time Entries"])

    return app


# Create the FastAPI app instance
app = create_application()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level="debug" if settings.debug else "info",
    )
