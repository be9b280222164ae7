"""FastAPI application entry point"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_hub.api.routes import health, projects, stats, tenants, users
from portfolio_hub.config.credentials import Configured, resolve_database_config
from portfolio_hub.config.database import Database
from portfolio_hub.config.settings import Settings, settings as default_settings
from portfolio_hub.routing import HostRoutingMiddleware
from portfolio_hub.services.domain_service import DomainService
from portfolio_hub.services.stats.service import StatsService

# Configure logging
logging.basicConfig(
    level=getattr(logging, default_settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_database(settings: Settings) -> Database:
    resolved = resolve_database_config(settings)
    if isinstance(resolved, Configured):
        logger.info(f"Using database from {resolved.value.source}")
        return Database(resolved.value.url, echo=resolved.value.echo)

    logger.warning(f"{resolved.reason}; falling back to {settings.LOCAL_DATABASE_URL}")
    return Database(settings.LOCAL_DATABASE_URL, echo=settings.DEBUG)


def create_app(
    settings: Optional[Settings] = None,
    *,
    database: Optional[Database] = None,
    stats_service: Optional[StatsService] = None,
) -> FastAPI:
    """Build the application.

    The database and stats service are constructed once here (or passed in
    by the caller) and shared by every request through `app.state`.
    """

    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.database.create_all()
        logger.info(f"{settings.APP_NAME} started", extra={"root_domain": settings.ROOT_DOMAIN})
        try:
            yield
        finally:
            await app.state.stats_service.aclose()
            app.state.database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Multi-tenant portfolio hosting with profile statistics",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or build_database(settings)
    app.state.stats_service = stats_service or StatsService.from_settings(settings)
    app.state.domain_service = DomainService()

    # CORS is registered after host routing so it wraps it
    app.add_middleware(HostRoutingMiddleware, root_domain=settings.ROOT_DOMAIN)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        """Marketing landing page"""
        return {
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running",
            "rootDomain": settings.ROOT_DOMAIN,
            "endpoints": {
                "health": "/api/health",
                "github": "/api/github",
                "github_contributions": "/api/github/contributions",
                "github_repos": "/api/github/repos",
                "leetcode": "/api/leetcode",
                "linkedin": "/api/linkedin",
                "projects": "/api/projects",
                "users": "/api/users/{user_id}",
            },
        }

    app.include_router(health.router)
    app.include_router(stats.router)
    app.include_router(users.router)
    app.include_router(projects.router)
    app.include_router(tenants.router)
    return app


app = create_app()
