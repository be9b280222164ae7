"""Request-scoped dependencies resolved from application state."""

from __future__ import annotations

from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from portfolio_hub.config.settings import Settings
from portfolio_hub.services.domain_service import DomainService
from portfolio_hub.services.stats.service import StatsService


def get_db(request: Request) -> Iterator[Session]:
    with request.app.state.database.session() as db:
        yield db


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_stats_service(request: Request) -> StatsService:
    return request.app.state.stats_service


def get_domain_service(request: Request) -> DomainService:
    return request.app.state.domain_service
