"""Payloads rendered for a resolved tenant host."""

from __future__ import annotations

from typing import Literal

from portfolio_hub.schemas.common import CamelModel
from portfolio_hub.schemas.projects import ProjectRead, ProjectStatsResponse
from portfolio_hub.schemas.users import DomainsResponse, UserRead


class PageMetadata(CamelModel):
    title: str
    description: str


class PortfolioPage(CamelModel):
    app_type: Literal["portfolio"] = "portfolio"
    domain: str
    path: str
    user: UserRead
    projects: list[ProjectRead]
    metadata: PageMetadata


class AdminPage(CamelModel):
    app_type: Literal["admin"] = "admin"
    domain: str
    path: str
    user: UserRead
    domains: DomainsResponse
    project_stats: ProjectStatsResponse
    metadata: PageMetadata

