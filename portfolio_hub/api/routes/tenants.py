"""Tenant pages reached through host-rewritten paths."""

from __future__ import annotations

import logging
from typing import Union

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from portfolio_hub.api.dependencies import get_db, get_domain_service
from portfolio_hub.models.user import User
from portfolio_hub.schemas.projects import ProjectRead, ProjectStatsResponse
from portfolio_hub.schemas.tenants import AdminPage, PageMetadata, PortfolioPage
from portfolio_hub.schemas.users import DomainsResponse, UserRead
from portfolio_hub.services import project_service
from portfolio_hub.services.domain_service import AppType, DomainResolution, DomainService
from portfolio_hub.services.errors import ResolutionUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tenants", tags=["tenants"])


def portfolio_metadata(user: User) -> PageMetadata:
    return PageMetadata(
        title=f"{user.full_name} - Portfolio",
        description=user.bio or f"{user.full_name}'s portfolio",
    )


def admin_metadata(user: User) -> PageMetadata:
    return PageMetadata(
        title=f"{user.full_name} - Dashboard",
        description=f"Manage {user.full_name}'s portfolio",
    )


def _resolve(db: Session, domains: DomainService, domain: str) -> DomainResolution:
    try:
        resolution = domains.resolve_domain(db, domain)
    except ResolutionUnavailableError:
        raise HTTPException(status_code=503, detail="Tenant resolution is temporarily unavailable")
    if resolution is None:
        logger.info("No tenant for host", extra={"domain": domain})
        raise HTTPException(status_code=404, detail="Not found")
    return resolution


def _render(db: Session, resolution: DomainResolution, path: str) -> Union[PortfolioPage, AdminPage]:
    user = resolution.user
    if resolution.app_type is AppType.PORTFOLIO:
        projects = project_service.get_projects_by_author(db, user.id)
        return PortfolioPage(
            domain=resolution.domain,
            path=path,
            user=UserRead.model_validate(user),
            projects=[ProjectRead.model_validate(project) for project in projects],
            metadata=portfolio_metadata(user),
        )

    return AdminPage(
        domain=resolution.domain,
        path=path,
        user=UserRead.model_validate(user),
        domains=DomainsResponse(portfolio=user.portfolio_domain, admin=user.admin_domain),
        project_stats=ProjectStatsResponse(**project_service.get_project_stats(db, user.id)),
        metadata=admin_metadata(user),
    )


@router.get("/{domain}", response_model=Union[PortfolioPage, AdminPage])
def tenant_home(
    domain: str,
    db: Session = Depends(get_db),
    domains: DomainService = Depends(get_domain_service),
):
    """Landing page of a portfolio or admin host"""
    return _render(db, _resolve(db, domains, domain), "/")


@router.get("/{domain}/{subpath:path}", response_model=Union[PortfolioPage, AdminPage])
def tenant_page(
    domain: str,
    subpath: str,
    db: Session = Depends(get_db),
    domains: DomainService = Depends(get_domain_service),
):
    return _render(db, _resolve(db, domains, domain), f"/{subpath}")
