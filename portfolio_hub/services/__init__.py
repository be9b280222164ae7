"""Service layer: tenant resolution, user and project management, stats."""

from portfolio_hub.services.domain_service import AppType, DomainResolution, DomainService

__all__ = [
    "AppType",
    "DomainResolution",
    "DomainService",
]
