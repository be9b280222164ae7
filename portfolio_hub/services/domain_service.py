"""Host-to-tenant resolution and domain management."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio_hub.models.user import User
from portfolio_hub.services.errors import DomainConflictError, ResolutionUnavailableError, UserNotFoundError

logger = logging.getLogger(__name__)


class AppType(str, Enum):
    PORTFOLIO = "portfolio"
    ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class DomainResolution:
    """Which tenant and which surface a host belongs to. Never persisted."""

    domain: str
    app_type: AppType
    user: User


def normalize_domain(host: Optional[str]) -> str:
    """Hosts compare case-insensitively; the port is part of the identity."""
    return (host or "").strip().lower()


class DomainService:
    """Resolves hosts against `users.portfolio_domain` / `users.admin_domain`."""

    def resolve_domain(self, db: Session, host: str) -> Optional[DomainResolution]:
        """Map a host to its tenant.

        The portfolio field is queried before the admin field, so a host
        claimed by one user's portfolio and another user's admin surface
        resolves to the portfolio. Returns None when nothing matches and
        raises ResolutionUnavailableError when the store cannot be read.
        """

        domain = normalize_domain(host)
        if not domain:
            return None

        try:
            user = self._first_user(db, User.portfolio_domain == domain)
            if user is not None:
                return DomainResolution(domain=domain, app_type=AppType.PORTFOLIO, user=user)

            user = self._first_user(db, User.admin_domain == domain)
            if user is not None:
                return DomainResolution(domain=domain, app_type=AppType.ADMIN, user=user)
        except SQLAlchemyError as exc:
            logger.error("Error resolving domain", extra={"domain": domain, "error": str(exc)})
            raise ResolutionUnavailableError(f"Could not resolve {domain!r}") from exc

        return None

    def get_user_by_domain(self, db: Session, domain: str) -> Optional[User]:
        resolution = self.resolve_domain(db, domain)
        return resolution.user if resolution else None

    def is_domain_valid(self, db: Session, domain: str, user_id: str) -> bool:
        """True when `domain` is one of the user's own domains."""
        try:
            user = db.get(User, user_id)
        except SQLAlchemyError as exc:
            logger.error("Error validating domain", extra={"user_id": user_id, "error": str(exc)})
            return False
        if user is None:
            return False

        normalized = normalize_domain(domain)
        return bool(normalized) and normalized in (user.portfolio_domain, user.admin_domain)

    def get_user_domains(self, db: Session, user_id: str) -> Optional[dict[str, Optional[str]]]:
        user = db.get(User, user_id)
        if user is None:
            return None
        return {"portfolio": user.portfolio_domain, "admin": user.admin_domain}

    def update_user_domains(
        self,
        db: Session,
        user_id: str,
        *,
        portfolio: Optional[str] = None,
        admin: Optional[str] = None,
    ) -> bool:
        """Partially update a user's domains.

        Raises UserNotFoundError for an unknown user and DomainConflictError
        when another user already holds a requested value in either field.
        Returns False if the write itself fails.
        """

        user = db.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        updates: dict[str, str] = {}
        if normalize_domain(portfolio):
            updates["portfolio_domain"] = normalize_domain(portfolio)
        if normalize_domain(admin):
            updates["admin_domain"] = normalize_domain(admin)
        if not updates:
            return True

        for value in set(updates.values()):
            owner = self._find_owner(db, value, exclude_user_id=user_id)
            if owner is not None:
                raise DomainConflictError(value, owner.id)

        next_portfolio = updates.get("portfolio_domain", user.portfolio_domain)
        next_admin = updates.get("admin_domain", user.admin_domain)
        if next_portfolio and next_portfolio == next_admin:
            # The admin surface would be unreachable behind the portfolio match
            raise DomainConflictError(next_portfolio, user_id)

        for field_name, value in updates.items():
            setattr(user, field_name, value)

        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            # Another writer claimed the value between the check and the commit
            raise DomainConflictError(", ".join(sorted(set(updates.values()))), "unknown") from exc
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Error updating user domains", extra={"user_id": user_id, "error": str(exc)})
            return False

        logger.info("Updated user domains", extra={"user_id": user_id, **updates})
        return True

    @staticmethod
    def _first_user(db: Session, condition: Any) -> Optional[User]:
        return db.query(User).filter(condition).order_by(User.id).first()

    @staticmethod
    def _find_owner(db: Session, domain: str, *, exclude_user_id: str) -> Optional[User]:
        return (
            db.query(User)
            .filter((User.portfolio_domain == domain) | (User.admin_domain == domain))
            .filter(User.id != exclude_user_id)
            .order_by(User.id)
            .first()
        )
