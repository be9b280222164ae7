from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy.exc import OperationalError

from portfolio_hub.services.domain_service import AppType, DomainService, normalize_domain
from portfolio_hub.services.errors import DomainConflictError, ResolutionUnavailableError, UserNotFoundError
from tests.conftest import add_user


class BrokenDB:
    def query(self, *_: Any, **__: Any) -> Any:
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    def get(self, *_: Any, **__: Any) -> Any:
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_resolve_domain_returns_portfolio_match(session) -> None:
    user = add_user(session, "u1", portfolio_domain="alice.dev", admin_domain="admin.alice.dev")

    resolution = DomainService().resolve_domain(session, "alice.dev")

    assert resolution is not None
    assert resolution.app_type is AppType.PORTFOLIO
    assert resolution.user.id == user.id
    assert resolution.domain == "alice.dev"


def test_resolve_domain_returns_admin_match(session) -> None:
    add_user(session, "u1", portfolio_domain="alice.dev", admin_domain="admin.alice.dev")

    resolution = DomainService().resolve_domain(session, "admin.alice.dev")

    assert resolution is not None
    assert resolution.app_type is AppType.ADMIN
    assert resolution.user.id == "u1"


def test_resolve_domain_keeps_port_and_ignores_case(session) -> None:
    add_user(session, "u1", portfolio_domain="sub.example.com:3000")

    assert DomainService().resolve_domain(session, "SUB.example.com:3000").user.id == "u1"
    assert DomainService().resolve_domain(session, "sub.example.com") is None


def test_resolve_domain_returns_none_for_unknown_or_empty_host(session) -> None:
    add_user(session, "u1", portfolio_domain="alice.dev")

    assert DomainService().resolve_domain(session, "nobody.dev") is None
    assert DomainService().resolve_domain(session, "") is None
    assert DomainService().get_user_by_domain(session, "nobody.dev") is None


def test_portfolio_match_wins_over_another_users_admin_domain(session) -> None:
    # Written directly to the table to bypass the write-time conflict check
    add_user(session, "b-admin-owner", admin_domain="shared.dev")
    add_user(session, "a-portfolio-owner", portfolio_domain="shared.dev")

    resolution = DomainService().resolve_domain(session, "shared.dev")

    assert resolution.app_type is AppType.PORTFOLIO
    assert resolution.user.id == "a-portfolio-owner"


def test_resolve_domain_raises_when_store_unavailable() -> None:
    with pytest.raises(ResolutionUnavailableError):
        DomainService().resolve_domain(BrokenDB(), "alice.dev")


def test_is_domain_valid(session) -> None:
    add_user(session, "u1", portfolio_domain="alice.dev", admin_domain="admin.alice.dev")
    add_user(session, "u2", portfolio_domain="bob.dev")
    service = DomainService()

    assert service.is_domain_valid(session, "alice.dev", "u1") is True
    assert service.is_domain_valid(session, "ADMIN.alice.dev", "u1") is True
    assert service.is_domain_valid(session, "bob.dev", "u1") is False
    assert service.is_domain_valid(session, "alice.dev", "missing") is False
    assert service.is_domain_valid(session, "", "u1") is False
    assert service.is_domain_valid(BrokenDB(), "alice.dev", "u1") is False


def test_update_user_domains_partial_update(session) -> None:
    add_user(session, "u1", portfolio_domain="alice.dev", admin_domain="admin.alice.dev")
    service = DomainService()

    assert service.update_user_domains(session, "u1", admin=" Dash.Alice.dev ") is True

    assert service.get_user_domains(session, "u1") == {"portfolio": "alice.dev", "admin": "dash.alice.dev"}
    assert service.resolve_domain(session, "dash.alice.dev").app_type is AppType.ADMIN


def test_update_user_domains_ignores_empty_values(session) -> None:
    add_user(session, "u1", portfolio_domain="alice.dev")

    assert DomainService().update_user_domains(session, "u1", portfolio="", admin=None) is True
    assert DomainService().get_user_domains(session, "u1") == {"portfolio": "alice.dev", "admin": None}


def test_update_user_domains_rejects_domain_held_by_another_user(session) -> None:
    add_user(session, "u1", portfolio_domain="alice.dev")
    add_user(session, "u2", admin_domain="admin.bob.dev")
    service = DomainService()

    with pytest.raises(DomainConflictError) as excinfo:
        service.update_user_domains(session, "u1", portfolio="admin.bob.dev")

    assert excinfo.value.owner_id == "u2"
    assert service.get_user_domains(session, "u1")["portfolio"] == "alice.dev"


def test_update_user_domains_rejects_same_value_for_both_surfaces(session) -> None:
    add_user(session, "u1", portfolio_domain="alice.dev")

    with pytest.raises(DomainConflictError):
        DomainService().update_user_domains(session, "u1", admin="alice.dev")


def test_update_user_domains_unknown_user(session) -> None:
    with pytest.raises(UserNotFoundError):
        DomainService().update_user_domains(session, "ghost", portfolio="ghost.dev")

    assert DomainService().get_user_domains(session, "ghost") is None


def test_normalize_domain() -> None:
    assert normalize_domain("  Alice.DEV:3000 ") == "alice.dev:3000"
    assert normalize_domain(None) == ""
