from __future__ import annotations

from typing import Any, Iterator, Optional

import pytest
from sqlalchemy.orm import Session

from portfolio_hub.config.database import Database
from portfolio_hub.config.settings import Settings
from portfolio_hub.models.project import Project
from portfolio_hub.models.user import User


def make_settings(**overrides: Any) -> Settings:
    """Settings isolated from the process environment and any .env file."""
    values: dict[str, Any] = {
        "ROOT_DOMAIN": "localhost:3000",
        "GITHUB_USERNAME": None,
        "GITHUB_TOKEN": None,
        "LEETCODE_USERNAME": None,
        "LINKEDIN_ACCESS_TOKEN": None,
        "LINKEDIN_USER_ID": None,
        "DATABASE_CONFIG_JSON": None,
        "DATABASE_URL": None,
        "UPSTREAM_MAX_RETRIES": 1,
        "UPSTREAM_BACKOFF_BASE_SECONDS": 0,
        "UPSTREAM_BACKOFF_MAX_SECONDS": 0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def database() -> Iterator[Database]:
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def session(database: Database) -> Iterator[Session]:
    with database.session() as db:
        yield db


def add_user(
    db: Session,
    user_id: str,
    *,
    username: Optional[str] = None,
    portfolio_domain: Optional[str] = None,
    admin_domain: Optional[str] = None,
    **fields: Any,
) -> User:
    user = User(
        id=user_id,
        username=username or user_id,
        full_name=fields.pop("full_name", f"User {user_id}"),
        email=fields.pop("email", f"{user_id}@example.com"),
        profile_picture_url=fields.pop("profile_picture_url", f"https://avatar.vercel.sh/{user_id}"),
        portfolio_domain=portfolio_domain,
        admin_domain=admin_domain,
        **fields,
    )
    db.add(user)
    db.commit()
    return user


def add_project(db: Session, author: User, *, title: str, technologies: list[str], **fields: Any) -> Project:
    project = Project(
        title=title,
        description=fields.pop("description", "A project used in tests"),
        technologies=technologies,
        author_id=author.id,
        author_username=author.username,
        author_avatar=author.profile_picture_url,
        **fields,
    )
    db.add(project)
    db.commit()
    return project
