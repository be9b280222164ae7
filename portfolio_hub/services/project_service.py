"""Project persistence operations."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Optional

from sqlalchemy.orm import Session

from portfolio_hub.models.project import Project
from portfolio_hub.models.user import User
from portfolio_hub.schemas.projects import ProjectCreateRequest, ProjectUpdateRequest
from portfolio_hub.services.errors import EmptyUpdateError, ProjectNotFoundError

logger = logging.getLogger(__name__)


def _newest_first(query):
    # id breaks ties between rows inserted within the same clock tick
    return query.order_by(Project.created_at.desc(), Project.id.desc())


def get_all_projects(db: Session) -> list[Project]:
    return _newest_first(db.query(Project)).all()


def get_projects_by_author(db: Session, author_id: str) -> list[Project]:
    return _newest_first(db.query(Project).filter(Project.author_id == author_id)).all()


def get_project(db: Session, project_id: str) -> Optional[Project]:
    return db.get(Project, project_id)


def create_project(db: Session, data: ProjectCreateRequest, author: User) -> Project:
    """Insert a project, copying the author's username and avatar onto it."""
    project = Project(
        **data.model_dump(),
        author_id=author.id,
        author_username=author.username,
        author_avatar=author.profile_picture_url or "",
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("Created project", extra={"project_id": project.id, "author_id": author.id})
    return project


def update_project(db: Session, project_id: str, data: ProjectUpdateRequest) -> Project:
    changes = data.model_dump(exclude_unset=True)
    if not changes:
        raise EmptyUpdateError()

    project = get_project(db, project_id)
    if project is None:
        raise ProjectNotFoundError(project_id)

    for field_name, value in changes.items():
        setattr(project, field_name, value)
    db.commit()
    db.refresh(project)
    return project


def delete_project(db: Session, project_id: str) -> None:
    project = get_project(db, project_id)
    if project is None:
        raise ProjectNotFoundError(project_id)
    db.delete(project)
    db.commit()
    logger.info("Deleted project", extra={"project_id": project_id})


def get_project_stats(db: Session, author_id: str) -> dict:
    projects = get_projects_by_author(db, author_id)
    by_technology: Counter[str] = Counter()
    for project in projects:
        by_technology.update(project.technologies or [])
    return {"total": len(projects), "by_technology": dict(by_technology)}
