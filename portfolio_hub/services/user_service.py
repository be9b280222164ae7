"""User profile management."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from sqlalchemy.orm import Session

from portfolio_hub.models.project import Project
from portfolio_hub.models.user import User
from portfolio_hub.schemas.users import (
    EducationEntry,
    EducationUpdate,
    ExperienceEntry,
    ExperienceUpdate,
    UserCreateRequest,
    UserUpdateRequest,
)
from portfolio_hub.services.errors import EmptyUpdateError, EntryNotFoundError, UserNotFoundError

logger = logging.getLogger(__name__)

EXPERIENCE = "experience"
EDUCATION = "education"


def default_avatar_url(username: str) -> str:
    return f"https://avatar.vercel.sh/{username}"


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    user = db.get(User, user_id)
    if user is None:
        logger.warning(f"No user found with id: {user_id}")
    return user


def user_exists(db: Session, user_id: str) -> bool:
    return db.get(User, user_id) is not None


def require_user(db: Session, user_id: str) -> User:
    user = get_user_by_id(db, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def create_user(db: Session, user_id: str, data: UserCreateRequest) -> User:
    """Create the user record written at the end of onboarding."""
    user = User(
        id=user_id,
        username=data.username,
        full_name=data.full_name,
        email=str(data.email),
        headline="",
        bio="",
        profile_picture_url=default_avatar_url(data.username),
        social_links={},
        skills=[],
        experience=[],
        education=[],
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user", extra={"user_id": user_id, "username": data.username})
    return user


def update_user(db: Session, user_id: str, data: UserUpdateRequest) -> User:
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise EmptyUpdateError()

    user = require_user(db, user_id)
    if "social_links" in changes:
        # Merge so a partial links payload does not wipe the others
        changes["social_links"] = {**(user.social_links or {}), **changes["social_links"]}
    for field_name, value in changes.items():
        setattr(user, field_name, value)

    db.commit()
    db.refresh(user)
    return user


def _entries(user: User, kind: str) -> list[dict[str, Any]]:
    return list(getattr(user, kind) or [])


def _save_entries(db: Session, user: User, kind: str, entries: list[dict[str, Any]]) -> User:
    # JSON columns only track reassignment, not in-place mutation
    setattr(user, kind, entries)
    db.commit()
    db.refresh(user)
    return user


def add_entry(db: Session, user_id: str, kind: str, entry: ExperienceEntry | EducationEntry) -> User:
    user = require_user(db, user_id)
    entries = _entries(user, kind)
    entries.append({"id": uuid.uuid4().hex, **entry.model_dump(by_alias=True)})
    return _save_entries(db, user, kind, entries)


def update_entry(
    db: Session,
    user_id: str,
    kind: str,
    entry_id: str,
    updates: ExperienceUpdate | EducationUpdate,
) -> User:
    changes = updates.model_dump(by_alias=True, exclude_unset=True)
    if not changes:
        raise EmptyUpdateError()

    user = require_user(db, user_id)
    entries = _entries(user, kind)
    for index, existing in enumerate(entries):
        if existing.get("id") == entry_id:
            entries[index] = {**existing, **changes}
            return _save_entries(db, user, kind, entries)
    raise EntryNotFoundError(entry_id)


def delete_entry(db: Session, user_id: str, kind: str, entry_id: str) -> User:
    user = require_user(db, user_id)
    entries = _entries(user, kind)
    remaining = [entry for entry in entries if entry.get("id") != entry_id]
    if len(remaining) == len(entries):
        raise EntryNotFoundError(entry_id)
    return _save_entries(db, user, kind, remaining)


def calculate_profile_completeness(user: User) -> int:
    """Percentage of ten profile fields that are filled in."""
    links = user.social_links or {}
    fields = [
        user.full_name,
        user.bio,
        user.profile_picture_url,
        user.headline,
        links.get("github"),
        links.get("linkedin"),
        links.get("twitter"),
        len(user.skills or []) > 0,
        len(user.experience or []) > 0,
        len(user.education or []) > 0,
    ]
    completed = sum(1 for value in fields if value)
    return round(completed / len(fields) * 100)


def get_user_profile(db: Session, user_id: str) -> Optional[dict[str, Any]]:
    user = get_user_by_id(db, user_id)
    if user is None:
        return None

    total_projects = db.query(Project).filter(Project.author_id == user_id).count()
    return {
        "user": user,
        "stats": {
            "total_projects": total_projects,
            "total_experience": len(user.experience or []),
            "skills_count": len(user.skills or []),
            "profile_completeness": calculate_profile_completeness(user),
        },
    }
