from __future__ import annotations

from datetime import datetime

import pytest

from portfolio_hub.schemas.users import (
    EducationEntry,
    ExperienceEntry,
    ExperienceUpdate,
    UserCreateRequest,
    UserUpdateRequest,
)
from portfolio_hub.services import user_service
from portfolio_hub.services.errors import EmptyUpdateError, EntryNotFoundError, UserNotFoundError
from tests.conftest import add_project, add_user


def test_create_user_applies_onboarding_defaults(session) -> None:
    payload = UserCreateRequest(username="alice", fullName="Alice Doe", email="alice@example.com")

    user = user_service.create_user(session, "uid-1", payload)

    assert user.profile_picture_url == "https://avatar.vercel.sh/alice"
    assert user.headline == ""
    assert user.bio == ""
    assert user.social_links == {}
    assert user.created_at is not None


def test_create_request_validation() -> None:
    with pytest.raises(ValueError):
        UserCreateRequest(username="al", full_name="Alice", email="alice@example.com")
    with pytest.raises(ValueError):
        UserCreateRequest(username="alice", full_name="Alice", email="not-an-email")


def test_update_user_merges_social_links(session) -> None:
    add_user(session, "u1", social_links={"github": "https://github.com/u1", "twitter": "https://x.com/u1"})

    user = user_service.update_user(
        session,
        "u1",
        UserUpdateRequest(headline="Engineer", socialLinks={"linkedin": "https://linkedin.com/in/u1"}),
    )

    assert user.headline == "Engineer"
    assert user.social_links == {
        "github": "https://github.com/u1",
        "twitter": "https://x.com/u1",
        "linkedin": "https://linkedin.com/in/u1",
    }


def test_update_user_rejects_empty_update(session) -> None:
    add_user(session, "u1")

    with pytest.raises(EmptyUpdateError):
        user_service.update_user(session, "u1", UserUpdateRequest())


def test_update_user_unknown(session) -> None:
    with pytest.raises(UserNotFoundError):
        user_service.update_user(session, "ghost", UserUpdateRequest(bio="hi"))


def test_experience_entries_keep_order_and_get_ids(session) -> None:
    add_user(session, "u1")
    first = ExperienceEntry(company="Acme", position="Engineer", startDate="2020-01")
    second = ExperienceEntry(company="Globex", position="Lead", startDate="2022-05", current=True)

    user_service.add_entry(session, "u1", user_service.EXPERIENCE, first)
    user = user_service.add_entry(session, "u1", user_service.EXPERIENCE, second)

    assert [entry["company"] for entry in user.experience] == ["Acme", "Globex"]
    assert all(entry["id"] for entry in user.experience)
    assert user.experience[0]["startDate"] == "2020-01"


def test_update_and_delete_experience_entry(session) -> None:
    add_user(session, "u1")
    user = user_service.add_entry(
        session, "u1", user_service.EXPERIENCE, ExperienceEntry(company="Acme", position="Engineer", startDate="2020")
    )
    entry_id = user.experience[0]["id"]

    user = user_service.update_entry(session, "u1", user_service.EXPERIENCE, entry_id, ExperienceUpdate(position="Staff"))
    assert user.experience[0]["position"] == "Staff"
    assert user.experience[0]["company"] == "Acme"

    user = user_service.delete_entry(session, "u1", user_service.EXPERIENCE, entry_id)
    assert user.experience == []

    with pytest.raises(EntryNotFoundError):
        user_service.delete_entry(session, "u1", user_service.EXPERIENCE, entry_id)


def test_timestamps_are_set_by_the_database(session) -> None:
    stale = datetime(2020, 1, 1)
    add_user(session, "u1", created_at=stale, updated_at=stale)

    user = user_service.add_entry(
        session, "u1", user_service.EDUCATION, EducationEntry(institution="MIT", degree="BSc", startDate="2016")
    )

    assert user.created_at == stale
    assert user.updated_at > stale

    fresh = add_user(session, "u2")
    session.refresh(fresh)
    assert fresh.created_at is not None
    assert fresh.updated_at is not None


def test_profile_completeness_and_counts(session) -> None:
    user = add_user(
        session,
        "u1",
        bio="Hello",
        headline="Engineer",
        social_links={"github": "https://github.com/u1"},
        skills=["python"],
    )
    user_service.add_entry(
        session, "u1", user_service.EDUCATION, EducationEntry(institution="MIT", degree="BSc", startDate="2014")
    )
    add_project(session, user, title="First", technologies=["python"])

    profile = user_service.get_user_profile(session, "u1")

    # full name, bio, avatar, headline, github, skills, education filled; linkedin, twitter, experience empty
    assert profile["stats"] == {
        "total_projects": 1,
        "total_experience": 0,
        "skills_count": 1,
        "profile_completeness": 70,
    }
    assert user_service.get_user_profile(session, "ghost") is None
