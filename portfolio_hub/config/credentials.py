"""Layered configuration resolution with explicit Configured/Missing outcomes."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from portfolio_hub.config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

LEETCODE_PLACEHOLDER_USERNAME = "sample-user"


@dataclass(frozen=True, slots=True)
class Configured(Generic[T]):
    """A capability whose configuration was found."""

    value: T


@dataclass(frozen=True, slots=True)
class Missing:
    """A capability that is intentionally unavailable."""

    reason: str


ConfigResult = Union[Configured[T], Missing]


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    url: str
    source: str
    echo: bool = False


@dataclass(frozen=True, slots=True)
class GitHubCredentials:
    username: str
    token: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LeetCodeCredentials:
    username: str


@dataclass(frozen=True, slots=True)
class LinkedInCredentials:
    access_token: str


@dataclass(frozen=True, slots=True)
class LinkedInPublicProfile:
    user_id: str
    first_name: str
    last_name: str
    headline: str
    location: str
    connections: int
    followers: int

    @property
    def profile_url(self) -> str:
        return f"https://linkedin.com/in/{self.user_id}"


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def resolve_database_config(settings: Settings) -> ConfigResult[DatabaseConfig]:
    """Resolve the store URL from DATABASE_CONFIG_JSON, then DATABASE_URL."""

    raw_json = _clean(settings.DATABASE_CONFIG_JSON)
    if raw_json:
        try:
            payload = json.loads(raw_json)
        except json.JSONDecodeError as exc:
            logger.warning("DATABASE_CONFIG_JSON is not valid JSON; trying DATABASE_URL", extra={"error": str(exc)})
            payload = None
        if isinstance(payload, dict) and isinstance(payload.get("url"), str) and payload["url"].strip():
            return Configured(
                DatabaseConfig(
                    url=payload["url"].strip(),
                    source="DATABASE_CONFIG_JSON",
                    echo=bool(payload.get("echo", False)),
                )
            )

    url = _clean(settings.DATABASE_URL)
    if url:
        return Configured(DatabaseConfig(url=url, source="DATABASE_URL"))

    return Missing("neither DATABASE_CONFIG_JSON nor DATABASE_URL is set")


def resolve_github_credentials(settings: Settings) -> ConfigResult[GitHubCredentials]:
    username = _clean(settings.GITHUB_USERNAME)
    if not username:
        return Missing("GITHUB_USERNAME is not set")
    return Configured(GitHubCredentials(username=username, token=_clean(settings.GITHUB_TOKEN)))


def resolve_leetcode_credentials(settings: Settings) -> ConfigResult[LeetCodeCredentials]:
    username = _clean(settings.LEETCODE_USERNAME)
    if not username or username == LEETCODE_PLACEHOLDER_USERNAME:
        return Missing("LEETCODE_USERNAME is not set")
    return Configured(LeetCodeCredentials(username=username))


def resolve_linkedin_credentials(settings: Settings) -> ConfigResult[LinkedInCredentials]:
    token = _clean(settings.LINKEDIN_ACCESS_TOKEN)
    if not token:
        return Missing("LINKEDIN_ACCESS_TOKEN is not set")
    return Configured(LinkedInCredentials(access_token=token))


def resolve_linkedin_public_profile(settings: Settings) -> ConfigResult[LinkedInPublicProfile]:
    user_id = _clean(settings.LINKEDIN_USER_ID)
    if not user_id:
        return Missing("LINKEDIN_USER_ID is not set")
    return Configured(
        LinkedInPublicProfile(
            user_id=user_id,
            first_name=settings.LINKEDIN_FIRST_NAME,
            last_name=settings.LINKEDIN_LAST_NAME,
            headline=settings.LINKEDIN_HEADLINE,
            location=settings.LINKEDIN_LOCATION,
            connections=settings.LINKEDIN_CONNECTIONS,
            followers=settings.LINKEDIN_FOLLOWERS,
        )
    )
