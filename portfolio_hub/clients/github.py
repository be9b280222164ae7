"""GitHub REST/GraphQL client for profile statistics."""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, TypeAdapter

from portfolio_hub.clients.base import BaseApiClient
from portfolio_hub.clients.contracts import FetchResult, FetchState, HttpUrlStr, parse_payload
from portfolio_hub.config.credentials import ConfigResult, Configured, GitHubCredentials, Missing

logger = logging.getLogger(__name__)


class GitHubUser(BaseModel):
    login: str
    avatar_url: HttpUrlStr
    name: Optional[str]
    bio: Optional[str]
    public_repos: int
    followers: int
    following: int


class GitHubRepoOwner(BaseModel):
    login: str


class GitHubRepo(BaseModel):
    id: int
    name: str
    description: Optional[str]
    html_url: HttpUrlStr
    language: Optional[str]
    stargazers_count: int
    forks_count: int
    owner: GitHubRepoOwner


class ContributionDay(BaseModel):
    contributionCount: int
    date: str
    weekday: int
    color: str


class ContributionWeek(BaseModel):
    contributionDays: list[ContributionDay]


class ContributionCalendar(BaseModel):
    totalContributions: int
    weeks: list[ContributionWeek]


_USER_ADAPTER = TypeAdapter(GitHubUser)
_REPOS_ADAPTER = TypeAdapter(list[GitHubRepo])
_LANGUAGES_ADAPTER = TypeAdapter(dict[str, int])
_CALENDAR_ADAPTER = TypeAdapter(ContributionCalendar)

CONTRIBUTIONS_QUERY = """
query($username: String!) {
  user(login: $username) {
    contributionsCollection {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            contributionCount
            date
            weekday
            color
          }
        }
      }
    }
  }
}
"""


class GitHubClient(BaseApiClient):
    """Reads the configured user's profile, repositories and languages."""

    BASE_URL = "https://api.github.com"
    PROVIDER = "GitHub"
    API_VERSION = "2022-11-28"
    ACCEPT_JSON = "application/vnd.github+json"

    def __init__(self, credentials: ConfigResult[GitHubCredentials], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._credentials = credentials

    @property
    def username(self) -> Optional[str]:
        if isinstance(self._credentials, Configured):
            return self._credentials.value.username
        return None

    def _default_headers(self) -> dict[str, str]:
        headers = {
            "Accept": self.ACCEPT_JSON,
            "User-Agent": self._user_agent,
            "X-GitHub-Api-Version": self.API_VERSION,
        }
        if isinstance(self._credentials, Configured) and self._credentials.value.token:
            headers["Authorization"] = f"Bearer {self._credentials.value.token}"
        return headers

    def _missing(self) -> Optional[FetchResult[Any]]:
        if isinstance(self._credentials, Missing):
            return FetchResult.not_configured(self._credentials.reason)
        return None

    async def get_user(self) -> FetchResult[GitHubUser]:
        missing = self._missing()
        if missing is not None:
            return missing
        response = await self._get_json(f"/users/{self.username}")
        return parse_payload(_USER_ADAPTER, response)

    async def list_repos(self, *, per_page: int = 100) -> FetchResult[list[GitHubRepo]]:
        missing = self._missing()
        if missing is not None:
            return missing
        response = await self._get_json(
            f"/users/{self.username}/repos",
            params={"sort": "updated", "per_page": per_page},
        )
        return parse_payload(_REPOS_ADAPTER, response)

    async def list_recent_repos(self, *, limit: int = 6) -> FetchResult[list[GitHubRepo]]:
        """Most recently updated repositories owned by the user."""
        missing = self._missing()
        if missing is not None:
            return missing
        response = await self._get_json(
            f"/users/{self.username}/repos",
            params={"type": "owner", "sort": "updated", "per_page": limit},
        )
        return parse_payload(_REPOS_ADAPTER, response)

    async def get_repo_languages(self, owner: str, repo: str) -> FetchResult[dict[str, int]]:
        response = await self._get_json(f"/repos/{owner}/{repo}/languages")
        return parse_payload(_LANGUAGES_ADAPTER, response)

    async def get_contributions(self) -> FetchResult[ContributionCalendar]:
        """Contribution calendar from the GraphQL API; requires a token."""
        missing = self._missing()
        if missing is not None:
            return missing
        if not self._credentials.value.token:
            return FetchResult.not_configured("GITHUB_TOKEN is required for the GraphQL API")

        response = await self._post_json(
            "/graphql",
            body={"query": CONTRIBUTIONS_QUERY, "variables": {"username": self.username}},
        )
        if not response.ok:
            return response.carry()

        payload = response.data if isinstance(response.data, dict) else {}
        user = (payload.get("data") or {}).get("user") or {}
        collection = user.get("contributionsCollection") or {}
        calendar = collection.get("contributionCalendar")
        return parse_payload(
            _CALENDAR_ADAPTER,
            FetchResult(state=FetchState.OK, data=calendar, status_code=response.status_code),
        )
