"""Demo-data fallback around the live stats pipeline."""

from __future__ import annotations

import logging
from typing import Any, Awaitable

from portfolio_hub.clients.contracts import FetchResult
from portfolio_hub.clients.github import GitHubClient
from portfolio_hub.clients.leetcode import LeetCodeClient
from portfolio_hub.clients.linkedin import LinkedInClient
from portfolio_hub.config.credentials import (
    ConfigResult,
    LinkedInPublicProfile,
    resolve_github_credentials,
    resolve_leetcode_credentials,
    resolve_linkedin_credentials,
    resolve_linkedin_public_profile,
)
from portfolio_hub.config.settings import Settings
from portfolio_hub.schemas.stats import (
    ContributionsDisplay,
    GitHubDisplayStats,
    GitHubReposDisplay,
    LeetCodeDisplayStats,
    LinkedInDisplayStats,
)
from portfolio_hub.services.stats.aggregators import (
    aggregate_github_stats,
    fetch_leetcode_stats,
    fetch_linkedin_profile,
)
from portfolio_hub.services.stats.display import (
    contributions_display,
    github_display_stats,
    github_repos_display,
    leetcode_display_stats,
    linkedin_display_stats,
)

logger = logging.getLogger(__name__)


class StatsService:
    """Serves provider stats, substituting demo payloads on any failure.

    The public coroutines never raise: exceptions from the live stage are
    logged and treated as a failed fetch.
    """

    def __init__(
        self,
        *,
        github: GitHubClient,
        leetcode: LeetCodeClient,
        linkedin: LinkedInClient,
        linkedin_public_profile: ConfigResult[LinkedInPublicProfile],
        top_repos: int = 6,
    ) -> None:
        self.github = github
        self.leetcode = leetcode
        self.linkedin = linkedin
        self.linkedin_public_profile = linkedin_public_profile
        self.top_repos = top_repos

    @classmethod
    def from_settings(cls, settings: Settings, **client_kwargs: Any) -> "StatsService":
        """Build the three clients from resolved credentials."""
        return cls(
            github=GitHubClient(resolve_github_credentials(settings), settings=settings, **client_kwargs),
            leetcode=LeetCodeClient(resolve_leetcode_credentials(settings), settings=settings, **client_kwargs),
            linkedin=LinkedInClient(resolve_linkedin_credentials(settings), settings=settings, **client_kwargs),
            linkedin_public_profile=resolve_linkedin_public_profile(settings),
            top_repos=settings.GITHUB_TOP_REPOS,
        )

    async def aclose(self) -> None:
        await self.github.aclose()
        await self.leetcode.aclose()
        await self.linkedin.aclose()

    async def github_stats(self) -> GitHubDisplayStats:
        result = await self._live("GitHub", aggregate_github_stats(self.github))
        return github_display_stats(result, self.top_repos)

    async def github_repos(self) -> GitHubReposDisplay:
        result = await self._live("GitHub repos", self.github.list_recent_repos(limit=self.top_repos))
        return github_repos_display(result)

    async def github_contributions(self) -> ContributionsDisplay:
        result = await self._live("GitHub contributions", self.github.get_contributions())
        return contributions_display(result)

    async def leetcode_stats(self) -> LeetCodeDisplayStats:
        result = await self._live("LeetCode", fetch_leetcode_stats(self.leetcode))
        return leetcode_display_stats(result, self.leetcode.username)

    async def linkedin_stats(self) -> LinkedInDisplayStats:
        result = await self._live("LinkedIn", fetch_linkedin_profile(self.linkedin))
        return linkedin_display_stats(result, self.linkedin_public_profile)

    @staticmethod
    async def _live(provider: str, pending: Awaitable[FetchResult[Any]]) -> FetchResult[Any]:
        try:
            result = await pending
        except Exception as exc:
            logger.exception(f"Unexpected error fetching {provider} stats")
            result = FetchResult.failed(f"{type(exc).__name__}: {exc}")

        if not result.ok:
            logger.info(
                f"Serving demo {provider} data",
                extra={"state": result.state.value, "reason": result.error},
            )
        return result

