"""Live stage of the stats pipeline: compose client calls into one result."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field

from portfolio_hub.clients.contracts import FetchResult, FetchState
from portfolio_hub.clients.github import GitHubClient, GitHubRepo, GitHubUser
from portfolio_hub.clients.leetcode import LeetCodeClient, LeetCodeStats
from portfolio_hub.clients.linkedin import LinkedInClient, LinkedInProfile

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GitHubStats:
    user: GitHubUser
    repos: list[GitHubRepo]
    total_stars: int
    total_forks: int
    languages: dict[str, int] = field(default_factory=dict)


async def collect_languages(client: GitHubClient, repos: list[GitHubRepo]) -> dict[str, int]:
    """Merge per-repository language byte counts into one histogram.

    Fetches run concurrently and settle independently: a repository whose
    fetch raises or returns a non-OK result contributes nothing.
    """

    outcomes = await asyncio.gather(
        *(client.get_repo_languages(repo.owner.login, repo.name) for repo in repos),
        return_exceptions=True,
    )

    histogram: Counter[str] = Counter()
    skipped = 0
    for repo, outcome in zip(repos, outcomes):
        if isinstance(outcome, BaseException):
            skipped += 1
            logger.warning(
                "Language fetch raised",
                extra={"repo": repo.name, "error": repr(outcome)},
            )
            continue
        if not outcome.ok:
            skipped += 1
            continue
        histogram.update(outcome.data)

    if skipped:
        logger.info("Languages omitted for some repositories", extra={"skipped": skipped, "total": len(repos)})
    return dict(histogram)


async def aggregate_github_stats(client: GitHubClient) -> FetchResult[GitHubStats]:
    # Both fetches settle before a raise propagates so neither is left running
    outcomes = await asyncio.gather(client.get_user(), client.list_repos(), return_exceptions=True)
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome

    user_result, repos_result = outcomes
    for result in (user_result, repos_result):
        if not result.ok:
            return result.carry()

    repos = repos_result.data
    languages = await collect_languages(client, repos)
    stats = GitHubStats(
        user=user_result.data,
        repos=repos,
        total_stars=sum(repo.stargazers_count for repo in repos),
        total_forks=sum(repo.forks_count for repo in repos),
        languages=languages,
    )
    return FetchResult(
        state=FetchState.OK,
        data=stats,
        from_cache=user_result.from_cache and repos_result.from_cache,
    )


async def fetch_leetcode_stats(client: LeetCodeClient) -> FetchResult[LeetCodeStats]:
    return await client.get_stats()


async def fetch_linkedin_profile(client: LinkedInClient) -> FetchResult[LinkedInProfile]:
    return await client.get_profile()
