"""Pure mapping from fetch results to response payloads.

Any result that is not OK maps to the provider's demo payload. None of
these functions perform I/O.
"""

from __future__ import annotations

from typing import Optional

from portfolio_hub.clients.contracts import FetchResult
from portfolio_hub.clients.github import ContributionCalendar, GitHubRepo
from portfolio_hub.clients.leetcode import LeetCodeStats
from portfolio_hub.clients.linkedin import LinkedInProfile
from portfolio_hub.config.credentials import ConfigResult, Configured, LinkedInPublicProfile
from portfolio_hub.schemas.stats import (
    ContributionsDisplay,
    DifficultyBreakdown,
    GitHubDisplayStats,
    GitHubReposDisplay,
    LeetCodeDisplayStats,
    LinkedInDisplayStats,
)
from portfolio_hub.services.stats.aggregators import GitHubStats
from portfolio_hub.services.stats.demo_data import (
    contributions_demo,
    github_demo_stats,
    github_repos_demo,
    leetcode_demo_stats,
    linkedin_demo_stats,
)


def github_display_stats(result: FetchResult[GitHubStats], top_repos: int = 6) -> GitHubDisplayStats:
    if not result.ok:
        return github_demo_stats()

    stats = result.data
    return GitHubDisplayStats(
        user=stats.user,
        repos=stats.repos[:top_repos],
        total_stars=stats.total_stars,
        total_forks=stats.total_forks,
        languages=stats.languages,
        total_repos=stats.user.public_repos,
        followers=stats.user.followers,
        following=stats.user.following,
        is_demo=False,
    )


def github_repos_display(result: FetchResult[list[GitHubRepo]]) -> GitHubReposDisplay:
    if not result.ok:
        return github_repos_demo()
    return GitHubReposDisplay(repos=result.data, is_demo=False)


def contributions_display(result: FetchResult[ContributionCalendar]) -> ContributionsDisplay:
    if not result.ok:
        return contributions_demo()

    return ContributionsDisplay(
        total_contributions=result.data.totalContributions,
        weeks=result.data.weeks,
        is_demo=False,
    )


def leetcode_display_stats(result: FetchResult[LeetCodeStats], username: Optional[str]) -> LeetCodeDisplayStats:
    if not result.ok or not username:
        return leetcode_demo_stats()

    stats = result.data
    return LeetCodeDisplayStats(
        username=username,
        solved_count=stats.totalSolved,
        difficulty_breakdown=DifficultyBreakdown(**stats.difficulty_breakdown()),
        ranking=stats.ranking,
        contribution_points=stats.contributionPoint,
        reputation=stats.reputation,
        total_questions=stats.totalQuestions,
        total_active_days=stats.active_days(),
        is_demo=False,
    )


def _official_linkedin_stats(profile: LinkedInProfile) -> LinkedInDisplayStats:
    first_name = profile.firstName.text()
    last_name = profile.lastName.text()
    return LinkedInDisplayStats(
        id=profile.id,
        first_name=first_name,
        last_name=last_name,
        full_name=" ".join(part for part in (first_name, last_name) if part) or None,
        headline=(profile.headline.text() if profile.headline else None) or "",
        vanity_name=profile.vanityName,
        profile_url=f"https://linkedin.com/in/{profile.vanityName}" if profile.vanityName else "",
        is_official=True,
        is_demo=False,
    )


def _public_linkedin_stats(profile: LinkedInPublicProfile) -> LinkedInDisplayStats:
    # Built from settings rather than an upstream call, so still flagged as demo
    return LinkedInDisplayStats(
        first_name=profile.first_name or None,
        last_name=profile.last_name or None,
        full_name=" ".join(part for part in (profile.first_name, profile.last_name) if part) or None,
        headline=profile.headline,
        location=profile.location or None,
        connections=profile.connections,
        followers=profile.followers,
        profile_url=profile.profile_url,
        is_official=False,
        is_demo=True,
    )


def linkedin_display_stats(
    result: FetchResult[LinkedInProfile],
    public_profile: ConfigResult[LinkedInPublicProfile],
) -> LinkedInDisplayStats:
    if result.ok:
        return _official_linkedin_stats(result.data)
    if isinstance(public_profile, Configured):
        return _public_linkedin_stats(public_profile.value)
    return linkedin_demo_stats()
