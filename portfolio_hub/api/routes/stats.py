"""Provider statistics endpoints.

These always answer 200: upstream problems are absorbed into demo
payloads flagged with `isDemo`.
"""

from fastapi import APIRouter, Depends

from portfolio_hub.api.dependencies import get_stats_service
from portfolio_hub.schemas.stats import (
    ContributionsDisplay,
    GitHubDisplayStats,
    GitHubReposDisplay,
    LeetCodeDisplayStats,
    LinkedInDisplayStats,
)
from portfolio_hub.services.stats.service import StatsService

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/github", response_model=GitHubDisplayStats, response_model_exclude_none=True)
async def github_stats(stats: StatsService = Depends(get_stats_service)):
    """Profile, top repositories, star/fork totals and language histogram"""
    return await stats.github_stats()


@router.get("/github/repos", response_model=GitHubReposDisplay, response_model_exclude_none=True)
async def github_repos(stats: StatsService = Depends(get_stats_service)):
    """Most recently updated repositories owned by the configured user"""
    return await stats.github_repos()


@router.get("/github/contributions", response_model=ContributionsDisplay, response_model_exclude_none=True)
async def github_contributions(stats: StatsService = Depends(get_stats_service)):
    """Contribution calendar for the configured GitHub user"""
    return await stats.github_contributions()


@router.get("/leetcode", response_model=LeetCodeDisplayStats, response_model_exclude_none=True)
async def leetcode_stats(stats: StatsService = Depends(get_stats_service)):
    return await stats.leetcode_stats()


@router.get("/linkedin", response_model=LinkedInDisplayStats, response_model_exclude_none=True)
async def linkedin_stats(stats: StatsService = Depends(get_stats_service)):
    return await stats.linkedin_stats()
