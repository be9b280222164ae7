"""Response models for provider statistics.

Every payload carries `isDemo`, true exactly when the values were not
produced by a live upstream call.
"""

from __future__ import annotations

from typing import Optional

from portfolio_hub.clients.github import ContributionWeek, GitHubRepo, GitHubUser
from portfolio_hub.schemas.common import CamelModel


class GitHubDisplayStats(CamelModel):
    user: GitHubUser
    repos: list[GitHubRepo]
    total_stars: int
    total_forks: int
    languages: dict[str, int]
    total_repos: int
    followers: int
    following: int
    is_demo: bool


class GitHubReposDisplay(CamelModel):
    repos: list[GitHubRepo]
    is_demo: bool


class ContributionsDisplay(CamelModel):
    total_contributions: int
    weeks: list[ContributionWeek]
    is_demo: bool


class DifficultyBreakdown(CamelModel):
    easy: int
    medium: int
    hard: int


class LeetCodeDisplayStats(CamelModel):
    username: str
    solved_count: int
    difficulty_breakdown: DifficultyBreakdown
    ranking: Optional[int] = None
    contribution_points: Optional[int] = None
    reputation: Optional[int] = None
    total_questions: Optional[int] = None
    streak: Optional[int] = None
    total_active_days: Optional[int] = None
    is_premium: Optional[bool] = None
    is_demo: bool


class LinkedInDisplayStats(CamelModel):
    id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    headline: str = ""
    location: Optional[str] = None
    connections: Optional[int] = None
    followers: Optional[int] = None
    vanity_name: Optional[str] = None
    profile_url: str
    is_official: bool
    is_demo: bool
