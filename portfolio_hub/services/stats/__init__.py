"""Provider statistics: live aggregation, display mapping and demo fallback."""

from portfolio_hub.services.stats.aggregators import (
    GitHubStats,
    aggregate_github_stats,
    collect_languages,
    fetch_leetcode_stats,
    fetch_linkedin_profile,
)
from portfolio_hub.services.stats.service import StatsService

__all__ = [
    "GitHubStats",
    "aggregate_github_stats",
    "collect_languages",
    "fetch_leetcode_stats",
    "fetch_linkedin_profile",
    "StatsService",
]
