"""Fixed placeholder payloads served when live provider data is unavailable."""

from __future__ import annotations

from portfolio_hub.schemas.stats import (
    ContributionsDisplay,
    GitHubDisplayStats,
    GitHubReposDisplay,
    LeetCodeDisplayStats,
    LinkedInDisplayStats,
)

DEMO_USERNAME = "demo-user"

GITHUB_DEMO = {
    "user": {
        "login": DEMO_USERNAME,
        "avatar_url": f"https://github.com/identicons/{DEMO_USERNAME}.png",
        "name": "Demo User",
        "bio": "Full-stack developer passionate about open source",
        "public_repos": 25,
        "followers": 150,
        "following": 100,
    },
    "repos": [],
    "total_stars": 120,
    "total_forks": 45,
    "languages": {
        "TypeScript": 35000,
        "JavaScript": 28000,
        "Python": 15000,
        "Go": 8000,
    },
    "total_repos": 25,
    "followers": 150,
    "following": 100,
    "is_demo": True,
}

GITHUB_REPOS_DEMO = {
    "repos": [],
    "is_demo": True,
}

CONTRIBUTIONS_DEMO = {
    "total_contributions": 0,
    "weeks": [],
    "is_demo": True,
}

LEETCODE_DEMO = {
    "username": DEMO_USERNAME,
    "solved_count": 150,
    "difficulty_breakdown": {"easy": 80, "medium": 60, "hard": 10},
    "streak": 5,
    "total_active_days": 30,
    "is_premium": False,
    "is_demo": True,
}

LINKEDIN_DEMO = {
    "first_name": "Demo",
    "last_name": "User",
    "headline": "Full Stack Developer",
    "location": "India",
    "connections": 500,
    "followers": 1200,
    "profile_url": f"https://linkedin.com/in/{DEMO_USERNAME}",
    "is_official": False,
    "is_demo": True,
}


# Built fresh on every call so callers can never mutate a shared instance
def github_demo_stats() -> GitHubDisplayStats:
    return GitHubDisplayStats.model_validate(GITHUB_DEMO)


def github_repos_demo() -> GitHubReposDisplay:
    return GitHubReposDisplay.model_validate(GITHUB_REPOS_DEMO)


def contributions_demo() -> ContributionsDisplay:
    return ContributionsDisplay.model_validate(CONTRIBUTIONS_DEMO)


def leetcode_demo_stats() -> LeetCodeDisplayStats:
    return LeetCodeDisplayStats.model_validate(LEETCODE_DEMO)


def linkedin_demo_stats() -> LinkedInDisplayStats:
    return LinkedInDisplayStats.model_validate(LINKEDIN_DEMO)
