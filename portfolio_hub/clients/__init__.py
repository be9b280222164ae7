"""Upstream profile provider clients."""

from portfolio_hub.clients.contracts import FetchResult, FetchState
from portfolio_hub.clients.github import GitHubClient
from portfolio_hub.clients.leetcode import LeetCodeClient
from portfolio_hub.clients.linkedin import LinkedInClient

__all__ = [
    "FetchResult",
    "FetchState",
    "GitHubClient",
    "LeetCodeClient",
    "LinkedInClient",
]
