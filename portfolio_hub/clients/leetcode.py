"""LeetCode statistics via the public query mirror."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, TypeAdapter

from portfolio_hub.clients.base import BaseApiClient
from portfolio_hub.clients.contracts import FetchResult, parse_payload
from portfolio_hub.config.credentials import ConfigResult, Configured, LeetCodeCredentials, Missing


class SubmissionCount(BaseModel):
    difficulty: str
    count: int
    submissions: int


class RecentSubmission(BaseModel):
    title: str
    titleSlug: str
    timestamp: str
    statusDisplay: str
    lang: str


class MatchedUserStats(BaseModel):
    acSubmissionNum: list[SubmissionCount]
    totalSubmissionNum: list[SubmissionCount]


class LeetCodeStats(BaseModel):
    totalSolved: int
    totalSubmissions: list[SubmissionCount]
    totalQuestions: int
    easySolved: int
    totalEasy: int
    mediumSolved: int
    totalMedium: int
    hardSolved: int
    totalHard: int
    ranking: int
    contributionPoint: int
    reputation: int
    submissionCalendar: dict[str, int]
    recentSubmissions: list[RecentSubmission]
    matchedUserStats: MatchedUserStats

    def difficulty_breakdown(self) -> dict[str, int]:
        return {"easy": self.easySolved, "medium": self.mediumSolved, "hard": self.hardSolved}

    def active_days(self) -> int:
        """Number of calendar days with at least one submission."""
        return sum(1 for count in self.submissionCalendar.values() if count > 0)


_STATS_ADAPTER = TypeAdapter(LeetCodeStats)


class LeetCodeClient(BaseApiClient):
    """Unauthenticated client for a LeetCode profile mirror."""

    BASE_URL = "https://leetcode-api-faisalshohag.vercel.app"
    PROVIDER = "LeetCode"

    def __init__(self, credentials: ConfigResult[LeetCodeCredentials], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._credentials = credentials

    @property
    def username(self) -> Optional[str]:
        if isinstance(self._credentials, Configured):
            return self._credentials.value.username
        return None

    def _default_headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", "User-Agent": self._user_agent}

    async def get_stats(self) -> FetchResult[LeetCodeStats]:
        if isinstance(self._credentials, Missing):
            return FetchResult.not_configured(self._credentials.reason)
        response = await self._get_json(f"/{self.username}")
        return parse_payload(_STATS_ADAPTER, response)
