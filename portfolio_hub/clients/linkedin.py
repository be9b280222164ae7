"""LinkedIn official profile client."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, TypeAdapter

from portfolio_hub.clients.base import BaseApiClient
from portfolio_hub.clients.contracts import FetchResult, parse_payload
from portfolio_hub.config.credentials import ConfigResult, Configured, LinkedInCredentials, Missing


class PreferredLocale(BaseModel):
    country: str
    language: str


class LocalizedField(BaseModel):
    localized: dict[str, str]
    preferredLocale: PreferredLocale

    def text(self) -> Optional[str]:
        """en_US value, falling back to the first localisation present."""
        if "en_US" in self.localized:
            return self.localized["en_US"]
        return next(iter(self.localized.values()), None)


class ProfilePicture(BaseModel):
    displayImage: str


class LinkedInProfile(BaseModel):
    id: str
    firstName: LocalizedField
    lastName: LocalizedField
    headline: Optional[LocalizedField] = None
    vanityName: Optional[str] = None
    profilePicture: Optional[ProfilePicture] = None


_PROFILE_ADAPTER = TypeAdapter(LinkedInProfile)


class LinkedInClient(BaseApiClient):
    """Reads the authenticated member via `/v2/me`.

    LinkedIn does not expose follower or connection counts through this
    endpoint, so only identity fields come back.
    """

    BASE_URL = "https://api.linkedin.com"
    PROVIDER = "LinkedIn"

    def __init__(self, credentials: ConfigResult[LinkedInCredentials], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._credentials = credentials

    def _default_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self._user_agent,
            "X-RestLi-Protocol-Version": "2.0.0",
        }
        if isinstance(self._credentials, Configured):
            headers["Authorization"] = f"Bearer {self._credentials.value.access_token}"
        return headers

    async def get_profile(self) -> FetchResult[LinkedInProfile]:
        if isinstance(self._credentials, Missing):
            return FetchResult.not_configured(self._credentials.reason)
        response = await self._get_json("/v2/me")
        return parse_payload(_PROFILE_ADAPTER, response)
