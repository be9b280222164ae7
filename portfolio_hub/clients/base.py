"""Shared async HTTP plumbing for profile provider clients."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from portfolio_hub.clients.cache import ResponseCache
from portfolio_hub.clients.contracts import FetchResult, FetchState
from portfolio_hub.config.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

_REDACTED_VALUE = "***REDACTED***"
_SENSITIVE_KEYS = (
    "authorization",
    "token",
    "api_key",
    "apikey",
    "secret",
    "password",
    "cookie",
    "session",
)
_TOKEN_PATTERNS = (
    re.compile(r"(?i)(bearer\s+)[^\s,;]+"),
    re.compile(r"(?i)(token\s*[=:]\s*)[^\s,;]+"),
    re.compile(r"(?i)(access_token=)[^&\s]+"),
    re.compile(r"(?i)(api[_-]?key\s*[=:]\s*)[^\s,;]+"),
    re.compile(r"(?i)(secret\s*[=:]\s*)[^\s,;]+"),
)


def sanitize_for_log(value: Any) -> Any:
    """Return a recursively sanitized copy of log payloads."""

    if isinstance(value, dict):
        sanitized: dict[str, Any] = {}
        for raw_key, raw_value in value.items():
            field = str(raw_key)
            if any(keyword in field.lower() for keyword in _SENSITIVE_KEYS):
                sanitized[field] = _REDACTED_VALUE
                continue
            sanitized[field] = sanitize_for_log(raw_value)
        return sanitized

    if isinstance(value, (list, tuple, set)):
        return [sanitize_for_log(item) for item in value]

    if isinstance(value, str):
        redacted = value
        for pattern in _TOKEN_PATTERNS:
            redacted = pattern.sub(rf"\1{_REDACTED_VALUE}", redacted)
        return redacted

    return value


def sanitize_log_extra(**kwargs: Any) -> dict[str, Any]:
    """Helper for `extra=` payloads in structured logging."""

    return {key: sanitize_for_log(value) for key, value in kwargs.items()}


class BaseApiClient:
    """Async JSON client with bounded retries and a force-cache.

    Subclasses set BASE_URL and PROVIDER and override `_default_headers`.
    Every request returns a FetchResult; transport problems, timeouts and
    non-2xx statuses surface as FAILED, undecodable bodies as INVALID.
    """

    BASE_URL = ""
    PROVIDER = "upstream"

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        timeout_seconds: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_base_seconds: Optional[float] = None,
        backoff_max_seconds: Optional[float] = None,
        cache: Optional[ResponseCache] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        config = settings or default_settings
        self._user_agent = config.USER_AGENT
        self._timeout_seconds = timeout_seconds or config.UPSTREAM_TIMEOUT_SECONDS
        self._max_retries = max(max_retries or config.UPSTREAM_MAX_RETRIES, 1)
        self._backoff_base_seconds = backoff_base_seconds if backoff_base_seconds is not None else config.UPSTREAM_BACKOFF_BASE_SECONDS
        self._backoff_max_seconds = backoff_max_seconds if backoff_max_seconds is not None else config.UPSTREAM_BACKOFF_MAX_SECONDS
        self._cache = cache if cache is not None else ResponseCache(config.STATS_CACHE_TTL_SECONDS)
        self._base_url = base_url or self.BASE_URL
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    def _default_headers(self) -> dict[str, str]:
        return {"User-Agent": self._user_agent}

    async def _get_json(self, path: str, *, params: Optional[dict[str, Any]] = None) -> FetchResult[Any]:
        return await self._request_json("GET", path, params=params)

    async def _post_json(self, path: str, *, body: Any) -> FetchResult[Any]:
        return await self._request_json("POST", path, body=body)

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        body: Any = None,
    ) -> FetchResult[Any]:
        cache_key = ResponseCache.make_key(method, f"{self._base_url}{path}", params, body)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return FetchResult(state=FetchState.OK, data=cached, status_code=200, from_cache=True)

        client = await self._ensure_client()

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._max_retries),
                wait=wait_exponential(multiplier=self._backoff_base_seconds, max=self._backoff_max_seconds),
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    response = await client.request(method, path, params=params, json=body)
        except httpx.TransportError as exc:
            logger.warning(
                f"{self.PROVIDER} request failed",
                extra=sanitize_log_extra(path=path, params=params, error=repr(exc)),
            )
            return FetchResult.failed(f"{type(exc).__name__}: {exc}")

        if response.status_code < 200 or response.status_code >= 300:
            logger.warning(
                f"{self.PROVIDER} responded with an error status",
                extra=sanitize_log_extra(path=path, params=params, status_code=response.status_code),
            )
            return FetchResult.failed(
                f"{self.PROVIDER} API responded with status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning(
                f"{self.PROVIDER} returned a non-JSON body",
                extra=sanitize_log_extra(path=path, status_code=response.status_code, error=str(exc)),
            )
            return FetchResult(state=FetchState.INVALID, status_code=response.status_code, error="response body is not JSON")

        self._cache.set(cache_key, payload)
        return FetchResult(state=FetchState.OK, data=payload, status_code=response.status_code)

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client:
            return self._client

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._default_headers(),
            timeout=self._timeout_seconds,
            transport=self._transport,
        )
        return self._client
