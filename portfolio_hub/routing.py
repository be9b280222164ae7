"""Host-based request routing.

Requests for the root domain reach the marketing routes unchanged. Any
other host is a tenant domain, and its path is rewritten under
`/tenants/<host>` so a single router can resolve it.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional
from urllib.parse import quote

from starlette.types import ASGIApp, Receive, Scope, Send

from portfolio_hub.services.domain_service import normalize_domain

logger = logging.getLogger(__name__)

TENANT_PREFIX = "/tenants"
PASSTHROUGH_PREFIXES = ("/api", "/docs", "/openapi.json", "/redoc")
LOCAL_HOSTNAMES = ("localhost", "127.0.0.1")


def _header(scope: Scope, name: bytes) -> Optional[str]:
    for key, value in scope.get("headers") or []:
        if key.lower() == name:
            return value.decode("latin-1")
    return None


def _hostname(host: str) -> str:
    return host.rsplit(":", 1)[0] if ":" in host else host


def _is_passthrough(path: str, prefixes: Iterable[str]) -> bool:
    return any(path == prefix or path.startswith(prefix.rstrip("/") + "/") for prefix in prefixes)


def is_root_host(host: str, root_domain: str) -> bool:
    """True for the marketing host: the root domain itself or a local address."""
    host = normalize_domain(host)
    if not host:
        return True
    if host == normalize_domain(root_domain):
        return True
    return _hostname(host) in LOCAL_HOSTNAMES


def tenant_path(host: str, path: str) -> str:
    suffix = "" if path in ("", "/") else path
    return f"{TENANT_PREFIX}/{normalize_domain(host)}{suffix}"


class HostRoutingMiddleware:
    """Pure ASGI middleware rewriting tenant requests to `/tenants/<host><path>`."""

    def __init__(self, app: ASGIApp, *, root_domain: str) -> None:
        self.app = app
        self.root_domain = root_domain

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "/")
        host = _header(scope, b"host") or ""
        if _is_passthrough(path, PASSTHROUGH_PREFIXES) or is_root_host(host, self.root_domain):
            await self.app(scope, receive, send)
            return

        rewritten = tenant_path(host, path)
        logger.debug("Rewriting tenant request", extra={"host": host, "path": path, "rewritten": rewritten})
        scope = dict(scope)
        scope["path"] = rewritten
        scope["raw_path"] = quote(rewritten).encode("ascii")
        await self.app(scope, receive, send)
