"""Force-cache store for upstream JSON responses."""

from __future__ import annotations

import copy
import json
import time
from typing import Any, Callable, Hashable, Optional


class ResponseCache:
    """Fixed-TTL cache keyed by request identity.

    Entries are served until they expire and are then refetched on the next
    call; there is no background revalidation.
    """

    def __init__(self, ttl_seconds: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, Any]] = {}

    @staticmethod
    def make_key(method: str, url: str, params: Optional[dict[str, Any]] = None, body: Any = None) -> Hashable:
        params_key = tuple(sorted((str(k), str(v)) for k, v in (params or {}).items()))
        body_key = json.dumps(body, sort_keys=True) if body is not None else None
        return (method.upper(), url, params_key, body_key)

    def get(self, key: Hashable) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return copy.deepcopy(value)

    def set(self, key: Hashable, value: Any) -> None:
        if self._ttl_seconds <= 0:
            return
        self._entries[key] = (self._clock() + self._ttl_seconds, copy.deepcopy(value))

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
