"""Typed fetch outcomes shared by every upstream client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Generic, Optional, TypeVar

from pydantic import AfterValidator, TypeAdapter, ValidationError

T = TypeVar("T")


class FetchState(str, Enum):
    OK = "ok"
    NOT_CONFIGURED = "not_configured"
    # Upstream answered but the payload did not match the expected shape
    INVALID = "invalid"
    # Transport error, timeout or non-2xx status
    FAILED = "failed"


@dataclass(slots=True)
class FetchResult(Generic[T]):
    """Outcome of one upstream call."""

    state: FetchState
    data: Optional[T] = None
    status_code: Optional[int] = None
    error: Optional[str] = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.state == FetchState.OK

    @classmethod
    def not_configured(cls, reason: str) -> "FetchResult[Any]":
        return cls(state=FetchState.NOT_CONFIGURED, error=reason)

    @classmethod
    def failed(cls, error: str, *, status_code: Optional[int] = None) -> "FetchResult[Any]":
        return cls(state=FetchState.FAILED, error=error, status_code=status_code)

    def carry(self) -> "FetchResult[Any]":
        """Re-wrap a non-OK result for a different payload type."""
        return FetchResult(
            state=self.state,
            data=None,
            status_code=self.status_code,
            error=self.error,
            from_cache=self.from_cache,
        )


def _require_http_url(value: str) -> str:
    if not value.startswith(("http://", "https://")):
        raise ValueError("must be an http(s) URL")
    return value


HttpUrlStr = Annotated[str, AfterValidator(_require_http_url)]


def parse_payload(adapter: TypeAdapter[T], result: FetchResult[Any]) -> FetchResult[T]:
    """Validate an OK result against a schema; shape mismatches become INVALID."""

    if not result.ok:
        return result.carry()
    try:
        parsed = adapter.validate_python(result.data)
    except ValidationError as exc:
        return FetchResult(
            state=FetchState.INVALID,
            status_code=result.status_code,
            error=f"{exc.error_count()} validation error(s): {exc.errors()[0]['loc']}",
            from_cache=result.from_cache,
        )
    return FetchResult(
        state=FetchState.OK,
        data=parsed,
        status_code=result.status_code,
        from_cache=result.from_cache,
    )
