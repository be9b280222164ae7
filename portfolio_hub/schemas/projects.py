"""Pydantic schemas for project endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from portfolio_hub.clients.contracts import HttpUrlStr
from portfolio_hub.schemas.common import CamelModel


class ProjectCreateRequest(CamelModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    cover_image_url: str = ""
    video_url: Optional[HttpUrlStr] = None
    live_url: Optional[HttpUrlStr] = None
    source_code_url: Optional[HttpUrlStr] = None
    technologies: list[str] = Field(..., min_length=1)

    @field_validator("source_code_url", mode="before")
    @classmethod
    def _blank_source_url(cls, value):
        # The admin form submits an empty string when the field is cleared
        return None if value == "" else value


class ProjectUpdateRequest(CamelModel):
    """Partial update; every field is optional."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=1000)
    cover_image_url: Optional[str] = None
    video_url: Optional[HttpUrlStr] = None
    live_url: Optional[HttpUrlStr] = None
    source_code_url: Optional[HttpUrlStr] = None
    technologies: Optional[list[str]] = Field(None, min_length=1)

    @field_validator("title", "description", "cover_image_url", "technologies", mode="before")
    @classmethod
    def _required_not_null(cls, value):
        # These columns are NOT NULL; omit the field to leave it unchanged
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

    @field_validator("source_code_url", mode="before")
    @classmethod
    def _blank_source_url(cls, value):
        return None if value == "" else value


class ProjectRead(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    cover_image_url: str
    video_url: Optional[str] = None
    live_url: Optional[str] = None
    source_code_url: Optional[str] = None
    technologies: list[str]
    created_at: Optional[datetime] = None
    author_id: str
    author_username: str
    author_avatar: str


class ProjectStatsResponse(CamelModel):
    total: int
    by_technology: dict[str, int]
