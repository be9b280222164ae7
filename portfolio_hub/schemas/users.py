"""Pydantic schemas for user and domain endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, EmailStr, Field

from portfolio_hub.schemas.common import CamelModel


class SocialLinks(CamelModel):
    github: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None


class UserCreateRequest(CamelModel):
    username: str = Field(..., min_length=3, max_length=20)
    full_name: str = Field(..., min_length=1)
    email: EmailStr


class UserUpdateRequest(CamelModel):
    """Profile fields an admin may edit; unset fields are left untouched."""

    model_config = ConfigDict(extra="forbid")

    full_name: Optional[str] = Field(None, min_length=1)
    headline: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=1000)
    profile_picture_url: Optional[str] = Field(None, min_length=1)
    social_links: Optional[SocialLinks] = None
    skills: Optional[list[str]] = None


class ExperienceEntry(CamelModel):
    company: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    start_date: str
    end_date: Optional[str] = None
    description: str = ""
    current: bool = False


class ExperienceUpdate(CamelModel):
    company: Optional[str] = Field(None, min_length=1)
    position: Optional[str] = Field(None, min_length=1)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None
    current: Optional[bool] = None


class EducationEntry(CamelModel):
    institution: str = Field(..., min_length=1)
    degree: str = Field(..., min_length=1)
    field: str = ""
    start_date: str
    end_date: Optional[str] = None
    gpa: Optional[float] = None
    description: Optional[str] = None


class EducationUpdate(CamelModel):
    institution: Optional[str] = Field(None, min_length=1)
    degree: Optional[str] = Field(None, min_length=1)
    field: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    gpa: Optional[float] = None
    description: Optional[str] = None


class UserRead(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    full_name: str
    email: str
    headline: str
    bio: str
    profile_picture_url: str
    portfolio_domain: Optional[str] = None
    admin_domain: Optional[str] = None
    social_links: dict[str, Optional[str]] = Field(default_factory=dict)
    skills: list[str] = Field(default_factory=list)
    experience: list[dict] = Field(default_factory=list)
    education: list[dict] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileStats(CamelModel):
    total_projects: int
    total_experience: int
    skills_count: int
    profile_completeness: int


class UserProfileResponse(CamelModel):
    user: UserRead
    stats: ProfileStats


class DomainsUpdateRequest(CamelModel):
    portfolio: Optional[str] = Field(None, max_length=255)
    admin: Optional[str] = Field(None, max_length=255)


class DomainsResponse(CamelModel):
    portfolio: Optional[str] = None
    admin: Optional[str] = None


class DomainValidationResponse(CamelModel):
    domain: str
    user_id: str
    valid: bool
