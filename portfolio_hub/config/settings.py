"""Application settings and configuration"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
    )

    # Application
    APP_NAME: str = "Portfolio Hub"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Host routing: requests for this host render the marketing page
    ROOT_DOMAIN: str = Field(
        default="localhost:3000",
        validation_alias=AliasChoices("ROOT_DOMAIN", "NEXT_PUBLIC_ROOT_DOMAIN"),
    )

    # Database (JSON config first, URL second, local file last)
    DATABASE_CONFIG_JSON: Optional[str] = None
    DATABASE_URL: Optional[str] = None
    LOCAL_DATABASE_URL: str = "sqlite:///./portfolio_hub.db"

    # GitHub API
    GITHUB_USERNAME: Optional[str] = None
    GITHUB_TOKEN: Optional[str] = None
    GITHUB_TOP_REPOS: int = 6

    # LeetCode public mirror
    LEETCODE_USERNAME: Optional[str] = None

    # LinkedIn API (official profile needs an approved access token)
    LINKEDIN_ACCESS_TOKEN: Optional[str] = None
    LINKEDIN_USER_ID: Optional[str] = None
    LINKEDIN_FIRST_NAME: str = ""
    LINKEDIN_LAST_NAME: str = ""
    LINKEDIN_HEADLINE: str = ""
    LINKEDIN_LOCATION: str = ""
    LINKEDIN_CONNECTIONS: int = 500  # LinkedIn does not expose this via API
    LINKEDIN_FOLLOWERS: int = 1200

    # Upstream client resilience
    STATS_CACHE_TTL_SECONDS: int = 3600
    UPSTREAM_TIMEOUT_SECONDS: float = 10.0
    UPSTREAM_MAX_RETRIES: int = 2
    UPSTREAM_BACKOFF_BASE_SECONDS: float = 0.5
    UPSTREAM_BACKOFF_MAX_SECONDS: float = 4.0
    USER_AGENT: str = "PortfolioHub/1.0"


settings = Settings()
