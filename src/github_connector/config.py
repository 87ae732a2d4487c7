"""Configuration settings for GitHub Connector."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RateLimitConfig(BaseModel):
    """Configuration for rate limit health reporting.

    Controls the thresholds used to label a rate limit window
    as healthy, warning or critical.
    """

    healthy_threshold_pct: float = Field(
        default=50.0,
        ge=0.0,
        le=100.0,
        description="% remaining above which status is HEALTHY",
    )
    warning_threshold_pct: float = Field(
        default=20.0,
        ge=0.0,
        le=100.0,
        description="% remaining above which status is WARNING (below healthy)",
    )
    critical_threshold_pct: float = Field(
        default=5.0,
        ge=0.0,
        le=100.0,
        description="% remaining above which status is CRITICAL (below warning)",
    )


class FetchConfig(BaseModel):
    """Configuration for repository and commit fetching.

    Controls page sizes, caps, backoff timing and the overall
    time budget of a single activity request.
    """

    # Page sizes (items per wire request)
    repos_page_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Repositories requested per page",
    )
    commits_page_size: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Commits requested per page",
    )

    # Caps
    max_repos: int = Field(
        default=20,
        ge=1,
        description="Maximum repositories processed per owner",
    )

    # Rate limit handling
    max_wait_time_ms: int = Field(
        default=120_000,
        ge=0,
        description="Longest single rate limit wait that is acceptable",
    )
    max_retry_attempts: int = Field(
        default=4,
        ge=1,
        description="Rate limit retries per repository before giving up on its commits",
    )
    backoff_base_ms: int = Field(
        default=5_000,
        ge=1,
        description="Initial backoff when no reset header is present",
    )
    backoff_cap_ms: int = Field(
        default=120_000,
        ge=1,
        description="Upper bound for exponential backoff",
    )

    # Time budgets
    request_timeout_ms: int = Field(
        default=300_000,
        ge=0,
        description="Overall budget for one activity request (0 = unlimited)",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Connect/read timeout for a single HTTP call",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging behavior.

    Controls file logging, rotation, and output format.
    """

    log_file: str | None = Field(
        default=None,
        description="Optional path for file logging (enables rotation)",
    )
    rotation: str = Field(
        default="10 MB",
        description="When to rotate log file (e.g., '10 MB', '1 day')",
    )
    retention: str = Field(
        default="7 days",
        description="How long to keep rotated logs",
    )
    serialize: bool = Field(
        default=False,
        description="If True, output JSON format to file",
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # GitHub API
    # --------------------------------------------------------------------------
    github_token: str = Field(
        default="",
        description="GitHub personal access token",
    )
    github_api_base_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API",
    )

    # --------------------------------------------------------------------------
    # Application
    # --------------------------------------------------------------------------
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # --------------------------------------------------------------------------
    # Fetching & Rate Limits
    # --------------------------------------------------------------------------
    fetch: FetchConfig = Field(
        default_factory=FetchConfig,
        description="Repository/commit fetch configuration",
    )
    rate_limit: RateLimitConfig = Field(
        default_factory=RateLimitConfig,
        description="Rate limit reporting configuration",
    )

    # --------------------------------------------------------------------------
    # Logging Configuration
    # --------------------------------------------------------------------------
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration (file output, rotation)",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
