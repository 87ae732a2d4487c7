"""Pydantic schemas for GitHub API rate limit data.

These schemas represent rate limit information from:
- GET /rate_limit API endpoint
- x-ratelimit-* response headers
- GET /user (token validation)
"""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Self

from pydantic import BaseModel, Field, computed_field


class RateLimitResource(StrEnum):
    """GitHub rate limit resource categories reported by /rate_limit.

    Each category has its own separate quota. Most operations use 'core'.
    Windows are keyed by plain strings, so categories GitHub adds later
    are still reported; this enum only fixes the display order.
    See: https://docs.github.com/en/rest/rate-limit/rate-limit
    """

    CORE = "core"
    SEARCH = "search"
    GRAPHQL = "graphql"
    INTEGRATION_MANIFEST = "integration_manifest"
    SOURCE_IMPORT = "source_import"
    CODE_SCANNING_UPLOAD = "code_scanning_upload"
    ACTIONS_RUNNER_REGISTRATION = "actions_runner_registration"
    SCIM = "scim"


class RateLimitStatus(StrEnum):
    """Rate limit health status.

    Thresholds are configurable but defaults are:
    - HEALTHY: > 50% remaining
    - WARNING: 20-50% remaining
    - CRITICAL: below 20% remaining
    - EXHAUSTED: 0 remaining
    """

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"
    EXHAUSTED = "exhausted"


class RateLimitWindow(BaseModel):
    """Quota state for one rate limit resource category."""

    resource: str = Field(description="Resource category name")
    limit: int = Field(ge=0, description="Maximum requests allowed in the window")
    remaining: int = Field(ge=0, description="Requests remaining in current window")
    used: int = Field(ge=0, description="Requests used in current window")
    reset: int = Field(ge=0, description="Unix timestamp when the window resets")

    @property
    def reset_at(self) -> datetime:
        """UTC datetime when the window resets."""
        return datetime.fromtimestamp(self.reset, tz=UTC)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def reset_time_formatted(self) -> str:
        """Human readable reset time."""
        return self.reset_at.strftime("%Y-%m-%d %H:%M:%S UTC")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def usage_percent(self) -> float:
        """Percentage of the quota consumed (0.0 to 100.0)."""
        if self.limit == 0:
            return 100.0
        return (self.used / self.limit) * 100

    @property
    def remaining_percent(self) -> float:
        return 100.0 - self.usage_percent

    @property
    def seconds_until_reset(self) -> int:
        """Seconds until the window resets (0 if already past)."""
        delta = self.reset_at - datetime.now(UTC)
        return max(0, int(delta.total_seconds()))

    def get_status(
        self,
        healthy_threshold: float = 50.0,
        warning_threshold: float = 20.0,
        critical_threshold: float = 5.0,
    ) -> RateLimitStatus:
        """Determine rate limit health status.

        Args:
            healthy_threshold: % remaining above which is HEALTHY
            warning_threshold: % remaining above which is WARNING (below healthy)
            critical_threshold: % remaining above which is CRITICAL (below warning)
        """
        if self.remaining == 0:
            return RateLimitStatus.EXHAUSTED
        if self.remaining_percent >= healthy_threshold:
            return RateLimitStatus.HEALTHY
        if self.remaining_percent >= warning_threshold:
            return RateLimitStatus.WARNING
        return RateLimitStatus.CRITICAL

    @classmethod
    def from_resource(cls, resource: str, data: dict[str, Any]) -> Self:
        """Parse one entry of the /rate_limit `resources` object.

        Missing or null counters default to 0, matching what GitHub omits
        for categories that are not applicable to the token.
        """
        return cls(
            resource=resource,
            limit=int(data.get("limit") or 0),
            remaining=int(data.get("remaining") or 0),
            used=int(data.get("used") or 0),
            reset=int(data.get("reset") or 0),
        )


class RateLimitReport(BaseModel):
    """Snapshot of every rate limit window, taken fresh per query.

    On failure `windows` is empty and `message` explains why; the
    query never raises.
    """

    windows: dict[str, RateLimitWindow] = Field(
        default_factory=dict, description="Windows by resource name"
    )
    message: str | None = Field(default=None, description="Error message (if any)")
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def ok(self) -> bool:
        return self.message is None

    def get(self, resource: str | RateLimitResource) -> RateLimitWindow | None:
        return self.windows.get(str(resource))

    @property
    def core(self) -> RateLimitWindow | None:
        return self.get(RateLimitResource.CORE)

    def ordered_windows(self) -> list[RateLimitWindow]:
        """Windows in display order: known categories first, then the rest by name."""
        known = [str(r) for r in RateLimitResource]
        names = [n for n in known if n in self.windows]
        names += sorted(n for n in self.windows if n not in known)
        return [self.windows[n] for n in names]

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Self:
        """Parse from the GitHub /rate_limit API response.

        Every entry under `resources` becomes a window; entries that
        are null or not objects are skipped, as is a `resources` value
        that is not an object.
        """
        resources = data.get("resources") if isinstance(data, dict) else None
        if not isinstance(resources, dict):
            resources = {}
        windows = {
            name: RateLimitWindow.from_resource(name, entry)
            for name, entry in resources.items()
            if isinstance(entry, dict)
        }
        return cls(windows=windows)

    @classmethod
    def from_error(cls, message: str) -> Self:
        return cls(message=message)


class TokenTestResult(BaseModel):
    """Result of validating the configured GitHub token against GET /user."""

    valid: bool = Field(description="Whether the token is valid")
    username: str | None = Field(default=None, description="GitHub login (if valid)")
    message: str = Field(min_length=1, description="Validation message")
    error_type: str | None = Field(default=None, description="Error type (if invalid)")

    @classmethod
    def success(cls, username: str) -> Self:
        return cls(
            valid=True,
            username=username,
            message=f"GitHub token is valid. Authenticated as '{username}'.",
        )

    @classmethod
    def failure(cls, error_type: str, message: str) -> Self:
        return cls(valid=False, error_type=error_type, message=message)
