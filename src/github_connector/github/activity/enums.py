"""Enums for activity fetching."""

from enum import Enum, StrEnum

from github_connector.github.exceptions import (
    GitHubClientError,
    GitHubEmptyRepositoryError,
    GitHubNotFoundError,
    GitHubTransportError,
)


class FetchOutcome(StrEnum):
    """Why a repository listing or commit fetch stopped.

    Every expected upstream condition ends a fetch with one of these
    instead of an exception; the data collected so far is kept unless
    the outcome says the repository does not exist or has no commits.
    """

    COMPLETED = "completed"
    """Upstream ran out of pages."""

    CAPPED = "capped"
    """The configured maximum was reached."""

    NOT_FOUND = "not_found"
    """Owner or repository does not exist or is inaccessible (404)."""

    EMPTY_REPOSITORY = "empty_repository"
    """Repository has no commits (409)."""

    RATE_LIMITED = "rate_limited"
    """Rate limited and the required wait exceeded the maximum."""

    RETRIES_EXHAUSTED = "retries_exhausted"
    """Rate limited on every allowed retry."""

    INTERRUPTED = "interrupted"
    """A backoff wait was cut short by the deadline or cancellation."""

    UPSTREAM_ERROR = "upstream_error"
    """Any other non-success status."""

    TRANSPORT_FAILURE = "transport_failure"
    """Network failure or undecodable response."""

    @property
    def hit_rate_limit(self) -> bool:
        return self in (FetchOutcome.RATE_LIMITED, FetchOutcome.RETRIES_EXHAUSTED)

    @classmethod
    def from_error(cls, error: GitHubClientError) -> "FetchOutcome":
        """Outcome for a non-rate-limit client error."""
        if isinstance(error, GitHubNotFoundError):
            return cls.NOT_FOUND
        if isinstance(error, GitHubEmptyRepositoryError):
            return cls.EMPTY_REPOSITORY
        if isinstance(error, GitHubTransportError):
            return cls.TRANSPORT_FAILURE
        return cls.UPSTREAM_ERROR


class StopReason(StrEnum):
    """Why the orchestrator stopped iterating repositories."""

    COMPLETED = "completed"
    DEADLINE_EXCEEDED = "deadline_exceeded"
    CANCELLED = "cancelled"


class OutputFormat(str, Enum):
    """Output format for CLI commands."""

    TEXT = "text"
    """Human-readable text output."""

    JSON = "json"
    """Machine-readable JSON output."""
