"""Result objects for activity fetching.

Structured results keep the data and the reason it may be partial
side by side, so callers never have to guess from an empty list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from github_connector.schemas.activity import (
    ActivityResponse,
    CommitRecord,
    RepoActivity,
    RepositoryRef,
)

from .enums import FetchOutcome, StopReason


@dataclass
class RepoListing:
    """Repositories listed for an owner and why listing stopped."""

    repos: list[RepositoryRef] = field(default_factory=list)
    outcome: FetchOutcome = FetchOutcome.COMPLETED


@dataclass
class CommitBatch:
    """Commits fetched for one repository and why fetching stopped."""

    commits: list[CommitRecord] = field(default_factory=list)
    outcome: FetchOutcome = FetchOutcome.COMPLETED


@dataclass
class ActivityResult:
    """Aggregate result of one activity request.

    `activities` is always safe to use; the remaining fields explain
    how complete it is.
    """

    owner: str
    activities: list[RepoActivity] = field(default_factory=list)
    """Per-repository activity, in listing order."""

    listing_outcome: FetchOutcome = FetchOutcome.COMPLETED
    """Why repository listing stopped."""

    repos_listed: int = 0
    """Repositories returned by the listing (before the deadline check)."""

    stop_reason: StopReason = StopReason.COMPLETED
    """Why the orchestrator stopped iterating repositories."""

    repo_outcomes: dict[str, FetchOutcome] = field(default_factory=dict)
    """Commit fetch outcome per repository name."""

    duration_seconds: float = 0.0

    def add(self, repo: RepositoryRef, batch: CommitBatch) -> RepoActivity:
        activity = RepoActivity(repository_name=repo.name, commits=batch.commits)
        self.activities.append(activity)
        self.repo_outcomes[repo.name] = batch.outcome
        return activity

    @property
    def total_commits(self) -> int:
        return sum(len(a.commits) for a in self.activities)

    @property
    def repos_processed(self) -> int:
        return len(self.activities)

    @property
    def rate_limited(self) -> bool:
        """True when the listing itself gave up because of rate limiting."""
        return self.listing_outcome.hit_rate_limit

    @property
    def is_partial(self) -> bool:
        """True when anything was cut short by a limit, error or the deadline."""
        if self.stop_reason is not StopReason.COMPLETED:
            return True
        if self.listing_outcome not in (FetchOutcome.COMPLETED, FetchOutcome.CAPPED):
            return True
        return any(
            outcome.hit_rate_limit
            or outcome
            in (
                FetchOutcome.INTERRUPTED,
                FetchOutcome.UPSTREAM_ERROR,
                FetchOutcome.TRANSPORT_FAILURE,
            )
            for outcome in self.repo_outcomes.values()
        )

    def to_response(self) -> ActivityResponse:
        """Metadata + data body, as served to API consumers."""
        return ActivityResponse.from_activities(self.activities)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        body = self.to_response().model_dump(mode="json")
        body["status"] = {
            "owner": self.owner,
            "stop_reason": self.stop_reason.value,
            "listing_outcome": self.listing_outcome.value,
            "repos_listed": self.repos_listed,
            "repos_processed": self.repos_processed,
            "partial": self.is_partial,
            "duration_seconds": round(self.duration_seconds, 2),
            "repositories": {name: o.value for name, o in self.repo_outcomes.items()},
        }
        return body
