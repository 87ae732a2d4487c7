"""Domain schemas for repository activity.

These are the values the connector hands back to its callers:
repository references, commit records and per-repository activity,
plus the metadata envelope used for serialized output.
"""

from datetime import UTC, datetime
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from .github_api import GitHubCommit, GitHubRepository


class RepositoryRef(BaseModel):
    """Immutable reference to a repository (owner + short name)."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(min_length=1, description="GitHub org or user")
    name: str = Field(min_length=1, description="Repository name")

    @property
    def full_name(self) -> str:
        """Owner-qualified name (owner/name)."""
        return f"{self.owner}/{self.name}"

    @classmethod
    def from_full_name(cls, full_name: str) -> Self:
        """Create from an owner-qualified name like 'octocat/hello-world'.

        Raises:
            ValueError: If the name is not in owner/name format
        """
        owner, name = parse_repo_string(full_name)
        return cls(owner=owner, name=name)

    @classmethod
    def from_github(cls, repo: GitHubRepository) -> Self:
        """Create from an upstream repository payload."""
        return cls.from_full_name(repo.full_name)


class CommitRecord(BaseModel):
    """A single commit as reported to callers."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(description="Commit message")
    author_name: str = Field(description="Git author name")
    timestamp: datetime = Field(description="Authored date (timezone-aware)")

    @classmethod
    def from_github(cls, commit: GitHubCommit) -> Self:
        """Create from an upstream commit payload."""
        author = commit.commit.author
        timestamp = author.date
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        return cls(
            message=commit.commit.message,
            author_name=author.name,
            timestamp=timestamp,
        )


class RepoActivity(BaseModel):
    """Recent commits of one repository, most recent first."""

    repository_name: str = Field(description="Short repository name")
    commits: list[CommitRecord] = Field(default_factory=list)


class ActivityMeta(BaseModel):
    """Summary counts for an activity response."""

    total_repos: int = Field(ge=0, description="Number of repositories")
    total_commits: int = Field(ge=0, description="Total commits across all repos")
    fetched_at: datetime = Field(description="When the data was fetched")

    @classmethod
    def from_activities(cls, activities: list[RepoActivity]) -> Self:
        return cls(
            total_repos=len(activities),
            total_commits=sum(len(a.commits) for a in activities),
            fetched_at=datetime.now(UTC),
        )


class ActivityResponse(BaseModel):
    """Serialized activity body: metadata plus per-repository data."""

    meta: ActivityMeta
    data: list[RepoActivity]

    @classmethod
    def from_activities(cls, activities: list[RepoActivity]) -> Self:
        return cls(meta=ActivityMeta.from_activities(activities), data=activities)


def parse_repo_string(repo: str) -> tuple[str, str]:
    """Split 'owner/name' into its two parts.

    Raises:
        ValueError: If either part is missing
    """
    owner, sep, name = repo.partition("/")
    if not sep or not owner or not name or "/" in name:
        raise ValueError(f"Repository must be in owner/name format: {repo!r}")
    return owner, name
