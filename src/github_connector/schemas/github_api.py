"""Pydantic schemas for parsing GitHub API responses.

These schemas map directly to the GitHub REST API response structure,
keeping only the fields the connector consumes.
See: https://docs.github.com/en/rest/repos/repos
     https://docs.github.com/en/rest/commits/commits
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GitHubPayload(BaseModel):
    """Base for upstream payloads: unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class GitHubUser(GitHubPayload):
    """GitHub user object from GET /user."""

    login: str = Field(description="GitHub username")
    id: int | None = Field(default=None, description="GitHub user ID")


class GitHubRepository(GitHubPayload):
    """Repository object from GET /users/{owner}/repos."""

    name: str = Field(description="Short repository name")
    full_name: str = Field(description="Owner-qualified name (owner/name)")


class GitHubCommitAuthor(GitHubPayload):
    """Commit author info (from git, not GitHub user)."""

    name: str = Field(description="Author name")
    email: str | None = Field(default=None, description="Author email")
    date: datetime = Field(description="Commit date (UTC)")


class GitHubCommitDetail(GitHubPayload):
    """Nested commit detail object."""

    author: GitHubCommitAuthor = Field(description="Commit author info")
    message: str = Field(description="Commit message")


class GitHubCommit(GitHubPayload):
    """Commit object from GET /repos/{owner}/{repo}/commits."""

    sha: str | None = Field(default=None, description="Commit SHA")
    commit: GitHubCommitDetail = Field(description="Commit details")
