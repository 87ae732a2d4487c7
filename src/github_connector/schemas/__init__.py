"""Pydantic schemas for GitHub Connector.

This module provides upstream payload parsing and the activity
models returned to callers.
"""

from .activity import (
    ActivityMeta,
    ActivityResponse,
    CommitRecord,
    RepoActivity,
    RepositoryRef,
    parse_repo_string,
)
from .github_api import (
    GitHubCommit,
    GitHubCommitAuthor,
    GitHubCommitDetail,
    GitHubRepository,
    GitHubUser,
)

__all__ = [
    # Activity
    "ActivityMeta",
    "ActivityResponse",
    "CommitRecord",
    "RepoActivity",
    "RepositoryRef",
    "parse_repo_string",
    # GitHub API
    "GitHubCommit",
    "GitHubCommitAuthor",
    "GitHubCommitDetail",
    "GitHubRepository",
    "GitHubUser",
]
