"""Commit activity fetching.

This package provides:
- RepoLister: capped, paginated repository listing
- CommitFetcher: capped commit retrieval following Link headers
- ActivityOrchestrator: per-owner assembly under a FetchBudget
- GitHubConnectorService: facade used by the CLI
"""

from .budget import MAX_COMMITS_PER_REPO, FetchBudget, Sleeper, plain_sleep
from .commit_fetcher import CommitFetcher, CommitStream
from .enums import FetchOutcome, OutputFormat, StopReason
from .orchestrator import ActivityOrchestrator
from .repo_lister import RepoLister, RepoStream
from .results import ActivityResult, CommitBatch, RepoListing
from .service import GitHubConnectorService

__all__ = [
    "MAX_COMMITS_PER_REPO",
    "ActivityOrchestrator",
    "ActivityResult",
    "CommitBatch",
    "CommitFetcher",
    "CommitStream",
    "FetchBudget",
    "FetchOutcome",
    "GitHubConnectorService",
    "OutputFormat",
    "RepoListing",
    "RepoLister",
    "RepoStream",
    "Sleeper",
    "StopReason",
    "plain_sleep",
]
