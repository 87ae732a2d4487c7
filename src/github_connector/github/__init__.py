"""GitHub API client module.

This module provides:
- GitHubClient: Async GitHub API client for the connector's endpoints
- Rate limit handling: RateLimitGuard, RateLimitStatusReporter, TokenValidator
- Activity fetching: RepoLister, CommitFetcher, ActivityOrchestrator
- GitHubConnectorService: facade over all of the above
"""

from .client import GitHubClient, Page
from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubEmptyRepositoryError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubTransportError,
    GitHubUpstreamError,
)
from .rate_limit import (
    RateLimitGuard,
    RateLimitReport,
    RateLimitStatus,
    RateLimitStatusReporter,
    RateLimitWindow,
    TokenTestResult,
    TokenValidator,
)
from .activity import (  # noqa: I001
    ActivityOrchestrator,
    ActivityResult,
    CommitFetcher,
    FetchBudget,
    FetchOutcome,
    GitHubConnectorService,
    RepoLister,
    StopReason,
)

__all__ = [
    # Client
    "GitHubClient",
    "Page",
    # Exceptions
    "GitHubAuthenticationError",
    "GitHubClientError",
    "GitHubEmptyRepositoryError",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
    "GitHubTransportError",
    "GitHubUpstreamError",
    # Rate limits
    "RateLimitGuard",
    "RateLimitReport",
    "RateLimitStatus",
    "RateLimitStatusReporter",
    "RateLimitWindow",
    "TokenTestResult",
    "TokenValidator",
    # Activity
    "ActivityOrchestrator",
    "ActivityResult",
    "CommitFetcher",
    "FetchBudget",
    "FetchOutcome",
    "GitHubConnectorService",
    "RepoLister",
    "StopReason",
]
