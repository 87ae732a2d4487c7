"""GitHub Connector Service - entry point for all connector operations.

Owns one GitHubClient and hands out fresh per-call state: every
method builds its own FetchBudget, so concurrent or repeated calls
never share deadlines, retry counters or collected data.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from github_connector.config import Settings, get_settings
from github_connector.github.rate_limit import (
    RateLimitGuard,
    RateLimitReport,
    RateLimitStatusReporter,
    TokenTestResult,
    TokenValidator,
)
from github_connector.logging import get_logger

from .budget import FetchBudget
from .commit_fetcher import CommitFetcher
from .orchestrator import ActivityOrchestrator
from .repo_lister import RepoLister
from .results import ActivityResult, CommitBatch, RepoListing

if TYPE_CHECKING:
    from github_connector.github.client import GitHubClient

logger = get_logger(__name__)


class GitHubConnectorService:
    """Facade over the activity, rate limit and token operations.

    Usage:
        async with GitHubClient() as client:
            service = GitHubConnectorService(client)
            result = await service.fetch_activity("octocat")
            print(result.to_response().meta.total_commits)
    """

    def __init__(
        self,
        client: GitHubClient,
        settings: Settings | None = None,
        guard: RateLimitGuard | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: GitHub API client
            settings: Application settings (defaults to get_settings())
            guard: Rate limit wait policy (defaults to one built from settings)
        """
        self._client = client
        self._settings = settings or get_settings()
        self._config = self._settings.fetch
        self._guard = guard or RateLimitGuard.from_config(self._config)
        self._orchestrator = ActivityOrchestrator(client, self._guard, self._config)

    def _budget(
        self,
        *,
        max_repos: int | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> FetchBudget:
        return FetchBudget.from_config(
            self._config, max_repos=max_repos, cancel_event=cancel_event
        )

    async def fetch_activity(
        self,
        owner: str,
        cancel_event: asyncio.Event | None = None,
        *,
        max_repos: int | None = None,
    ) -> ActivityResult:
        """Recent commits for each of the owner's repositories."""
        budget = self._budget(max_repos=max_repos, cancel_event=cancel_event)
        return await self._orchestrator.fetch_activity(owner, budget=budget)

    async def fetch_quick_activity(
        self,
        owner: str,
        cancel_event: asyncio.Event | None = None,
    ) -> ActivityResult:
        """Activity for the first listed repository only."""
        logger.debug("Quick activity fetch for {}", owner)
        return await self.fetch_activity(owner, cancel_event, max_repos=1)

    async def fetch_all_repos(
        self,
        owner: str,
        *,
        max_repos: int | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> RepoListing:
        """Repositories for an owner, capped at `max_repos`."""
        budget = self._budget(max_repos=max_repos, cancel_event=cancel_event)
        lister = RepoLister(self._client, self._guard, sleep=budget.sleep)
        return await lister.list_repos(
            owner,
            page_size=self._config.repos_page_size,
            max_repos=budget.max_repos,
            max_wait_ms=budget.max_wait_ms,
        )

    async def fetch_commits(
        self,
        owner: str,
        repo: str,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> CommitBatch:
        """Most recent commits for one repository."""
        budget = self._budget(cancel_event=cancel_event)
        fetcher = CommitFetcher(
            self._client,
            self._guard,
            max_commits=budget.max_commits_per_repo,
            max_wait_ms=budget.max_wait_ms,
            max_retries=budget.max_retries,
            sleep=budget.sleep,
        )
        return await fetcher.fetch_commits(owner, repo, page_size=self._config.commits_page_size)

    async def fetch_rate_limit_info(self) -> RateLimitReport:
        """Snapshot of every rate limit window."""
        return await RateLimitStatusReporter(self._client).fetch()

    async def test_token(self) -> TokenTestResult:
        """Check that the configured token authenticates."""
        return await TokenValidator(self._client).test()
