"""Activity Orchestrator - Recent commits across an owner's repositories.

Lists the owner's repositories once, then fetches commits for each
one sequentially in listing order. Every request gets its own
FetchBudget; nothing carries over between calls.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from github_connector.config import FetchConfig, get_settings
from github_connector.logging import bind_owner

from .budget import FetchBudget
from .commit_fetcher import CommitFetcher
from .enums import FetchOutcome, StopReason
from .repo_lister import RepoLister
from .results import ActivityResult

if TYPE_CHECKING:
    from github_connector.github.client import GitHubClient
    from github_connector.github.rate_limit.guard import RateLimitGuard


class ActivityOrchestrator:
    """Assembles per-repository commit activity for one owner.

    Never raises for upstream conditions: rate limits, missing
    repositories, errors and the deadline all end up as outcome
    fields on the returned ActivityResult.

    Usage:
        async with GitHubClient() as client:
            orchestrator = ActivityOrchestrator(client, RateLimitGuard())
            result = await orchestrator.fetch_activity("octocat")
            for activity in result.activities:
                print(activity.repository_name, len(activity.commits))
    """

    def __init__(
        self,
        client: GitHubClient,
        guard: RateLimitGuard,
        config: FetchConfig | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            client: GitHub API client
            guard: Rate limit wait policy
            config: Fetch limits (defaults to Settings.fetch)
        """
        self._client = client
        self._guard = guard
        self._config = config or get_settings().fetch

    def new_budget(
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
        *,
        cancel_event: asyncio.Event | None = None,
        max_repos: int | None = None,
        budget: FetchBudget | None = None,
    ) -> ActivityResult:
        """Fetch recent commits for up to `max_repos` repositories.

        The deadline and cancellation are checked before each
        repository and cut backoff waits short; an in-flight request
        is never interrupted.

        Args:
            owner: User or organization login
            cancel_event: Set to stop early with a partial result
            max_repos: Override of the configured repository cap
            budget: Pre-built budget (takes precedence over the two above)

        Returns:
            ActivityResult with the activities assembled so far
        """
        if budget is None:
            budget = self.new_budget(max_repos=max_repos, cancel_event=cancel_event)

        log = bind_owner(owner)
        start = time.monotonic()
        result = ActivityResult(owner=owner)

        lister = RepoLister(self._client, self._guard, sleep=budget.sleep)
        fetcher = CommitFetcher(
            self._client,
            self._guard,
            max_commits=budget.max_commits_per_repo,
            max_wait_ms=budget.max_wait_ms,
            max_retries=budget.max_retries,
            sleep=budget.sleep,
        )

        listing = await lister.list_repos(
            owner,
            page_size=self._config.repos_page_size,
            max_repos=budget.max_repos,
            max_wait_ms=budget.max_wait_ms,
        )
        result.listing_outcome = listing.outcome
        result.repos_listed = len(listing.repos)

        if listing.outcome.hit_rate_limit and not listing.repos:
            log.warning("Rate limited while listing repositories for {}, no activity fetched", owner)

        if listing.outcome is FetchOutcome.INTERRUPTED:
            result.stop_reason = _interrupted_reason(budget)

        for index, repo in enumerate(listing.repos, start=1):
            if result.stop_reason is not StopReason.COMPLETED:
                break
            reason = budget.stop_reason()
            if reason is not None:
                result.stop_reason = reason
                break

            log.debug("[{}/{}] Fetching commits for {}", index, len(listing.repos), repo.full_name)
            batch = await fetcher.fetch_commits(
                repo.owner, repo.name, page_size=self._config.commits_page_size
            )
            result.add(repo, batch)

            if batch.outcome is FetchOutcome.INTERRUPTED:
                result.stop_reason = _interrupted_reason(budget)

        if result.stop_reason is not StopReason.COMPLETED:
            log.warning(
                "Stopping activity fetch for {} ({}) after {}/{} repositories",
                owner,
                result.stop_reason.value,
                result.repos_processed,
                len(listing.repos),
            )

        result.duration_seconds = time.monotonic() - start

        log.info(
            "Activity fetch for {} finished ({}): {} repositories, {} commits in {:.1f}s",
            owner,
            result.stop_reason.value,
            result.repos_processed,
            result.total_commits,
            result.duration_seconds,
        )
        return result


def _interrupted_reason(budget: FetchBudget) -> StopReason:
    """Why a backoff wait was cut short. A truncated wait ends at the deadline."""
    return budget.stop_reason() or StopReason.DEADLINE_EXCEEDED
