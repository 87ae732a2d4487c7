"""Repository listing for an owner.

Pages through GET /users/{owner}/repos until a short or empty page,
or until the repository cap is reached. Rate limit responses are
retried on the same page for as long as each wait stays within
policy; there is no retry-count cap here, unlike commit fetching, and
waits without a reset header stay at the base backoff.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from github_connector.github.exceptions import GitHubClientError, GitHubRateLimitError
from github_connector.logging import bind_owner
from github_connector.schemas.activity import RepositoryRef

from .budget import Sleeper, plain_sleep
from .enums import FetchOutcome
from .results import RepoListing

if TYPE_CHECKING:
    from github_connector.github.client import GitHubClient
    from github_connector.github.rate_limit.guard import RateLimitGuard


class RepoStream:
    """Lazy, capacity-bounded iteration over one owner's repositories.

    Each `async for` starts a fresh listing; `outcome` is set once
    the iteration finishes.
    """

    def __init__(
        self,
        client: GitHubClient,
        guard: RateLimitGuard,
        sleep: Sleeper,
        owner: str,
        *,
        page_size: int,
        max_repos: int,
        max_wait_ms: int,
    ) -> None:
        self._client = client
        self._guard = guard
        self._sleep = sleep
        self.owner = owner
        self.page_size = page_size
        self.max_repos = max_repos
        self.max_wait_ms = max_wait_ms
        self.outcome: FetchOutcome | None = None

    def __aiter__(self) -> AsyncIterator[RepositoryRef]:
        return self._run()

    async def _run(self) -> AsyncIterator[RepositoryRef]:
        log = bind_owner(self.owner)
        self.outcome = None
        page = 1
        listed = 0

        log.info("Fetching up to {} repositories for {}", self.max_repos, self.owner)

        while listed < self.max_repos:
            try:
                result = await self._client.list_repos_page(
                    self.owner, page=page, per_page=self.page_size
                )
            except GitHubRateLimitError as e:
                self._guard.log_rate_limit(e.headers, "repositories", self.owner)
                wait_ms = self._guard.compute_wait(e.headers, 0)
                if not self._guard.is_within_policy(wait_ms, self.max_wait_ms):
                    log.warning(
                        "Wait time {}ms exceeds maximum allowed ({}ms), aborting repository fetch",
                        wait_ms,
                        self.max_wait_ms,
                    )
                    self.outcome = FetchOutcome.RATE_LIMITED
                    return
                log.warning(
                    "Rate limited while fetching repositories for {} - waiting {} ms",
                    self.owner,
                    wait_ms,
                )
                if not await self._sleep(wait_ms / 1000):
                    self.outcome = FetchOutcome.INTERRUPTED
                    return
                continue
            except GitHubClientError as e:
                log.error("Error fetching repositories for {}: {}", self.owner, e)
                self.outcome = FetchOutcome.from_error(e)
                return

            if result.raw_count == 0:
                break

            for repo in result.items:
                if listed >= self.max_repos:
                    break
                try:
                    ref = RepositoryRef.from_github(repo)
                except ValueError:
                    log.debug("Skipping repository with malformed full_name {!r}", repo.full_name)
                    continue
                listed += 1
                yield ref

            if listed >= self.max_repos:
                log.info("Reached maximum repository limit ({}) for {}", self.max_repos, self.owner)
                self.outcome = FetchOutcome.CAPPED
                return

            if result.raw_count < self.page_size:
                break
            page += 1

        self.outcome = FetchOutcome.COMPLETED


class RepoLister:
    """Lists up to `max_repos` repositories for an owner.

    Usage:
        lister = RepoLister(client, RateLimitGuard())
        listing = await lister.list_repos("octocat", page_size=100, max_repos=20,
                                          max_wait_ms=120_000)
        for repo in listing.repos:
            print(repo.full_name)
    """

    def __init__(
        self,
        client: GitHubClient,
        guard: RateLimitGuard,
        sleep: Sleeper = plain_sleep,
    ) -> None:
        """Initialize the lister.

        Args:
            client: GitHub API client
            guard: Rate limit wait policy
            sleep: Backoff suspension; returns False when interrupted
        """
        self._client = client
        self._guard = guard
        self._sleep = sleep

    def stream(
        self,
        owner: str,
        *,
        page_size: int,
        max_repos: int,
        max_wait_ms: int,
    ) -> RepoStream:
        """Lazy listing; repositories are requested only as they are consumed."""
        return RepoStream(
            self._client,
            self._guard,
            self._sleep,
            owner,
            page_size=page_size,
            max_repos=max_repos,
            max_wait_ms=max_wait_ms,
        )

    async def list_repos(
        self,
        owner: str,
        page_size: int,
        max_repos: int,
        max_wait_ms: int,
    ) -> RepoListing:
        """List repositories, never raising for upstream conditions.

        Args:
            owner: User or organization login
            page_size: Repositories per request
            max_repos: Hard cap on returned repositories
            max_wait_ms: Longest acceptable single rate limit wait

        Returns:
            RepoListing with the repositories in listing order and the
            reason listing stopped
        """
        stream = self.stream(
            owner, page_size=page_size, max_repos=max_repos, max_wait_ms=max_wait_ms
        )
        repos = [repo async for repo in stream]
        outcome = stream.outcome or FetchOutcome.COMPLETED

        bind_owner(owner).info(
            "Fetched {} repositories for {} ({})", len(repos), owner, outcome.value
        )
        return RepoListing(repos=repos, outcome=outcome)
