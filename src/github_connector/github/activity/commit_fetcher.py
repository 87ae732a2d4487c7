"""Commit fetching for a single repository.

Fetches at most MAX_COMMITS_PER_REPO commits, following the Link
header's rel="next" URL verbatim between pages. Page size only
controls how many commits one request returns; the cap is separate.

    Fetching --(items, room left, next link)--> Fetching (next URL)
    Fetching --(items, cap reached / no next link / empty page)--> Done
    Fetching --(404 / 409)--> Done, empty
    Fetching --(403 / 429)--> WaitingBackoff
    Fetching --(other error)--> Done, keep collected
    WaitingBackoff --(wait > max wait)--> Done, keep collected
    WaitingBackoff --(slept, attempts == max)--> Done, keep collected
    WaitingBackoff --(slept)--> Fetching (same URL)
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from github_connector.github.exceptions import GitHubClientError, GitHubRateLimitError
from github_connector.logging import bind_repo
from github_connector.schemas.activity import CommitRecord

from .budget import MAX_COMMITS_PER_REPO, Sleeper, plain_sleep
from .enums import FetchOutcome
from .results import CommitBatch

if TYPE_CHECKING:
    from github_connector.github.client import GitHubClient
    from github_connector.github.rate_limit.guard import RateLimitGuard

DEFAULT_MAX_RETRIES = 4
DEFAULT_MAX_WAIT_MS = 120_000

# Outcomes after which anything already collected is discarded
_DISCARDING_OUTCOMES = frozenset({FetchOutcome.NOT_FOUND, FetchOutcome.EMPTY_REPOSITORY})


class CommitStream:
    """Lazy iteration over one repository's most recent commits.

    Each `async for` starts from the first page; `outcome` is set once
    the iteration finishes. Commits keep upstream order (newest first).
    """

    def __init__(
        self,
        fetcher: CommitFetcher,
        owner: str,
        repo: str,
        page_size: int,
    ) -> None:
        self._fetcher = fetcher
        self.owner = owner
        self.repo = repo
        self.page_size = page_size
        self.outcome: FetchOutcome | None = None
        self.pages = 0

    def __aiter__(self) -> AsyncIterator[CommitRecord]:
        return self._run()

    async def _run(self) -> AsyncIterator[CommitRecord]:
        fetcher = self._fetcher
        guard = fetcher.guard
        log = bind_repo(self.owner, self.repo)
        target = f"{self.owner}/{self.repo}"

        self.outcome = None
        self.pages = 0
        url: str | None = None
        attempt = 0
        collected = 0

        log.debug("Fetching up to {} commits for repository {}", fetcher.max_commits, target)

        while True:
            # --- Fetching ---
            try:
                result = await fetcher.client.list_commits_page(
                    self.owner, self.repo, per_page=self.page_size, url=url
                )
            except GitHubRateLimitError as e:
                # --- WaitingBackoff ---
                guard.log_rate_limit(e.headers, "commits", target)
                wait_ms = guard.compute_wait(e.headers, attempt)
                if not guard.is_within_policy(wait_ms, fetcher.max_wait_ms):
                    log.warning(
                        "Required wait time {}ms exceeds maximum allowed {}ms, "
                        "skipping repository {}",
                        wait_ms,
                        fetcher.max_wait_ms,
                        target,
                    )
                    self.outcome = FetchOutcome.RATE_LIMITED
                    return

                log.warning(
                    "Rate limited while fetching commits for {} - retrying in {} ms "
                    "(attempt {}/{})",
                    target,
                    wait_ms,
                    attempt + 1,
                    fetcher.max_retries,
                )
                if not await fetcher.sleep(wait_ms / 1000):
                    self.outcome = FetchOutcome.INTERRUPTED
                    return
                attempt += 1
                if attempt >= fetcher.max_retries:
                    log.error("Exceeded max retry attempts when fetching commits for {}", target)
                    self.outcome = FetchOutcome.RETRIES_EXHAUSTED
                    return
                continue
            except GitHubClientError as e:
                self.outcome = FetchOutcome.from_error(e)
                if self.outcome is FetchOutcome.NOT_FOUND:
                    log.warning("Repository {} not found (404)", target)
                elif self.outcome is FetchOutcome.EMPTY_REPOSITORY:
                    log.debug("Repository {} is empty (409 Conflict)", target)
                else:
                    log.error("Error fetching commits for {}: {}", target, e)
                return

            self.pages += 1
            if result.raw_count == 0:
                log.debug("No more commits found for {} on page {}", target, self.pages)
                self.outcome = FetchOutcome.COMPLETED
                return

            for commit in result.items:
                if collected >= fetcher.max_commits:
                    break
                collected += 1
                yield CommitRecord.from_github(commit)

            log.debug(
                "Received commits for {} on page {} (total: {})", target, self.pages, collected
            )

            if collected >= fetcher.max_commits:
                log.debug("Reached maximum commit limit ({}) for {}", fetcher.max_commits, target)
                self.outcome = FetchOutcome.CAPPED
                return

            next_url = result.next_url
            if next_url is None:
                log.debug("No next page link found for {}", target)
                self.outcome = FetchOutcome.COMPLETED
                return
            url = next_url


class CommitFetcher:
    """Fetches up to `max_commits` recent commits for one repository.

    Usage:
        fetcher = CommitFetcher(client, RateLimitGuard())
        batch = await fetcher.fetch_commits("octocat", "hello-world", page_size=20)
        print(len(batch.commits), batch.outcome)
    """

    def __init__(
        self,
        client: GitHubClient,
        guard: RateLimitGuard,
        *,
        max_commits: int = MAX_COMMITS_PER_REPO,
        max_wait_ms: int = DEFAULT_MAX_WAIT_MS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        sleep: Sleeper = plain_sleep,
    ) -> None:
        """Initialize the fetcher.

        Args:
            client: GitHub API client
            guard: Rate limit wait policy
            max_commits: Commits kept per repository
            max_wait_ms: Longest acceptable single rate limit wait
            max_retries: Rate limit retries before giving up
            sleep: Backoff suspension; returns False when interrupted
        """
        self.client = client
        self.guard = guard
        self.max_commits = max_commits
        self.max_wait_ms = max_wait_ms
        self.max_retries = max_retries
        self.sleep = sleep

    def stream(self, owner: str, repo: str, page_size: int) -> CommitStream:
        """Lazy commit iteration; pages are requested only as they are consumed."""
        return CommitStream(self, owner, repo, page_size)

    async def fetch_commits(self, owner: str, repo: str, page_size: int) -> CommitBatch:
        """Fetch commits, never raising for upstream conditions.

        A 404 or 409 yields an empty batch even if earlier pages
        succeeded; any other failure keeps what was collected.

        Args:
            owner: Repository owner
            repo: Repository name
            page_size: Commits per request

        Returns:
            CommitBatch with at most `max_commits` commits and the outcome
        """
        stream = self.stream(owner, repo, page_size)
        commits = [commit async for commit in stream]
        outcome = stream.outcome or FetchOutcome.COMPLETED

        if outcome in _DISCARDING_OUTCOMES:
            commits = []

        bind_repo(owner, repo).debug(
            "Completed fetching commits for {}/{} - collected {} commits ({})",
            owner,
            repo,
            len(commits),
            outcome.value,
        )
        return CommitBatch(commits=commits, outcome=outcome)
