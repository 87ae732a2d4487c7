"""Per-request fetch budget: caps, deadline and cancellation.

A FetchBudget is built once per operation and never mutated. Its
`sleep` method is what the listing and commit fetching loops use for
backoff waits, so a wait is cut short as soon as the deadline passes
or the cancellation event is set, without those loops knowing either.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from github_connector.config import FetchConfig
from github_connector.logging import get_logger

from .enums import StopReason

logger = get_logger(__name__)

MAX_COMMITS_PER_REPO = 20

Sleeper = Callable[[float], Awaitable[bool]]
"""Suspends for up to N seconds; returns False if the wait was interrupted."""


async def plain_sleep(seconds: float) -> bool:
    """Uninterruptible (except by task cancellation) sleep."""
    await asyncio.sleep(seconds)
    return True


@dataclass(frozen=True)
class FetchBudget:
    """Limits for one activity request.

    Attributes:
        max_repos: Repositories processed at most
        max_wait_ms: Longest single rate limit wait accepted
        max_retries: Rate limit retries per repository
        timeout_ms: Overall wall-clock budget (0 = unlimited)
        max_commits_per_repo: Commits kept per repository
        cancel_event: External cancellation signal (e.g. Ctrl-C)
        clock: Monotonic clock in seconds (injectable for tests)
        started_at: Clock reading when the budget was created
    """

    max_repos: int
    max_wait_ms: int
    max_retries: int
    timeout_ms: int
    max_commits_per_repo: int = MAX_COMMITS_PER_REPO
    cancel_event: asyncio.Event | None = None
    clock: Callable[[], float] = time.monotonic
    started_at: float = field(default=-1.0)

    def __post_init__(self) -> None:
        if self.started_at < 0:
            object.__setattr__(self, "started_at", self.clock())

    @classmethod
    def from_config(
        cls,
        config: FetchConfig,
        *,
        max_repos: int | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> FetchBudget:
        return cls(
            max_repos=max_repos if max_repos is not None else config.max_repos,
            max_wait_ms=config.max_wait_time_ms,
            max_retries=config.max_retry_attempts,
            timeout_ms=config.request_timeout_ms,
            cancel_event=cancel_event,
        )

    @property
    def deadline(self) -> float | None:
        """Clock reading after which the budget is exhausted (None = never)."""
        if self.timeout_ms <= 0:
            return None
        return self.started_at + self.timeout_ms / 1000

    def elapsed_ms(self) -> int:
        return int((self.clock() - self.started_at) * 1000)

    def is_expired(self) -> bool:
        return self.timeout_ms > 0 and self.elapsed_ms() > self.timeout_ms

    def is_cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def stop_reason(self) -> StopReason | None:
        """Reason to stop now, or None to keep going. Cancellation wins."""
        if self.is_cancelled():
            return StopReason.CANCELLED
        if self.is_expired():
            return StopReason.DEADLINE_EXCEEDED
        return None

    async def sleep(self, seconds: float) -> bool:
        """Suspend for up to `seconds`, bounded by the deadline and cancellation.

        Returns:
            True if the full wait elapsed, False if it was interrupted
            (or would certainly overrun the deadline).
        """
        if self.stop_reason() is not None:
            return False

        timeout = max(0.0, seconds)
        truncated = False
        deadline = self.deadline
        if deadline is not None:
            remaining = deadline - self.clock()
            if remaining < timeout:
                timeout = max(0.0, remaining)
                truncated = True

        if self.cancel_event is None:
            await asyncio.sleep(timeout)
        else:
            try:
                await asyncio.wait_for(self.cancel_event.wait(), timeout=timeout)
            except TimeoutError:
                pass
            else:
                logger.info("Backoff wait cancelled")
                return False

        if truncated:
            logger.info("Backoff wait of {:.1f}s cut short by request deadline", seconds)
            return False
        return True
