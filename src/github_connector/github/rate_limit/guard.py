"""Rate limit wait policy.

Translates a rate limit response into a wait duration and decides
whether that wait is acceptable:

    reset header present:  wait = max(1000, (reset - now) * 1000) ms
    otherwise:             wait = min(cap, base * 2 ** attempt) ms

The reset header wins because it is GitHub's own recovery time.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from datetime import UTC, datetime

from github_connector.config import FetchConfig
from github_connector.logging import get_logger

logger = get_logger(__name__)

BASE_BACKOFF_MS = 5_000
MAX_BACKOFF_MS = 120_000
MIN_RESET_WAIT_MS = 1_000

RESET_HEADER = "x-ratelimit-reset"


class RateLimitGuard:
    """Computes rate limit waits. Pure: never sleeps, never raises.

    Usage:
        guard = RateLimitGuard()
        wait_ms = guard.compute_wait(error.headers, attempt)
        if not guard.is_within_policy(wait_ms, max_wait_ms):
            return collected  # abort, don't sleep
        await sleep(wait_ms / 1000)
    """

    def __init__(
        self,
        base_ms: int = BASE_BACKOFF_MS,
        cap_ms: int = MAX_BACKOFF_MS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the guard.

        Args:
            base_ms: Backoff for attempt 0 when no reset header is present
            cap_ms: Upper bound for exponential backoff
            clock: Wall clock in epoch seconds (injectable for tests)
        """
        self._base_ms = base_ms
        self._cap_ms = cap_ms
        self._clock = clock

    @classmethod
    def from_config(cls, config: FetchConfig) -> RateLimitGuard:
        return cls(base_ms=config.backoff_base_ms, cap_ms=config.backoff_cap_ms)

    def compute_wait(self, headers: Mapping[str, str] | None, attempt: int) -> int:
        """Milliseconds to wait before retrying.

        Args:
            headers: Response headers (lower-case keys)
            attempt: 0-based retry attempt, used only for exponential backoff

        Returns:
            Wait in milliseconds
        """
        reset = _parse_reset(headers)
        if reset is not None:
            wait_seconds = reset - int(self._clock())
            return max(MIN_RESET_WAIT_MS, wait_seconds * 1000)

        return min(self._cap_ms, self._base_ms * 2 ** max(0, attempt))

    @staticmethod
    def is_within_policy(wait_ms: int, max_wait_ms: int) -> bool:
        """True iff the wait does not exceed the configured maximum."""
        return wait_ms <= max_wait_ms

    def log_rate_limit(
        self,
        headers: Mapping[str, str] | None,
        resource_type: str,
        target: str,
    ) -> None:
        """Log the quota state carried by a rate limit response."""
        headers = headers or {}
        remaining = headers.get("x-ratelimit-remaining", "?")
        limit = headers.get("x-ratelimit-limit", "?")
        resource = headers.get("x-ratelimit-resource") or resource_type

        reset = _parse_reset(headers)
        if reset is None:
            logger.warning(
                "GitHub API rate limit hit for {} ({}): {}/{} requests remaining",
                resource,
                target,
                remaining,
                limit,
            )
            return

        logger.warning(
            "GitHub API rate limit hit: {}/{} requests remaining for {} ({}). "
            "Limit resets in {} seconds at {}",
            remaining,
            limit,
            resource,
            target,
            reset - int(self._clock()),
            datetime.fromtimestamp(reset, tz=UTC).isoformat(),
        )


def _parse_reset(headers: Mapping[str, str] | None) -> int | None:
    if not headers:
        return None
    raw = headers.get(RESET_HEADER)
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        logger.debug("Ignoring malformed {} header: {!r}", RESET_HEADER, raw)
        return None
