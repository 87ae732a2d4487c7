"""Pytest configuration and shared fixtures.

Usage Guide:
- For upstream payloads: import factories from tests.factories
- For rate limit bodies and headers: import from tests.fixtures
- For fetch loops: use `fake_client` + `recorded_sleep` so no test waits
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from github_connector.config import FetchConfig, get_settings
from github_connector.github.rate_limit import RateLimitGuard

# -----------------------------------------------------------------------------
# Test Timeline Constants
#
# A fixed "now" keeps reset-header arithmetic deterministic.
# -----------------------------------------------------------------------------

NOW_EPOCH = 1_700_000_000
"""Wall clock used by guards built with `frozen_guard`."""

JAN_15 = datetime(2024, 1, 15, 10, 0, 0, tzinfo=UTC)
JAN_16 = datetime(2024, 1, 16, 14, 0, 0, tzinfo=UTC)

JAN_15_ISO = "2024-01-15T10:00:00Z"
JAN_16_ISO = "2024-01-16T14:00:00Z"


class SleepRecorder:
    """Stand-in for a Sleeper: records requested waits and returns instantly."""

    def __init__(self, result: bool = True) -> None:
        self.calls: list[float] = []
        self.result = result

    async def __call__(self, seconds: float) -> bool:
        self.calls.append(seconds)
        return self.result

    @property
    def waits_ms(self) -> list[int]:
        return [round(s * 1000) for s in self.calls]


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fetch_config() -> FetchConfig:
    """Default fetch configuration."""
    return FetchConfig()


# -----------------------------------------------------------------------------
# Fetch Loop Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fake_client() -> MagicMock:
    """GitHubClient double with async page methods.

    Configure `list_repos_page` / `list_commits_page` with
    `side_effect` lists of Page objects or exceptions.
    """
    client = MagicMock()
    client.base_url = "https://api.github.com"
    client.list_repos_page = AsyncMock()
    client.list_commits_page = AsyncMock()
    client.get_rate_limit = AsyncMock()
    client.get_authenticated_user = AsyncMock()
    return client


@pytest.fixture
def frozen_guard() -> RateLimitGuard:
    """Guard whose wall clock is pinned to NOW_EPOCH."""
    return RateLimitGuard(clock=lambda: float(NOW_EPOCH))


@pytest.fixture
def recorded_sleep() -> SleepRecorder:
    """Sleeper that never actually sleeps."""
    return SleepRecorder()


# -----------------------------------------------------------------------------
# Utility Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def utc_now() -> datetime:
    """Current UTC datetime for tests."""
    return datetime.now(UTC)
