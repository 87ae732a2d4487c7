"""Tests for GitHubConnectorService."""

import asyncio

import pytest

from github_connector.config import FetchConfig, Settings
from github_connector.github.activity import (
    FetchOutcome,
    GitHubConnectorService,
    StopReason,
)
from github_connector.schemas import GitHubUser
from tests.factories import commits_url, make_commit_page, make_repo_page
from tests.fixtures import RATE_LIMIT_RESPONSE_HEALTHY


async def one_page_of_commits(owner, repo, *, per_page, url=None):
    return make_commit_page(2)


@pytest.fixture
def service(fake_client, frozen_guard) -> GitHubConnectorService:
    settings = Settings(github_token="ghp_test", fetch=FetchConfig(max_repos=3))
    return GitHubConnectorService(fake_client, settings=settings, guard=frozen_guard)


class TestActivityOperations:
    """Tests for the activity entry points."""

    async def test_fetch_activity_uses_configured_cap(self, service, fake_client):
        fake_client.list_repos_page.return_value = make_repo_page(["a", "b", "c", "d"])
        fake_client.list_commits_page.side_effect = one_page_of_commits

        result = await service.fetch_activity("octocat")

        assert [a.repository_name for a in result.activities] == ["a", "b", "c"]
        assert result.total_commits == 6

    async def test_quick_activity_fetches_first_repo_only(self, service, fake_client):
        fake_client.list_repos_page.return_value = make_repo_page(["first", "second"])
        fake_client.list_commits_page.side_effect = one_page_of_commits

        result = await service.fetch_quick_activity("octocat")

        assert [a.repository_name for a in result.activities] == ["first"]
        assert fake_client.list_commits_page.await_count == 1

    async def test_calls_do_not_share_state(self, service, fake_client):
        """Each call gets its own budget; an earlier cancellation does not leak."""
        fake_client.list_repos_page.return_value = make_repo_page(["a"])
        fake_client.list_commits_page.side_effect = one_page_of_commits
        event = asyncio.Event()
        event.set()

        cancelled = await service.fetch_activity("octocat", event)
        again = await service.fetch_activity("octocat")

        assert cancelled.stop_reason is StopReason.CANCELLED
        assert again.stop_reason is StopReason.COMPLETED
        assert len(again.activities) == 1

    async def test_fetch_all_repos(self, service, fake_client):
        fake_client.list_repos_page.return_value = make_repo_page(["a", "b", "c", "d"])

        listing = await service.fetch_all_repos("octocat", max_repos=2)

        assert [r.name for r in listing.repos] == ["a", "b"]
        assert listing.outcome is FetchOutcome.CAPPED
        fake_client.list_repos_page.assert_awaited_once_with("octocat", page=1, per_page=100)

    async def test_fetch_commits_uses_configured_page_size(self, service, fake_client):
        fake_client.list_commits_page.side_effect = [
            make_commit_page(20, next_url=commits_url("octocat", "hw", 2)),
        ]

        batch = await service.fetch_commits("octocat", "hw")

        assert len(batch.commits) == 20
        assert batch.outcome is FetchOutcome.CAPPED
        fake_client.list_commits_page.assert_awaited_once_with(
            "octocat", "hw", per_page=20, url=None
        )


class TestStatusOperations:
    """Tests for rate limit and token checks."""

    async def test_fetch_rate_limit_info(self, service, fake_client):
        fake_client.get_rate_limit.return_value = RATE_LIMIT_RESPONSE_HEALTHY

        report = await service.fetch_rate_limit_info()

        assert report.ok
        assert report.core.limit == 5000

    async def test_test_token(self, service, fake_client):
        fake_client.get_authenticated_user.return_value = GitHubUser(login="octocat", id=1)

        result = await service.test_token()

        assert result.valid
        assert result.username == "octocat"
