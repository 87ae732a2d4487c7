"""Factory functions for creating test data.

This module provides factory functions for:
- Raw GitHub API payloads (dicts, as the REST API returns them)
- Parsed payload models and Page objects fed to the fetch loops

Design principles:
- Factories provide sensible defaults that can be overridden
- Payload factories return dicts suitable for Pydantic model instantiation
- Page factories build the exact object GitHubClient would return
"""

from typing import Any

from github_connector.github.client import Page
from github_connector.github.exceptions import GitHubRateLimitError
from github_connector.schemas.github_api import GitHubCommit, GitHubRepository

# Import test timeline constants
from tests.conftest import JAN_15_ISO


# -----------------------------------------------------------------------------
# Payload Factories
# -----------------------------------------------------------------------------
def make_github_user(login: str = "octocat", **overrides: Any) -> dict[str, Any]:
    """Create a GitHub user payload (GET /user)."""
    return {
        "login": login,
        "id": 583231,
        "type": "User",
        **overrides,
    }


def make_github_repo(
    name: str = "hello-world",
    *,
    owner: str = "octocat",
    **overrides: Any,
) -> dict[str, Any]:
    """Create a repository payload as listed by GET /users/{owner}/repos."""
    return {
        "id": 1296269,
        "name": name,
        "full_name": f"{owner}/{name}",
        "private": False,
        "owner": {"login": owner},
        "html_url": f"https://github.com/{owner}/{name}",
        **overrides,
    }


def make_github_commit(
    sha: str = "abc123",
    *,
    message: str = "Initial commit",
    author: str = "Test Author",
    date: str = JAN_15_ISO,
    **overrides: Any,
) -> dict[str, Any]:
    """Create a commit payload as listed by GET /repos/{owner}/{repo}/commits."""
    return {
        "sha": sha,
        "commit": {
            "author": {
                "name": author,
                "email": f"{author.lower().replace(' ', '.')}@example.com",
                "date": date,
            },
            "committer": {
                "name": author,
                "email": f"{author.lower().replace(' ', '.')}@example.com",
                "date": date,
            },
            "message": message,
        },
        "html_url": f"https://github.com/octocat/hello-world/commit/{sha}",
        **overrides,
    }


# -----------------------------------------------------------------------------
# Page Factories
# -----------------------------------------------------------------------------
def link_header(**rels: str) -> str:
    """Build a Link header: link_header(next="https://...", last="https://...")."""
    return ", ".join(f'<{url}>; rel="{rel}"' for rel, url in rels.items())


def commits_url(owner: str, repo: str, page: int) -> str:
    return f"https://api.github.com/repos/{owner}/{repo}/commits?per_page=20&page={page}"


def make_repo_page(
    names: list[str],
    *,
    owner: str = "octocat",
    headers: dict[str, str] | None = None,
) -> Page[GitHubRepository]:
    """A page of repositories with the given short names."""
    items = [GitHubRepository.model_validate(make_github_repo(n, owner=owner)) for n in names]
    return Page(items=items, raw_count=len(items), headers=headers or {})


def make_commit_page(
    count: int,
    *,
    start: int = 0,
    next_url: str | None = None,
    last_url: str | None = None,
) -> Page[GitHubCommit]:
    """A page of `count` commits numbered from `start`, with optional Link relations."""
    items = [
        GitHubCommit.model_validate(
            make_github_commit(f"sha{i:04d}", message=f"Commit {i}", author=f"Author {i}")
        )
        for i in range(start, start + count)
    ]
    rels: dict[str, str] = {}
    if next_url:
        rels["next"] = next_url
    if last_url:
        rels["last"] = last_url
    headers = {"link": link_header(**rels)} if rels else {}
    return Page(items=items, raw_count=count, headers=headers)


def rate_limited(
    *,
    reset: int | None = None,
    status_code: int = 403,
    remaining: int = 0,
) -> GitHubRateLimitError:
    """A rate limit error, with an x-ratelimit-reset header when `reset` is given."""
    headers = {
        "x-ratelimit-limit": "5000",
        "x-ratelimit-remaining": str(remaining),
        "x-ratelimit-resource": "core",
    }
    if reset is not None:
        headers["x-ratelimit-reset"] = str(reset)
    return GitHubRateLimitError(
        f"GitHub rate limit exceeded ({status_code})",
        headers=headers,
        status_code=status_code,
    )
