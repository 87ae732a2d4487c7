"""Async GitHub API client wrapper using githubkit.

This module provides a typed async interface to the four GitHub REST
endpoints the connector needs: repository listing, commit listing,
rate limit status and the authenticated user. Every failure is
converted to one of the exceptions in `exceptions.py`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from githubkit import GitHub
from githubkit.exception import GitHubException, RequestFailed
from pydantic import BaseModel, ValidationError

from github_connector.config import get_settings
from github_connector.logging import get_logger
from github_connector.schemas.github_api import GitHubCommit, GitHubRepository, GitHubUser

from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubEmptyRepositoryError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubTransportError,
    GitHubUpstreamError,
)
from .links import next_page_url

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

RATE_LIMIT_STATUSES = frozenset({403, 429})


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a paginated listing.

    `raw_count` is the number of entries the server sent, which can be
    larger than `len(items)` when an entry failed validation. Page-size
    decisions use `raw_count`.
    """

    items: list[T]
    raw_count: int
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def next_url(self) -> str | None:
        """URL of the next page, if the server advertised one."""
        return next_page_url(self.headers.get("link"))


def headers_to_dict(headers: Any) -> dict[str, str]:
    """Normalize response headers (httpx.Headers or mapping) to a lower-case dict."""
    if headers is None:
        return {}
    return {str(key).lower(): str(value) for key, value in headers.items()}


class GitHubClient:
    """Async GitHub API client for repository activity retrieval.

    Usage:
        async with GitHubClient() as client:
            page = await client.list_repos_page("octocat", page=1, per_page=100)
            for repo in page.items:
                print(repo.full_name)

    Rate limit handling is deliberately left to callers: githubkit's
    automatic retry is disabled so a 403/429 surfaces immediately as
    GitHubRateLimitError with the response headers attached.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the GitHub client.

        Args:
            token: GitHub PAT. If not provided, uses GITHUB_TOKEN from settings.
            base_url: API base URL. Defaults to GITHUB_API_BASE_URL from settings.
            timeout: Per-request timeout in seconds. Defaults to
                     fetch.http_timeout_seconds from settings.

        Raises:
            GitHubAuthenticationError: If no token is available.
        """
        settings = get_settings()
        self._token = token or settings.github_token
        if not self._token:
            raise GitHubAuthenticationError(
                "GitHub token required. Set GITHUB_TOKEN environment variable."
            )
        self._base_url = base_url or settings.github_api_base_url
        self._timeout = timeout or settings.fetch.http_timeout_seconds
        self._client: GitHub[Any] | None = None

    @property
    def _github(self) -> GitHub[Any]:
        """Get or create the githubkit client instance."""
        if self._client is None:
            self._client = GitHub(
                self._token,
                base_url=self._base_url,
                timeout=self._timeout,
                auto_retry=False,
                http_cache=False,
            )
        return self._client

    @property
    def base_url(self) -> str:
        return self._base_url

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            self._client = None

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------
    async def list_repos_page(
        self,
        owner: str,
        *,
        page: int,
        per_page: int,
    ) -> Page[GitHubRepository]:
        """Fetch one page of GET /users/{owner}/repos.

        Args:
            owner: User or organization login
            page: 1-based page number
            per_page: Results per page (max 100)

        Raises:
            GitHubClientError: Any subclass, depending on the failure
        """
        resp = await self._get(
            f"/users/{owner}/repos",
            params={"per_page": per_page, "page": page},
        )
        return self._to_page(resp, GitHubRepository)

    async def list_commits_page(
        self,
        owner: str,
        repo: str,
        *,
        per_page: int,
        url: str | None = None,
    ) -> Page[GitHubCommit]:
        """Fetch one page of GET /repos/{owner}/{repo}/commits.

        Args:
            owner: Repository owner
            repo: Repository name
            per_page: Results per page (max 100); only used for the first page
            url: A next-page URL taken from a previous page's Link header.
                 It already carries the cursor and is requested verbatim.

        Raises:
            GitHubClientError: Any subclass, depending on the failure
        """
        if url is None:
            resp = await self._get(f"/repos/{owner}/{repo}/commits", params={"per_page": per_page})
        else:
            resp = await self._get(url)
        return self._to_page(resp, GitHubCommit)

    # -------------------------------------------------------------------------
    # Single calls
    # -------------------------------------------------------------------------
    async def get_rate_limit(self) -> dict[str, Any]:
        """Get the raw GET /rate_limit body.

        Note: this endpoint does not count against the quota.
        """
        resp = await self._get("/rate_limit")
        data = self._decode(resp)
        if not isinstance(data, dict):
            raise GitHubTransportError("Unexpected /rate_limit payload")
        return data

    async def get_authenticated_user(self) -> GitHubUser:
        """Get the user the token belongs to (GET /user)."""
        resp = await self._get("/user")
        try:
            return GitHubUser.model_validate(self._decode(resp))
        except ValidationError as e:
            raise GitHubTransportError(f"Unexpected /user payload: {e}") from e

    # -------------------------------------------------------------------------
    # Plumbing
    # -------------------------------------------------------------------------
    async def _get(self, url: str, params: dict[str, Any] | None = None) -> Any:
        logger.debug("GET {} {}", url, params or "")
        try:
            return await self._github.arequest("GET", url, params=params)
        except RequestFailed as e:
            raise self._handle_error(e) from e
        except GitHubException as e:
            raise GitHubTransportError(f"Request to {url} failed: {e}") from e

    @staticmethod
    def _decode(resp: Any) -> Any:
        try:
            return resp.parsed_data
        except ValueError as e:
            raise GitHubTransportError(f"Could not decode response body: {e}") from e

    def _to_page(self, resp: Any, model: type[T]) -> Page[T]:
        data = self._decode(resp)
        if not isinstance(data, list):
            raise GitHubTransportError(f"Expected a JSON array, got {type(data).__name__}")

        items: list[T] = []
        for entry in data:
            try:
                items.append(model.model_validate(entry))
            except ValidationError as e:
                # Skip entries that don't validate (shouldn't happen normally)
                logger.debug("Skipping undecodable {} entry: {}", model.__name__, e)
                continue

        return Page(
            items=items,
            raw_count=len(data),
            headers=headers_to_dict(getattr(resp, "headers", None)),
        )

    # -------------------------------------------------------------------------
    # Error Handling
    # -------------------------------------------------------------------------
    def _handle_error(self, error: RequestFailed) -> GitHubClientError:
        """Convert githubkit exceptions to our custom exceptions."""
        status = error.response.status_code
        headers = headers_to_dict(getattr(error.response, "headers", None))

        if status == 401:
            return GitHubAuthenticationError("Invalid GitHub token", status_code=status)
        if status in RATE_LIMIT_STATUSES:
            # GitHub answers secondary limits and abuse detection with 403 as well
            return GitHubRateLimitError(
                f"GitHub rate limit exceeded ({status})",
                headers=headers,
                status_code=status,
            )
        if status == 404:
            return GitHubNotFoundError(f"Not found: {error.response.url}", status_code=status)
        if status == 409:
            return GitHubEmptyRepositoryError("Repository is empty", status_code=status)
        return GitHubUpstreamError(f"GitHub API error ({status})", status_code=status)
