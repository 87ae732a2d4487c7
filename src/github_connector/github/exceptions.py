"""GitHub client exceptions.

The client raises these; the listing, fetching and reporting layers
absorb them into outcome codes instead of letting them escape.
"""


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubAuthenticationError(GitHubClientError):
    """Raised when authentication fails (401) or no token is configured."""


class GitHubNotFoundError(GitHubClientError):
    """Raised when a resource is not found (404)."""


class GitHubEmptyRepositoryError(GitHubClientError):
    """Raised when a repository has no commits (409 Conflict)."""


class GitHubRateLimitError(GitHubClientError):
    """Raised on a rate limit signal (429, or 403 which GitHub also uses).

    Carries the response headers so callers can compute a wait
    from x-ratelimit-reset and log the remaining quota.
    """

    def __init__(
        self,
        message: str,
        headers: dict[str, str] | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.headers = headers or {}


class GitHubUpstreamError(GitHubClientError):
    """Raised for any other non-success status."""


class GitHubTransportError(GitHubClientError):
    """Raised when the request could not complete or its body could not be decoded."""
