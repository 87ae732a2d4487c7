"""Test fixtures for GitHub Connector."""

from .github_responses import (
    GITHUB_COMMIT_WITHOUT_AUTHOR,
    GITHUB_COMMITS_RESPONSE,
    GITHUB_REPOS_RESPONSE,
    GITHUB_USER_RESPONSE,
)
from .rate_limit_responses import (
    HEADERS_EXHAUSTED,
    HEADERS_MALFORMED_RESET,
    HEADERS_PARTIAL,
    HEADERS_SEARCH,
    RATE_LIMIT_RESPONSE_CRITICAL,
    RATE_LIMIT_RESPONSE_EXHAUSTED,
    RATE_LIMIT_RESPONSE_HEALTHY,
    RATE_LIMIT_RESPONSE_MINIMAL,
    RATE_LIMIT_RESPONSE_UNKNOWN_CATEGORY,
    RATE_LIMIT_RESPONSE_WARNING,
    make_rate_limit_headers,
)

__all__ = [
    # Mock GitHub API responses
    "GITHUB_COMMITS_RESPONSE",
    "GITHUB_COMMIT_WITHOUT_AUTHOR",
    "GITHUB_REPOS_RESPONSE",
    "GITHUB_USER_RESPONSE",
    # Rate limit bodies and headers
    "HEADERS_EXHAUSTED",
    "HEADERS_MALFORMED_RESET",
    "HEADERS_PARTIAL",
    "HEADERS_SEARCH",
    "RATE_LIMIT_RESPONSE_CRITICAL",
    "RATE_LIMIT_RESPONSE_EXHAUSTED",
    "RATE_LIMIT_RESPONSE_HEALTHY",
    "RATE_LIMIT_RESPONSE_MINIMAL",
    "RATE_LIMIT_RESPONSE_UNKNOWN_CATEGORY",
    "RATE_LIMIT_RESPONSE_WARNING",
    "make_rate_limit_headers",
]
