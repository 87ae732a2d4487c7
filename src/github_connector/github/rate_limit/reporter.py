"""Single-call rate limit status and token checks.

Both operations are stateless: each call hits the API once and turns
any failure into a result object instead of raising.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING

from pydantic import ValidationError

from github_connector.github.exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubTransportError,
)
from github_connector.logging import get_logger

from .schemas import RateLimitReport, TokenTestResult

if TYPE_CHECKING:
    from github_connector.github.client import GitHubClient

logger = get_logger(__name__)

INVALID_TOKEN_MESSAGE = "GitHub token is invalid, expired or lacks required scopes."

# Statuses on /user that mean the token itself is unusable
INVALID_TOKEN_STATUSES = frozenset({401, 403})


class RateLimitStatusReporter:
    """Reports the current quota of every rate limit resource.

    Usage:
        report = await RateLimitStatusReporter(client).fetch()
        if report.ok:
            print(report.core.remaining)
    """

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    async def fetch(self) -> RateLimitReport:
        """Query GET /rate_limit and build a fresh report."""
        logger.debug("Fetching GitHub API rate limit status from {}", self._client.base_url)
        try:
            data = await self._client.get_rate_limit()
        except GitHubTransportError as e:
            logger.error("Error fetching GitHub API rate limit status: {}", e)
            return RateLimitReport.from_error(f"Error fetching rate limit information: {e}")
        except GitHubClientError as e:
            logger.warning("Failed to fetch rate limit info: {}", e)
            return RateLimitReport.from_error(f"Failed to fetch rate limit information: {e}")

        try:
            report = RateLimitReport.from_api_response(data)
        except (TypeError, ValueError, ValidationError) as e:
            logger.warning("Unexpected rate limit payload: {}", e)
            return RateLimitReport.from_error(f"Failed to parse rate limit information: {e}")

        core = report.core
        if core is not None:
            logger.info("Core rate limit: {}/{} remaining", core.remaining, core.limit)
        return report


class TokenValidator:
    """Checks that the configured token authenticates (GET /user)."""

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    async def test(self) -> TokenTestResult:
        """Validate the token.

        Returns:
            TokenTestResult - valid with the login, or invalid with an
            error type (HTTP status name, or UNKNOWN_ERROR)
        """
        logger.debug("Testing GitHub token against {}/user", self._client.base_url)
        try:
            user = await self._client.get_authenticated_user()
        except GitHubTransportError as e:
            logger.error("Unexpected error while validating GitHub token: {}", e)
            return TokenTestResult.failure("UNKNOWN_ERROR", f"Unexpected error: {e}")
        except GitHubClientError as e:
            # 403 on /user means missing scopes far more often than a rate limit
            if isinstance(e, GitHubAuthenticationError) or e.status_code in INVALID_TOKEN_STATUSES:
                return TokenTestResult.failure(_error_type(e), INVALID_TOKEN_MESSAGE)
            return TokenTestResult.failure(_error_type(e), f"Error validating token: {e}")

        logger.info("GitHub token valid for {}", user.login)
        return TokenTestResult.success(user.login)


def _error_type(error: GitHubClientError) -> str:
    """Status in the form '401 UNAUTHORIZED'."""
    if error.status_code is None:
        return "UNKNOWN_ERROR"
    try:
        return f"{error.status_code} {HTTPStatus(error.status_code).name}"
    except ValueError:
        return str(error.status_code)
