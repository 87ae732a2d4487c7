"""Rate limit handling for the GitHub API.

- RateLimitGuard: wait computation and policy for rate limit responses
- RateLimitStatusReporter / TokenValidator: single-call status checks
- Schemas for rate limit windows, reports and token results
"""

from .guard import RateLimitGuard
from .reporter import RateLimitStatusReporter, TokenValidator
from .schemas import (
    RateLimitReport,
    RateLimitResource,
    RateLimitStatus,
    RateLimitWindow,
    TokenTestResult,
)

__all__ = [
    "RateLimitGuard",
    "RateLimitReport",
    "RateLimitResource",
    "RateLimitStatus",
    "RateLimitStatusReporter",
    "RateLimitWindow",
    "TokenTestResult",
    "TokenValidator",
]
