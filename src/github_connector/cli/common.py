"""Common CLI option factories and helpers.

This module centralizes reusable CLI options to reduce duplication
and consolidate noqa comments for Typer's required function call pattern.

It also provides:
- `run_async_command`: Unified async execution with error handling for CLI commands
- `cancel_on_interrupt`: Ctrl-C sets a cancellation event instead of killing the run
- Owner/repository argument type aliases and validation helpers
"""

from __future__ import annotations

import asyncio
import contextlib
import re
import signal
from collections.abc import Coroutine, Iterator
from typing import Annotated, TypeVar

import typer
from rich.console import Console

from github_connector.config import get_settings
from github_connector.github.activity.enums import OutputFormat

# Shared console instance for CLI output
console = Console()

T = TypeVar("T")

OWNER_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,37}[A-Za-z0-9])?$")
REPO_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,100}$")


def run_async_command(
    coro: Coroutine[object, object, T],
    *,
    error_prefix: str = "Error",
) -> T:
    """Execute async code from synchronous CLI command with unified error handling.

    Uses asyncio.run() for clean event loop management. Catches exceptions,
    prints user-friendly error messages, and exits with code 1.

    Args:
        coro: Async coroutine to execute
        error_prefix: Prefix for error messages (default: "Error")

    Returns:
        Result from the coroutine

    Raises:
        typer.Exit: Re-raised from deliberate exits, or raised with code 1 on error
    """
    try:
        return asyncio.run(coro)
    except typer.Exit:
        # Re-raise deliberate exits (e.g., from validation helpers)
        raise
    except Exception as e:
        console.print(f"[red]{error_prefix}:[/red] {e}")
        raise typer.Exit(1) from None


@contextlib.contextmanager
def cancel_on_interrupt(event: asyncio.Event) -> Iterator[asyncio.Event]:
    """Route SIGINT to `event` for the duration of the block.

    Must be entered from inside the running loop. Platforms without
    loop signal handlers keep the default KeyboardInterrupt behavior.
    """
    loop = asyncio.get_running_loop()
    installed = False
    with contextlib.suppress(NotImplementedError, RuntimeError):
        loop.add_signal_handler(signal.SIGINT, event.set)
        installed = True
    try:
        yield event
    finally:
        if installed:
            loop.remove_signal_handler(signal.SIGINT)


def require_token() -> None:
    """Exit with an error if GITHUB_TOKEN is not configured."""
    if not get_settings().github_token:
        console.print("[red]Error:[/red] GITHUB_TOKEN not set in environment")
        raise typer.Exit(1)


# Typer requires function calls as default arguments, which triggers B008.
# Using Annotated with a centralized type alias keeps the noqa in one place.

OutputFormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format",
    ),
]
"""Output format option type for CLI commands.

Usage:
    def command(output_format: OutputFormatOption = OutputFormat.TEXT):
"""

OwnerArgument = Annotated[
    str,
    typer.Argument(
        help="GitHub user or organization login (e.g., octocat)",
    ),
]
"""Required positional owner argument."""

RepoNameArgument = Annotated[
    str,
    typer.Argument(
        help="Repository name without the owner (e.g., hello-world)",
    ),
]
"""Required positional repository name argument."""

MaxReposOption = Annotated[
    int | None,
    typer.Option(
        "--max-repos",
        "-n",
        min=1,
        help="Maximum repositories to process (defaults to FETCH__MAX_REPOS)",
    ),
]


# -----------------------------------------------------------------------------
# Validation Helpers
# -----------------------------------------------------------------------------


def validate_owner(owner: str) -> str:
    """Check a GitHub login before any request is made.

    Raises:
        typer.Exit(1): If the login is not a valid GitHub username
    """
    if not OWNER_PATTERN.match(owner):
        console.print(f"[red]Error:[/red] '{owner}' is not a valid GitHub username")
        raise typer.Exit(1)
    return owner


def validate_repo_name(repo: str) -> str:
    """Check a repository name before any request is made.

    Raises:
        typer.Exit(1): If the name contains characters GitHub does not allow
    """
    if not REPO_NAME_PATTERN.match(repo) or repo in (".", ".."):
        console.print(f"[red]Error:[/red] '{repo}' is not a valid repository name")
        raise typer.Exit(1)
    return repo
