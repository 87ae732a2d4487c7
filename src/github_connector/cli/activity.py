"""Activity commands: recent commits across an owner's repositories."""

import asyncio
import json
from typing import Any

import typer
from rich.table import Table
from rich.text import Text

from github_connector.cli.common import (
    MaxReposOption,
    OutputFormatOption,
    OwnerArgument,
    RepoNameArgument,
    cancel_on_interrupt,
    console,
    require_token,
    run_async_command,
    validate_owner,
    validate_repo_name,
)
from github_connector.github import GitHubClient, GitHubConnectorService
from github_connector.github.activity import (
    ActivityResult,
    CommitBatch,
    FetchOutcome,
    OutputFormat,
    RepoListing,
    StopReason,
)
from github_connector.schemas import CommitRecord

MESSAGE_WIDTH = 72


def _first_line(message: str, width: int = MESSAGE_WIDTH) -> str:
    line = message.strip().splitlines()[0] if message.strip() else ""
    return line if len(line) <= width else line[: width - 3] + "..."


def _commit_table(title: str, commits: list[CommitRecord]) -> Table:
    table = Table(title=title, title_justify="left")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Author")
    table.add_column("Message")
    for commit in commits:
        table.add_row(
            commit.timestamp.strftime("%Y-%m-%d %H:%M"),
            Text(commit.author_name),
            Text(_first_line(commit.message)),
        )
    return table


def _exit_if_nothing_listed(result: ActivityResult) -> None:
    """Exit 1 when listing failed before producing anything."""
    if result.activities:
        return
    if result.rate_limited:
        console.print(
            f"[red]Error:[/red] GitHub API rate limit exceeded while listing "
            f"repositories for '{result.owner}'. Try again later."
        )
        raise typer.Exit(1)
    if result.listing_outcome is FetchOutcome.NOT_FOUND:
        console.print(f"[red]Error:[/red] User or organization '{result.owner}' not found")
        raise typer.Exit(1)


def _print_status(result: ActivityResult) -> None:
    """Footer explaining how complete the result is."""
    console.print(
        f"\n[bold]{result.repos_processed}[/bold] repositories, "
        f"[bold]{result.total_commits}[/bold] commits "
        f"({result.duration_seconds:.1f}s)"
    )
    if result.stop_reason is StopReason.CANCELLED:
        console.print("[yellow]Cancelled:[/yellow] showing partial results")
    elif result.stop_reason is StopReason.DEADLINE_EXCEEDED:
        console.print("[yellow]Time budget exceeded:[/yellow] showing partial results")

    if result.listing_outcome.hit_rate_limit:
        console.print("[yellow]Warning:[/yellow] repository listing stopped by rate limiting")
    elif result.listing_outcome not in (
        FetchOutcome.COMPLETED,
        FetchOutcome.CAPPED,
        FetchOutcome.INTERRUPTED,
    ):
        console.print(
            f"[yellow]Warning:[/yellow] repository listing stopped early "
            f"({result.listing_outcome.value})"
        )

    limited = [name for name, o in result.repo_outcomes.items() if o.hit_rate_limit]
    if limited:
        console.print(
            f"[yellow]Warning:[/yellow] commits incomplete due to rate limiting: "
            f"{', '.join(limited)}"
        )


def _render_activity(result: ActivityResult, output_format: OutputFormat) -> None:
    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(result.to_dict()))
        return

    if not result.activities:
        console.print(f"[yellow]No repositories found for '{result.owner}'[/yellow]")
    for activity in result.activities:
        if not activity.commits:
            outcome = result.repo_outcomes.get(activity.repository_name)
            note = "empty" if outcome is FetchOutcome.EMPTY_REPOSITORY else "no commits"
            console.print(f"\n[bold]{activity.repository_name}[/bold] [dim]({note})[/dim]")
            continue
        console.print()
        console.print(
            _commit_table(
                f"{activity.repository_name} ({len(activity.commits)} commits)",
                activity.commits,
            )
        )
    _print_status(result)


async def _fetch_activity(owner: str, max_repos: int | None) -> ActivityResult:
    cancel_event = asyncio.Event()
    with cancel_on_interrupt(cancel_event):
        async with GitHubClient() as client:
            service = GitHubConnectorService(client)
            return await service.fetch_activity(owner, cancel_event, max_repos=max_repos)


def activity(
    owner: OwnerArgument,
    max_repos: MaxReposOption = None,
    output_format: OutputFormatOption = OutputFormat.TEXT,
) -> None:
    """Show recent commits for each of an owner's repositories.

    Press Ctrl-C to stop early and print what was fetched so far.

    Examples:
        ghconnector activity octocat
        ghconnector activity octocat --max-repos 5
        ghconnector activity octocat --format json
    """
    validate_owner(owner)
    require_token()

    result = run_async_command(_fetch_activity(owner, max_repos), error_prefix="Activity failed")
    _exit_if_nothing_listed(result)
    _render_activity(result, output_format)


def summary(
    owner: OwnerArgument,
    max_repos: MaxReposOption = None,
    output_format: OutputFormatOption = OutputFormat.TEXT,
) -> None:
    """Show activity totals without the commits themselves.

    Examples:
        ghconnector summary octocat
        ghconnector summary octocat --format json
    """
    validate_owner(owner)
    require_token()

    result = run_async_command(_fetch_activity(owner, max_repos), error_prefix="Summary failed")
    _exit_if_nothing_listed(result)
    meta = result.to_response().meta

    if output_format == OutputFormat.JSON:
        body: dict[str, Any] = {
            "meta": meta.model_dump(mode="json"),
            "status": result.to_dict()["status"],
        }
        console.print_json(json.dumps(body))
        return

    table = Table(title=f"Activity summary for {owner}")
    table.add_column("Repository", style="bold")
    table.add_column("Commits", justify="right")
    table.add_column("Outcome")
    for item in result.activities:
        outcome = result.repo_outcomes.get(item.repository_name, FetchOutcome.COMPLETED)
        table.add_row(item.repository_name, str(len(item.commits)), outcome.value)
    console.print(table)
    console.print(f"  Fetched at: {meta.fetched_at:%Y-%m-%d %H:%M:%S UTC}")
    _print_status(result)


def quick(
    owner: OwnerArgument,
    output_format: OutputFormatOption = OutputFormat.TEXT,
) -> None:
    """Show recent commits for the owner's first listed repository only.

    Examples:
        ghconnector quick octocat
    """
    validate_owner(owner)
    require_token()

    async def _quick() -> ActivityResult:
        cancel_event = asyncio.Event()
        with cancel_on_interrupt(cancel_event):
            async with GitHubClient() as client:
                service = GitHubConnectorService(client)
                return await service.fetch_quick_activity(owner, cancel_event)

    result = run_async_command(_quick(), error_prefix="Quick activity failed")
    _exit_if_nothing_listed(result)
    _render_activity(result, output_format)


def repos(
    owner: OwnerArgument,
    max_repos: MaxReposOption = None,
    output_format: OutputFormatOption = OutputFormat.TEXT,
) -> None:
    """List an owner's repositories (capped at --max-repos).

    Examples:
        ghconnector repos octocat
        ghconnector repos octocat -n 50 --format json
    """
    validate_owner(owner)
    require_token()

    async def _list() -> RepoListing:
        async with GitHubClient() as client:
            service = GitHubConnectorService(client)
            return await service.fetch_all_repos(owner, max_repos=max_repos)

    listing = run_async_command(_list(), error_prefix="Listing failed")

    if not listing.repos and listing.outcome.hit_rate_limit:
        console.print("[red]Error:[/red] GitHub API rate limit exceeded. Try again later.")
        raise typer.Exit(1)
    if listing.outcome is FetchOutcome.NOT_FOUND:
        console.print(f"[red]Error:[/red] User or organization '{owner}' not found")
        raise typer.Exit(1)

    if output_format == OutputFormat.JSON:
        body = {
            "owner": owner,
            "outcome": listing.outcome.value,
            "repositories": [r.full_name for r in listing.repos],
        }
        console.print_json(json.dumps(body))
        return

    for repo in listing.repos:
        console.print(f"  {repo.full_name}")
    console.print(f"\n[bold]{len(listing.repos)}[/bold] repositories ({listing.outcome.value})")


def commits(
    owner: OwnerArgument,
    repo: RepoNameArgument,
    output_format: OutputFormatOption = OutputFormat.TEXT,
) -> None:
    """Show the most recent commits of one repository.

    Examples:
        ghconnector commits octocat hello-world
        ghconnector commits octocat hello-world --format json
    """
    validate_owner(owner)
    validate_repo_name(repo)
    require_token()

    async def _fetch() -> CommitBatch:
        async with GitHubClient() as client:
            service = GitHubConnectorService(client)
            return await service.fetch_commits(owner, repo)

    batch = run_async_command(_fetch(), error_prefix="Fetching commits failed")

    if batch.outcome is FetchOutcome.NOT_FOUND:
        console.print(f"[red]Error:[/red] Repository '{owner}/{repo}' not found")
        raise typer.Exit(1)

    if output_format == OutputFormat.JSON:
        body = {
            "repository": f"{owner}/{repo}",
            "outcome": batch.outcome.value,
            "commits": [c.model_dump(mode="json") for c in batch.commits],
        }
        console.print_json(json.dumps(body))
        return

    if batch.outcome is FetchOutcome.EMPTY_REPOSITORY:
        console.print(f"[yellow]Repository '{owner}/{repo}' is empty[/yellow]")
        return

    console.print(_commit_table(f"{owner}/{repo} ({len(batch.commits)} commits)", batch.commits))
    if batch.outcome.hit_rate_limit:
        console.print("[yellow]Warning:[/yellow] commits incomplete due to rate limiting")
