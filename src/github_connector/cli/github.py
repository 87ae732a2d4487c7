"""GitHub API verification commands."""

import json

import typer
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table

from github_connector.cli.common import (
    OutputFormatOption,
    console,
    require_token,
    run_async_command,
)
from github_connector.config import get_settings
from github_connector.github import (
    GitHubClient,
    GitHubConnectorService,
    RateLimitReport,
    RateLimitStatus,
    RateLimitWindow,
    TokenTestResult,
)
from github_connector.github.activity import OutputFormat

app = typer.Typer(help="GitHub API commands")


def _get_status_style(status: RateLimitStatus) -> str:
    """Get rich style for status."""
    match status:
        case RateLimitStatus.HEALTHY:
            return "[green]HEALTHY[/green]"
        case RateLimitStatus.WARNING:
            return "[yellow]WARNING[/yellow]"
        case RateLimitStatus.CRITICAL:
            return "[red]CRITICAL[/red]"
        case RateLimitStatus.EXHAUSTED:
            return "[bold red]EXHAUSTED[/bold red]"
        case _:
            return str(status)


def _format_time_remaining(seconds: int) -> str:
    """Format seconds as human-readable time."""
    if seconds <= 0:
        return "Now"
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m {seconds % 60}s"
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours}h {minutes}m"


def _window_status(window: RateLimitWindow) -> RateLimitStatus:
    thresholds = get_settings().rate_limit
    return window.get_status(
        healthy_threshold=thresholds.healthy_threshold_pct,
        warning_threshold=thresholds.warning_threshold_pct,
        critical_threshold=thresholds.critical_threshold_pct,
    )


@app.command("rate-limit")
def show_rate_limit(
    all_resources: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Show all rate limit resources (not just core)",
    ),
    output_format: OutputFormatOption = OutputFormat.TEXT,
) -> None:
    """Show current GitHub API rate limit status.

    Examples:
        ghconnector github rate-limit
        ghconnector github rate-limit --all
        ghconnector github rate-limit --format json
    """
    require_token()

    async def _check() -> RateLimitReport:
        async with GitHubClient() as client:
            return await GitHubConnectorService(client).fetch_rate_limit_info()

    report = run_async_command(_check(), error_prefix="Rate limit check failed")

    if not report.ok:
        console.print(f"[red]Error:[/red] {report.message}")
        raise typer.Exit(1)

    windows = report.ordered_windows()
    if not all_resources:
        windows = [w for w in windows if w.resource == "core"]

    if output_format == OutputFormat.JSON:
        body = {
            "fetched_at": report.fetched_at.isoformat(),
            "resources": {w.resource: w.model_dump(mode="json") for w in windows},
        }
        console.print_json(json.dumps(body))
        return

    table = Table(title="GitHub API Rate Limits")
    table.add_column("Resource", style="bold")
    table.add_column("Status")
    table.add_column("Remaining", justify="right")
    table.add_column("Limit", justify="right")
    table.add_column("Used %", justify="right")
    table.add_column("Resets In", justify="right")
    table.add_column("Resets At")

    for window in windows:
        usage_pct = window.usage_percent
        if usage_pct < 50:
            usage_str = f"[green]{usage_pct:.1f}%[/green]"
        elif usage_pct < 80:
            usage_str = f"[yellow]{usage_pct:.1f}%[/yellow]"
        else:
            usage_str = f"[red]{usage_pct:.1f}%[/red]"

        table.add_row(
            window.resource,
            _get_status_style(_window_status(window)),
            str(window.remaining),
            str(window.limit),
            usage_str,
            _format_time_remaining(window.seconds_until_reset),
            window.reset_time_formatted,
        )

    console.print()
    console.print(table)

    core = report.core
    if core is None:
        return

    console.print()
    remaining_pct = core.remaining_percent
    with Progress(
        TextColumn("[bold]Core quota:[/bold]"),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TextColumn(f"{remaining_pct:.1f}% remaining"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("", total=100)
        progress.update(task, completed=remaining_pct)
        progress.refresh()

    core_status = _window_status(core)
    if core_status == RateLimitStatus.CRITICAL:
        console.print(
            "\n[yellow]Recommendation:[/yellow] Rate limit is low. "
            "Consider waiting before making more API calls."
        )
    elif core_status == RateLimitStatus.EXHAUSTED:
        console.print(
            f"\n[red]Rate limit exhausted![/red] "
            f"Wait {_format_time_remaining(core.seconds_until_reset)} before making API calls."
        )


@app.command("test-token")
def test_token(
    output_format: OutputFormatOption = OutputFormat.TEXT,
) -> None:
    """Check that GITHUB_TOKEN authenticates against the GitHub API.

    Exits with code 1 when the token is invalid.

    Examples:
        ghconnector github test-token
    """
    require_token()

    async def _test() -> TokenTestResult:
        async with GitHubClient() as client:
            return await GitHubConnectorService(client).test_token()

    result = run_async_command(_test(), error_prefix="Token test failed")

    if output_format == OutputFormat.JSON:
        console.print_json(result.model_dump_json())
    elif result.valid:
        console.print(f"[green]✓[/green] {result.message}")
    else:
        console.print(f"[red]✗[/red] {result.message}")
        if result.error_type:
            console.print(f"  Error type: {result.error_type}")

    if not result.valid:
        raise typer.Exit(1)
