"""Main CLI application for GitHub Connector."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from github_connector import __version__
from github_connector.cli import activity as activity_cmd
from github_connector.cli import github as github_cmd
from github_connector.config import get_settings
from github_connector.logging import setup_logging

app = typer.Typer(
    name="ghconnector",
    help="Recent commit activity across a GitHub user's or organization's repositories.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"ghconnector version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-error output (WARNING level).",
        ),
    ] = False,
) -> None:
    """GitHub Connector - Fetch recent commit activity from GitHub."""
    settings = get_settings()
    log_config = settings.logging

    # Setup logging with CLI overrides
    setup_logging(
        level=settings.log_level,
        verbose=verbose,
        quiet=quiet,
        log_file=Path(log_config.log_file) if log_config.log_file else None,
        rotation=log_config.rotation,
        retention=log_config.retention,
        serialize=log_config.serialize,
    )


# Activity commands live at the top level
app.command("activity")(activity_cmd.activity)
app.command("summary")(activity_cmd.summary)
app.command("quick")(activity_cmd.quick)
app.command("repos")(activity_cmd.repos)
app.command("commits")(activity_cmd.commits)

# Register subcommands
app.add_typer(github_cmd.app, name="github")


if __name__ == "__main__":
    app()
