"""Command-line interface for yt2pod."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from yt2pod.config.settings import DEFAULT_MIN_FEEDS

app = typer.Typer(
    name="yt2pod",
    help="Serve YouTube channels as podcast feeds.",
    no_args_is_help=True,
)

console = Console()


@app.command()
def check(
    config: Annotated[
        Path,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration JSON or YAML file.",
        ),
    ] = Path("yt2pod.json"),
    min_feeds: Annotated[
        int,
        typer.Option(
            "--min-feeds",
            help="Minimum number of podcasts the configuration must define.",
            min=0,
        ),
    ] = DEFAULT_MIN_FEEDS,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)."),
    ] = "WARNING",
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit logs as JSON lines."),
    ] = False,
) -> None:
    """Load and validate a configuration file, then summarize it."""
    from yt2pod.config import ConfigError, load_config
    from yt2pod.reporter import ConfigReporter
    from yt2pod.utils.logging import configure_logging

    configure_logging(level=log_level, json_output=json_logs)
    reporter = ConfigReporter(console)

    console.print(f"[blue]Loading configuration from {escape(str(config))}[/blue]")
    try:
        loaded = load_config(config, min_feeds=min_feeds)
    except ConfigError as e:
        reporter.print_error(config, e)
        raise typer.Exit(code=1) from e

    reporter.print_config(loaded)


@app.command()
def version() -> None:
    """Show version information."""
    from yt2pod import __version__

    console.print(f"yt2pod version {__version__}")


if __name__ == "__main__":
    app()
