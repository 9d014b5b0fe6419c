"""
Console reporter for loaded configurations.

Formats a Configuration, or the error that prevented loading one, using
Rich for clear, colored output.
"""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from yt2pod.config import ConfigError, Configuration, FeedDefinition


class ConfigReporter:
    """Formats and displays configuration load results to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_config(self, config: Configuration) -> None:
        """
        Print the watch policy and a table of the configured podcasts.

        Args:
            config: Successfully loaded configuration.
        """
        self._print_watch_policy(config)

        table = Table(title="Podcasts", show_header=True)
        table.add_column("Short name", style="cyan", no_wrap=True)
        table.add_column("Channel", style="blue")
        table.add_column("Feed URL")
        table.add_column("Epoch", justify="center")
        table.add_column("Title filter", style="dim")

        for feed in config.feeds:
            table.add_row(
                escape(feed.short_name),
                escape(feed.channel_ref) or "-",
                escape(config.feed_url(feed)),
                feed.epoch_str or "-",
                self._format_filter(feed),
            )

        self.console.print(table)
        self.console.print(f"[green]OK: {len(config.feeds)} podcasts configured[/green]")

    def print_error(self, config_path: Path, error: ConfigError) -> None:
        """
        Print the reason a configuration was rejected.

        Args:
            config_path: Path of the rejected file.
            error: The error raised by the loader.
        """
        self.console.print(f"[bold red]Invalid configuration:[/bold red] {escape(str(config_path))}")
        self.console.print(f"  [red]{type(error).__name__}[/red]: {escape(str(error))}")
        if error.__cause__ is not None:
            self.console.print(f"  [dim]caused by: {escape(str(error.__cause__))}[/dim]")

    def _print_watch_policy(self, config: Configuration) -> None:
        policy = config.watch_policy
        self.console.print("[bold]Watch policy:[/bold]")
        self.console.print(f"  Check interval: every {policy.check_interval_minutes} min")
        self.console.print(
            f"  Download: {escape(policy.download_format_selector)} "
            f"-> .{escape(policy.download_file_extension)}"
        )
        listings = "on" if policy.serve_directory_listings else "off"
        self.console.print(
            f"  Serving: {escape(policy.url_for(''))} (directory listings {listings})"
        )
        self.console.print()

    def _format_filter(self, feed: FeedDefinition) -> str:
        if not feed.title_filter_pattern:
            return "(all titles)"
        return escape(feed.title_filter_pattern)
