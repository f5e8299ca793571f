"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from ytsub import __version__
from ytsub.core import Scheduler, SubscriptionRunner
from ytsub.exceptions import YtsubError
from ytsub.media import Downloader, Organizer
from ytsub.models.config import DEFAULT_DOWNLOADER, RunConfig
from ytsub.storage.config_manager import ConfigManager
from ytsub.utils.structured_logger import create_pass_logger

from .formatters import (
    format_error_with_suggestions,
    print_run_header,
    print_subscriptions,
    print_summary_panel,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("ytsub")

app = typer.Typer(
    name="ytsub",
    help=(
        "Keeps folders of yt-dlp subscriptions up to date and sorts the downloaded"
        " files. Reads subscriptions.txt from the current directory by default."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


async def _dry_run(config: RunConfig, config_manager: ConfigManager) -> None:
    subscription_set = await config_manager.load_subscriptions()
    print_subscriptions(subscription_set, config.base_dir, console=console)


async def _run(config: RunConfig, config_manager: ConfigManager) -> None:
    base_logger, events = create_pass_logger(config.log_dir)
    runner = SubscriptionRunner(
        config_manager,
        Downloader(config.downloader, config.archive_name),
        Organizer(config.archive_name),
        events,
    )
    scheduler = Scheduler(runner.run_pass, config.interval_seconds, events)
    try:
        await scheduler.run()
    finally:
        base_logger.close()

    if not config.interval_seconds and runner.last_stats:
        print_summary_panel(runner.last_stats, console=console)


@app.command()
def main(
    path: Path | None = typer.Argument(  # noqa: B008
        None,
        help="subscriptions.txt, or a folder containing one.",
        show_default=False,
    ),
    interval: str | None = typer.Option(
        None,
        "-t",
        "--interval",
        help="Re-run every interval, e.g. 90s, 2h30m, 1d or plain seconds.",
    ),
    dry: bool = typer.Option(
        False, "--dry", help="Parse the subscriptions file and don't call yt-dlp."
    ),
    create: bool = typer.Option(
        False,
        "--create",
        "-c",
        help="Create an example subscriptions.txt in the current directory.",
    ),
    downloader: str = typer.Option(
        DEFAULT_DOWNLOADER,
        "--downloader",
        envvar="YTSUB_DOWNLOADER",
        help="Downloader executable to run for each URL.",
    ),
    log_dir: Path | None = typer.Option(  # noqa: B008
        None, "--log-dir", help="Also write JSON-lines event logs to this folder."
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """Download every subscription, then organize the files."""
    if version:
        console.print(f"[bold]ytsub[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    logging.getLogger("ytsub").setLevel("DEBUG" if verbose >= 2 else "INFO")

    if create:
        created = ConfigManager.create_example(Path.cwd())
        if created:
            console.print(
                f"[green]✓ Created example subscriptions file at '{created}'.[/green]"
            )
        else:
            console.print(
                "[yellow]subscriptions.txt already exists, not overwriting.[/yellow]"
            )
        raise typer.Exit()

    config_manager = ConfigManager.from_cli_path(path)
    try:
        config = config_manager.build_run_config(
            {
                "interval_seconds": interval,
                "dry_run": dry,
                "downloader": downloader,
                "log_dir": log_dir,
            }
        )
    except YtsubError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    if config.dry_run:
        try:
            asyncio.run(_dry_run(config, config_manager))
        except YtsubError as e:
            console.print(format_error_with_suggestions(e))
            raise typer.Exit(code=1) from e
        return

    print_run_header(config, console=console)
    try:
        asyncio.run(_run(config, config_manager))
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Stopped by user.[/yellow]")
        raise typer.Exit(code=0) from None
