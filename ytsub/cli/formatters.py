"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ytsub.models.config import RunConfig
from ytsub.models.stats import PassStats
from ytsub.models.subscription import OrganizeRules, SubscriptionSet
from ytsub.utils.formatting import format_duration
from ytsub.utils.path import safe_dir_name


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Pass the subscriptions file or its folder as the first argument.",
            "• Run `ytsub --create` to write an example subscriptions.txt.",
        ],
        "IntervalError": [
            "• Use components in the order d, h, m, s: `-t 2h30m`, `-t 1d`.",
            "• A plain number is read as seconds: `-t 900`.",
        ],
        "DownloadError": [
            "• Check that yt-dlp is installed and on your PATH.",
            "• Use `--downloader` to point at another executable.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def _rules_text(rules: OrganizeRules) -> str:
    if not rules:
        return "[dim]none[/dim]"
    return "\n".join(
        f"[cyan]{escape(key)}[/cyan] ← {escape(str(pattern))}"
        for key, pattern in rules.items()
    )


def _arguments_text(arguments: list[str]) -> str:
    if not arguments:
        return "[dim]none[/dim]"
    return escape(" ".join(arguments))


def print_subscriptions(
    subscription_set: SubscriptionSet, base_dir: Path, console: Console | None = None
):
    """Prints the fully resolved subscriptions file (used by --dry)."""
    console = console or Console()
    global_config = subscription_set.global_config

    global_table = Table(box=box.ROUNDED, show_header=False, title="Global settings")
    global_table.add_column("Setting", style="bold")
    global_table.add_column("Value")
    global_table.add_row("Arguments", _arguments_text(global_config.arguments))
    global_table.add_row("Organize", _rules_text(global_config.organize_rules))
    console.print(global_table)

    if not subscription_set.subscriptions:
        console.print("[yellow]No subscriptions defined.[/yellow]")
        return

    for subscription in subscription_set.subscriptions:
        table = Table(
            box=box.ROUNDED,
            show_header=False,
            title=f"[bold cyan]{escape(subscription.name)}[/bold cyan]",
        )
        table.add_column("Setting", style="bold")
        table.add_column("Value")
        folder = base_dir / safe_dir_name(subscription.name)
        table.add_row("Folder", f"[dim]{escape(str(folder))}[/dim]")
        table.add_row("Arguments", _arguments_text(subscription.arguments))
        table.add_row("Organize", _rules_text(subscription.organize_rules))
        table.add_row(
            "URLs",
            "\n".join(escape(url) for url in subscription.urls) or "[dim]none[/dim]",
        )
        console.print(table)

    console.print(
        f"[green]✓[/green] {len(subscription_set.subscriptions)} subscriptions, "
        f"{subscription_set.total_urls} URLs."
    )


def print_run_header(config: RunConfig, console: Console | None = None):
    """Prints what is about to run."""
    console = console or Console()
    interval = (
        format_duration(config.interval_seconds) if config.interval_seconds else "once"
    )
    console.print(
        f"[bold cyan]📺 ytsub[/bold cyan] [dim]{escape(str(config.subscriptions_file))}"
        f"[/dim] · every [cyan]{interval}[/cyan] · downloader "
        f"[cyan]{escape(config.downloader)}[/cyan]"
    )


def print_summary_panel(stats: PassStats, console: Console | None = None):
    """Prints a summary of the last pass."""
    console = console or Console()
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bold")
    grid.add_column()
    grid.add_row("Subscriptions", str(stats.subscriptions))
    grid.add_row("URLs downloaded", f"[green]{stats.urls_succeeded}[/green]")
    grid.add_row(
        "URLs failed",
        f"[red]{stats.urls_failed}[/red]" if stats.urls_failed else "0",
    )
    grid.add_row("Files moved", str(stats.files_moved))
    if stats.files_failed:
        grid.add_row("Moves failed", f"[red]{stats.files_failed}[/red]")
    grid.add_row("Duration", format_duration(stats.duration))

    for url in stats.failed_urls:
        grid.add_row("[red]✗[/red]", escape(url))

    console.print(
        Panel(
            grid,
            title="[bold]Pass Summary[/bold]",
            border_style="red" if stats.has_failures else "green",
            expand=False,
        )
    )
