import logging
from typing import Any, List, Optional

from rich.console import Console
from rich.table import Table
from rich.box import ROUNDED

from blobcache.domain.interfaces.user_interface import UserInterface
from blobcache.domain.models.cache import CacheStats, Entry

logger = logging.getLogger(__name__)


def format_bytes(size: int) -> str:
    """Human readable byte count (1536 -> '1.5 KiB')."""
    value = float(size)
    for unit in ("B", "KiB", "MiB", "GiB"):
        if abs(value) < 1024 or unit == "GiB":
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GiB"


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output.

    Results go to stdout; warnings and errors go to stderr so they never mix
    with payload bytes piped out of `blobcache get`.
    """

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        """Initializes the rich Consoles."""
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        self.err_console.print(f"[bold red]Error:[/bold red] {error_message}")

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        self.err_console.print(f"[yellow]Warning:[/yellow] {warning_message}")

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        self.console.print(f"[blue]Info:[/blue] {info_message}")

    def display_stats(self, stats: CacheStats) -> None:
        table = Table(title="Disk cache", box=ROUNDED, show_header=True, header_style="bold cyan")
        table.add_column("Setting")
        table.add_column("Value", justify="right")
        table.add_row("Directory", str(stats.directory))
        table.add_row("Entries", f"{stats.count} / {stats.count_limit}")
        table.add_row("Allocated", f"{format_bytes(stats.total_size)} / {format_bytes(stats.size_limit)}")
        status = "[green]within bounds[/green]" if stats.within_bounds else "[red]over bounds[/red]"
        table.add_row("Status", status)
        self.console.print(table)

    def display_entries(self, entries: List[Entry]) -> None:
        if not entries:
            self.display_info("Cache is empty.")
            return
        table = Table(box=ROUNDED, show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Identifier")
        table.add_column("Size", justify="right")
        table.add_column("Last used (UTC)")
        for position, entry in enumerate(entries, start=1):
            last_used = entry.last_used
            table.add_row(
                str(position),
                entry.identifier,
                format_bytes(entry.size),
                last_used.strftime("%Y-%m-%d %H:%M:%S") if last_used else "unknown",
            )
        logger.debug(f"Rendering {len(entries)} cache entries")
        self.console.print(table)
