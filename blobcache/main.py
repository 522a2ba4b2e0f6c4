"""Main entry point for the blobcache application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Any, Coroutine, Dict, Optional, TypeVar

import typer

from blobcache import __version__
from blobcache.core.command_handler import CommandHandler
from blobcache.core.services.fetch_service import FetchService
from blobcache.domain.models.errors import ConfigurationError
from blobcache.infrastructure.cache.disk_cache import DiskCache
from blobcache.infrastructure.cache.memory_cache import LRUMemoryCache
from blobcache.infrastructure.cli.display import ConsoleDisplay
from blobcache.infrastructure.config.settings import (
    get_cache_directory,
    get_config,
    get_count_limit,
    get_fetch_timeout,
    get_memory_items,
    get_size_limit,
    load_configuration,
)
from blobcache.infrastructure.monitoring.logger_setup import resolve_log_level, setup_logging
from blobcache.infrastructure.network.http_fetcher import HttpFetcher

logger = logging.getLogger(__name__)

T = TypeVar("T")


# --- Dependency Injection Container (Manual) ---

def create_dependencies(
    directory: Optional[Path] = None,
    count_limit: Optional[int] = None,
    size_limit: Optional[int] = None,
    log_level: Optional[str] = None,
) -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root. Explicit arguments win over
    configured values.
    """
    load_configuration()
    setup_logging(
        log_level=resolve_log_level(log_level or get_config('logging.level')),
        log_file=get_config('logging.file'),
    )

    dependencies: Dict[str, Any] = {}
    dependencies['ui'] = ConsoleDisplay()
    dependencies['disk_cache'] = DiskCache(
        count_limit=count_limit if count_limit is not None else get_count_limit(),
        size_limit=size_limit if size_limit is not None else get_size_limit(),
        directory=directory or get_cache_directory(),
    )
    dependencies['memory_cache'] = LRUMemoryCache(max_items=get_memory_items())
    dependencies['fetcher'] = HttpFetcher(timeout=get_fetch_timeout())
    dependencies['fetch_service'] = FetchService(
        disk_cache=dependencies['disk_cache'],
        fetcher=dependencies['fetcher'],
        memory_cache=dependencies['memory_cache'],
    )
    dependencies['command_handler'] = CommandHandler(
        disk_cache=dependencies['disk_cache'],
        fetch_service=dependencies['fetch_service'],
        ui=dependencies['ui'],
    )
    logger.debug("All dependencies initialized successfully.")
    return dependencies


# --- Typer App Definition ---
app = typer.Typer(
    name="blobcache",
    help="blobcache: persistent, count- and size-bounded blob cache with LRU eviction.",
    add_completion=False,
)


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Runs an async handler from a sync Typer command."""
    return asyncio.run(coro)


def _handler(ctx: typer.Context) -> CommandHandler:
    return ctx.obj['command_handler']


def _exit_unless(succeeded: bool) -> None:
    if not succeeded:
        raise typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"blobcache {__version__}")
        raise typer.Exit()


OutputOption = Annotated[
    Optional[Path],
    typer.Option("--output", "-o", dir_okay=False, writable=True, help="Write the payload to this file instead of stdout.")
]


@app.callback()
def main_callback(
    ctx: typer.Context,
    directory: Annotated[Optional[Path], typer.Option("--directory", "-d", file_okay=False, help="Cache directory (defaults to the platform cache dir).")] = None,
    count_limit: Annotated[Optional[int], typer.Option("--count-limit", min=0, help="Maximum number of entries.")] = None,
    size_limit: Annotated[Optional[int], typer.Option("--size-limit", min=0, help="Maximum total size in bytes.")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Logging level (debug, info, warning, error).")] = None,
    version: Annotated[bool, typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit.")] = False,
):
    """Persistent blob cache. Builds the store before running a command."""
    try:
        ctx.obj = create_dependencies(
            directory=directory,
            count_limit=count_limit,
            size_limit=size_limit,
            log_level=log_level,
        )
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        typer.echo(f"Error: invalid configuration: {e}", err=True)
        raise typer.Exit(code=2)


@app.command()
def get(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Cache key to read.")],
    output: OutputOption = None,
):
    """Print (or save) the payload stored under KEY."""
    data = run_async(_handler(ctx).handle_get(key, output))
    _exit_unless(data is not None)
    if output is None:
        typer.echo(data, nl=False)


@app.command()
def put(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Cache key to write.")],
    value: Annotated[Optional[str], typer.Argument(help="Text payload (UTF-8). Use --file for binary data.")] = None,
    file: Annotated[Optional[Path], typer.Option("--file", "-f", exists=True, dir_okay=False, readable=True, help="Read the payload from this file.")] = None,
):
    """Store a payload under KEY."""
    if (value is None) == (file is None):
        _handler(ctx).ui.display_error("Provide exactly one of VALUE or --file.")
        raise typer.Exit(code=2)
    data = file.read_bytes() if file is not None else value.encode("utf-8")
    _exit_unless(run_async(_handler(ctx).handle_put(key, data)))


@app.command()
def delete(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Cache key to remove.")],
):
    """Remove the entry stored under KEY."""
    _exit_unless(run_async(_handler(ctx).handle_delete(key)))


@app.command()
def stats(ctx: typer.Context):
    """Show entry count and allocated size against the limits."""
    _exit_unless(run_async(_handler(ctx).handle_stats()))


@app.command()
def entries(ctx: typer.Context):
    """List entries, most recently used first."""
    _exit_unless(run_async(_handler(ctx).handle_entries()))


@app.command()
def evict(ctx: typer.Context):
    """Run an eviction pass against the configured limits."""
    _exit_unless(run_async(_handler(ctx).handle_evict()))


@app.command()
def clear(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")] = False,
):
    """Delete every entry in the cache directory."""
    if not yes:
        typer.confirm(f"Remove all entries from {ctx.obj['disk_cache'].directory}?", abort=True)
    _exit_unless(run_async(_handler(ctx).handle_clear()))


@app.command()
def fetch(
    ctx: typer.Context,
    url: Annotated[str, typer.Argument(help="URL to fetch through the memory, disk and network tiers.")],
    output: OutputOption = None,
):
    """Fetch URL, serving it from the cache when possible."""
    result = run_async(_handler(ctx).handle_fetch(url, output))
    _exit_unless(result is not None)
    if output is None:
        typer.echo(result.data, nl=False)


# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
