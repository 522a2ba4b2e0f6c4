from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.table import Table

from blobcache.domain.models.cache import CacheStats, Entry
from blobcache.domain.models.common import Identifier
from blobcache.infrastructure.cli.display import ConsoleDisplay, format_bytes


@pytest.fixture
def mock_console():
    """Fixture to create a mock rich Console object."""
    return MagicMock()


@pytest.fixture
def mock_err_console():
    return MagicMock()


@pytest.fixture
def console_display(mock_console: MagicMock, mock_err_console: MagicMock):
    """Fixture to create a ConsoleDisplay instance with mocked consoles."""
    return ConsoleDisplay(console=mock_console, err_console=mock_err_console)


def test_display_error(console_display: ConsoleDisplay, mock_err_console: MagicMock):
    """Test that display_error prints to the error console with error formatting."""
    console_display.display_error("Something went wrong")
    mock_err_console.print.assert_called_once_with("[bold red]Error:[/bold red] Something went wrong")


def test_display_warning(console_display: ConsoleDisplay, mock_err_console: MagicMock):
    console_display.display_warning("Careful")
    mock_err_console.print.assert_called_once_with("[yellow]Warning:[/yellow] Careful")


def test_display_info(console_display: ConsoleDisplay, mock_console: MagicMock):
    """Test that display_info calls console.print with info formatting."""
    console_display.display_info("Process completed")
    mock_console.print.assert_called_once_with("[blue]Info:[/blue] Process completed")


def test_display_stats_renders_table(console_display: ConsoleDisplay, mock_console: MagicMock):
    stats = CacheStats(directory=Path("/tmp/c"), count=2, total_size=8192, count_limit=30, size_limit=10**9)

    console_display.display_stats(stats)

    (table,), _ = mock_console.print.call_args
    assert isinstance(table, Table)
    assert table.row_count == 4


def test_display_entries_renders_one_row_per_entry(console_display: ConsoleDisplay, mock_console: MagicMock):
    ns = int(datetime(2024, 1, 2, tzinfo=timezone.utc).timestamp()) * 1_000_000_000
    entries = [
        Entry(path=Path("a"), identifier=Identifier("a" * 64), last_access_ns=ns, last_modification_ns=ns, allocated_size=4096),
        Entry(path=Path("b"), identifier=Identifier("b" * 64)),
    ]

    console_display.display_entries(entries)

    (table,), _ = mock_console.print.call_args
    assert table.row_count == 2


def test_display_entries_when_empty(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_entries([])
    mock_console.print.assert_called_once_with("[blue]Info:[/blue] Cache is empty.")


@pytest.mark.parametrize("size, expected", [(0, "0 B"), (1023, "1023 B"), (1536, "1.5 KiB"), (1024 ** 3, "1.0 GiB")])
def test_format_bytes(size, expected):
    assert format_bytes(size) == expected
