import logging
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from blobcache.infrastructure.cache.disk_cache import DiskCache
from blobcache.infrastructure.config import settings


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """A per-test cache directory that does not exist yet."""
    return tmp_path / "caches" / "blobcache"


@pytest.fixture
def disk_cache(cache_dir: Path) -> DiskCache:
    """A small DiskCache rooted in a temporary directory."""
    return DiskCache(count_limit=30, size_limit=1_000_000_000, directory=cache_dir)


@pytest.fixture(autouse=True)
def isolate_configuration(monkeypatch, tmp_path: Path):
    """Keeps user config and BLOBCACHE_* variables out of the tests."""
    for name in list(os.environ):
        if name.startswith(settings.ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))
    monkeypatch.setattr(settings, "_config", {})
    settings.clear_test_config()
    yield
    settings.clear_test_config()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def set_recency():
    """Returns a helper that pins both timestamps of a cache file to a fixed instant."""
    def _set(path: Path, seconds: int) -> None:
        ns = seconds * 1_000_000_000
        os.utime(path, ns=(ns, ns))
    return _set
