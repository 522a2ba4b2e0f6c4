from pathlib import Path

import pytest

from blobcache.domain.models.errors import ConfigurationError
from blobcache.infrastructure.config import settings


def test_defaults_without_any_configuration(tmp_path: Path):
    assert settings.get_count_limit() == 30
    assert settings.get_size_limit() == 1_000_000_000
    assert settings.get_memory_items() == 100
    assert settings.get_fetch_timeout() == 30.0
    assert settings.get_cache_directory() == tmp_path / "xdg-cache" / "blobcache"


def test_env_var_name():
    assert settings.env_var_name("cache.count_limit") == "BLOBCACHE_CACHE_COUNT_LIMIT"


def test_environment_overrides_yaml(monkeypatch, tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("cache:\n  count_limit: 12\n  size_limit: 4096\n")
    settings.load_configuration(config_file=config_file, env_file=None, force=True)
    monkeypatch.setenv("BLOBCACHE_CACHE_COUNT_LIMIT", "7")

    assert settings.get_count_limit() == 7
    assert settings.get_size_limit() == 4096


def test_yaml_directory_is_expanded(tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(f"cache:\n  directory: {tmp_path / 'custom'}\n")
    settings.load_configuration(config_file=config_file, env_file=None, force=True)

    assert settings.get_cache_directory() == tmp_path / "custom"


def test_non_mapping_yaml_is_ignored(tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("- just\n- a list\n")
    settings.load_configuration(config_file=config_file, env_file=None, force=True)

    assert settings.get_count_limit() == 30


def test_dotenv_file_is_loaded(monkeypatch, tmp_path: Path):
    env_file = tmp_path / ".env"
    env_file.write_text("BLOBCACHE_CACHE_SIZE_LIMIT=2048\n")
    # Registers the variable so teardown removes what load_dotenv exports.
    monkeypatch.setenv("BLOBCACHE_CACHE_SIZE_LIMIT", "")
    monkeypatch.delenv("BLOBCACHE_CACHE_SIZE_LIMIT")

    settings.load_configuration(config_file=tmp_path / "missing.yaml", env_file=env_file, force=True)

    assert settings.get_size_limit() == 2048


def test_test_config_wins_over_environment(monkeypatch):
    monkeypatch.setenv("BLOBCACHE_CACHE_COUNT_LIMIT", "7")
    settings.set_config_for_testing({"cache.count_limit": 3})

    assert settings.get_count_limit() == 3


def test_set_config_exports_environment(monkeypatch):
    monkeypatch.delenv("BLOBCACHE_FETCH_TIMEOUT_SECONDS", raising=False)
    settings.set_config("fetch.timeout_seconds", 2.5)
    try:
        assert settings.get_fetch_timeout() == 2.5
    finally:
        monkeypatch.delenv("BLOBCACHE_FETCH_TIMEOUT_SECONDS", raising=False)


@pytest.mark.parametrize("value", ["-1", "lots"])
def test_invalid_limits_raise(monkeypatch, value):
    monkeypatch.setenv("BLOBCACHE_CACHE_COUNT_LIMIT", value)
    with pytest.raises(ConfigurationError):
        settings.get_count_limit()
