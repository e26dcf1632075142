"""Tests for configuration and cache path resolution."""

from pathlib import Path

import pytest

from yuan_rates.core.exceptions import ConfigError
from yuan_rates.infra.settings import SettingsLoader
from yuan_rates.parser_service.config import (
    CURRENCIES,
    ParserConfig,
    build_pattern,
    load_parser_config,
    resolve_cache_dir,
    resolve_cache_path,
)


class TestResolveCacheDir:
    def test_xdg_cache_home_wins(self):
        env = {"XDG_CACHE_HOME": "/tmp/xdg", "HOME": "/home/u"}
        assert resolve_cache_dir(env) == Path("/tmp/xdg")

    def test_falls_back_to_home(self):
        assert resolve_cache_dir({"HOME": "/home/u"}) == Path("/home/u/.cache")

    def test_empty_xdg_falls_back_to_home(self):
        env = {"XDG_CACHE_HOME": "", "HOME": "/home/u"}
        assert resolve_cache_dir(env) == Path("/home/u/.cache")

    def test_nothing_set(self):
        with pytest.raises(ConfigError):
            resolve_cache_dir({})

    def test_cache_file_name(self):
        path = resolve_cache_path({"HOME": "/home/u"})
        assert path == Path("/home/u/.cache/exchange_rate.json")


class TestLoadParserConfig:
    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
        monkeypatch.delenv("RATES_URL", raising=False)
        monkeypatch.delenv("RATES_HTTP_TIMEOUT", raising=False)
        cfg = load_parser_config()
        assert isinstance(cfg, ParserConfig)
        assert cfg.CACHE_FILE_PATH == str(tmp_path / "exchange_rate.json")
        assert cfg.REQUEST_TIMEOUT == 10.0
        assert cfg.CURRENCIES == CURRENCIES
        assert cfg.RATES_URL == "https://huobiduihuan.bmcx.com/"
        assert "Firefox" in cfg.USER_AGENT

    def test_explicit_cache_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        monkeypatch.delenv("HOME", raising=False)
        target = tmp_path / "rates.json"
        cfg = load_parser_config(target)
        assert cfg.CACHE_FILE_PATH == str(target)

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
        monkeypatch.setenv("RATES_URL", "http://mirror.test/")
        monkeypatch.setenv("RATES_HTTP_TIMEOUT", "2.5")
        cfg = load_parser_config()
        assert cfg.RATES_URL == "http://mirror.test/"
        assert cfg.REQUEST_TIMEOUT == 2.5

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_bad_timeout(self, monkeypatch, tmp_path, value):
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
        monkeypatch.setenv("RATES_HTTP_TIMEOUT", value)
        with pytest.raises(ConfigError):
            load_parser_config()

    def test_no_cache_dir(self, monkeypatch):
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        monkeypatch.delenv("HOME", raising=False)
        with pytest.raises(ConfigError):
            load_parser_config()


def test_build_pattern_inserts_code(parser_config):
    pattern = build_pattern(parser_config, "USD")
    assert '/USD__huobiduihuan/' in pattern
    assert "{code}" not in pattern


class TestSettingsLoader:
    @pytest.fixture
    def settings(self):
        loader = SettingsLoader()
        saved_root, saved_config = loader._root, dict(loader._config)
        yield loader
        loader._root = saved_root
        loader._config = saved_config

    def test_reads_tool_section(self, settings, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            '[tool.yuan_rates]\nconsole_log_level = "ERROR"\n'
            'cache_file = "/tmp/rates.json"\n',
            encoding="utf-8",
        )
        settings._root = tmp_path
        settings.reload()
        assert settings.get("console_log_level") == "ERROR"
        assert settings.get("cache_file") == "/tmp/rates.json"
        assert settings.get("log_level") == "INFO"

    def test_project_pyproject_is_parsed(self, settings):
        settings.reload()
        assert settings.get("log_backup_count") == 5
        assert settings.get("console_log_level") == "WARNING"
