from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Mapping

from dotenv import find_dotenv, load_dotenv

from ..core.exceptions import ConfigError
from ..infra.settings import SettingsLoader


# Валюты в порядке вывода
CURRENCIES: Final[tuple[str, ...]] = (
    "USD",
    "HKD",
    "JPY",
    "ARS",
    "TRY",
    "RUB",
    "EUR",
    "GBP",
    "TWD",
    "KRW",
    "AUD",
)

RATES_URL: Final[str] = "https://huobiduihuan.bmcx.com/"
USER_AGENT: Final[str] = (
    "Mozilla/5.0 (X11; Linux x86_64; rv:74.0) Gecko/20100101 Firefox/74.0"
)
# group 1: rate, group 2: currency label
PATTERN_TEMPLATE: Final[str] = (
    r'(\d+\.\d+)</a> <a href="/{code}__huobiduihuan/" title=".*?">(.*?)<'
)
CACHE_FILE_NAME: Final[str] = "exchange_rate.json"


@dataclass(frozen=True)
class ParserConfig:
    # Источник
    RATES_URL: str
    USER_AGENT: str
    PATTERN_TEMPLATE: str

    # Список валют
    CURRENCIES: tuple[str, ...]

    # Пути
    CACHE_FILE_PATH: str

    # Сетевые параметры
    REQUEST_TIMEOUT: float


def resolve_cache_dir(env: Mapping[str, str] | None = None) -> Path:
    """Return the XDG cache directory.

    $XDG_CACHE_HOME if set and non-empty, else $HOME/.cache.

    Raises:
        ConfigError: if neither variable gives a usable path
    """
    env = os.environ if env is None else env
    xdg = (env.get("XDG_CACHE_HOME") or "").strip()
    if xdg:
        return Path(xdg)
    home = (env.get("HOME") or "").strip()
    if home:
        return Path(home) / ".cache"
    raise ConfigError("neither XDG_CACHE_HOME nor HOME is set")


def resolve_cache_path(env: Mapping[str, str] | None = None) -> Path:
    return resolve_cache_dir(env) / CACHE_FILE_NAME


def _load_env_file() -> None:
    # Load .env once per process (non-overriding), if available
    try:
        path = find_dotenv(usecwd=True)
        if path:
            load_dotenv(dotenv_path=path, override=False)
    except Exception:
        # Ignore .env loading issues silently; fall back to real env
        pass


def load_parser_config(cache_file: str | os.PathLike[str] | None = None) -> ParserConfig:
    """Load converter configuration from env/.env and project settings.

    Returns a frozen ParserConfig with the page URL, request headers, currency
    list, cache path and network timeout. Environment variables override .env;
    an explicit cache_file (CLI) wins over the `cache_file` setting, which
    wins over XDG resolution.

    Raises:
        ConfigError: when no cache path can be resolved or the timeout is bad
    """
    _load_env_file()
    settings = SettingsLoader()
    chosen = cache_file or settings.get("cache_file")
    cache_path = Path(chosen) if chosen else resolve_cache_path()

    raw_timeout = os.getenv("RATES_HTTP_TIMEOUT", "10")
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise ConfigError(f"RATES_HTTP_TIMEOUT is not a number: {raw_timeout!r}") from exc
    if timeout <= 0:
        raise ConfigError("RATES_HTTP_TIMEOUT must be positive")

    return ParserConfig(
        RATES_URL=os.getenv("RATES_URL", RATES_URL),
        USER_AGENT=os.getenv("RATES_USER_AGENT", USER_AGENT),
        PATTERN_TEMPLATE=PATTERN_TEMPLATE,
        CURRENCIES=CURRENCIES,
        CACHE_FILE_PATH=os.fspath(cache_path),
        REQUEST_TIMEOUT=timeout,
    )


def build_pattern(cfg: ParserConfig, code: str) -> str:
    """Собрать регулярное выражение для одной валюты."""
    return cfg.PATTERN_TEMPLATE.replace("{code}", re.escape(code))
