"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path
from typing import Iterable, List

import pytest

from yuan_rates.core.models import RateEntry
from yuan_rates.parser_service.config import ParserConfig, PATTERN_TEMPLATE


def page_row(code: str, rate: str, label: str) -> str:
    """One currency row in the layout of huobiduihuan.bmcx.com."""
    return (
        f'<td><a href="/CNY{code}__huobiduihuan/">{rate}</a> '
        f'<a href="/{code}__huobiduihuan/" title="{label}汇率">{label}</a></td>'
    )


@pytest.fixture
def make_page():
    def _make(rows: Iterable[tuple]) -> str:
        body = "\n".join(page_row(*row) for row in rows)
        return f"<html><body><table>{body}</table></body></html>"

    return _make


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "exchange_rate.json"


@pytest.fixture
def write_cache(cache_path: Path):
    def _write(rows: List[dict]) -> Path:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(json.dumps(rows), encoding="utf-8")
        return cache_path

    return _write


@pytest.fixture
def parser_config(cache_path: Path) -> ParserConfig:
    return ParserConfig(
        RATES_URL="https://example.test/",
        USER_AGENT="test-agent/1.0",
        PATTERN_TEMPLATE=PATTERN_TEMPLATE,
        CURRENCIES=("USD", "EUR"),
        CACHE_FILE_PATH=str(cache_path),
        REQUEST_TIMEOUT=10.0,
    )


@pytest.fixture
def sample_entries() -> List[RateEntry]:
    return [
        RateEntry("USD", 7.0),
        RateEntry("EUR", 8.0),
        RateEntry("JPY", 0.048),
    ]
