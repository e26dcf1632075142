"""CLI entrypoint for the CNY converter.

Запуск: кеш загружается в таблицу, параллельно идёт запрос курсов со
страницы; пользователь вводит сумму и сразу видит расчёт по тем данным,
что уже есть. После завершения обеих задач расчёт повторяется по
итоговой таблице, и таблица сохраняется в кеш.
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
import time
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, TextIO

from ..core.exceptions import (
    AmountParseError,
    CacheParseError,
    CacheReadError,
    CacheWriteError,
    ConfigError,
    FetchError,
)
from ..core.store import RateStore
from ..core.utils import calculate, parse_amount
from ..infra.settings import SettingsLoader
from ..logging_config import configure_logging
from ..parser_service.api_clients import BaseRatesClient
from ..parser_service.config import ParserConfig, load_parser_config
from ..parser_service.storage import load_cache, save_cache
from ..parser_service.updater import fetch_into_store

logger = logging.getLogger("yuan_rates")

PROMPT = "Money: "
# extra wait at the join on top of REQUEST_TIMEOUT (connect + first read)
JOIN_GRACE_SECONDS = 1.0


def _print_error(msg: str) -> None:
    """Print a user-facing error message (no stack traces)."""
    print(msg)


def read_amount_and_calculate(
    store: RateStore,
    cache_path: str,
    *,
    table: bool = False,
    reader: Callable[[str], str] = input,
    out: TextIO | None = None,
) -> float:
    """Seed the store from cache, ask for the amount, print a first result.

    Cache problems are not reported to the user: the store simply stays
    as it is (empty, or already filled by the fetch).

    Raises:
        AmountParseError: input is not a number or stdin is closed
    """
    try:
        load_cache(cache_path, store)
    except (CacheReadError, CacheParseError) as exc:
        logger.debug("Cache not used: %s", exc)

    try:
        line = reader(PROMPT)
    except EOFError as exc:
        raise AmountParseError("") from exc
    amount = parse_amount(line)
    calculate(amount, store.get_snapshot(), out, table=table)
    return amount


def start_fetch(
    store: RateStore, cfg: ParserConfig, client: BaseRatesClient | None = None
) -> Future:
    """Run fetch_into_store on a daemon thread; the outcome lands in a Future.

    A daemon thread never holds the process open: a fatal input error exits
    at once even if the page is still downloading.
    """
    future: Future = Future()
    future.set_running_or_notify_cancel()

    def target() -> None:
        try:
            future.set_result(fetch_into_store(store, cfg, client))
        except Exception as exc:  # noqa: BLE001 - inspected at the join point
            future.set_exception(exc)

    threading.Thread(target=target, name="yuan-rates-fetch", daemon=True).start()
    return future


def _report_fetch(future: Future, timeout: float) -> None:
    """Inspect the fetch outcome at the join point; log, never raise."""
    try:
        exc = future.exception(timeout=max(0.0, timeout))
    except FutureTimeoutError:
        logger.warning("Rates were not updated: fetch did not finish in time")
        return
    if exc is None:
        return
    if isinstance(exc, FetchError):
        logger.warning("Rates were not updated: %s", exc)
    else:
        logger.error("Rates fetch crashed: %s", exc, exc_info=exc)


def run(
    cfg: ParserConfig,
    *,
    offline: bool = False,
    table: bool = False,
    client: BaseRatesClient | None = None,
    reader: Callable[[str], str] = input,
    out: TextIO | None = None,
) -> int:
    """Run one conversion session. Returns exit code.

    The fetch runs in the background while the amount is read on the calling
    thread. The join waits for the fetch no longer than REQUEST_TIMEOUT
    (plus JOIN_GRACE_SECONDS) from its start; a fetch still running after
    that is abandoned and the store keeps what it has.

    Raises:
        AmountParseError: bad amount; nothing is recalculated or saved
    """
    store = RateStore()
    fetch_future: Future | None = None
    fetch_deadline = time.monotonic() + cfg.REQUEST_TIMEOUT + JOIN_GRACE_SECONDS
    if not offline:
        fetch_future = start_fetch(store, cfg, client)

    amount = read_amount_and_calculate(
        store,
        cfg.CACHE_FILE_PATH,
        table=table,
        reader=reader,
        out=out,
    )
    if fetch_future is not None:
        _report_fetch(fetch_future, fetch_deadline - time.monotonic())

    final = store.get_snapshot()
    calculate(amount, final, out, table=table)
    try:
        save_cache(cfg.CACHE_FILE_PATH, final)
    except CacheWriteError as exc:
        logger.error("%s", exc)
        _print_error("cache the data failed")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Construct the argparse parser."""
    parser = argparse.ArgumentParser(
        prog="yuan-rates",
        description="Конвертация суммы в юанях по курсам huobiduihuan.bmcx.com",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Не обращаться к сети, использовать только кеш",
    )
    parser.add_argument(
        "--table", action="store_true", help="Вывести результат таблицей"
    )
    parser.add_argument(
        "--cache-file",
        default=None,
        help="Путь к файлу кеша (по умолчанию $XDG_CACHE_HOME/exchange_rate.json)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Уровень логирования в консоль и файл",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint used by the console script and main.py.

    Args:
        argv: Optional explicit argv (without program name). If None, uses sys.argv[1:].
    Returns:
        Exit code integer (0 success, non-zero on error).
    """
    ns = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    if ns.log_level:
        settings = SettingsLoader()
        settings.set("log_level", ns.log_level)
        settings.set("console_log_level", ns.log_level)
    # Ensure logging is configured once per process
    configure_logging()
    try:
        cfg = load_parser_config(ns.cache_file)
        return run(cfg, offline=ns.offline, table=ns.table)
    except ConfigError as exc:
        _print_error(str(exc))
        _print_error("Подсказка: задайте XDG_CACHE_HOME или HOME")
        return 1
    except AmountParseError as exc:
        _print_error(str(exc))
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
