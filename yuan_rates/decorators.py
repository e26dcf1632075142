from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable

_logger = logging.getLogger("yuan_rates")


def _count(result: Any) -> str:
    if isinstance(result, bool):
        return str(result).lower()
    if isinstance(result, int):
        return str(result)
    try:
        return str(len(result))
    except TypeError:
        return "-"


def log_action(action: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to log rate pipeline actions (FETCH, CACHE_LOAD, CACHE_SAVE).

    Logs action, elapsed time and result (OK/ERROR). On success the entry
    count (or replace flag) is included. Does not swallow exceptions.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            t0 = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:  # noqa: BLE001
                elapsed_ms = int((time.perf_counter() - t0) * 1000)
                _logger.info(
                    "%s result=ERROR elapsed_ms=%d error_type=%s error_message='%s'",
                    action,
                    elapsed_ms,
                    type(exc).__name__,
                    str(exc).replace("'", "\\'"),
                )
                raise
            elapsed_ms = int((time.perf_counter() - t0) * 1000)
            _logger.info(
                "%s result=OK elapsed_ms=%d entries=%s",
                action,
                elapsed_ms,
                _count(result),
            )
            return result

        return wrapper

    return decorator
