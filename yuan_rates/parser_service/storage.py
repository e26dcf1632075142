from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Iterable

from ..core.exceptions import CacheParseError, CacheReadError, CacheWriteError
from ..core.models import RateEntry
from ..core.store import RateStore
from ..decorators import log_action


def _atomic_write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(obj, ensure_ascii=False), encoding="utf-8")
    os.replace(tmp, path)


def read_cache_entries(path: str | os.PathLike[str]) -> list[RateEntry]:
    """Read and validate the cache file.

    Raises:
        CacheReadError: file missing or unreadable
        CacheParseError: not a JSON array of {current_name, rate} objects
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CacheReadError(p, f"cannot read cache ({exc.__class__.__name__})") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CacheParseError(p, f"invalid JSON ({exc.msg})") from exc
    if not isinstance(data, list):
        raise CacheParseError(p, "cache root is not a list")
    return [RateEntry.from_dict(item, p) for item in data]


@log_action("CACHE_LOAD")
def load_cache(path: str | os.PathLike[str], store: RateStore) -> bool:
    """Seed the store from cache. Never overwrites a non-empty store.

    Returns True if the store was replaced.
    """
    return store.replace_if_empty(read_cache_entries(path))


@log_action("CACHE_SAVE")
def save_cache(path: str | os.PathLike[str], entries: Iterable[RateEntry]) -> int:
    """Overwrite the cache file with entries. Returns number written.

    Raises:
        CacheWriteError: on any filesystem failure
    """
    rows = [e.to_dict() for e in entries]
    p = Path(path)
    try:
        _atomic_write_json(p, rows)
    except OSError as exc:
        raise CacheWriteError(p, f"cannot write cache ({exc})") from exc
    return len(rows)
