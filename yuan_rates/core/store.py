from __future__ import annotations

import threading
from typing import Iterable

from .models import RateEntry, RateTable


class RateStore:
    """Shared rate table guarded by a single lock.

    One instance per run, created by the orchestrator and handed to the
    cache loader, the fetcher and the calculator. The table itself never
    leaves the critical section: readers get an immutable tuple copy.
    """

    def __init__(self, entries: Iterable[RateEntry] = ()) -> None:
        self._lock = threading.Lock()
        self._table: list[RateEntry] = list(entries)

    def get_snapshot(self) -> RateTable:
        with self._lock:
            return tuple(self._table)

    def replace_if_empty(self, entries: Iterable[RateEntry]) -> bool:
        """Replace contents only when the table is empty.

        Returns True if the table was replaced. A cache load must never
        clobber data that a fetch already put in place.
        """
        new_table = list(entries)
        with self._lock:
            if self._table:
                return False
            self._table = new_table
            return True

    def replace_unconditional(self, entries: Iterable[RateEntry]) -> None:
        new_table = list(entries)
        with self._lock:
            self._table = new_table

    def is_empty(self) -> bool:
        with self._lock:
            return not self._table

    def __len__(self) -> int:
        with self._lock:
            return len(self._table)
