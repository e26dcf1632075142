"""Domain models for the CNY converter.

RateEntry — одна строка таблицы курсов: название валюты и курс.
Таблица целиком (RateTable) — это кортеж RateEntry в порядке конфигурации.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .exceptions import CacheParseError


@dataclass(frozen=True)
class RateEntry:
    """Immutable rate record.

    Attributes:
        current_name: Display name of the currency (code or page label).
        rate: Positive finite rate used by the conversion formulas.
    """

    current_name: str
    rate: float

    def __post_init__(self) -> None:
        if not isinstance(self.current_name, str) or not self.current_name.strip():
            raise ValueError("current_name must be a non-empty string")
        if isinstance(self.rate, bool) or not isinstance(self.rate, (int, float)):
            raise ValueError("rate must be a number")
        if not math.isfinite(self.rate) or self.rate <= 0:
            raise ValueError("rate must be a positive finite number")
        # normalize ints coming from JSON (e.g. 7 -> 7.0)
        object.__setattr__(self, "rate", float(self.rate))

    def to_dict(self) -> dict[str, Any]:
        return {"current_name": self.current_name, "rate": self.rate}

    @classmethod
    def from_dict(cls, data: Any, source: object = "<cache>") -> "RateEntry":
        """Build an entry from a cache object.

        Raises:
            CacheParseError: when keys are missing or values are invalid.
        """
        if not isinstance(data, dict):
            raise CacheParseError(source, "cache item is not an object")
        try:
            return cls(current_name=data["current_name"], rate=data["rate"])
        except KeyError as exc:
            raise CacheParseError(source, f"missing key {exc}") from exc
        except ValueError as exc:
            raise CacheParseError(source, str(exc)) from exc


RateTable = tuple[RateEntry, ...]
