from __future__ import annotations

import re
import time
from abc import ABC, abstractmethod
from typing import Iterable

import requests

from ..core.exceptions import ExtractionError, NetworkError
from ..core.models import RateEntry
from .config import ParserConfig, build_pattern


class BaseRatesClient(ABC):
    def __init__(self, cfg: ParserConfig) -> None:
        self.cfg = cfg

    @abstractmethod
    def fetch_rates(self, codes: Iterable[str] | None = None) -> list[RateEntry]:
        """Возвращает курсы в порядке запрошенных кодов.

        Всё или ничего: либо курс есть для каждого кода, либо исключение.
        """


class BmcxPageClient(BaseRatesClient):
    SOURCE = "huobiduihuan.bmcx.com"
    last_request_ms: int | None = None

    CHUNK_SIZE = 8192

    def fetch_page(self) -> str:
        """Download the page within REQUEST_TIMEOUT seconds in total.

        The requests timeout only bounds connect and each socket read, so the
        body is streamed and checked against an overall deadline.
        """
        timeout = self.cfg.REQUEST_TIMEOUT
        t0 = time.perf_counter()
        deadline = time.monotonic() + timeout
        try:
            resp = requests.get(
                self.cfg.RATES_URL,
                headers={"User-Agent": self.cfg.USER_AGENT},
                timeout=timeout,
                stream=True,
            )
        except requests.exceptions.RequestException as exc:
            raise NetworkError(f"{self.SOURCE}: {exc}") from exc

        try:
            status = resp.status_code
            if not 200 <= status < 300:
                raise NetworkError(f"{self.SOURCE} HTTP {status}")

            chunks: list[bytes] = []
            try:
                for chunk in resp.iter_content(chunk_size=self.CHUNK_SIZE):
                    if time.monotonic() > deadline:
                        raise NetworkError(
                            f"{self.SOURCE}: timed out after {timeout:g}s"
                        )
                    chunks.append(chunk)
            except requests.exceptions.RequestException as exc:
                raise NetworkError(f"{self.SOURCE}: {exc}") from exc
            encoding = resp.encoding
        finally:
            resp.close()
        self.last_request_ms = int((time.perf_counter() - t0) * 1000)

        # The page is Chinese; requests falls back to latin-1 without a charset
        if not encoding or encoding.lower() == "iso-8859-1":
            encoding = "utf-8"
        body = b"".join(chunks)
        try:
            return body.decode(encoding, errors="replace")
        except LookupError:
            # unknown charset in Content-Type
            return body.decode("utf-8", errors="replace")

    def extract_rates(self, html: str, codes: Iterable[str]) -> list[RateEntry]:
        entries: list[RateEntry] = []
        for code in codes:
            match = re.search(build_pattern(self.cfg, code), html)
            if match is None:
                raise ExtractionError(code)
            try:
                rate = float(match.group(1))
            except ValueError as exc:
                raise ExtractionError(code, f"bad rate {match.group(1)!r}") from exc
            if rate <= 0:
                raise ExtractionError(code, f"non-positive rate {rate}")
            label = match.group(2).strip() or code
            entries.append(RateEntry(current_name=label, rate=rate))
        return entries

    def fetch_rates(self, codes: Iterable[str] | None = None) -> list[RateEntry]:
        wanted = list(self.cfg.CURRENCIES if codes is None else codes)
        return self.extract_rates(self.fetch_page(), wanted)
