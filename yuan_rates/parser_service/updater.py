from __future__ import annotations

import logging

from ..core.store import RateStore
from ..decorators import log_action
from .api_clients import BaseRatesClient, BmcxPageClient
from .config import ParserConfig

logger = logging.getLogger("yuan_rates")


@log_action("FETCH")
def fetch_into_store(
    store: RateStore, cfg: ParserConfig, client: BaseRatesClient | None = None
) -> int:
    """Fetch fresh rates and overwrite the store.

    A successful fetch always wins over whatever is in the store (cache data
    included). On any error the store is left untouched and the error
    propagates to the caller.

    Returns:
        Number of entries written to the store.
    """
    client = client or BmcxPageClient(cfg)
    logger.info("Fetching %d rates from %s...", len(cfg.CURRENCIES), cfg.RATES_URL)
    entries = client.fetch_rates(cfg.CURRENCIES)
    store.replace_unconditional(entries)
    logger.info("Fetching rates... OK (%d rates)", len(entries))
    return len(entries)
