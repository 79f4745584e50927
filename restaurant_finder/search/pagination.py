from __future__ import annotations

import logging

import httpx

from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .models import ResultKind, RestaurantRecord, SearchOutcome, StopReason
from .serpapi_client import fetch_page

logger = logging.getLogger(__name__)


async def _paginate(
    client: httpx.AsyncClient,
    location: str,
    config: SearchConfig,
) -> SearchOutcome:
    first = await fetch_page(client, location, config=config)

    if first.kind is ResultKind.failed:
        return SearchOutcome(
            kind=ResultKind.failed,
            pages_fetched=1,
            stop_reason=StopReason.provider_error,
            error=first.error,
        )
    if first.kind is ResultKind.empty:
        return SearchOutcome(
            kind=ResultKind.empty, pages_fetched=1, stop_reason=StopReason.exhausted,
        )

    if not first.anchor:
        logger.warning("No 'll' anchor for %r, cannot paginate", location)
        records = [] if config.require_anchor else list(first.records)
        return SearchOutcome(
            kind=ResultKind.ok if records else ResultKind.empty,
            records=records,
            pages_fetched=1,
            stop_reason=StopReason.no_anchor,
        )

    records: list[RestaurantRecord] = list(first.records)
    pages = 1
    offset = config.results_per_page
    stop_reason = StopReason.max_pages
    error: str | None = None

    while pages < config.max_pages:
        page = await fetch_page(
            client, location, anchor=first.anchor, offset=offset, config=config,
        )
        pages += 1

        if page.kind is ResultKind.failed:
            logger.warning("Stopping pagination at start=%d: %s", offset, page.error)
            stop_reason = StopReason.provider_error
            error = page.error
            break
        if page.kind is ResultKind.empty:
            stop_reason = StopReason.exhausted
            break

        records.extend(page.records)
        offset += config.results_per_page

    if stop_reason is StopReason.max_pages:
        logger.info("Reached page limit (%d) for %r", config.max_pages, location)

    return SearchOutcome(
        kind=ResultKind.ok,
        records=records,
        pages_fetched=pages,
        stop_reason=stop_reason,
        error=error,
    )


async def fetch_all_restaurants(
    location: str,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
    client: httpx.AsyncClient | None = None,
) -> SearchOutcome:
    """
    Collect restaurants for ``location`` across result pages.

    Pages are requested in order until one comes back empty or failed, or
    ``config.max_pages`` is reached. Records keep arrival order and are not
    deduplicated.
    """
    logger.info("Searching for restaurants in: %s", location)
    if client is not None:
        return await _paginate(client, location, config)
    async with httpx.AsyncClient(timeout=config.timeout) as owned_client:
        return await _paginate(owned_client, location, config)
