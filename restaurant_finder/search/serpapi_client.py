from __future__ import annotations

import logging
import re
from typing import Any

import httpx
from pydantic import ValidationError

from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .models import ResultKind, RestaurantRecord, SearchPage

logger = logging.getLogger(__name__)

_API_KEY_RE = re.compile(r"(api_key=)[^&\s\"']+")


class RedactApiKeyFilter(logging.Filter):
    """Masks ``api_key`` query values in records, e.g. httpx's request lines."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if "api_key=" in message:
            record.msg = _API_KEY_RE.sub(r"\1***", message)
            record.args = ()
        return True


logging.getLogger("httpx").addFilter(RedactApiKeyFilter())


def build_query(location: str) -> str:
    return f"restaurants in {location}"


def build_params(
    location: str,
    anchor: str | None,
    offset: int,
    config: SearchConfig,
) -> dict[str, Any]:
    params: dict[str, Any] = {
        "engine": config.engine,
        "q": build_query(location),
        "type": "search",
        "api_key": config.api_key,
    }
    if anchor:
        params["ll"] = anchor
        params["start"] = offset
    return params


def derive_anchor(records: list[RestaurantRecord], zoom: int) -> str | None:
    """Build the ``ll`` anchor from the first record's coordinates."""
    if not records or records[0].gps_coordinates is None:
        return None
    gps = records[0].gps_coordinates
    return f"@{gps.latitude},{gps.longitude},{zoom}z"


def _parse_records(items: list[Any]) -> list[RestaurantRecord]:
    records: list[RestaurantRecord] = []
    for item in items:
        try:
            records.append(RestaurantRecord.model_validate(item))
        except ValidationError:
            logger.warning("Skipping malformed result item: %r", item, exc_info=True)
    return records


def _failed(message: str) -> SearchPage:
    return SearchPage(kind=ResultKind.failed, error=message)


async def fetch_page(
    client: httpx.AsyncClient,
    location: str,
    *,
    anchor: str | None = None,
    offset: int = 0,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> SearchPage:
    """
    Fetch one page of Google Maps results from SerpApi.

    The anchor is only derived when none is passed in, i.e. on the first
    page. Never raises: transport errors, non-JSON bodies and provider
    errors come back as a ``failed`` page.
    """
    if not config.api_key:
        logger.warning("SERPAPI_KEY is not configured, skipping search for %r", location)
        return _failed("SERPAPI_KEY is not configured")

    params = build_params(location, anchor, offset, config)
    logger.info("Fetching %r (ll=%s, start=%s)", params["q"], anchor, params.get("start", 0))

    try:
        response = await client.get(config.base_url, params=params)
    except httpx.HTTPError as exc:
        logger.warning("Search request failed for %r", location, exc_info=True)
        return _failed(f"Request failed: {exc}")

    try:
        data = response.json()
    except ValueError:
        logger.warning("Search provider returned non-JSON (status %s)", response.status_code)
        return _failed(f"Invalid JSON response (status {response.status_code})")

    if not isinstance(data, dict):
        logger.warning("Unexpected response shape: %s", type(data).__name__)
        return _failed("Unexpected response shape")

    if data.get("error"):
        logger.warning("SerpApi error: %s", data["error"])
        return _failed(str(data["error"]))

    records = _parse_records(data.get("local_results") or [])
    if not records:
        logger.info("No restaurants in response for %r", location)
        return SearchPage(kind=ResultKind.empty)

    logger.info("Found %d restaurants", len(records))
    page_anchor = anchor
    if anchor is None:
        page_anchor = derive_anchor(records, config.zoom)
        if page_anchor is None:
            logger.warning("No GPS coordinates found for the first restaurant")

    return SearchPage(kind=ResultKind.ok, records=records, anchor=page_anchor)
