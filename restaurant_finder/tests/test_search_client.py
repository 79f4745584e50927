from __future__ import annotations

import asyncio
import logging

import httpx

from restaurant_finder.search.config import SearchConfig
from restaurant_finder.search.models import GpsCoordinates, RestaurantRecord, ResultKind
from restaurant_finder.search.serpapi_client import build_params, derive_anchor, fetch_page

CONFIG = SearchConfig(api_key="test-key")

SAMPLE_RESULTS = [
    {
        "title": "Beach House",
        "address": "Saadiyat Beach Club, Abu Dhabi",
        "rating": 4.6,
        "reviews": 812,
        "phone": "+971 2 407 1138",
        "gps_coordinates": {"latitude": 24.54, "longitude": 54.43},
        "thumbnail": "https://example.com/beach.jpg",
    },
    {
        "title": "Fouquet's",
        "address": "Louvre Abu Dhabi",
        "rating": 4.2,
        "reviews": 350,
    },
]


def _fetch(handler, anchor=None, offset=0, config=CONFIG):
    async def run():
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport) as client:
            return await fetch_page(
                client, "Saadiyat Island", anchor=anchor, offset=offset, config=config,
            )

    return asyncio.run(run())


def test_first_page_returns_records_and_anchor():
    page = _fetch(lambda request: httpx.Response(200, json={"local_results": SAMPLE_RESULTS}))

    assert page.kind is ResultKind.ok
    assert [r.title for r in page.records] == ["Beach House", "Fouquet's"]
    assert page.anchor == "@24.54,54.43,14z"
    assert page.records[1].gps_coordinates is None


def test_first_page_request_has_no_pagination_params():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"local_results": SAMPLE_RESULTS})

    _fetch(handler)

    params = seen[0].url.params
    assert params["engine"] == "google_maps"
    assert params["q"] == "restaurants in Saadiyat Island"
    assert params["type"] == "search"
    assert params["api_key"] == "test-key"
    assert "ll" not in params
    assert "start" not in params


def test_later_page_sends_anchor_and_offset():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"local_results": SAMPLE_RESULTS[1:]})

    page = _fetch(handler, anchor="@24.54,54.43,14z", offset=40)

    params = seen[0].url.params
    assert params["ll"] == "@24.54,54.43,14z"
    assert params["start"] == "40"
    # Anchor is carried, not re-derived from this page
    assert page.anchor == "@24.54,54.43,14z"


def test_no_coordinates_on_first_record_gives_no_anchor():
    results = [SAMPLE_RESULTS[1], SAMPLE_RESULTS[0]]
    page = _fetch(lambda request: httpx.Response(200, json={"local_results": results}))

    assert page.kind is ResultKind.ok
    assert len(page.records) == 2
    assert page.anchor is None


def test_provider_error_field_fails_page():
    page = _fetch(lambda request: httpx.Response(401, json={"error": "Invalid API key."}))

    assert page.kind is ResultKind.failed
    assert page.records == []
    assert page.anchor is None
    assert page.error == "Invalid API key."


def test_non_json_response_fails_page():
    page = _fetch(lambda request: httpx.Response(502, text="<html>Bad gateway</html>"))

    assert page.kind is ResultKind.failed
    assert "Invalid JSON" in page.error


def test_non_object_json_fails_page():
    page = _fetch(lambda request: httpx.Response(200, json=["unexpected"]))

    assert page.kind is ResultKind.failed


def test_transport_error_fails_page():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    page = _fetch(handler)

    assert page.kind is ResultKind.failed
    assert page.records == []
    assert "connection refused" in page.error


def test_empty_results_give_empty_page():
    page = _fetch(lambda request: httpx.Response(200, json={"search_metadata": {}}))

    assert page.kind is ResultKind.empty
    assert page.records == []


def test_missing_api_key_skips_request():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"local_results": SAMPLE_RESULTS})

    page = _fetch(handler, config=SearchConfig(api_key=""))

    assert page.kind is ResultKind.failed
    assert seen == []


def test_malformed_items_are_skipped():
    results = [
        {"title": "Broken", "gps_coordinates": {"latitude": "north"}},
        SAMPLE_RESULTS[0],
    ]
    page = _fetch(lambda request: httpx.Response(200, json={"local_results": results}))

    assert [r.title for r in page.records] == ["Beach House"]


def test_build_params_without_anchor_ignores_offset():
    params = build_params("Dubai Marina", None, 20, CONFIG)
    assert "start" not in params
    assert params["q"] == "restaurants in Dubai Marina"


def test_derive_anchor_uses_configured_zoom():
    record = RestaurantRecord(title="x", gps_coordinates=GpsCoordinates(latitude=25.1, longitude=55.2))
    assert derive_anchor([record], zoom=12) == "@25.1,55.2,12z"
    assert derive_anchor([], zoom=14) is None


def test_api_key_never_reaches_the_log(caplog):
    caplog.set_level(logging.INFO)
    caplog.set_level(logging.INFO, logger="httpx")
    config = SearchConfig(api_key="SECRET-KEY-123")

    _fetch(lambda request: httpx.Response(200, json={"local_results": SAMPLE_RESULTS}), config=config)
    _fetch(lambda request: httpx.Response(200, json={"error": "Invalid API key."}), config=config)

    assert caplog.records
    assert all("SECRET-KEY-123" not in r.getMessage() for r in caplog.records)
