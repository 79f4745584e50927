from __future__ import annotations

import logging
import time
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .export.store import ExportNotFoundError, ExportStore, get_export_store
from .search.filters import filter_top_rated
from .search.models import ResultKind, SearchOutcome
from .search.pagination import fetch_all_restaurants
from .web.render import render_results_page

logger = logging.getLogger(__name__)

app = FastAPI(title="Restaurant Finder", version="1.0.0")

_STATIC_DIR = Path(__file__).resolve().parent / "static"

NO_RESULTS_MESSAGE = "No high-rated restaurants found."
MISSING_QUERY_MESSAGE = "Missing 'q' parameter. Example: /restaurants?q=Saadiyat Island"


def _no_results_message(outcome: SearchOutcome) -> str:
    if outcome.kind is ResultKind.failed:
        return f"{NO_RESULTS_MESSAGE} The search provider returned an error: {outcome.error}"
    return NO_RESULTS_MESSAGE


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/")
def root():
    return FileResponse(str(_STATIC_DIR / "index.html"))


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/restaurants")
async def restaurants(
    q: str | None = None,
    store: ExportStore = Depends(get_export_store),
):
    location = (q or "").strip()
    if not location:
        raise HTTPException(status_code=400, detail=MISSING_QUERY_MESSAGE)

    start_time = time.time()
    outcome = await fetch_all_restaurants(location)
    top_rated = filter_top_rated(outcome.records)

    # Write failures propagate as a 500
    token = await run_in_threadpool(store.save, top_rated) if top_rated else None

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("search", {
        "location": location,
        "kind": outcome.kind.value,
        "stop_reason": outcome.stop_reason.value,
        "pages_fetched": outcome.pages_fetched,
        "results_fetched": len(outcome.records),
        "results_kept": len(top_rated),
        "export_token": token,
        "response_time_ms": elapsed_ms,
    })
    logger.info(
        "Search %r: %d fetched, %d kept in %.1f ms",
        location, len(outcome.records), len(top_rated), elapsed_ms,
    )

    if not top_rated:
        return PlainTextResponse(_no_results_message(outcome))

    html = render_results_page(location, top_rated, f"/download?token={token}")
    return HTMLResponse(html)


@app.get("/download")
def download(
    token: str | None = None,
    store: ExportStore = Depends(get_export_store),
):
    try:
        path = store.path_for(token)
    except ExportNotFoundError as exc:
        logger.error("Error downloading file: %s", exc)
        raise HTTPException(status_code=500, detail=f"Error downloading file: {exc}")

    return FileResponse(
        str(path),
        media_type="text/csv",
        filename=store.config.download_filename,
    )


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
