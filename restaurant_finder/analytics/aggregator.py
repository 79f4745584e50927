from __future__ import annotations

from collections import Counter
from typing import Any


def _average(values: list[float]) -> float:
    return round(sum(values) / len(values), 1) if values else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    total = len(searches)

    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    pages = [s["pages_fetched"] for s in searches if "pages_fetched" in s]

    loc_counter: Counter[str] = Counter()
    for s in searches:
        loc_counter[s.get("location", "unknown")] += 1
    top_locations = [{"name": n, "count": c} for n, c in loc_counter.most_common(10)]

    stop_reasons = Counter(s.get("stop_reason", "unknown") for s in searches)
    provider_failures = sum(1 for s in searches if s.get("kind") == "failed")
    results_kept = sum(s.get("results_kept", 0) for s in searches)

    return {
        "total_searches": total,
        "avg_response_time_ms": _average(times),
        "avg_pages_per_search": _average(pages),
        "top_locations": top_locations,
        "stop_reasons": dict(stop_reasons),
        "provider_failures": provider_failures,
        "total_results_kept": results_kept,
        "exports_created": sum(1 for s in searches if s.get("export_token")),
    }
