from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class SearchConfig:
    api_key: str = os.getenv("SERPAPI_KEY", "")
    base_url: str = "https://serpapi.com/search"
    engine: str = "google_maps"
    results_per_page: int = 20
    zoom: int = 14
    max_pages: int = int(os.getenv("SERPAPI_MAX_PAGES", "10"))
    timeout: float = float(os.getenv("SERPAPI_TIMEOUT", "15.0"))
    # When the first result has no coordinates there is no anchor to page
    # with. Strict mode drops the first page too.
    require_anchor: bool = True


DEFAULT_SEARCH_CONFIG = SearchConfig()
