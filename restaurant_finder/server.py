"""
Run the Restaurant Finder web server.

Usage:
    restaurant-finder
    python -m restaurant_finder.server

Environment:
    HOST, PORT  - bind address (default 0.0.0.0:3000)
    LOG_LEVEL   - logging level (default INFO)
"""
from __future__ import annotations

import logging
import os

import uvicorn


def main() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every request URL at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    logging.getLogger(__name__).info("Server running on http://localhost:%d", port)
    uvicorn.run("restaurant_finder.app:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
