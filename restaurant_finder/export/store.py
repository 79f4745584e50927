from __future__ import annotations

import logging
import os
import re
import uuid
from pathlib import Path
from typing import Iterable

from ..search.models import RestaurantRecord
from .config import DEFAULT_EXPORT_CONFIG, ExportConfig
from .csv_writer import write_csv

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"^[0-9a-f]{32}$")


class ExportNotFoundError(LookupError):
    """Raised when an export token cannot be resolved to a readable file."""


class ExportStore:
    """
    One CSV per search, addressed by an opaque token.

    Files are written under a temporary name and renamed into place so a
    concurrent download only ever sees complete exports.
    """

    def __init__(self, config: ExportConfig = DEFAULT_EXPORT_CONFIG) -> None:
        self.config = config
        self._latest: str | None = None

    @property
    def latest_token(self) -> str | None:
        return self._latest

    def save(self, records: Iterable[RestaurantRecord]) -> str:
        self.config.export_dir.mkdir(parents=True, exist_ok=True)
        token = uuid.uuid4().hex
        final_path = self.config.path_for_token(token)
        tmp_path = final_path.with_suffix(".csv.tmp")

        try:
            write_csv(records, tmp_path)
            tmp_path.replace(final_path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

        self._latest = token
        logger.info("Wrote export %s", final_path)
        self._prune(keep=final_path)
        return token

    def path_for(self, token: str | None = None) -> Path:
        """Resolve ``token`` (or the latest export) to an existing file."""
        token = token or self._latest
        if token is None:
            raise ExportNotFoundError("No export has been created yet")
        if not _TOKEN_RE.match(token):
            raise ExportNotFoundError(f"Invalid export token: {token!r}")

        path = self.config.path_for_token(token)
        if not path.is_file():
            raise ExportNotFoundError(f"Export {token} does not exist")
        if not os.access(path, os.R_OK):
            raise ExportNotFoundError(f"Export {token} is not readable")
        return path

    def _prune(self, keep: Path) -> None:
        if self.config.max_exports <= 0:
            return
        others = sorted(
            (
                p for p in self.config.export_dir.glob("*.csv")
                if _TOKEN_RE.match(p.stem) and p != keep
            ),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        for stale in others[self.config.max_exports - 1:]:
            try:
                stale.unlink()
            except OSError:
                logger.warning("Could not remove old export %s", stale, exc_info=True)


_store: ExportStore | None = None


def get_export_store() -> ExportStore:
    """Return the process-wide export store, creating it on first call."""
    global _store
    if _store is None:
        _store = ExportStore()
    return _store
