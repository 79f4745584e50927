from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for CSV exports.
    """

    export_dir: Path = Path(
        os.getenv("EXPORT_DIR", str(Path(tempfile.gettempdir()) / "restaurant_finder_exports"))
    )
    download_filename: str = "restaurants.csv"
    max_exports: int = int(os.getenv("EXPORT_MAX_FILES", "50"))

    def path_for_token(self, token: str) -> Path:
        return self.export_dir / f"{token}.csv"


DEFAULT_EXPORT_CONFIG = ExportConfig()
