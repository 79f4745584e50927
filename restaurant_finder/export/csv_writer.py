from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pandas as pd

from ..search.models import GpsCoordinates, RestaurantRecord

EXPORT_COLUMNS: List[str] = [
    "title",
    "address",
    "rating",
    "reviews",
    "phone",
    "gps_coordinates",
]

NO_PHONE = "No contact info"
NO_COORDINATES = "No coordinates"


def format_coordinates(gps: GpsCoordinates | None) -> str:
    if gps is None:
        return NO_COORDINATES
    return f"{gps.latitude}, {gps.longitude}"


def to_export_row(record: RestaurantRecord) -> dict:
    return {
        "title": record.title,
        "address": record.address,
        "rating": record.rating,
        "reviews": record.reviews,
        "phone": record.phone or NO_PHONE,
        "gps_coordinates": format_coordinates(record.gps_coordinates),
    }


def build_export_frame(records: Iterable[RestaurantRecord]) -> pd.DataFrame:
    """
    Build the export DataFrame in the fixed column order.

    Object dtype keeps review counts as integers even when a value is missing.
    """
    rows = [to_export_row(r) for r in records]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS, dtype=object)


def write_csv(records: Iterable[RestaurantRecord], path: Path) -> Path:
    """Write ``records`` to ``path``, replacing any previous content."""
    build_export_frame(records).to_csv(path, index=False)
    return path
