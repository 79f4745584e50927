from __future__ import annotations

from collections.abc import Iterable

from .models import RestaurantRecord

MIN_RATING = 4.0
MIN_REVIEWS = 100


def is_top_rated(
    record: RestaurantRecord,
    min_rating: float = MIN_RATING,
    min_reviews: int = MIN_REVIEWS,
) -> bool:
    """Missing rating or review count counts as zero."""
    return (record.rating or 0) >= min_rating and (record.reviews or 0) >= min_reviews


def filter_top_rated(
    records: Iterable[RestaurantRecord],
    min_rating: float = MIN_RATING,
    min_reviews: int = MIN_REVIEWS,
) -> list[RestaurantRecord]:
    return [r for r in records if is_top_rated(r, min_rating, min_reviews)]
