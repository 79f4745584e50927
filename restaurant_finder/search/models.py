from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GpsCoordinates(BaseModel):
    latitude: float
    longitude: float


class RestaurantRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = ""
    address: str | None = None
    rating: int | float | None = None
    reviews: int | None = None
    phone: str | None = None
    gps_coordinates: GpsCoordinates | None = None


class ResultKind(str, Enum):
    ok = "ok"
    empty = "empty"
    failed = "failed"


class StopReason(str, Enum):
    exhausted = "exhausted"
    provider_error = "provider_error"
    no_anchor = "no_anchor"
    max_pages = "max_pages"


class SearchPage(BaseModel):
    kind: ResultKind
    records: list[RestaurantRecord] = Field(default_factory=list)
    anchor: str | None = None
    error: str | None = None


class SearchOutcome(BaseModel):
    kind: ResultKind
    records: list[RestaurantRecord] = Field(default_factory=list)
    pages_fetched: int = 0
    stop_reason: StopReason
    error: str | None = None
