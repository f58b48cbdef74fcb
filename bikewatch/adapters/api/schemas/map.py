from __future__ import annotations

from pydantic import BaseModel, Field


class GeoPointSchema(BaseModel):
    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)


class TimeFilterRequestSchema(BaseModel):
    # -1 clears the filter.
    minutes: int = Field(ge=-1, le=1439)


class ViewportRequestSchema(BaseModel):
    center: GeoPointSchema | None = None
    zoom: float | None = None
    width: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, gt=0)


class ViewportSchema(BaseModel):
    center: GeoPointSchema
    zoom: float
    width: int
    height: int


class TimeLabelSchema(BaseModel):
    text: str
    any_time: bool


class RadiusScaleSchema(BaseModel):
    domain: tuple[float, float]
    range: tuple[float, float]


class MarkerSchema(BaseModel):
    short_name: str
    name: str | None = None
    location: GeoPointSchema
    arrivals: int
    departures: int
    total_traffic: int
    radius: float
    flow: float
    opacity: float
    tooltip: str
    cx: float | None = None
    cy: float | None = None


class MarkersResponseSchema(BaseModel):
    time_filter: int | None = None
    label: TimeLabelSchema
    radius_scale: RadiusScaleSchema
    viewport: ViewportSchema
    markers: list[MarkerSchema]


class ReconcileSummarySchema(BaseModel):
    created: int
    updated: int
    removed: int


class TimeFilterResponseSchema(MarkersResponseSchema):
    changes: ReconcileSummarySchema
