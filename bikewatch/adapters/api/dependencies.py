from __future__ import annotations

import os

from fastapi import Request

from bikewatch.adapters.maps.web_mercator_map_view import WebMercatorMapView
from bikewatch.adapters.persistence import (
    HttpBikeshareDataSource,
    LocalBikeshareDataSource,
)
from bikewatch.app.ports.output import IBikeshareDataSource
from bikewatch.app.services.station_map_service import StationMapService


def build_data_source() -> IBikeshareDataSource:
    # Local files win when both paths are configured.
    if os.getenv("BIKEWATCH_STATIONS_PATH") and os.getenv("BIKEWATCH_TRIPS_PATH"):
        return LocalBikeshareDataSource()
    return HttpBikeshareDataSource()


def build_station_map_service() -> StationMapService:
    return StationMapService(
        data_source=build_data_source(),
        map_view=WebMercatorMapView(),
    )


def get_station_map_service(request: Request) -> StationMapService:
    service: StationMapService | None = getattr(
        request.app.state, "station_map", None
    )
    if service is None:
        raise RuntimeError("Station map service not initialised")
    return service
