from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from bikewatch.adapters.api.dependencies import get_station_map_service
from bikewatch.adapters.api.schemas.map import (
    GeoPointSchema,
    MarkerSchema,
    MarkersResponseSchema,
    RadiusScaleSchema,
    ReconcileSummarySchema,
    TimeFilterRequestSchema,
    TimeFilterResponseSchema,
    TimeLabelSchema,
    ViewportRequestSchema,
    ViewportSchema,
)
from bikewatch.adapters.maps.web_mercator_map_view import WebMercatorMapView
from bikewatch.adapters.rendering.svg_overlay import render_markers_svg
from bikewatch.app.services.station_map_service import StationMapService
from bikewatch.domain.exceptions import MapNotReadyError
from bikewatch.domain.models import GeoPoint

router = APIRouter(prefix="/map", tags=["map"])

# Handlers are `async def` so redraws run on the event loop, one at a time.


def _require_ready(service: StationMapService) -> None:
    if not service.is_ready:
        raise MapNotReadyError(service.load_error or "Map is not rendered yet")


def _markers_payload(service: StationMapService) -> dict:
    _require_ready(service)

    label = service.time_label()
    scale = service.scales.radius_scale
    vp = service.map_view.viewport
    return {
        "time_filter": service.time_filter,
        "label": TimeLabelSchema(text=label.text, any_time=label.any_time),
        "radius_scale": RadiusScaleSchema(domain=scale.domain, range=scale.range),
        "viewport": ViewportSchema(
            center=GeoPointSchema(lat=vp.center.lat, lon=vp.center.lon),
            zoom=vp.zoom,
            width=vp.width,
            height=vp.height,
        ),
        "markers": [
            MarkerSchema(
                short_name=m.key,
                name=m.datum.station.name,
                location=GeoPointSchema(
                    lat=m.datum.station.location.lat,
                    lon=m.datum.station.location.lon,
                ),
                arrivals=m.datum.arrivals,
                departures=m.datum.departures,
                total_traffic=m.datum.total_traffic,
                radius=m.radius,
                flow=m.flow,
                opacity=m.opacity,
                tooltip=m.tooltip,
                cx=m.cx,
                cy=m.cy,
            )
            for m in service.markers.values()
        ],
    }


@router.get("/markers", response_model=MarkersResponseSchema)
async def get_markers(
    service: StationMapService = Depends(get_station_map_service),
) -> MarkersResponseSchema:
    return MarkersResponseSchema(**_markers_payload(service))


@router.put("/time-filter", response_model=TimeFilterResponseSchema)
async def put_time_filter(
    body: TimeFilterRequestSchema,
    service: StationMapService = Depends(get_station_map_service),
) -> TimeFilterResponseSchema:
    result = service.set_time_filter(body.minutes)
    return TimeFilterResponseSchema(
        **_markers_payload(service),
        changes=ReconcileSummarySchema(
            created=len(result.created),
            updated=len(result.updated),
            removed=len(result.removed),
        ),
    )


@router.post("/viewport", response_model=MarkersResponseSchema)
async def post_viewport(
    body: ViewportRequestSchema,
    service: StationMapService = Depends(get_station_map_service),
) -> MarkersResponseSchema:
    _require_ready(service)
    map_view = service.map_view
    if not isinstance(map_view, WebMercatorMapView):
        raise RuntimeError("Configured map view does not accept camera changes")

    map_view.jump_to(
        center=(
            GeoPoint(lat=body.center.lat, lon=body.center.lon) if body.center else None
        ),
        zoom=body.zoom,
        width=body.width,
        height=body.height,
    )
    return MarkersResponseSchema(**_markers_payload(service))


@router.get("/markers.svg")
async def get_markers_svg(
    service: StationMapService = Depends(get_station_map_service),
) -> Response:
    _require_ready(service)
    vp = service.map_view.viewport
    svg = render_markers_svg(
        service.markers.values(), width=vp.width, height=vp.height
    )
    return Response(content=svg, media_type="image/svg+xml")
