from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field

from bikewatch.app.ports.output import IMapView, ViewportListener
from bikewatch.domain.models import (
    GeoPoint,
    ScreenPoint,
    Viewport,
    ViewportEvent,
    ViewportEventType,
)

logger = logging.getLogger(__name__)

TILE_SIZE = 512
MAX_MERCATOR_LAT = 85.051129


def _parse_center(raw: str) -> GeoPoint:
    lon_s, lat_s = raw.split(",", 1)
    return GeoPoint(lat=float(lat_s), lon=float(lon_s))


def _parse_size(raw: str) -> tuple[int, int]:
    w, h = raw.lower().split("x", 1)
    return int(w), int(h)


def _world_xy(lon: float, lat: float, zoom: float) -> tuple[float, float]:
    """Spherical Mercator world pixel coordinates at a zoom level."""

    lat = max(-MAX_MERCATOR_LAT, min(MAX_MERCATOR_LAT, lat))
    scale = TILE_SIZE * (2.0**zoom)
    x = (lon + 180.0) / 360.0 * scale
    sin_lat = math.sin(math.radians(lat))
    y = (0.5 - math.log((1.0 + sin_lat) / (1.0 - sin_lat)) / (4.0 * math.pi)) * scale
    return x, y


@dataclass(slots=True)
class WebMercatorMapView(IMapView):
    """In-process Web Mercator camera (512px tiles, like Mapbox GL).

    Env vars:
      - BIKEWATCH_MAP_CENTER: 'lon,lat' (default Cambridge/Boston)
      - BIKEWATCH_MAP_ZOOM: initial zoom (default 12, clamped to min/max)
      - BIKEWATCH_MAP_SIZE: viewport size as 'WIDTHxHEIGHT' (default 1024x768)

    Every camera change notifies listeners with the specific event
    (`move`, `zoom` or `resize`) followed by `moveend`.
    """

    center: GeoPoint | None = None
    zoom: float | None = None
    width: int | None = None
    height: int | None = None
    min_zoom: float = 5.0
    max_zoom: float = 18.0

    _listeners: list[ViewportListener] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.center is None:
            self.center = _parse_center(
                os.getenv("BIKEWATCH_MAP_CENTER") or "-71.09415,42.36027"
            )
        if self.zoom is None:
            self.zoom = float(os.getenv("BIKEWATCH_MAP_ZOOM") or 12)
        if self.width is None or self.height is None:
            w, h = _parse_size(os.getenv("BIKEWATCH_MAP_SIZE") or "1024x768")
            self.width = self.width if self.width is not None else w
            self.height = self.height if self.height is not None else h
        self.zoom = self._clamp_zoom(self.zoom)

    @property
    def viewport(self) -> Viewport:
        return Viewport(
            center=self.center,
            zoom=self.zoom,
            width=int(self.width),
            height=int(self.height),
        )

    def project(self, *, lon: float, lat: float) -> ScreenPoint:
        px, py = _world_xy(lon, lat, self.zoom)
        cx, cy = _world_xy(self.center.lon, self.center.lat, self.zoom)
        return ScreenPoint(
            x=px - cx + self.width / 2.0,
            y=py - cy + self.height / 2.0,
        )

    def on_viewport_change(self, listener: ViewportListener) -> None:
        self._listeners.append(listener)

    def pan_to(self, center: GeoPoint) -> None:
        self.center = center
        self._emit("move")

    def zoom_to(self, zoom: float) -> None:
        self.zoom = self._clamp_zoom(zoom)
        self._emit("zoom")

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid viewport size: {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._emit("resize")

    def jump_to(
        self,
        *,
        center: GeoPoint | None = None,
        zoom: float | None = None,
        width: int | None = None,
        height: int | None = None,
    ) -> None:
        """Apply several camera changes, emitting one event per change."""

        if width is not None or height is not None:
            self.resize(
                width if width is not None else int(self.width),
                height if height is not None else int(self.height),
            )
        if center is not None:
            self.pan_to(center)
        if zoom is not None:
            self.zoom_to(zoom)

    def _clamp_zoom(self, zoom: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, float(zoom)))

    def _emit(self, kind: ViewportEventType) -> None:
        viewport = self.viewport
        logger.debug("Viewport %s: %s", kind, viewport)
        for event_type in (kind, "moveend"):
            event = ViewportEvent(type=event_type, viewport=viewport)
            for listener in list(self._listeners):
                listener(event)
