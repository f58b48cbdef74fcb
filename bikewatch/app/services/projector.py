from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from bikewatch.app.ports.output import IMapView
from bikewatch.domain.models import GeoPoint, Marker, ScreenPoint


@dataclass(slots=True)
class CoordinateProjector:
    map_view: IMapView

    def project(self, location: GeoPoint) -> ScreenPoint:
        return self.map_view.project(lon=location.lon, lat=location.lat)

    def position_all(self, markers: Iterable[Marker]) -> int:
        """Refresh screen coordinates of every marker; returns the number positioned."""

        count = 0
        for marker in markers:
            point = self.project(marker.datum.station.location)
            marker.cx = point.x
            marker.cy = point.y
            count += 1
        return count
