from .geo import GeoPoint, ScreenPoint
from .marker import Marker
from .station import Station, StationTraffic
from .trip import Trip
from .viewport import Viewport, ViewportEvent, ViewportEventType

__all__ = [
    "GeoPoint",
    "Marker",
    "ScreenPoint",
    "Station",
    "StationTraffic",
    "Trip",
    "Viewport",
    "ViewportEvent",
    "ViewportEventType",
]
