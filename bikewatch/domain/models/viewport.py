from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .geo import GeoPoint

ViewportEventType = Literal["move", "zoom", "resize", "moveend"]


@dataclass(frozen=True, slots=True)
class Viewport:
    center: GeoPoint
    zoom: float
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class ViewportEvent:
    type: ViewportEventType
    viewport: Viewport
